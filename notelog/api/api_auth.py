"""
API JSON di autenticazione.

Endpoint principali:

POST /api/auth/register
    Registra un utente e restituisce {user, token}.

POST /api/auth/login
    Verifica le credenziali e restituisce {user, token}.

GET  /api/auth/me
    Restituisce l'utente autenticato. Usata dal client per verificare che
    un token salvato sia ancora valido (e che l'utente esista ancora).
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from notelog.middleware.auth import current_principal, login_required
from notelog.services import get_user_profile, login_user, register_user
from notelog.services.errors import ValidationError

api_auth_bp = Blueprint("api_auth", __name__)


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON body")
    return data


@api_auth_bp.route("/register", methods=["POST"])
def api_register():
    """
    Body JSON atteso:
    {
      "username": "alice",
      "email": "a@x.com",
      "password": "secret1"
    }
    """
    data = _json_body()
    user, token = register_user(
        username=data.get("username"),
        email=data.get("email"),
        password=data.get("password"),
    )
    return jsonify({"user": user.to_dict(), "token": token}), 201


@api_auth_bp.route("/login", methods=["POST"])
def api_login():
    data = _json_body()
    user, token = login_user(email=data.get("email"), password=data.get("password"))
    return jsonify({"user": user.to_dict(), "token": token})


@api_auth_bp.route("/me", methods=["GET"])
@login_required
def api_me():
    user = get_user_profile(current_principal())
    return jsonify(user.to_dict())
