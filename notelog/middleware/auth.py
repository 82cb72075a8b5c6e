"""
Middleware di autenticazione (gate sulle richieste API).

Per ogni richiesta protetta:
1. richiede l'header ``Authorization: Bearer <token>``;
2. verifica firma e scadenza del token;
3. controlla che l'utente referenziato esista ancora nel DB;
4. imposta ``flask.g.current_user`` con il solo id dell'utente.

Qualsiasi fallimento è terminale per la richiesta (401).
Il controllo di esistenza al punto 3 è l'unico meccanismo di revoca:
i token non sono revocabili singolarmente.
"""

from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Blueprint, g, request

from notelog.services.auth_service import USER_MISSING_MESSAGE, Principal
from notelog.services.errors import AuthRejected
from notelog.services.logging import log_structured_event
from notelog.services.token_service import TokenError, get_token_service
from notelog.services.unit_of_work import UnitOfWork

BEARER_PREFIX = "Bearer "
NO_TOKEN_MESSAGE = "Access denied. No token provided."
INVALID_TOKEN_MESSAGE = "Invalid token"


def authenticate(authorization: Optional[str]) -> Principal:
    """
    Valida il valore dell'header Authorization e restituisce il Principal.

    Solleva AuthRejected in tutti i casi di rifiuto.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthRejected(NO_TOKEN_MESSAGE)

    token = authorization[len(BEARER_PREFIX):].strip()

    try:
        identity_id = get_token_service().verify(token)
    except TokenError as exc:
        log_structured_event(
            "token_rejected",
            message="Token rifiutato",
            level="warning",
            reason=type(exc).__name__,
        )
        raise AuthRejected(INVALID_TOKEN_MESSAGE) from exc

    with UnitOfWork() as uow:
        if not uow.users.exists(identity_id):
            log_structured_event(
                "token_rejected",
                message="Utente del token non più esistente",
                level="warning",
                reason="IdentityMissing",
                user_id=identity_id,
            )
            raise AuthRejected(USER_MISSING_MESSAGE)

    return Principal(id=identity_id)


def require_auth() -> None:
    """
    Hook ``before_request`` per i blueprint interamente protetti.

    Imposta g.current_user; in caso di errore la richiesta viene
    interrotta dall'handler di AuthRejected.
    """
    g.current_user = authenticate(request.headers.get("Authorization"))


def protect_blueprint(bp: Blueprint) -> Blueprint:
    """Applica ``require_auth`` a tutte le route del blueprint."""
    bp.before_request(require_auth)
    return bp


def login_required(view):
    """Decoratore per le singole view protette (es. /auth/me)."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        require_auth()
        return view(*args, **kwargs)

    return wrapper


def current_principal() -> Principal:
    """Principal della richiesta corrente (dopo il gate)."""
    principal: Optional[Principal] = getattr(g, "current_user", None)
    if principal is None:
        raise AuthRejected(NO_TOKEN_MESSAGE)
    return principal
