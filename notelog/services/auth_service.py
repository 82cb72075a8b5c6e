"""
Servizi di autenticazione: registrazione, login e profilo utente.
Rifattorizzato con Pattern Unit of Work.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import IntegrityError

from notelog.models import User
from notelog.services.errors import AuthRejected, ValidationError
from notelog.services.logging import log_structured_event
from notelog.services.token_service import get_token_service
from notelog.services.unit_of_work import UnitOfWork

USER_MISSING_MESSAGE = "User no longer exists."


@dataclass(frozen=True)
class Principal:
    """
    Identità autenticata associata alla richiesta corrente.

    Contiene solo l'id: nessun altro dato fornito dal client viene
    considerato per le decisioni di accesso.
    """

    id: int


def _clean_text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def register_user(username: Any, email: Any, password: Any) -> Tuple[User, str]:
    """
    Crea un nuovo utente e restituisce (utente, token).
    """
    username = _clean_text(username)
    email = _clean_text(email).lower()
    password = password if isinstance(password, str) else ""

    if not username or not email or not password:
        raise ValidationError("Missing required fields")
    if "@" not in email:
        raise ValidationError("Invalid email address")

    min_length = current_app.config.get("PASSWORD_MIN_LENGTH", 6)
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")

    with UnitOfWork() as uow:
        if uow.users.get_by_email(email) or uow.users.get_by_username(username):
            raise ValidationError("User already exists")

        user = User(username=username, email=email)
        user.set_password(password)
        uow.users.add(user)

        try:
            uow.commit()
        except IntegrityError as exc:
            # Registrazione concorrente con la stessa email/username
            raise ValidationError("User already exists") from exc

        token = get_token_service().issue(user.id)
        log_structured_event("user_registered", message="Nuovo utente registrato", user_id=user.id)
        return user, token


def login_user(email: Any, password: Any) -> Tuple[User, str]:
    """
    Verifica le credenziali e restituisce (utente, token).
    """
    email = _clean_text(email).lower()
    if not email or not isinstance(password, str) or not password:
        raise ValidationError("Missing required fields")

    with UnitOfWork() as uow:
        user: Optional[User] = uow.users.get_by_email(email)
        if user is None or not user.check_password(password):
            log_structured_event("login_failed", message="Credenziali non valide", level="warning")
            raise AuthRejected("Invalid credentials")

        token = get_token_service().issue(user.id)
        log_structured_event("user_login", message="Login effettuato", user_id=user.id)
        return user, token


def get_user_profile(principal: Principal) -> User:
    """Restituisce l'utente autenticato (sonda di validità della sessione)."""
    with UnitOfWork() as uow:
        user = uow.users.get_by_id(principal.id)
        if user is None:
            raise AuthRejected(USER_MISSING_MESSAGE)
        return user
