"""
Eccezioni applicative dei servizi.

Ogni eccezione porta con sé lo status HTTP e un messaggio generico:
l'handler registrato in ``create_app`` le converte in ``{"message": ...}``.
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthRejected(ServiceError):
    """Token assente, non valido, scaduto o utente non più esistente."""

    status_code = 401
    default_message = "Invalid token"


class ValidationError(ServiceError):
    """Campo obbligatorio mancante o valore non valido."""

    status_code = 400
    default_message = "Missing required fields"


class NotFound(ServiceError):
    """Record inesistente oppure appartenente a un altro utente."""

    status_code = 404
    default_message = "Not found"
