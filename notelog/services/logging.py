"""Helper per logging strutturato JSON nei servizi applicativi."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

EVENTS_LOGGER_NAME = "notelog.events"

# Valori che non devono mai finire nei log
REDACTED_FIELDS = frozenset({"password", "password_hash", "token", "authorization"})


def _redact(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: "***" if key.lower() in REDACTED_FIELDS else value
        for key, value in fields.items()
    }


def log_structured_event(
    action: str,
    *,
    message: Optional[str] = None,
    level: str = "info",
    **fields: Any,
) -> None:
    """Registra un evento applicativo (login, token rifiutati, CRUD) sul logger ``notelog.events``.

    Il formato JSON è configurato sul root logger da ``notelog.extensions``.
    Credenziali e token vengono mascherati prima della scrittura; un errore
    di logging non interrompe mai la richiesta.
    """

    logger = logging.getLogger(EVENTS_LOGGER_NAME)
    log_method = getattr(logger, level.lower(), logger.info)

    payload: Dict[str, Any] = {"action": action}
    payload.update(_redact(fields))

    try:
        log_method(message or "Structured service event", extra=payload)
    except Exception:
        logger.debug("Logging strutturato fallito", exc_info=True)
