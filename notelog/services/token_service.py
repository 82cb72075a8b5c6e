"""
Emissione e verifica dei token di accesso (JWT firmati HS256).

Il token è autocontenuto e non viene salvato lato server:
contiene solo ``sub`` (id utente), ``iat`` ed ``exp``.
Non esiste revoca del singolo token; l'unico controllo aggiuntivo è la
verifica di esistenza dell'utente fatta dal middleware di autenticazione.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from flask import Flask, current_app


class TokenError(Exception):
    """Base per tutti gli errori di verifica del token."""


class InvalidSignature(TokenError):
    """La firma non corrisponde alla chiave del server."""


class TokenExpired(TokenError):
    """L'istante corrente ha superato la scadenza ``exp``."""


class MalformedToken(TokenError):
    """Token non decodificabile o privo dei claim richiesti."""


REQUIRED_CLAIMS = ["exp", "iat", "sub"]


class TokenService:
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_in: int = 3600):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in

    @classmethod
    def from_app(cls, app: Optional[Flask] = None) -> "TokenService":
        """Costruisce il servizio dalla configurazione dell'app (default: current_app)."""
        config = (app or current_app).config
        return cls(
            secret_key=config["JWT_SECRET_KEY"],
            algorithm=config.get("JWT_ALGORITHM", "HS256"),
            expires_in=int(config.get("TOKEN_EXPIRES_SECONDS", 3600)),
        )

    def issue(self, identity_id: int, now: Optional[datetime] = None) -> str:
        """Firma un token per ``identity_id`` con scadenza a ``now + expires_in``."""
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            # PyJWT richiede che "sub" sia una stringa
            "sub": str(identity_id),
            "iat": issued_at,
            "exp": issued_at + timedelta(seconds=self.expires_in),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Verifica firma e scadenza e restituisce l'id utente.

        Solleva InvalidSignature, TokenExpired o MalformedToken.
        Degli altri claim viene usato solo ``sub``.
        """
        if not token or not isinstance(token, str):
            raise MalformedToken("Token vuoto")

        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired(str(exc)) from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidSignature(str(exc)) from exc
        except jwt.InvalidTokenError as exc:
            raise MalformedToken(str(exc)) from exc

        try:
            identity_id = int(claims["sub"])
        except (TypeError, ValueError) as exc:
            raise MalformedToken("Subject non valido") from exc
        if identity_id <= 0:
            raise MalformedToken("Subject non valido")
        return identity_id


def get_token_service() -> TokenService:
    return TokenService.from_app()
