"""
Pacchetto per i servizi (logica di business) dell'applicazione.

I servizi orchestrano:
- repository (accesso al DB) tramite Unit of Work
- emissione/verifica dei token
- validazioni e transazioni
- logging strutturato
"""

from .errors import AuthRejected, NotFound, ServiceError, ValidationError
from .auth_service import (
    Principal,
    register_user,
    login_user,
    get_user_profile,
)
from .token_service import (
    TokenService,
    TokenError,
    InvalidSignature,
    TokenExpired,
    MalformedToken,
    get_token_service,
)
from .resource_service import FieldSpec, OwnedResourceService
from .resources import (
    notes_service,
    custom_notes_service,
    todos_service,
    contacts_service,
)

__all__ = [
    # Errori
    "ServiceError",
    "AuthRejected",
    "ValidationError",
    "NotFound",
    # Auth
    "Principal",
    "register_user",
    "login_user",
    "get_user_profile",
    # Token
    "TokenService",
    "TokenError",
    "InvalidSignature",
    "TokenExpired",
    "MalformedToken",
    "get_token_service",
    # Risorse
    "FieldSpec",
    "OwnedResourceService",
    "notes_service",
    "custom_notes_service",
    "todos_service",
    "contacts_service",
]
