"""
Pacchetto per le API JSON usate dal client.

Contiene:
- api_auth_bp         -> registrazione, login, profilo
- api_notes_bp        -> note testuali
- api_todos_bp        -> todo con promemoria
- api_contacts_bp     -> rubrica contatti
- api_custom_notes_bp -> note con sfondo
"""

from notelog.services import (
    contacts_service,
    custom_notes_service,
    notes_service,
    todos_service,
)

from .api_auth import api_auth_bp
from .api_resources import build_resource_blueprint

api_notes_bp = build_resource_blueprint("api_notes", notes_service)
api_todos_bp = build_resource_blueprint("api_todos", todos_service)
api_contacts_bp = build_resource_blueprint("api_contacts", contacts_service)
api_custom_notes_bp = build_resource_blueprint("api_custom_notes", custom_notes_service)

__all__ = [
    "api_auth_bp",
    "api_notes_bp",
    "api_todos_bp",
    "api_contacts_bp",
    "api_custom_notes_bp",
    "build_resource_blueprint",
]
