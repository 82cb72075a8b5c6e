"""
Pacchetto per i modelli SQLAlchemy.

Qui vengono esportate le classi modello principali.
"""

from .user import User
from .note import Note
from .custom_note import CustomNote
from .todo import Todo
from .contact import Contact

__all__ = [
    "User",
    "Note",
    "CustomNote",
    "Todo",
    "Contact",
]
