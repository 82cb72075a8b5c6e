"""
Package repositories.
Espone i Repository per l'accesso ai dati.
"""

from .base import OwnedRepository, SqlAlchemyRepository
from .user_repo import UserRepository
from .note_repo import NoteRepository
from .custom_note_repo import CustomNoteRepository
from .todo_repo import TodoRepository
from .contact_repo import ContactRepository

__all__ = [
    "SqlAlchemyRepository",
    "OwnedRepository",
    "UserRepository",
    "NoteRepository",
    "CustomNoteRepository",
    "TodoRepository",
    "ContactRepository",
]
