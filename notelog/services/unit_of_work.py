"""
Unit of Work Pattern.
Gestisce la transazione del database atomica e l'accesso ai repository.
"""
from typing import Optional

from notelog.extensions import db
from notelog.repositories import (
    ContactRepository,
    CustomNoteRepository,
    NoteRepository,
    TodoRepository,
    UserRepository,
)


class UnitOfWork:
    def __init__(self):
        self.session = db.session
        self._users: Optional[UserRepository] = None
        self._notes: Optional[NoteRepository] = None
        self._custom_notes: Optional[CustomNoteRepository] = None
        self._todos: Optional[TodoRepository] = None
        self._contacts: Optional[ContactRepository] = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            self.rollback()
            return False
        # Flask gestisce la chiusura della sessione, non chiudere qui

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.session)
        return self._users

    @property
    def notes(self) -> NoteRepository:
        if self._notes is None:
            self._notes = NoteRepository(self.session)
        return self._notes

    @property
    def custom_notes(self) -> CustomNoteRepository:
        if self._custom_notes is None:
            self._custom_notes = CustomNoteRepository(self.session)
        return self._custom_notes

    @property
    def todos(self) -> TodoRepository:
        if self._todos is None:
            self._todos = TodoRepository(self.session)
        return self._todos

    @property
    def contacts(self) -> ContactRepository:
        if self._contacts is None:
            self._contacts = ContactRepository(self.session)
        return self._contacts

    def commit(self):
        try:
            self.session.commit()
        except Exception:
            self.rollback()
            raise

    def rollback(self):
        self.session.rollback()
