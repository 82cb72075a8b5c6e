"""
Repository per il modello Note.
Le note più recenti vengono restituite per prime.
"""
from notelog.models import Note
from notelog.repositories.base import OwnedRepository


class NoteRepository(OwnedRepository[Note]):
    def __init__(self, session):
        super().__init__(session, Note)

    def ordering(self) -> tuple:
        return (Note.created_at.desc(), Note.id.desc())
