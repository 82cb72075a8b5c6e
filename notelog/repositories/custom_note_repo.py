"""Repository per il modello CustomNote (più recenti per prime)."""
from notelog.models import CustomNote
from notelog.repositories.base import OwnedRepository


class CustomNoteRepository(OwnedRepository[CustomNote]):
    def __init__(self, session):
        super().__init__(session, CustomNote)

    def ordering(self) -> tuple:
        return (CustomNote.created_at.desc(), CustomNote.id.desc())
