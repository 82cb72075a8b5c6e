"""Repository per il modello Todo (più recenti per primi)."""
from notelog.models import Todo
from notelog.repositories.base import OwnedRepository


class TodoRepository(OwnedRepository[Todo]):
    def __init__(self, session):
        super().__init__(session, Todo)

    def ordering(self) -> tuple:
        return (Todo.created_at.desc(), Todo.id.desc())
