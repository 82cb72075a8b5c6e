"""
Repository specifico per User (archivio credenziali).
Eredita le funzioni base (add, get, list) da SqlAlchemyRepository.
"""
from typing import Optional

from notelog.models import User
from notelog.repositories.base import SqlAlchemyRepository


class UserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session):
        super().__init__(session, User)

    def get_by_email(self, email: str) -> Optional[User]:
        """Cerca utente per email (già normalizzata in minuscolo)."""
        if not email:
            return None
        return self.session.query(User).filter_by(email=email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        if not username:
            return None
        return self.session.query(User).filter_by(username=username).first()

    def exists(self, user_id: int) -> bool:
        """Verifica che l'identità referenziata da un token esista ancora."""
        return (
            self.session.query(User.id).filter_by(id=user_id).first() is not None
        )
