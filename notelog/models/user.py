"""
Modello User (tabella: users).

Rappresenta un'identità registrata: username, email e hash della password.
Ogni risorsa (note, todo, contatti, note personalizzate) vi fa riferimento
tramite ``user_id``.
"""

from typing import Any, Dict

from werkzeug.security import check_password_hash, generate_password_hash

from notelog.extensions import db, utcnow
from notelog.models.serialization import isoformat_utc


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)

    username = db.Column(db.String(64), nullable=False, unique=True, index=True)
    email = db.Column(db.String(255), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def to_dict(self) -> Dict[str, Any]:
        # L'hash della password non esce mai dal server
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": isoformat_utc(self.created_at),
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
