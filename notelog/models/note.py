"""
Modello Note (tabella: notes).

Nota testuale libera di un utente.
"""

from typing import Any, Dict

from notelog.extensions import db, utcnow
from notelog.models.serialization import isoformat_utc

DEFAULT_NOTE_TITLE = "Untitled Note"


class Note(db.Model):
    __tablename__ = "notes"

    id = db.Column(db.Integer, primary_key=True)

    # Proprietario: impostato alla creazione e mai modificato
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(255), nullable=False, default=DEFAULT_NOTE_TITLE)
    content = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "createdAt": isoformat_utc(self.created_at),
            "updatedAt": isoformat_utc(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Note id={self.id} user_id={self.user_id}>"
