"""
Modello Todo (tabella: todos).

Attività con stato di completamento e promemoria opzionale.
``reminder_date`` è salvato in UTC senza tzinfo, come gli altri timestamp.
"""

from typing import Any, Dict

from notelog.extensions import db, utcnow
from notelog.models.serialization import isoformat_utc


class Todo(db.Model):
    __tablename__ = "todos"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    is_completed = db.Column(db.Boolean, nullable=False, default=False)
    reminder_date = db.Column(db.DateTime, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "description": self.description,
            "isCompleted": bool(self.is_completed),
            "reminderDate": isoformat_utc(self.reminder_date),
            "createdAt": isoformat_utc(self.created_at),
            "updatedAt": isoformat_utc(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Todo id={self.id} completed={self.is_completed}>"
