"""
Modello CustomNote (tabella: custom_notes).

Nota con immagine di sfondo scelta dalla galleria del frontend.
"""

from typing import Any, Dict

from notelog.extensions import db, utcnow
from notelog.models.serialization import isoformat_utc


class CustomNote(db.Model):
    __tablename__ = "custom_notes"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    title = db.Column(db.String(255), nullable=False)
    content = db.Column(db.Text, nullable=True)
    background_image_url = db.Column(db.String(1024), nullable=False)

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
            "backgroundImageUrl": self.background_image_url,
            "createdAt": isoformat_utc(self.created_at),
            "updatedAt": isoformat_utc(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<CustomNote id={self.id} title={self.title!r}>"
