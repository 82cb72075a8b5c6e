"""
Modello Contact (tabella: contacts).

Rubrica personale: nome e telefono obbligatori, etichetta tra
``family``, ``friend``, ``work``, ``other``.
"""

from typing import Any, Dict

from notelog.extensions import db, utcnow
from notelog.models.serialization import isoformat_utc

CONTACT_TAGS = ("family", "friend", "work", "other")
DEFAULT_CONTACT_TAG = "other"


class Contact(db.Model):
    __tablename__ = "contacts"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = db.Column(db.String(255), nullable=False, index=True)
    phone = db.Column(db.String(64), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    tag = db.Column(db.String(16), nullable=False, default=DEFAULT_CONTACT_TAG)
    address = db.Column(db.String(512), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "tag": self.tag,
            "address": self.address,
            "createdAt": isoformat_utc(self.created_at),
            "updatedAt": isoformat_utc(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Contact id={self.id} name={self.name!r}>"
