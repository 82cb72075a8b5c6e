"""
Configurazione delle quattro risorse dell'applicazione sul servizio generico.

Campi obbligatori:
- Note: content (title ha default "Untitled Note")
- CustomNote: title, backgroundImageUrl
- Todo: title
- Contact: name, phone (tag tra family/friend/work/other)
"""

from __future__ import annotations

from notelog.models import Contact, CustomNote, Note, Todo
from notelog.models.contact import CONTACT_TAGS, DEFAULT_CONTACT_TAG
from notelog.models.note import DEFAULT_NOTE_TITLE
from notelog.services.resource_service import (
    FieldSpec,
    OwnedResourceService,
    choice_parser,
    parse_bool,
    parse_datetime,
)

notes_service = OwnedResourceService(
    name="note",
    label="Note",
    repository="notes",
    model_cls=Note,
    fields=[
        FieldSpec("title", "title", default=DEFAULT_NOTE_TITLE),
        FieldSpec("content", "content", required=True),
    ],
)

custom_notes_service = OwnedResourceService(
    name="custom_note",
    label="Note",
    repository="custom_notes",
    model_cls=CustomNote,
    fields=[
        FieldSpec("title", "title", required=True),
        FieldSpec("content", "content"),
        FieldSpec("backgroundImageUrl", "background_image_url", required=True),
    ],
)

todos_service = OwnedResourceService(
    name="todo",
    label="Todo",
    repository="todos",
    model_cls=Todo,
    fields=[
        FieldSpec("title", "title", required=True),
        FieldSpec("description", "description"),
        FieldSpec("isCompleted", "is_completed", parser=parse_bool, default=False),
        FieldSpec("reminderDate", "reminder_date", parser=parse_datetime),
    ],
)

contacts_service = OwnedResourceService(
    name="contact",
    label="Contact",
    repository="contacts",
    model_cls=Contact,
    fields=[
        FieldSpec("name", "name", required=True),
        FieldSpec("phone", "phone", required=True),
        FieldSpec("email", "email"),
        FieldSpec("tag", "tag", parser=choice_parser(CONTACT_TAGS), default=DEFAULT_CONTACT_TAG),
        FieldSpec("address", "address"),
    ],
)
