"""
Viste "note" e "contatti" del client: record caricati più ricerca e filtro.

La ricerca lavora sui record già scaricati, senza altre chiamate HTTP.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, Iterable, List, Optional

from notelog.client.api_client import NoteLogClient, ResourceClient

ALL_TAGS = "all"


def _contains(value: Optional[str], term: str) -> bool:
    return bool(value) and term in value.lower()


def search_notes(notes: Iterable[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """Note il cui titolo o contenuto contiene ``term`` (senza distinzione maiuscole)."""
    if not term:
        return list(notes)
    needle = term.lower()
    return [
        note for note in notes
        if _contains(note.get("title"), needle) or _contains(note.get("content"), needle)
    ]


def search_contacts(contacts: Iterable[Dict[str, Any]], term: str) -> List[Dict[str, Any]]:
    """
    Contatti per nome o email (senza distinzione maiuscole) oppure per
    telefono (sottostringa esatta). Termine vuoto: tutti i contatti.
    """
    if not term:
        return list(contacts)
    needle = term.lower()
    return [
        contact for contact in contacts
        if _contains(contact.get("name"), needle)
        or term in (contact.get("phone") or "")
        or _contains(contact.get("email"), needle)
    ]


def filter_contacts_by_tag(contacts: Iterable[Dict[str, Any]], tag: str) -> List[Dict[str, Any]]:
    if not tag or tag == ALL_TAGS:
        return list(contacts)
    return [contact for contact in contacts if contact.get("tag") == tag]


class _LoadedView:
    """Copia locale dei record di una risorsa, aggiornata con ``refresh()``."""

    def __init__(self, resource: ResourceClient):
        self.resource = resource
        self._lock = threading.Lock()
        self._records: List[Dict[str, Any]] = []

    def snapshot(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._records)

    def refresh(self) -> List[Dict[str, Any]]:
        records = self.resource.list()
        with self._lock:
            self._records = list(records)
        return self.snapshot()


class NotesView(_LoadedView):
    def __init__(self, client: NoteLogClient):
        super().__init__(client.notes)

    def search(self, term: str) -> List[Dict[str, Any]]:
        return search_notes(self.snapshot(), term)


class ContactsView(_LoadedView):
    def __init__(self, client: NoteLogClient):
        super().__init__(client.contacts)

    def search(self, term: str) -> List[Dict[str, Any]]:
        return search_contacts(self.snapshot(), term)

    def filter_by_tag(self, tag: str) -> List[Dict[str, Any]]:
        return filter_contacts_by_tag(self.snapshot(), tag)

    def visible(self, term: str = "", tag: str = ALL_TAGS) -> List[Dict[str, Any]]:
        """Ricerca e filtro per tag combinati, come nell'elenco contatti."""
        return filter_contacts_by_tag(search_contacts(self.snapshot(), term), tag)
