"""
Bozze delle note personalizzate.

Una nota nuova viene salvata in bozza ad ogni modifica, con chiave legata
all'immagine di sfondo scelta. La bozza sparisce quando la nota viene
salvata sul server o quando l'utente annulla. Le note già esistenti non
hanno bozze.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from notelog.client.api_client import NoteLogClient
from notelog.client.storage import read_json, write_json_atomic


def draft_key(background_image_url: str) -> str:
    return f"note-draft-{background_image_url}"


class MemoryDraftStore:
    def __init__(self):
        self._lock = threading.Lock()
        self._drafts: Dict[str, Dict[str, str]] = {}

    def load(self, key: str) -> Optional[Dict[str, str]]:
        with self._lock:
            draft = self._drafts.get(key)
            return dict(draft) if draft else None

    def save(self, key: str, draft: Dict[str, str]) -> None:
        with self._lock:
            self._drafts[key] = dict(draft)

    def discard(self, key: str) -> None:
        with self._lock:
            self._drafts.pop(key, None)


class JsonFileDraftStore:
    """Bozze su file JSON, conservate tra una sessione e l'altra."""

    def __init__(self, path: os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()
        data = read_json(self.path, default={})
        self._drafts: Dict[str, Dict[str, str]] = data if isinstance(data, dict) else {}

    def load(self, key: str) -> Optional[Dict[str, str]]:
        with self._lock:
            draft = self._drafts.get(key)
            return dict(draft) if isinstance(draft, dict) else None

    def save(self, key: str, draft: Dict[str, str]) -> None:
        with self._lock:
            self._drafts[key] = dict(draft)
            write_json_atomic(self.path, self._drafts)

    def discard(self, key: str) -> None:
        with self._lock:
            if self._drafts.pop(key, None) is not None:
                write_json_atomic(self.path, self._drafts)


class CustomNoteEditor:
    """
    Editor di una nota personalizzata.

    ``existing`` è la nota da modificare (dict dell'API) oppure None per una
    nota nuova; solo le note nuove usano le bozze.
    """

    def __init__(
        self,
        client: NoteLogClient,
        background_image_url: str,
        existing: Optional[Dict[str, Any]] = None,
        drafts=None,
    ):
        self.client = client
        self.background_image_url = background_image_url
        self.existing = existing
        self.drafts = drafts if drafts is not None else MemoryDraftStore()
        self.key = draft_key(background_image_url)
        self.is_draft = False

        if existing is not None:
            self.title = existing.get("title") or ""
            self.content = existing.get("content") or ""
        else:
            draft = self.drafts.load(self.key) or {}
            self.title = draft.get("title", "")
            self.content = draft.get("content", "")
            self.is_draft = bool(draft)

    def edit(self, title: Optional[str] = None, content: Optional[str] = None) -> None:
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if self.existing is None and (self.title or self.content):
            self.drafts.save(self.key, {"title": self.title, "content": self.content})
            self.is_draft = True

    def save(self) -> Optional[Dict[str, Any]]:
        """Crea o aggiorna la nota; senza titolo non fa nulla e restituisce None."""
        if not self.title.strip():
            return None

        data = {
            "title": self.title,
            "content": self.content,
            "backgroundImageUrl": self.background_image_url,
        }
        if self.existing is not None:
            saved = self.client.custom_notes.update(self.existing["id"], data)
        else:
            saved = self.client.custom_notes.create(data)
            self.drafts.discard(self.key)
            self.is_draft = False
        self.existing = saved
        return saved

    def cancel(self) -> None:
        if self.existing is None:
            self.drafts.discard(self.key)
            self.is_draft = False
