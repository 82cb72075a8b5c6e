"""
Vista "todo" del client: elenco dei todo caricati più il poller dei promemoria.

Il poller appartiene alla vista che lo crea: ``start_reminders()`` lo avvia,
``close()`` lo ferma.
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Optional

from notelog.client.api_client import NoteLogClient
from notelog.client.reminders import (
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_WINDOW_SECONDS,
    ReminderPoller,
)


class TodoBoard:
    def __init__(
        self,
        client: NoteLogClient,
        notifier=None,
        dedup_store=None,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        window: float = DEFAULT_WINDOW_SECONDS,
    ):
        self.client = client
        self._lock = threading.Lock()
        self._todos: List[Dict[str, Any]] = []
        self.poller = ReminderPoller(
            self.snapshot,
            notifier=notifier,
            dedup_store=dedup_store,
            interval=interval,
            window=window,
        )

    def snapshot(self) -> List[Dict[str, Any]]:
        """Copia dei todo caricati (letta dal poller)."""
        with self._lock:
            return list(self._todos)

    def refresh(self) -> List[Dict[str, Any]]:
        todos = self.client.todos.list()
        with self._lock:
            self._todos = list(todos)
        return self.snapshot()

    def add(self, title: str, description: Optional[str] = None,
            reminder_date: Optional[str] = None) -> Dict[str, Any]:
        todo = self.client.todos.create(
            {"title": title, "description": description, "reminderDate": reminder_date}
        )
        with self._lock:
            self._todos.insert(0, todo)
        return todo

    def _replace(self, updated: Dict[str, Any]) -> None:
        with self._lock:
            self._todos = [updated if t.get("id") == updated.get("id") else t for t in self._todos]

    def toggle_complete(self, todo_id: int) -> Dict[str, Any]:
        current = next((t for t in self.snapshot() if t.get("id") == todo_id), None)
        is_completed = bool(current and current.get("isCompleted"))
        updated = self.client.todos.update(todo_id, {"isCompleted": not is_completed})
        self._replace(updated)
        return updated

    def remove(self, todo_id: int) -> None:
        self.client.todos.delete(todo_id)
        with self._lock:
            self._todos = [t for t in self._todos if t.get("id") != todo_id]

    def start_reminders(self) -> None:
        self.poller.start()

    def close(self) -> None:
        self.poller.stop(timeout=5)
