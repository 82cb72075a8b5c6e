"""
Promemoria dei todo lato client.

Il ReminderPoller scansiona periodicamente i todo caricati e invia una
notifica locale quando un promemoria è scattato da non più di ``window``
secondi. Ogni promemoria viene notificato una sola volta grazie alle
chiavi di deduplica persistite (``todo id`` + istante del promemoria).

È uno scheduler best-effort: un promemoria la cui finestra scade mentre
il poller non è attivo viene semplicemente perso.
"""

from __future__ import annotations

import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from notelog.client.storage import read_json, write_json_atomic

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 1.0
DEFAULT_WINDOW_SECONDS = 120.0

NOTIFICATION_TITLE = "Todo Reminder"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_reminder(value: Any) -> Optional[datetime]:
    """Istante del promemoria come datetime UTC aware, oppure None."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.warning("reminderDate non valida ignorata: %r", value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def reminder_key(todo_id: Any, reminder: datetime) -> str:
    return f"todo-reminder:{todo_id}:{reminder.isoformat()}"


# --- Store delle chiavi di deduplica -----------------------------------------

class MemoryDedupStore:
    """Chiavi in memoria (utile nei test o per sessioni usa-e-getta)."""

    def __init__(self, keys: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._keys: Set[str] = set(keys)

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._keys

    def add(self, key: str) -> None:
        with self._lock:
            self._keys.add(key)


class JsonFileDedupStore:
    """
    Chiavi persistite su file JSON, quindi conservate tra una sessione e l'altra.
    """

    def __init__(self, path: os.PathLike):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._keys: Set[str] = self._load()

    def _load(self) -> Set[str]:
        data = read_json(self.path, default=[])
        return {str(k) for k in data} if isinstance(data, list) else set()

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._keys

    def add(self, key: str) -> None:
        with self._lock:
            self._keys.add(key)
            write_json_atomic(self.path, sorted(self._keys))


# --- Notifiche ----------------------------------------------------------------

class LoggingNotifier:
    """
    Notificatore di default: scrive la notifica nel log.

    ``granted`` simula il permesso di notifica della piattaforma.
    """

    def __init__(self, granted: bool = True):
        self.granted = granted

    def permission_granted(self) -> bool:
        return self.granted

    def notify(self, title: str, body: str) -> None:
        logger.info("%s: %s", title, body)


class ReminderPoller:
    """
    Scheduler periodico dei promemoria.

    ``todos_provider`` restituisce i todo attualmente caricati (dict nel
    formato dell'API). Il thread esegue un tick alla volta: il successivo
    intervallo parte solo quando il tick precedente è terminato.
    """

    def __init__(
        self,
        todos_provider: Callable[[], Iterable[Dict[str, Any]]],
        notifier=None,
        dedup_store=None,
        interval: float = DEFAULT_INTERVAL_SECONDS,
        window: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.todos_provider = todos_provider
        self.notifier = notifier or LoggingNotifier()
        self.dedup_store = dedup_store if dedup_store is not None else MemoryDedupStore()
        self.interval = interval
        self.window = window
        self.clock = clock

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _is_due(self, reminder: datetime, now: datetime) -> bool:
        elapsed = (now - reminder).total_seconds()
        return 0 <= elapsed <= self.window

    def tick(self, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Esegue una scansione e restituisce i todo notificati.

        Senza permesso di notifica non viene fatto nulla (nessuna chiave
        salvata: se il permesso arriva entro la finestra, la notifica parte).
        """
        if not self.notifier.permission_granted():
            return []

        now = now or self.clock()
        fired: List[Dict[str, Any]] = []
        for todo in list(self.todos_provider()):
            if todo.get("isCompleted"):
                continue
            reminder = parse_reminder(todo.get("reminderDate"))
            if reminder is None or not self._is_due(reminder, now):
                continue

            key = reminder_key(todo.get("id"), reminder)
            if self.dedup_store.contains(key):
                continue

            self.notifier.notify(NOTIFICATION_TITLE, f"Reminder: {todo.get('title', '')}")
            self.dedup_store.add(key)
            fired.append(todo)
        return fired

    # --- Ciclo di vita ----------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            if not self._stop_event.is_set():
                return
            # Il thread precedente sta ancora chiudendo il suo ultimo tick
            self._thread.join()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run, name="notelog-reminder-poller", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.tick()
            except Exception:
                # Best-effort: un tick fallito non deve fermare lo scheduler
                logger.exception("Errore durante la scansione dei promemoria")
