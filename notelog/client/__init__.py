"""
Client Python per le API NoteLog.

Contiene:
- NoteLogClient / ResourceClient -> chiamate HTTP con token Bearer
- SessionStore                   -> token e utente della sessione corrente
- ReminderPoller                 -> notifiche locali dei promemoria dei todo
- TodoBoard                      -> vista todo che possiede il poller
- NotesView / ContactsView       -> ricerca e filtro sui record caricati
- CustomNoteEditor               -> editor note personalizzate con bozze
"""

from .api_client import APIError, NoteLogClient, ResourceClient
from .drafts import CustomNoteEditor, JsonFileDraftStore, MemoryDraftStore
from .reminders import (
    JsonFileDedupStore,
    LoggingNotifier,
    MemoryDedupStore,
    ReminderPoller,
)
from .session import SessionStore
from .todo_board import TodoBoard
from .views import ContactsView, NotesView

__all__ = [
    "APIError",
    "NoteLogClient",
    "ResourceClient",
    "SessionStore",
    "ReminderPoller",
    "MemoryDedupStore",
    "JsonFileDedupStore",
    "LoggingNotifier",
    "TodoBoard",
    "NotesView",
    "ContactsView",
    "CustomNoteEditor",
    "MemoryDraftStore",
    "JsonFileDraftStore",
]
