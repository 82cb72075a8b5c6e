"""
NoteLogClient e TodoBoard contro l'app reale (tramite FlaskTestAdapter).
"""

from datetime import datetime, timedelta, timezone

import pytest
import requests

import manage
from notelog.client import (
    APIError,
    ContactsView,
    CustomNoteEditor,
    JsonFileDraftStore,
    MemoryDedupStore,
    NoteLogClient,
    NotesView,
    SessionStore,
    TodoBoard,
)

BASE_URL = "http://notelog.test/api"


class FakeNotifier:
    def __init__(self):
        self.calls = []

    def permission_granted(self):
        return True

    def notify(self, title, body):
        self.calls.append((title, body))


@pytest.fixture
def api(http_session):
    return NoteLogClient(BASE_URL, session_store=SessionStore(), http=http_session)


def test_register_stores_session(api):
    user = api.register("alice", "a@x.com", "secret1")
    assert user["username"] == "alice"
    assert api.session_store.get_token()
    assert api.session_store.get_user()["email"] == "a@x.com"
    assert api.check_session() is True


def test_login_and_logout(api):
    api.register("alice", "a@x.com", "secret1")
    api.logout()
    assert api.check_session() is False

    api.login("a@x.com", "secret1")
    assert api.get_profile()["username"] == "alice"


def test_bad_login_raises_api_error(api):
    with pytest.raises(APIError) as info:
        api.login("a@x.com", "secret1")
    assert info.value.status == 401
    assert info.value.message == "Invalid credentials"


def test_resource_crud(api):
    api.register("alice", "a@x.com", "secret1")

    contact = api.contacts.create({"name": "Anna", "phone": "123"})
    assert api.contacts.list() == [contact]

    updated = api.contacts.update(contact["id"], {"tag": "family"})
    assert updated["tag"] == "family"

    api.contacts.delete(contact["id"])
    assert api.contacts.list() == []

    with pytest.raises(APIError) as info:
        api.contacts.delete(contact["id"])
    assert info.value.status == 404
    assert info.value.message == "Contact not found"


def test_custom_notes_path(api):
    api.register("alice", "a@x.com", "secret1")
    note = api.custom_notes.create({"title": "Mare", "backgroundImageUrl": "https://x/y.jpg"})
    assert api.custom_notes.list()[0]["id"] == note["id"]


def test_session_cleared_when_identity_deleted(app, api):
    api.register("alice", "a@x.com", "secret1")
    api.notes.create({"content": "hello"})

    assert manage.delete_user(app, "a@x.com") is True

    with pytest.raises(APIError) as info:
        api.notes.list()
    assert info.value.status == 401
    assert info.value.message == "User no longer exists."

    assert api.check_session() is False
    assert api.session_store.get_token() is None


def test_network_error_is_api_error():
    class BrokenAdapter(requests.adapters.BaseAdapter):
        def send(self, request, **kwargs):
            raise requests.ConnectionError("connessione rifiutata")

        def close(self):
            pass

    session = requests.Session()
    session.mount("http://", BrokenAdapter())
    api = NoteLogClient("http://offline.test/api", http=session)

    with pytest.raises(APIError) as info:
        api.login("a@x.com", "secret1")
    assert info.value.status is None


def test_todo_board_reminders(api):
    api.register("alice", "a@x.com", "secret1")
    notifier = FakeNotifier()
    board = TodoBoard(api, notifier=notifier, dedup_store=MemoryDedupStore())

    past = (datetime.now(timezone.utc) - timedelta(seconds=5)).isoformat()
    future = (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat()
    board.add("Bollette", reminder_date=past)
    board.add("Dentista", reminder_date=future)
    board.refresh()

    fired = board.poller.tick()
    assert [t["title"] for t in fired] == ["Bollette"]
    assert board.poller.tick() == []
    assert notifier.calls == [("Todo Reminder", "Reminder: Bollette")]


def test_todo_board_toggle_and_remove(api):
    api.register("alice", "a@x.com", "secret1")
    board = TodoBoard(api, notifier=FakeNotifier())
    todo = board.add("Palestra")

    toggled = board.toggle_complete(todo["id"])
    assert toggled["isCompleted"] is True
    assert board.snapshot()[0]["isCompleted"] is True

    board.remove(todo["id"])
    assert board.snapshot() == []
    assert board.refresh() == []


def test_todo_board_owns_poller(api):
    api.register("alice", "a@x.com", "secret1")
    board = TodoBoard(api, notifier=FakeNotifier(), interval=0.01)
    board.start_reminders()
    assert board.poller.is_running
    board.close()
    assert not board.poller.is_running


def test_notes_view_search(api):
    api.register("alice", "a@x.com", "secret1")
    spesa = api.notes.create({"title": "Spesa", "content": "Latte e uova"})
    lavoro = api.notes.create({"title": "Riunione", "content": "Budget LATTE macchinetta"})
    api.notes.create({"title": "Viaggio", "content": "Treno per Roma"})

    view = NotesView(api)
    assert len(view.refresh()) == 3

    assert [n["id"] for n in view.search("latte")] == [lavoro["id"], spesa["id"]]
    assert [n["id"] for n in view.search("SPESA")] == [spesa["id"]]
    assert len(view.search("")) == 3
    assert view.search("nessuna") == []


def test_contacts_view_search_and_tag(api):
    api.register("alice", "a@x.com", "secret1")
    anna = api.contacts.create(
        {"name": "Anna Bianchi", "phone": "333 1234567", "email": "Anna@Example.com", "tag": "family"}
    )
    marco = api.contacts.create({"name": "Marco", "phone": "02 555", "tag": "work"})
    luca = api.contacts.create({"name": "Luca", "phone": "347 999", "email": "luca@work.it", "tag": "work"})

    view = ContactsView(api)
    view.refresh()

    assert [c["id"] for c in view.search("anna")] == [anna["id"]]
    assert [c["id"] for c in view.search("example.COM")] == [anna["id"]]
    assert [c["id"] for c in view.search("555")] == [marco["id"]]
    assert len(view.search("")) == 3

    assert [c["id"] for c in view.filter_by_tag("work")] == [luca["id"], marco["id"]]
    assert len(view.filter_by_tag("all")) == 3
    assert view.filter_by_tag("friend") == []

    assert [c["id"] for c in view.visible("work", "work")] == [luca["id"]]
    assert view.visible("anna", "work") == []


def test_custom_note_draft_survives_and_clears_on_save(api, tmp_path):
    api.register("alice", "a@x.com", "secret1")
    drafts_path = tmp_path / "drafts.json"
    background = "https://images.example.com/beach.jpg"

    editor = CustomNoteEditor(api, background, drafts=JsonFileDraftStore(drafts_path))
    assert editor.is_draft is False
    editor.edit(title="Vacanze")
    editor.edit(content="Idee per agosto")
    assert editor.is_draft is True

    # nuova sessione: la bozza viene ricaricata dal file
    reopened = CustomNoteEditor(api, background, drafts=JsonFileDraftStore(drafts_path))
    assert reopened.is_draft is True
    assert (reopened.title, reopened.content) == ("Vacanze", "Idee per agosto")

    # altra immagine, nessuna bozza
    other = CustomNoteEditor(api, "https://images.example.com/snow.jpg", drafts=JsonFileDraftStore(drafts_path))
    assert (other.title, other.content) == ("", "")

    saved = reopened.save()
    assert saved["title"] == "Vacanze"
    assert saved["backgroundImageUrl"] == background
    assert api.custom_notes.list()[0]["id"] == saved["id"]

    after = CustomNoteEditor(api, background, drafts=JsonFileDraftStore(drafts_path))
    assert after.is_draft is False
    assert after.title == ""


def test_custom_note_editor_cancel_and_existing_note(api, tmp_path):
    api.register("alice", "a@x.com", "secret1")
    drafts = JsonFileDraftStore(tmp_path / "drafts.json")
    background = "https://images.example.com/forest.jpg"

    editor = CustomNoteEditor(api, background, drafts=drafts)
    editor.edit(content="solo contenuto")
    assert editor.save() is None
    assert api.custom_notes.list() == []

    editor.cancel()
    assert drafts.load("note-draft-" + background) is None

    note = api.custom_notes.create({"title": "Bosco", "content": "", "backgroundImageUrl": background})
    existing = CustomNoteEditor(api, background, existing=note, drafts=drafts)
    existing.edit(content="Funghi")
    # le note già salvate non producono bozze
    assert drafts.load("note-draft-" + background) is None

    updated = existing.save()
    assert updated["id"] == note["id"]
    assert updated["content"] == "Funghi"
