import json
import logging

from notelog.extensions import JsonFormatter
from notelog.services.logging import log_structured_event


def _record(**extra):
    record = logging.LogRecord("notelog.events", logging.INFO, __file__, 1, "Nota creata", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields():
    line = JsonFormatter().format(_record(action="note_created", user_id=3))
    data = json.loads(line)

    assert data["level"] == "INFO"
    assert data["logger"] == "notelog.events"
    assert data["message"] == "Nota creata"
    assert data["timestamp"].endswith("Z")
    assert data["extra"] == {"action": "note_created", "user_id": 3}


def test_json_formatter_serializes_unknown_types():
    line = JsonFormatter().format(_record(fields=["a", "b"], when=object()))
    data = json.loads(line)
    assert data["extra"]["fields"] == ["a", "b"]
    assert isinstance(data["extra"]["when"], str)


def test_structured_event_reaches_logger():
    captured = []

    class _Handler(logging.Handler):
        def emit(self, record):
            captured.append(record)

    logger = logging.getLogger("notelog.events")
    handler = _Handler(level=logging.DEBUG)
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        log_structured_event("user_login", message="Login effettuato", user_id=9)
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

    assert len(captured) == 1
    assert captured[0].action == "user_login"
    assert captured[0].user_id == 9
    assert captured[0].getMessage() == "Login effettuato"


def test_structured_event_masks_secrets():
    captured = []

    class _Handler(logging.Handler):
        def emit(self, record):
            captured.append(record)

    logger = logging.getLogger("notelog.events")
    handler = _Handler(level=logging.DEBUG)
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        log_structured_event("debug_login", token="abc.def.ghi", password="secret1", user_id=1)
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)

    assert captured[0].token == "***"
    assert captured[0].password == "***"
    assert captured[0].user_id == 1
