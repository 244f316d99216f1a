"""Structured Logging - JSONFormatter output and setup_logging idempotence."""

import json
import logging

from app.infrastructure import observability
from app.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="app.services.post_service", level=logging.INFO, pathname=__file__,
        lineno=1, msg="Post %s created", args=("abc",), exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "app.services.post_service"
    assert payload["message"] == "Post abc created"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(post_id="p1", user_id="u1", attempt=2, unrelated="x"),
    ))
    assert payload["post_id"] == "p1"
    assert payload["user_id"] == "u1"
    assert payload["attempt"] == 2
    assert "unrelated" not in payload


def test_setup_logging_is_idempotent():
    before = len(logging.root.handlers)
    level = logging.root.level
    setup_logging("DEBUG", "json")
    setup_logging("WARNING", "text")
    try:
        assert len(logging.root.handlers) == before + 1
        assert logging.root.level == logging.WARNING
        assert not isinstance(observability._handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(observability._handler)
        observability._handler = None
        logging.root.setLevel(level)
