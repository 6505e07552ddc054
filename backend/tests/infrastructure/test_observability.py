"""Structured Logging — tests for the JSON formatter and setup.

Tests cover:
    - Base fields always present
    - Extra fields surfaced only when set
    - Exceptions rendered into the payload
    - setup_logging applies level and formatter
"""

import json
import logging

from graphwalk.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "graphwalk.test", logging.INFO, __file__, 1, msg, None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "graphwalk.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload
    assert "session_id" not in payload


def test_json_formatter_surfaces_extras():
    payload = json.loads(JSONFormatter().format(
        _record(session_id="abc", algorithm="dfs", steps=11),
    ))
    assert (payload["session_id"], payload["algorithm"], payload["steps"]) == (
        "abc", "dfs", 11,
    )


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        import sys
        record = _record(exc_info=sys.exc_info())
    payload = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in payload["exception"]


def test_setup_logging_sets_level_and_json_handler():
    root = logging.getLogger()
    handlers_before = list(root.handlers)
    level_before = root.level
    try:
        setup_logging("debug", "json")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[-1].formatter, JSONFormatter)
    finally:
        root.handlers = handlers_before
        root.setLevel(level_before)
