"""Structured logging: JSON lines carry gateway context keys."""

import json
import logging

from pothole_api.infrastructure import observability
from pothole_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "pothole_api.api.delegation", logging.ERROR, __file__, 10,
        "Failed to fetch budget data", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_context_keys():
    line = JSONFormatter().format(_record(route="budget", city="Chicago"))
    payload = json.loads(line)
    assert payload["level"] == "ERROR"
    assert payload["message"] == "Failed to fetch budget data"
    assert payload["route"] == "budget"
    assert payload["city"] == "Chicago"
    assert "report_id" not in payload


def test_setup_logging_replaces_handler():
    setup_logging("DEBUG", "json")
    first = observability._handler
    setup_logging("INFO", "text")
    assert first not in logging.root.handlers
    assert observability._handler in logging.root.handlers
    assert not isinstance(observability._handler.formatter, JSONFormatter)
    assert logging.root.level == logging.INFO
    logging.root.removeHandler(observability._handler)
    observability._handler = None
