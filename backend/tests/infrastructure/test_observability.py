"""Structured Logging — tests for JSONFormatter and setup_logging.

Tests:
    - JSON records carry timestamp, level, logger, message
    - path/error_code/status extras are surfaced only when present
    - Exceptions are formatted into the record
    - setup_logging installs a handler at the requested level
"""

import json
import logging
import sys

from featurekit.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "featurekit.test", logging.WARNING, __file__, 1, "rejected %s", ("x",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "featurekit.test"
    assert log["message"] == "rejected x"
    assert "timestamp" in log
    assert "path" not in log


def test_json_formatter_surfaces_extras():
    log = json.loads(JSONFormatter().format(
        _record(path="/flag", status=400, error_code="API_ERROR"),
    ))
    assert log["path"] == "/flag"
    assert log["status"] == 400
    assert log["error_code"] == "API_ERROR"


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad")
    except ValueError:
        record = _record()
        record.exc_info = sys.exc_info()
    log = json.loads(JSONFormatter().format(record))
    assert "ValueError: bad" in log["exception"]


def test_setup_logging_installs_handler():
    previous_level = logging.root.level
    handler = setup_logging("debug", "text")
    try:
        assert handler in logging.root.handlers
        assert logging.root.level == logging.DEBUG
        assert not isinstance(handler.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)


def test_setup_logging_json_format():
    previous_level = logging.root.level
    handler = setup_logging()
    try:
        assert isinstance(handler.formatter, JSONFormatter)
        assert logging.root.level == logging.INFO
    finally:
        logging.root.removeHandler(handler)
        logging.root.setLevel(previous_level)
