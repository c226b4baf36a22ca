"""Tests for logging configuration and formatters."""

import json
import logging
import sys

import pytest

from lead_downloader.logging import ComponentLoggerAdapter, get_logger
from lead_downloader.logging.config import (
    FRAMEWORK_LOGGERS,
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from lead_downloader.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger for building records."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield root

    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(logger, message="Test message", extra=None):
    return logger.makeRecord("test", logging.INFO, "test.py", 1, message, (), None, extra=extra)


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    log_obj = json.loads(JSONFormatter().format(make_record(logger)))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert log_obj["logger"] == "test"
    assert log_obj["timestamp"].endswith("Z")


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    record = make_record(
        logger,
        extra={"event": "retrieval.page.fetched", "page": 2, "flag": True, "path": object()},
    )

    log_obj = json.loads(JSONFormatter().format(record))

    assert log_obj["event"] == "retrieval.page.fetched"
    assert log_obj["page"] == 2
    assert log_obj["flag"] is True
    assert isinstance(log_obj["path"], str)


def test_json_formatter_includes_exception(logger):
    try:
        raise ValueError("boom")
    except ValueError:
        record = logger.makeRecord(
            "test", logging.ERROR, "test.py", 1, "Failed", (), sys.exc_info()
        )

    log_obj = json.loads(JSONFormatter().format(record))

    assert "ValueError: boom" in log_obj["exc_info"]


def test_key_value_formatter(logger):
    """Test KeyValueFormatter appends sorted key=value pairs."""
    formatter = KeyValueFormatter("%(levelname)s %(message)s")
    record = make_record(
        logger,
        extra={"event": "retrieval.completed", "lead_count": 120, "keywords": "web designer"},
    )

    output = formatter.format(record)

    assert output == (
        'INFO Test message event=retrieval.completed keywords="web designer" lead_count=120'
    )


def test_key_value_formatter_value_rendering():
    assert KeyValueFormatter._format_value(None) == "null"
    assert KeyValueFormatter._format_value(False) == "false"
    assert KeyValueFormatter._format_value("a=b") == '"a=b"'
    assert KeyValueFormatter._format_value(3.5) == "3.5"


def test_key_value_formatter_skips_static_fields(logger):
    formatter = KeyValueFormatter("%(message)s")
    record = make_record(logger)
    ContextualFilter(service="svc", environment="test").filter(record)

    assert formatter.format(record) == "Test message"


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds static service and environment fields."""
    record = make_record(logger)

    assert ContextualFilter(service="test-service", environment="test").filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter adds fields from log context."""
    with log_context(request_id="abc123", retrieval_id="r-1"):
        record = make_record(logger)
        ContextualFilter().filter(record)

    assert record.request_id == "abc123"
    assert record.retrieval_id == "r-1"


def test_contextual_filter_does_not_override_explicit_fields(logger):
    """Fields passed on the log call win over context fields."""
    with log_context(path="/search"):
        record = make_record(logger, extra={"path": "/download"})
        ContextualFilter().filter(record)

    assert record.path == "/download"


def test_get_logger_with_component():
    adapter = get_logger("lead_downloader.test", component="retrieval")

    assert isinstance(adapter, ComponentLoggerAdapter)
    msg, kwargs = adapter.process("hello", {"extra": {"event": "x"}})
    assert kwargs["extra"] == {"component": "retrieval", "event": "x"}


def test_get_logger_without_component():
    assert isinstance(get_logger("lead_downloader.test"), logging.Logger)


def test_configure_logging_json(restore_root_logger):
    configure_logging(level="DEBUG", format_type="json", environment="test")

    root = restore_root_logger
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JSONFormatter)


def test_configure_logging_key_value(restore_root_logger):
    configure_logging(level="warning", format_type="key-value")

    root = restore_root_logger
    assert root.level == logging.WARNING
    assert isinstance(root.handlers[0].formatter, KeyValueFormatter)


def test_configure_logging_routes_uvicorn_through_root(restore_root_logger):
    uvicorn_logger = logging.getLogger("uvicorn.access")
    uvicorn_logger.addHandler(logging.NullHandler())
    uvicorn_logger.propagate = False

    configure_logging()

    for name in FRAMEWORK_LOGGERS:
        assert logging.getLogger(name).propagate is True
        assert logging.getLogger(name).handlers == []


def test_configure_logging_invalid_level():
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="LOUD")


def test_configure_logging_invalid_format():
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="xml")
