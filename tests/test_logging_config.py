"""Tests for logging configuration and formatters."""

import io
import json
import logging

import pytest

from founderflow.logging import ComponentLoggerAdapter, get_logger
from founderflow.logging.config import (
    ContextualFilter,
    JSONFormatter,
    KeyValueFormatter,
    configure_logging,
)
from founderflow.logging.context import log_context


@pytest.fixture
def logger():
    """Create a test logger with handler for capturing output."""
    test_logger = logging.getLogger("test_logger")
    test_logger.setLevel(logging.DEBUG)
    test_logger.handlers.clear()

    yield test_logger

    test_logger.handlers.clear()


def test_json_formatter_basic(logger):
    """Test JSONFormatter produces valid JSON with mandatory fields."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None
    )

    log_obj = json.loads(formatter.format(record))

    assert log_obj["level"] == "INFO"
    assert log_obj["message"] == "Test message"
    assert "timestamp" in log_obj


def test_json_formatter_with_extra_fields(logger):
    """Test JSONFormatter includes extra fields."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Batch normalized",
        (),
        None,
        extra={"event": "normalization.batch.completed", "normalized": 42, "failed": 0},
    )

    log_obj = json.loads(formatter.format(record))

    assert log_obj["event"] == "normalization.batch.completed"
    assert log_obj["normalized"] == 42
    assert log_obj["failed"] == 0


def test_json_formatter_stringifies_unknown_types(logger):
    """Test JSONFormatter falls back to str() for values JSON cannot encode."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "msg", (), None,
        extra={"tags": ("Eng", "PM")},
    )

    log_obj = json.loads(formatter.format(record))

    assert log_obj["tags"] == "('Eng', 'PM')"


def test_contextual_filter_adds_static_fields(logger):
    """Test ContextualFilter adds static service and environment fields."""
    contextual_filter = ContextualFilter(service="test-service", environment="test")

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None
    )
    contextual_filter.filter(record)

    assert record.service == "test-service"
    assert record.environment == "test"


def test_contextual_filter_defaults_to_founderflow(logger):
    """Test the default service name."""
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "m", (), None)
    ContextualFilter().filter(record)

    assert record.service == "founderflow"


def test_contextual_filter_adds_context_fields(logger):
    """Test ContextualFilter adds fields from log context."""
    contextual_filter = ContextualFilter()

    with log_context(batch_id="b-1", source_file="records.json"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "Test message", (), None
        )
        contextual_filter.filter(record)

    assert record.batch_id == "b-1"
    assert record.source_file == "records.json"


def test_contextual_filter_extra_wins_over_context(logger):
    """Test that explicit extras are not overwritten by context fields."""
    with log_context(record_id="from-context"):
        record = logger.makeRecord(
            "test", logging.INFO, "test.py", 1, "m", (), None,
            extra={"record_id": "from-extra"},
        )
        ContextualFilter().filter(record)

    assert record.record_id == "from-extra"


def test_json_formatter_with_context(logger):
    """Test full pipeline: context + filter + JSON formatter."""
    formatter = JSONFormatter()
    contextual_filter = ContextualFilter(service="founderflow", environment="test")

    with log_context(batch_id="b-1"):
        record = logger.makeRecord(
            "test",
            logging.INFO,
            "test.py",
            1,
            "Loaded records",
            (),
            None,
            extra={"event": "import.records.loaded"},
        )
        contextual_filter.filter(record)
        log_obj = json.loads(formatter.format(record))

    assert log_obj["message"] == "Loaded records"
    assert log_obj["event"] == "import.records.loaded"
    assert log_obj["service"] == "founderflow"
    assert log_obj["environment"] == "test"
    assert log_obj["batch_id"] == "b-1"


def test_key_value_formatter_basic(logger):
    """Test KeyValueFormatter produces readable output."""
    formatter = KeyValueFormatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None
    )

    output = formatter.format(record)

    assert "[INFO]" in output
    assert "Test message" in output


def test_key_value_formatter_with_extras(logger):
    """Test KeyValueFormatter includes extra fields as key=value pairs."""
    formatter = KeyValueFormatter("%(message)s")

    record = logger.makeRecord(
        "test",
        logging.INFO,
        "test.py",
        1,
        "Test message",
        (),
        None,
        extra={
            "event": "test.event",
            "count": 42,
            "has_email": False,
            "company": "Acme Labs",
            "role": None,
        },
    )

    output = formatter.format(record)

    assert "event=test.event" in output
    assert "count=42" in output
    assert "has_email=false" in output
    assert 'company="Acme Labs"' in output
    assert "role=null" in output


def test_key_value_formatter_skips_static_fields(logger):
    """Test that service and environment are not repeated as extras."""
    formatter = KeyValueFormatter("%(message)s")
    record = logger.makeRecord("test", logging.INFO, "test.py", 1, "m", (), None)
    ContextualFilter().filter(record)

    output = formatter.format(record)

    assert "service=" not in output
    assert "environment=" not in output


def test_configure_logging_invalid_level():
    """Test configure_logging rejects invalid log level."""
    with pytest.raises(ValueError, match="Invalid log level"):
        configure_logging(level="INVALID")


def test_configure_logging_invalid_format():
    """Test configure_logging rejects invalid format type."""
    with pytest.raises(ValueError, match="Invalid log format"):
        configure_logging(format_type="invalid")


def test_configure_logging_json_format(restore_root_logger):
    """Test configure_logging with JSON format."""
    configure_logging(level="INFO", format_type="json", environment="test")

    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, JSONFormatter)
    assert restore_root_logger.level == logging.INFO


def test_configure_logging_key_value_format(restore_root_logger):
    """Test configure_logging with key-value format."""
    configure_logging(level="debug", format_type="key-value", environment="test")

    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, KeyValueFormatter)
    assert restore_root_logger.level == logging.DEBUG


def test_configure_logging_writes_to_given_stream(restore_root_logger):
    """Test that log lines go to the configured stream."""
    stream = io.StringIO()
    configure_logging(level="INFO", format_type="json", environment="test", stream=stream)

    logging.getLogger("founderflow.test").info(
        "hello", extra={"event": "test.event"}
    )

    log_obj = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert log_obj["message"] == "hello"
    assert log_obj["environment"] == "test"


def test_timestamp_format_in_json(logger):
    """Test that JSON formatter produces correct ISO-8601 timestamp format."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None
    )

    timestamp = json.loads(formatter.format(record))["timestamp"]
    assert timestamp.endswith("Z")
    assert "T" in timestamp
    assert len(timestamp) == 24  # 2025-11-04T10:30:00.123Z


def test_json_formatter_no_duplicate_fields(logger):
    """Test that JSON formatter doesn't duplicate standard fields in extras."""
    formatter = JSONFormatter()

    record = logger.makeRecord(
        "test", logging.INFO, "test.py", 1, "Test message", (), None,
        extra={"event": "test.event"},
    )

    log_obj = json.loads(formatter.format(record))

    assert "name" not in log_obj
    assert "event" in log_obj


class TestGetLogger:
    """Tests for get_logger and ComponentLoggerAdapter."""

    def test_without_component_returns_plain_logger(self):
        """Test that no component yields a plain Logger."""
        assert isinstance(get_logger("founderflow.x"), logging.Logger)

    def test_with_component_returns_adapter(self):
        """Test that a component yields an adapter carrying it."""
        adapter = get_logger("founderflow.x", component="directory")

        assert isinstance(adapter, ComponentLoggerAdapter)
        assert adapter.extra == {"component": "directory"}

    def test_adapter_merges_extras(self):
        """Test that per-call extras are merged with the component."""
        adapter = get_logger("founderflow.x", component="normalization")

        _, kwargs = adapter.process("msg", {"extra": {"event": "e", "component": "override"}})

        assert kwargs["extra"] == {"component": "override", "event": "e"}
