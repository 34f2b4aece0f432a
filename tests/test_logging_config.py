"""Tests for logging configuration."""

import json
import logging

from redis_target_discovery.config import LoggingConfig
from redis_target_discovery.discovery.models import DiscoveryWarning
from redis_target_discovery.logging_config import JSONFormatter, TextFormatter, configure_logging


class TestJSONFormatter:
    def test_formats_as_json(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="found %d targets", args=(3,), exc_info=None,
        )
        output = formatter.format(record)
        parsed = json.loads(output)
        assert parsed["message"] == "found 3 targets"
        assert parsed["level"] == "INFO"
        assert "timestamp" in parsed

    def test_includes_extra_fields(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test", level=logging.WARNING, pathname="", lineno=0,
            msg="no key", args=(), exc_info=None,
        )
        record.source = "azure"  # type: ignore
        record.resource_group = "rg1"  # type: ignore
        record.cache = "cache-1"  # type: ignore
        parsed = json.loads(formatter.format(record))
        assert parsed["source"] == "azure"
        assert parsed["resource_group"] == "rg1"
        assert parsed["cache"] == "cache-1"
        assert "service" not in parsed

    def test_includes_discovery_warning(self):
        formatter = JSONFormatter()
        record = logging.LogRecord(
            name="test", level=logging.WARNING, pathname="", lineno=0,
            msg="You have no rights to read redis keys for cache-1", args=(), exc_info=None,
        )
        record.discovery_warning = DiscoveryWarning(  # type: ignore
            source="azure", message=record.msg, subject="cache-1",
        )
        parsed = json.loads(formatter.format(record))
        assert parsed["warning"] == {
            "source": "azure",
            "message": "You have no rights to read redis keys for cache-1",
            "subject": "cache-1",
        }

    def test_no_warning_key_without_discovery_warning(self):
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="ok", args=(), exc_info=None,
        )
        assert "warning" not in json.loads(JSONFormatter().format(record))


class TestConfigureLogging:
    def test_json_format(self):
        configure_logging(LoggingConfig(level="DEBUG", format="json"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h.formatter, JSONFormatter) for h in root.handlers)

    def test_text_format(self):
        configure_logging(LoggingConfig(level="WARNING", format="text"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h.formatter, TextFormatter) for h in root.handlers)

    def test_suppresses_noisy_loggers(self):
        configure_logging(LoggingConfig())
        assert logging.getLogger("azure").level >= logging.WARNING
        assert logging.getLogger("urllib3").level >= logging.WARNING
