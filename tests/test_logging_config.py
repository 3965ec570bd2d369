"""Tests for structured logging."""

import json
import logging

from core.logging_config import JSONFormatter, configure_logging


class TestJSONFormatter:
    def test_standard_fields(self):
        record = logging.LogRecord(
            "core.mcr", logging.DEBUG, __file__, 42, "MCR status is %r", ("DEPLOYABLE",), None
        )

        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "core.mcr"
        assert entry["message"] == "MCR status is 'DEPLOYABLE'"
        assert entry["line"] == 42
        assert entry["timestamp"].endswith("Z")

    def test_extra_fields(self):
        record = logging.LogRecord("core.mcr", logging.INFO, __file__, 1, "ready", (), None)
        record.mcr_id = "mcr-1"
        record.attempt = 3

        entry = json.loads(JSONFormatter().format(record))

        assert entry["mcr_id"] == "mcr-1"
        assert entry["attempt"] == 3
        assert "correlation_id" not in entry


class TestConfigureLogging:
    def test_json_console(self):
        logger = configure_logging(log_level="debug", log_format="json", log_file="")

        assert logger.name == "core"
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        logger.handlers = []

    def test_text_format_and_file(self, tmp_path):
        log_file = tmp_path / "mcr.log"

        logger = configure_logging(log_level="INFO", log_format="text", log_file=str(log_file))

        assert len(logger.handlers) == 2
        assert not isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert isinstance(logger.handlers[1].formatter, JSONFormatter)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    def test_reconfigure_replaces_handlers(self):
        configure_logging(log_format="json", log_file="")
        logger = configure_logging(log_format="json", log_file="")

        assert len(logger.handlers) == 1
        logger.handlers = []
