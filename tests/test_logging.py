"""
Tests for logging utilities.
"""

import json
import logging

import pytest

from nostr_offer_watch.utils import logging as logging_utils
from nostr_offer_watch.utils.logging import (
    ROOT_LOGGER_NAME,
    ComponentLogger,
    LoggingManager,
    get_logger,
    setup_logging,
)


@pytest.fixture
def restore_logging():
    """Detach handlers installed by a test."""
    previous = logging_utils._logging_manager
    yield
    if logging_utils._logging_manager is not None and logging_utils._logging_manager is not previous:
        logging_utils._logging_manager.close()
    logging_utils._logging_manager = previous


class TestComponentLogger:
    """Test cases for ComponentLogger."""

    def test_component_logger_initialization(self):
        """Test component logger initialization."""
        logger = ComponentLogger("notifier", {"run": "1"})

        assert logger.component_name == "notifier"
        assert logger.extra_context == {"run": "1"}
        assert logger.logger.name == f"{ROOT_LOGGER_NAME}.notifier"

    def test_format_message(self):
        """Test structured message formatting."""
        logger = ComponentLogger("notifier", {"run": "1"})

        formatted = json.loads(logger._format_message("Sending notification", {"event_id": "abc"}))

        assert formatted["component"] == "notifier"
        assert formatted["message"] == "Sending notification"
        assert formatted["run"] == "1"
        assert formatted["event_id"] == "abc"
        assert "timestamp" in formatted

    def test_format_message_keeps_unicode(self):
        """Test that non-ASCII text is written as is."""
        logger = ComponentLogger("notifier")

        assert "Oferta encontrada!" in logger._format_message("Oferta encontrada!")
        assert "ção" in logger._format_message("ção")

    def test_log_levels(self, caplog):
        """Test that messages reach the standard logging tree."""
        logger = ComponentLogger("orchestrator")

        with caplog.at_level(logging.DEBUG, logger=f"{ROOT_LOGGER_NAME}.orchestrator"):
            logger.info("Run completed")
            logger.warning("Relay slow")

        messages = [json.loads(record.getMessage())["message"] for record in caplog.records]
        assert messages == ["Run completed", "Relay slow"]


class TestLoggingManager:
    """Test cases for LoggingManager."""

    def test_creates_log_files(self, tmp_path):
        """Test that handlers write the main and error logs."""
        manager = LoggingManager(str(tmp_path / "logs"), "INFO")
        try:
            logger = manager.get_component_logger("test")
            logger.info("hello")
            logger.error("broken")
        finally:
            manager.close()

        main_log = (tmp_path / "logs" / f"{ROOT_LOGGER_NAME}.log").read_text(encoding="utf-8")
        error_log = (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")
        assert "hello" in main_log
        assert "broken" in main_log
        assert "broken" in error_log
        assert "hello" not in error_log

    def test_component_logger_cache(self, tmp_path):
        """Test that component loggers are reused."""
        manager = LoggingManager(str(tmp_path), "DEBUG")
        try:
            assert manager.get_component_logger("a") is manager.get_component_logger("a")
            assert manager.get_component_logger("a") is not manager.get_component_logger("b")
        finally:
            manager.close()

    def test_close_detaches_handlers(self, tmp_path):
        """Test that closing removes the package handlers."""
        manager = LoggingManager(str(tmp_path), "INFO")
        manager.close()

        assert logging.getLogger(ROOT_LOGGER_NAME).handlers == []


class TestGlobalLogging:
    """Test cases for module-level helpers."""

    def test_get_logger_before_setup(self, restore_logging):
        """Test that loggers work before logging is configured."""
        logging_utils._logging_manager = None

        logger = get_logger("early")

        assert isinstance(logger, ComponentLogger)

    def test_setup_logging_replaces_manager(self, tmp_path, restore_logging):
        """Test that a second setup closes the first."""
        first = setup_logging(str(tmp_path / "one"), "INFO")
        second = setup_logging(str(tmp_path / "two"), "DEBUG")

        assert first is not second
        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 3
        assert get_logger("x") is second.get_component_logger("x")
