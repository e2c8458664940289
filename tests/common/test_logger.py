"""Tests for logging utilities."""

import logging

import pytest
from rich.logging import RichHandler

from common import logger as logger_module
from common.logger import get_logger, setup_logging


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_named_logger(self):
        """Test that get_logger returns a logger with the given name."""
        logger = get_logger("highlights.test.name")
        assert isinstance(logger, logging.Logger)
        assert logger.name == "highlights.test.name"

    def test_default_level_is_info(self, monkeypatch):
        """Test that default logging level is INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = get_logger("highlights.test.default")
        assert logger.level == logging.INFO

    def test_level_from_environment(self, monkeypatch):
        """Test that LOG_LEVEL is honoured, case-insensitively."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = get_logger("highlights.test.envlevel")
        assert logger.level == logging.WARNING

    def test_custom_level(self):
        """Test that an explicit level wins."""
        logger = get_logger("highlights.test.custom", level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_uses_rich_handler_once(self):
        """Test that repeated calls don't stack handlers."""
        first = get_logger("highlights.test.reuse")
        second = get_logger("highlights.test.reuse")
        assert first is second
        assert len(first.handlers) == 1
        assert isinstance(first.handlers[0], RichHandler)

    def test_records_reach_caplog(self, caplog):
        """Test that records propagate for pytest capture."""
        logger = get_logger("highlights.test.output")

        with caplog.at_level(logging.INFO):
            logger.info("3 highlights found")

        assert "3 highlights found" in caplog.text

    def test_info_level_filters_debug(self, caplog):
        """Test that INFO level filters out DEBUG messages."""
        logger = get_logger("highlights.test.filter", level="INFO")

        with caplog.at_level(logging.DEBUG):
            logger.debug("Scanning: hidden.sdr")
            logger.info("Scanning finished")

        assert "hidden.sdr" not in caplog.text
        assert "Scanning finished" in caplog.text


class TestSetupLogging:
    """Tests for root logger configuration."""

    @pytest.fixture
    def restore_logging(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", list(root.handlers))
        saved_levels = {name: logging.getLogger(name).level for name in logger_module._managed}
        saved_levels[""] = root.level
        yield root
        for name, level in saved_levels.items():
            logging.getLogger(name).setLevel(level)

    def test_configures_root(self, restore_logging):
        """Test root level and console handler."""
        setup_logging(level="DEBUG")
        assert restore_logging.level == logging.DEBUG
        assert len(restore_logging.handlers) == 1
        assert isinstance(restore_logging.handlers[0], RichHandler)

    def test_relevels_module_loggers(self, restore_logging):
        """Test --log-level reaches loggers created before setup."""
        logger = get_logger("highlights.test.relevel", level="INFO")
        setup_logging(level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_module_records_print_once(self, restore_logging, monkeypatch):
        """Test a get_logger record isn't rendered again by the root handler."""
        emitted = []
        monkeypatch.setattr(RichHandler, "emit", lambda self, record: emitted.append(record.name))
        setup_logging(level="INFO")

        get_logger("highlights.test.once").info("3 highlights found")
        logging.getLogger("thirdparty.test").info("from elsewhere")

        assert emitted == ["highlights.test.once", "thirdparty.test"]


class TestStatusHelpers:
    """Tests for the console status helpers."""

    def test_success_and_progress(self, monkeypatch):
        """Test helpers print through the shared console."""
        printed = []
        monkeypatch.setattr(logger_module.console, "print", lambda msg: printed.append(msg))

        logger_module.progress("Scanning: dune.sdr")
        logger_module.success("1 highlight found and saved.")
        logger_module.warning("No highlights found.")

        assert printed == [
            "Scanning: dune.sdr",
            "[green]✓[/green] 1 highlight found and saved.",
            "[yellow]⚠[/yellow] No highlights found.",
        ]

    def test_error_goes_to_stderr_console(self, monkeypatch):
        """Test errors use the stderr console."""
        printed = []
        monkeypatch.setattr(logger_module.err_console, "print", lambda msg: printed.append(msg))

        logger_module.error("Error during extraction: boom")

        assert printed == ["[red]✗[/red] Error during extraction: boom"]
        assert logger_module.err_console.stderr is True
