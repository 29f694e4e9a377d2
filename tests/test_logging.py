"""Tests for logging setup."""

import logging
import sys

import pytest
from tenable_docs.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("tenable_docs")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    mcp_level = logging.getLogger("mcp").level
    yield
    for handler in logger.handlers:
        if handler not in saved[0]:
            handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]
    logging.getLogger("mcp").setLevel(mcp_level)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_console_goes_to_stderr(self):
        """Test that nothing is written to stdout, which carries the protocol."""
        logger = setup_logging("INFO", force=True)

        streams = [h.stream for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert streams == [sys.stderr]
        assert logger.level == logging.INFO
        assert logger.propagate is False

    def test_unknown_level_defaults_to_info(self):
        """Test that a bad level name falls back to INFO."""
        assert setup_logging("LOUD", force=True).level == logging.INFO

    def test_log_file(self, tmp_path):
        """Test that records are also written to the log file."""
        log_file = tmp_path / "server.log"
        logger = setup_logging("DEBUG", log_file=log_file, force=True)

        logging.getLogger("tenable_docs.search").debug("index ready")
        for handler in logger.handlers:
            handler.flush()

        assert "index ready" in log_file.read_text(encoding="utf-8")

    def test_library_loggers_quieted(self):
        """Test that library chatter is held at WARNING outside DEBUG."""
        setup_logging("INFO", force=True)
        assert logging.getLogger("mcp").level == logging.WARNING

        setup_logging("DEBUG", force=True)
        assert logging.getLogger("mcp").level == logging.DEBUG

    def test_existing_handlers_kept_without_force(self):
        """Test that a second call does not stack handlers."""
        first = setup_logging("INFO", force=True)
        count = len(first.handlers)

        second = setup_logging("WARNING")

        assert len(second.handlers) == count
        assert second.level == logging.WARNING
