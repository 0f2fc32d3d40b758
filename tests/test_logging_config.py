"""Tests for logging configuration module."""

import logging
import os
import time
from unittest.mock import patch

import pytest

from skyvendas.utils import logging_config
from skyvendas.utils.logging_config import (
    PerformanceMonitor,
    _loggers_configured,
    cleanup_old_logs,
    get_log_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_logging_state():
    """Reset logging state before each test."""
    _loggers_configured.clear()
    yield
    _loggers_configured.clear()


@pytest.fixture
def log_dir(tmp_path):
    with patch.object(logging_config, "LOG_DIR", tmp_path / "logs"):
        yield tmp_path / "logs"


def test_get_log_level():
    """Test log level detection from environment."""
    with patch.dict(os.environ, {}, clear=True):
        assert get_log_level() == logging.INFO

    with patch.dict(os.environ, {"DEBUG": "1"}, clear=True):
        assert get_log_level() == logging.DEBUG

    with patch.dict(os.environ, {"LOG_LEVEL": "error", "DEBUG": "true"}, clear=True):
        assert get_log_level() == logging.ERROR


def test_setup_logging_console_only():
    logger = setup_logging("skyvendas.test.console", file=False)

    assert len(logger.handlers) == 1
    assert logger.propagate is False
    assert setup_logging("skyvendas.test.console") is logger
    assert len(logger.handlers) == 1


def test_setup_logging_with_file(log_dir):
    logger = setup_logging("skyvendas.test.file", level=logging.DEBUG, console=False)
    logger.debug("page loaded")
    for handler in logger.handlers:
        handler.flush()

    files = list(log_dir.glob("skyvendas-*.log"))
    assert len(files) == 1
    assert "page loaded" in files[0].read_text(encoding="utf-8")

    for handler in logger.handlers:
        handler.close()


def test_cleanup_old_logs(log_dir):
    log_dir.mkdir(parents=True)
    old_log = log_dir / "skyvendas-2020-01-01.log"
    new_log = log_dir / "skyvendas-2026-10-16.log"
    old_log.write_text("old")
    new_log.write_text("new")
    stale = time.time() - 10 * 24 * 60 * 60
    os.utime(old_log, (stale, stale))

    cleanup_old_logs()

    assert not old_log.exists()
    assert new_log.exists()


def test_performance_monitor_logs_elapsed(caplog):
    logger = logging.getLogger("skyvendas.test.perf")

    with caplog.at_level(logging.DEBUG, logger="skyvendas.test.perf"):
        with PerformanceMonitor(logger, "Fetch page", page=2):
            pass

    assert "Fetch page completed in" in caplog.text
    assert "page=2" in caplog.text


def test_performance_monitor_marks_failures(caplog):
    logger = logging.getLogger("skyvendas.test.perf")

    with caplog.at_level(logging.DEBUG, logger="skyvendas.test.perf"):
        with pytest.raises(RuntimeError):
            with PerformanceMonitor(logger, "Fetch page"):
                raise RuntimeError("boom")

    assert "Fetch page failed in" in caplog.text
