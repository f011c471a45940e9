"""Tests for spendlog.logging_setup."""

import logging
import sys
from collections.abc import Iterator

import pytest

from spendlog.logging_setup import _parse_level, configure_logging, get_logger


class TestParseLevel:
    """Tests for _parse_level."""

    def test_names_and_numbers(self) -> None:
        """Should accept level names in any case and numbers."""
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("20") == logging.INFO
        assert _parse_level(logging.ERROR) == logging.ERROR

    def test_env_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to SPENDLOG_LOG_LEVEL, then WARNING."""
        monkeypatch.setenv("SPENDLOG_LOG_LEVEL", "INFO")
        assert _parse_level(None) == logging.INFO
        assert _parse_level("nonsense") == logging.INFO

        monkeypatch.setenv("SPENDLOG_LOG_LEVEL", "nonsense")
        assert _parse_level(None) == logging.WARNING


def test_get_logger_is_namespaced() -> None:
    """Should return loggers under the package root."""
    assert get_logger("spendlog.store.document").name == "spendlog.store.document"
    assert logging.getLogger("spendlog").handlers


class TestConfigureLogging:
    """Tests for configure_logging."""

    @pytest.fixture
    def fresh_logger(self, monkeypatch: pytest.MonkeyPatch) -> Iterator[logging.Logger]:
        logger = logging.getLogger("spendlog")
        saved = (list(logger.handlers), logger.level, logger.propagate)
        monkeypatch.setattr("spendlog.logging_setup._CONFIGURED", False)
        yield logger
        logger.handlers[:] = saved[0]
        logger.setLevel(saved[1])
        logger.propagate = saved[2]

    def test_attaches_one_stderr_handler(self, fresh_logger: logging.Logger) -> None:
        """Should replace the NullHandler with a single stderr handler at the given level."""
        fresh_logger.handlers[:] = [logging.NullHandler()]

        configure_logging("INFO")

        assert len(fresh_logger.handlers) == 1
        handler = fresh_logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert fresh_logger.level == logging.INFO
        assert fresh_logger.propagate is False

    def test_runs_once(self, fresh_logger: logging.Logger) -> None:
        """Should ignore later calls."""
        fresh_logger.handlers[:] = []

        configure_logging("INFO")
        configure_logging("DEBUG")

        assert len(fresh_logger.handlers) == 1
        assert fresh_logger.level == logging.INFO
