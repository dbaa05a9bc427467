"""
Tests for logging configuration.
"""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from foundation.shared.logging import configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    yield
    configure_logging("INFO")


def _flush() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_level_is_applied(self, restore_logging) -> None:
        configure_logging("warning")

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, restore_logging) -> None:
        configure_logging("chatty")

        assert logging.getLogger().level == logging.INFO

    def test_rotating_files(self, tmp_path: Path, restore_logging) -> None:
        configure_logging("DEBUG", log_dir=str(tmp_path / "logs"))
        logger = logging.getLogger("foundation.test")

        logger.info("request served")
        logger.error("request failed")
        _flush()

        combined = (tmp_path / "logs" / "combined.log").read_text(encoding="utf-8")
        errors = (tmp_path / "logs" / "error.log").read_text(encoding="utf-8")
        assert "request served" in combined
        assert "request failed" in combined
        assert "request failed" in errors
        assert "request served" not in errors
