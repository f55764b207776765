"""Unit tests for logging setup."""

import io
import logging

from envguard.utils.logging import (
    configure_logging,
    get_logger,
    get_logger_with_context,
    level_for,
)


class TestLevelFor:
    def test_levels(self):
        assert level_for() == "INFO"
        assert level_for(verbose=True) == "DEBUG"
        assert level_for(quiet=True) == "WARNING"
        assert level_for(verbose=True, quiet=True) == "DEBUG"


class TestLoggers:
    """Tests for logger helpers."""

    def test_namespace(self):
        assert get_logger("parser").name == "envguard.parser"
        assert get_logger("envguard.cli").name == "envguard.cli"

    def test_context_appended(self):
        """Test context fields are written after the message."""
        stream = io.StringIO()
        configure_logging(level="DEBUG", stream=stream)

        get_logger_with_context("validator", env_file=".env").debug("Validating")

        assert stream.getvalue().strip() == "DEBUG: Validating env_file=.env"

    def test_level_filters(self):
        stream = io.StringIO()
        logger = configure_logging(level="WARNING", stream=stream)

        get_logger("parser").info("hidden")

        assert logger.level == logging.WARNING
        assert stream.getvalue() == ""
