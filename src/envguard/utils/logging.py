"""Logging setup for envguard.

Everything logs under the ``envguard`` logger namespace to stderr, so
reports written to stdout stay machine-readable.
"""

import logging
import sys
from typing import IO, Any

LOGGER_NAME = "envguard"

DEFAULT_FORMAT = "%(levelname)s: %(message)s"
STRUCTURED_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class ContextFormatter(logging.Formatter):
    """Formatter that appends a record's context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if not context:
            return message
        pairs = " ".join(f"{k}={v}" for k, v in context.items())
        return f"{message} {pairs}"


def level_for(verbose: bool = False, quiet: bool = False) -> str:
    """Map the CLI verbosity flags to a log level name."""
    if verbose:
        return "DEBUG"
    if quiet:
        return "WARNING"
    return "INFO"


def configure_logging(
    level: str = "INFO",
    structured: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the envguard logger.

    Calling this again replaces the previous handler.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        structured: Prefix records with time and logger name
        stream: Destination stream, stderr by default

    Returns:
        The configured ``envguard`` logger
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(ContextFormatter(STRUCTURED_FORMAT if structured else DEFAULT_FORMAT))

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child of the ``envguard`` logger.

    Args:
        name: Component name, e.g. ``"parser"``

    Returns:
        Logger named ``envguard.<name>``
    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


class ContextLogger(logging.LoggerAdapter):
    """Adapter attaching fixed context, such as the file being validated."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextLogger:
    """Get a component logger that tags every record with ``context``."""
    return ContextLogger(get_logger(name), context)
