"""Error handling utilities for envguard."""

from __future__ import annotations

import re
from typing import Any

from envguard.models.common import ErrorDetail

_ENV_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class EnvGuardError(Exception):
    """Base exception for envguard."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_error_detail(self) -> ErrorDetail:
        """Convert to ErrorDetail model."""
        return ErrorDetail(code=self.code, message=self.message, details=self.details)


class ConfigurationError(EnvGuardError):
    """Configuration, schema or rule declaration is unusable."""

    def __init__(self, message: str, config_key: str | None = None, path: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        if path:
            details["path"] = path
        super().__init__(message, code="CONFIG_ERROR", details=details)


class EnvFileError(EnvGuardError):
    """An environment file could not be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to read file {path}: {reason}",
            code="FILE_READ_ERROR",
            details={"path": path},
        )


class ValidationError(EnvGuardError):
    """An input value is invalid."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


def validate_env_var_name(name: str) -> None:
    """Validate an environment variable name.

    Args:
        name: Environment variable name to validate

    Raises:
        ValidationError: If name is invalid
    """
    if not name:
        raise ValidationError("Environment variable name cannot be empty", field="name")

    if not _ENV_NAME_RE.fullmatch(name):
        if not (name[0].isalpha() or name[0] == "_"):
            raise ValidationError(
                f"Environment variable name must start with a letter or underscore: {name!r}",
                field="name",
            )
        raise ValidationError(
            f"Environment variable name contains invalid characters: {name!r}",
            field="name",
        )
