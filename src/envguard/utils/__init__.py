"""Utility functions for envguard."""

from envguard.utils.logging import configure_logging, get_logger, get_logger_with_context
from envguard.utils.errors import (
    EnvGuardError,
    ConfigurationError,
    EnvFileError,
    ValidationError,
    validate_env_var_name,
)
from envguard.utils.config import (
    EnvGuardConfig,
    get_config_paths,
    load_config,
    merge_cli_options,
    save_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "EnvGuardError",
    "ConfigurationError",
    "EnvFileError",
    "ValidationError",
    "validate_env_var_name",
    # Config
    "EnvGuardConfig",
    "get_config_paths",
    "load_config",
    "merge_cli_options",
    "save_config",
]
