"""Configuration file support for envguard."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from envguard.models.common import EnvGuardModel
from envguard.models.schema import SecurityRule, ValidationRule
from envguard.utils.errors import ConfigurationError
from envguard.utils.logging import get_logger

logger = get_logger("config")

DEFAULT_IGNORE_PATTERNS = ["^_.*", ".*_TEST$", ".*_DEBUG$"]

CONFIG_FILE_NAMES = [
    "envguard.config.json",
    "envguard.config.yaml",
    "envguard.config.yml",
    ".envguardrc",
    ".envguardrc.json",
    ".envguardrc.yaml",
    ".envguardrc.yml",
]


class EnvGuardConfig(EnvGuardModel):
    """Main configuration for envguard."""

    env_file: str = Field(default=".env", description="Environment file to validate")
    schema_file: str | None = Field(default=None, description="Schema document")
    example_file: str | None = Field(default=None, description="Reference .env.example file")
    mode: Literal["schema", "example", "both"] | None = Field(
        default=None,
        description="Validation mode, inferred from available inputs when unset",
    )
    output_format: Literal["text", "json", "junit"] = Field(default="text", description="Report format")
    strict: bool = Field(default=False, description="Treat warnings as failures")
    verbose: bool = Field(default=False, description="Verbose output")
    exit_on_error: bool = Field(default=True, description="Exit non-zero on validation failure")
    ignore_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS),
        description="Key regexes exempt from missing/unused reporting",
    )
    custom_rules: list[ValidationRule] = Field(default_factory=list, description="Rules applied in every mode")
    security_rules: list[SecurityRule] = Field(default_factory=list, description="Extra security rules")

    @field_validator("ignore_patterns")
    @classmethod
    def _check_ignore_patterns(cls, v: list[str]) -> list[str]:
        for p in v:
            try:
                re.compile(p)
            except re.error as e:
                raise ValueError(f"invalid ignore pattern {p!r}: {e}") from e
        return v


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files, in priority order
    """
    paths = [Path.cwd() / name for name in CONFIG_FILE_NAMES]

    # XDG config directory
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "envguard" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> EnvGuardConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Configuration file not found: {config_path}", path=str(config_path))

    # Search default locations
    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    logger.debug("No configuration file found, using defaults")
    return EnvGuardConfig()


def _decode(path: Path, content: str) -> Any:
    suffix = path.suffix.lower()
    if suffix == ".json":
        return json.loads(content)
    if suffix in (".yaml", ".yml"):
        return yaml.safe_load(content)
    # Extensionless rc files may be either
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        return yaml.safe_load(content)


def _load_config_file(path: Path) -> EnvGuardConfig:
    """Load configuration from a specific file.

    Args:
        path: Path to config file

    Returns:
        Loaded configuration
    """
    try:
        data = _decode(path, path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to load configuration from {path}: {e}", path=str(path)) from e

    if data is None:
        return EnvGuardConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Failed to load configuration from {path}: configuration must be a mapping",
            path=str(path),
        )

    try:
        config = EnvGuardConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Failed to load configuration from {path}: {e}", path=str(path)) from e

    logger.debug(f"Loaded configuration from {path}")
    return config


def merge_cli_options(config: EnvGuardConfig, **overrides: Any) -> EnvGuardConfig:
    """Apply command-line values on top of a loaded configuration.

    ``None`` values are treated as "not given". Ignore patterns are
    appended to the configured ones rather than replacing them.

    Args:
        config: Configuration loaded from file
        **overrides: Field values from the command line

    Returns:
        New configuration with overrides applied
    """
    update = {k: v for k, v in overrides.items() if v is not None}

    extra_patterns = update.pop("ignore_patterns", None)
    if extra_patterns:
        update["ignore_patterns"] = [*config.ignore_patterns, *extra_patterns]

    unknown = set(update) - set(EnvGuardConfig.model_fields)
    if unknown:
        raise ConfigurationError(f"Unknown configuration option: {', '.join(sorted(unknown))}")

    data = config.model_dump()
    data.update(update)
    # Rules keep their compiled patterns and predicates
    data["custom_rules"] = config.custom_rules
    data["security_rules"] = config.security_rules
    try:
        return EnvGuardConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid command-line option: {e}") from e


def save_config(config: EnvGuardConfig, config_path: Path | str) -> Path:
    """Save configuration to file.

    JSON is written for ``.json`` paths, YAML otherwise.

    Args:
        config: Configuration to save
        config_path: Path to save to

    Returns:
        Path where config was saved
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    if config_path.suffix.lower() == ".json":
        config_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8")

    return config_path
