"""Load and save schema documents (JSON or YAML)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from envguard.models.schema import EnvSchema
from envguard.utils.errors import ConfigurationError, ValidationError, validate_env_var_name
from envguard.utils.logging import get_logger

logger = get_logger("schema_loader")

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")


def parse_schema_data(data: Any, source: str = "<schema>") -> EnvSchema:
    """Build an EnvSchema from a decoded document.

    Args:
        data: Decoded JSON/YAML document
        source: Where the document came from, for error messages

    Returns:
        Validated schema

    Raises:
        ConfigurationError: If the document is not a valid schema
    """
    if data is None:
        return EnvSchema()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Schema must be a mapping: {source}", path=source)

    for key in (data.get("variables") or {}):
        try:
            validate_env_var_name(str(key))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid schema variable in {source}: {e.message}", path=source) from e

    try:
        return EnvSchema.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid schema in {source}: {e}", path=source) from e


def load_schema(path: str | Path) -> EnvSchema:
    """Load a schema from a JSON or YAML file.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        Validated schema

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Schema file not found: {path}", path=str(path))

    suffix = path.suffix.lower()
    if suffix not in JSON_SUFFIXES + YAML_SUFFIXES:
        raise ConfigurationError(
            f"Unsupported schema file format '{suffix or path.name}', use .json, .yaml or .yml",
            path=str(path),
        )

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read schema file {path}: {e}", path=str(path)) from e

    try:
        if suffix in JSON_SUFFIXES:
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to parse schema file {path}: {e}", path=str(path)) from e

    schema = parse_schema_data(data, source=str(path))
    logger.debug(
        f"Loaded schema {path}: {len(schema.variables)} variables, "
        f"{len(schema.rules)} rules, {len(schema.security_rules)} security rules"
    )
    return schema


def schema_to_dict(schema: EnvSchema) -> dict[str, Any]:
    """Serialize a schema to a camelCase document.

    Rule predicates are callables and are not written out.
    """
    return schema.model_dump(mode="json", by_alias=True, exclude_none=True)


def save_schema(schema: EnvSchema, path: str | Path) -> Path:
    """Save a schema as JSON or YAML depending on the file suffix.

    Args:
        schema: Schema to save
        path: Destination path

    Returns:
        Path where the schema was saved
    """
    path = Path(path)
    data = schema_to_dict(schema)
    if path.suffix.lower() in JSON_SUFFIXES:
        content = json.dumps(data, indent=2) + "\n"
    else:
        content = yaml.dump(data, default_flow_style=False, sort_keys=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
