"""Core parsing and validation for envguard."""

from envguard.core.parser import parse_content, parse_file, stringify
from envguard.core.schema_loader import load_schema, save_schema
from envguard.core.schema_validator import SchemaValidator, apply_custom_rules
from envguard.core.example_validator import ExampleValidator
from envguard.core.validator import EnvGuardValidator, merge_results

__all__ = [
    "parse_content",
    "parse_file",
    "stringify",
    "load_schema",
    "save_schema",
    "SchemaValidator",
    "apply_custom_rules",
    "ExampleValidator",
    "EnvGuardValidator",
    "merge_results",
]
