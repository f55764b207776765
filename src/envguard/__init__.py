"""envguard: validate .env files against a schema or a .env.example file.

This package parses environment files and checks them for:

- **Schema validation**: required keys, value types, regex patterns, deprecations
- **Example comparison**: keys missing from or unknown to a reference file
- **Security analysis**: weak or hardcoded secrets, development leftovers, PII
- **Custom rules**: pattern and predicate rules from the schema or config

Usage:
    # Library API
    from envguard import EnvGuardConfig, EnvGuardValidator

    config = EnvGuardConfig(env_file=".env", schema_file="envguard.schema.yaml")
    result = EnvGuardValidator(config).validate()

    if not result.is_valid:
        for error in result.errors:
            print(error.variable, error.message)

    # Parser
    from envguard import parse_content
    parsed = parse_content("PORT=3000\\n")

CLI:
    envguard validate --env-file .env --schema-file envguard.schema.yaml
    envguard check --env-file .env
    envguard init
"""

__version__ = "0.1.0"

# Core
from envguard.core.parser import parse_content, parse_file, stringify
from envguard.core.schema_loader import load_schema
from envguard.core.schema_validator import SchemaValidator
from envguard.core.example_validator import ExampleValidator
from envguard.core.validator import EnvGuardValidator
from envguard.security.analyzer import SecurityAnalyzer

# Models (commonly used)
from envguard.models.env import EnvVariable, ParsedEnvFile, ParseError
from envguard.models.result import Finding, FindingType, Severity, ValidationResult, ValidationSummary
from envguard.models.schema import EnvSchema, SecurityRule, ValidationRule, VariableSchema

# Config and errors
from envguard.utils.config import EnvGuardConfig, load_config
from envguard.utils.errors import ConfigurationError, EnvFileError, EnvGuardError

# Renderers
from envguard.renderers import OutputFormat, RenderContext, get_renderer

__all__ = [
    # Version
    "__version__",
    # Core
    "parse_content",
    "parse_file",
    "stringify",
    "load_schema",
    "SchemaValidator",
    "ExampleValidator",
    "EnvGuardValidator",
    "SecurityAnalyzer",
    # Models
    "EnvVariable",
    "ParsedEnvFile",
    "ParseError",
    "Finding",
    "FindingType",
    "Severity",
    "ValidationResult",
    "ValidationSummary",
    "EnvSchema",
    "SecurityRule",
    "ValidationRule",
    "VariableSchema",
    # Config and errors
    "EnvGuardConfig",
    "load_config",
    "ConfigurationError",
    "EnvFileError",
    "EnvGuardError",
    # Renderers
    "OutputFormat",
    "RenderContext",
    "get_renderer",
]
