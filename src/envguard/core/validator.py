"""Validation orchestrator combining schema, example and security checks."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Literal

from envguard.core.example_validator import ExampleValidator
from envguard.core.parser import parse_content, parse_file
from envguard.core.schema_loader import load_schema
from envguard.core.schema_validator import SchemaValidator, apply_custom_rules
from envguard.models.env import EnvVariable, ParsedEnvFile
from envguard.models.result import (
    Finding,
    FindingType,
    ValidationResult,
    ValidationSummary,
)
from envguard.models.schema import EnvSchema
from envguard.security.analyzer import SecurityAnalyzer
from envguard.utils.config import EnvGuardConfig
from envguard.utils.errors import ConfigurationError
from envguard.utils.logging import get_logger_with_context

Mode = Literal["schema", "example", "both"]

DEFAULT_EXAMPLE_FILE = ".env.example"


def _dedupe(findings: list[Finding]) -> list[Finding]:
    """Drop findings with a (type, variable, message) already seen."""
    seen: set[tuple[str, str, str]] = set()
    unique = []
    for finding in findings:
        if finding.dedupe_key in seen:
            continue
        seen.add(finding.dedupe_key)
        unique.append(finding)
    return unique


def merge_results(first: ValidationResult, second: ValidationResult) -> ValidationResult:
    """Combine a schema result and an example result.

    Findings are concatenated and deduplicated. Summary counters take the
    larger value, except security issues, which add up.
    """
    a, b = first.summary, second.summary
    summary = ValidationSummary(
        total_variables=max(a.total_variables, b.total_variables),
        required_variables=max(a.required_variables, b.required_variables),
        missing_variables=max(a.missing_variables, b.missing_variables),
        unused_variables=max(a.unused_variables, b.unused_variables),
        security_issues=a.security_issues + b.security_issues,
        validation_time=max(a.validation_time, b.validation_time),
    )
    return ValidationResult.from_findings(
        _dedupe([*first.errors, *second.errors]),
        _dedupe([*first.warnings, *second.warnings]),
        _dedupe([*first.info, *second.info]),
        summary,
    )


def parse_error_result(parsed: ParsedEnvFile, elapsed_ms: float = 0.0) -> ValidationResult:
    """Build the failing result reported for a file with malformed lines."""
    errors = [
        Finding.error(
            FindingType.INVALID_FORMAT,
            "",
            f"{err.message}: {err.line}",
            line_number=err.line_number,
        )
        for err in parsed.parse_errors
    ]
    return ValidationResult.from_findings(
        errors, [], [], ValidationSummary(validation_time=elapsed_ms)
    )


class EnvGuardValidator:
    """Runs a full validation of an environment file.

    The mode decides which reference the file is checked against: a
    schema, a ``.env.example`` file, or both. Security analysis always
    runs. A schema or example can be injected directly instead of being
    loaded from the paths in the configuration.

    Example:
        config = EnvGuardConfig(env_file=".env", schema_file="envguard.schema.yaml")
        result = EnvGuardValidator(config).validate()

        if not result.passed(strict=config.strict):
            for error in result.errors:
                print(error.message)
    """

    def __init__(
        self,
        config: EnvGuardConfig | None = None,
        *,
        schema: EnvSchema | None = None,
        example_variables: list[EnvVariable] | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            config: Validation configuration (defaults when omitted)
            schema: Schema to use instead of ``config.schema_file``
            example_variables: Reference variables to use instead of ``config.example_file``
        """
        self.config = config or EnvGuardConfig()
        self._schema = schema
        self._example_variables = example_variables
        self.logger = get_logger_with_context("validator", env_file=self.config.env_file)

    def resolve_mode(self) -> Mode:
        """Decide the validation mode.

        An explicit ``config.mode`` wins. Otherwise both references are
        used when both are available, then the schema alone, then the
        example file.
        """
        if self.config.mode is not None:
            return self.config.mode

        has_schema = self._schema is not None or bool(self.config.schema_file)
        has_example = self._example_variables is not None or bool(self.config.example_file)

        if has_schema and has_example:
            return "both"
        if has_schema:
            return "schema"
        return "example"

    def load_schema(self) -> EnvSchema:
        """Get the injected schema or load the configured schema file.

        Raises:
            ConfigurationError: If no schema is available
        """
        if self._schema is not None:
            return self._schema
        if not self.config.schema_file:
            raise ConfigurationError("Schema file is required for schema validation", config_key="schema_file")
        return load_schema(self.config.schema_file)

    def load_example_variables(self) -> list[EnvVariable]:
        """Get the injected reference variables or parse the example file.

        Raises:
            ConfigurationError: If the example file is missing or malformed
        """
        if self._example_variables is not None:
            return self._example_variables

        path = Path(self.config.example_file or DEFAULT_EXAMPLE_FILE)
        if not path.exists():
            raise ConfigurationError(
                f"Example file not found: {path}",
                config_key="example_file",
                path=str(path),
            )

        parsed = parse_file(path)
        if parsed.has_errors:
            first = parsed.parse_errors[0]
            raise ConfigurationError(
                f"Example file {path} has {len(parsed.parse_errors)} parse error(s), "
                f"first at line {first.line_number}: {first.message}",
                config_key="example_file",
                path=str(path),
            )
        return parsed.variables

    def _validate_against_schema(self, schema: EnvSchema, parsed: ParsedEnvFile) -> ValidationResult:
        return SchemaValidator(schema, self.config.ignore_patterns).validate(parsed.variables)

    def _validate_against_example(self, parsed: ParsedEnvFile) -> ValidationResult:
        validator = ExampleValidator(self.load_example_variables(), self.config.ignore_patterns)
        return validator.validate(parsed.variables)

    def validate(self) -> ValidationResult:
        """Parse and validate ``config.env_file``.

        Raises:
            EnvFileError: If the file cannot be read
            ConfigurationError: If the schema or example cannot be used
        """
        self.logger.debug("Reading environment file")
        return self.validate_parsed(parse_file(self.config.env_file))

    def validate_content(self, content: str) -> ValidationResult:
        """Validate environment file text."""
        return self.validate_parsed(parse_content(content))

    def validate_parsed(self, parsed: ParsedEnvFile) -> ValidationResult:
        """Validate an already parsed file.

        Args:
            parsed: Parsed environment file

        Returns:
            ValidationResult with findings from every stage

        Raises:
            ConfigurationError: If the schema or example cannot be used
        """
        start = time.perf_counter()

        if parsed.has_errors:
            self.logger.debug(f"Aborting on {len(parsed.parse_errors)} parse errors")
            return parse_error_result(parsed, (time.perf_counter() - start) * 1000)

        mode = self.resolve_mode()
        self.logger.debug(f"Validating in {mode} mode")

        schema: EnvSchema | None = None

        if mode == "schema":
            schema = self.load_schema()
            result = self._validate_against_schema(schema, parsed)
        elif mode == "example":
            result = self._validate_against_example(parsed)
        elif mode == "both":
            schema = self.load_schema()
            result = merge_results(
                self._validate_against_schema(schema, parsed),
                self._validate_against_example(parsed),
            )
        else:
            raise ConfigurationError(f"Unknown validation mode: {mode}", config_key="mode")

        errors = list(result.errors)
        warnings = list(result.warnings)
        info = list(result.info)

        # Last-wins values for rules; every assignment is screened for secrets
        variables = parsed.effective_variables()

        rule_errors, rule_warnings, rule_info = apply_custom_rules(self.config.custom_rules, variables)
        errors.extend(rule_errors)
        warnings.extend(rule_warnings)
        info.extend(rule_info)

        for key in parsed.duplicate_keys:
            winner = parsed.get(key)
            info.append(
                Finding.note(
                    key,
                    f"Variable '{key}' is defined multiple times; using the value from line {winner.line_number}",
                    line_number=winner.line_number,
                )
            )

        security_rules = [*self.config.security_rules, *(schema.security_rules if schema else [])]
        analysis = SecurityAnalyzer(security_rules).analyze(parsed.variables)
        errors.extend(analysis.errors)
        warnings.extend(analysis.warnings)
        info.extend(analysis.info)

        summary = result.summary.model_copy(
            update={
                "security_issues": len(analysis.errors),
                "validation_time": (time.perf_counter() - start) * 1000,
            }
        )
        final = ValidationResult.from_findings(errors, warnings, info, summary)
        self.logger.debug(
            f"Validation finished: {len(errors)} errors, {len(warnings)} warnings, {len(info)} info"
        )
        return final
