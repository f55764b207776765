"""Validate parsed variables against a declarative schema."""

from __future__ import annotations

import re
import time
from typing import Callable, Iterable

from envguard.core.patterns import (
    looks_like_boolean,
    looks_like_email,
    looks_like_json,
    looks_like_number,
    looks_like_url,
)
from envguard.models.env import EnvVariable, effective_variables
from envguard.models.result import (
    Finding,
    FindingType,
    Severity,
    ValidationResult,
    ValidationSummary,
)
from envguard.models.schema import (
    EnvSchema,
    ValidationRule,
    VariableSchema,
    VariableType,
    compile_pattern,
)
from envguard.utils.logging import get_logger

logger = get_logger("schema_validator")

# type -> (check, expected format wording)
TYPE_CHECKS: dict[VariableType, tuple[Callable[[str], bool], str]] = {
    VariableType.NUMBER: (looks_like_number, "a valid number"),
    VariableType.BOOLEAN: (looks_like_boolean, "true, false, 1, 0, yes, or no"),
    VariableType.URL: (looks_like_url, "a valid URL"),
    VariableType.EMAIL: (looks_like_email, "a valid email address"),
    VariableType.JSON: (looks_like_json, "valid JSON"),
}


def matches_any(key: str, patterns: Iterable[str]) -> bool:
    """Check if a key matches any of the given regexes (search semantics)."""
    return any(compile_pattern(p).search(key) for p in patterns)


def apply_custom_rules(
    rules: Iterable[ValidationRule],
    variables: list[EnvVariable],
) -> tuple[list[Finding], list[Finding], list[Finding]]:
    """Apply custom rules to every variable.

    A rule's pattern and predicate are checked independently, so one
    variable can trigger the same rule twice.

    Args:
        rules: Rules to apply, in order
        variables: Variables to check

    Returns:
        Tuple of (errors, warnings, info)
    """
    errors: list[Finding] = []
    warnings: list[Finding] = []
    info: list[Finding] = []

    for rule in rules:
        for var in variables:
            failures = 0
            if rule.pattern is not None and not rule.pattern.search(var.value):
                failures += 1
            if rule.predicate is not None and not rule.predicate(var.value):
                failures += 1

            for _ in range(failures):
                if rule.severity == Severity.ERROR:
                    errors.append(
                        Finding.error(
                            FindingType.CUSTOM,
                            var.key,
                            rule.description,
                            line_number=var.line_number,
                        )
                    )
                elif rule.severity == Severity.WARNING:
                    warnings.append(
                        Finding.warning(
                            FindingType.CUSTOM,
                            var.key,
                            rule.description,
                            line_number=var.line_number,
                        )
                    )
                else:
                    info.append(Finding.note(var.key, rule.description, line_number=var.line_number))

    return errors, warnings, info


class SchemaValidator:
    """Checks variables against an EnvSchema.

    Example:
        validator = SchemaValidator(schema)
        result = validator.validate(parsed.variables)

        for error in result.errors:
            print(error.message)
    """

    def __init__(self, schema: EnvSchema, ignore_patterns: Iterable[str] = ()) -> None:
        """Initialize the validator.

        Args:
            schema: Schema to validate against
            ignore_patterns: Extra key regexes exempt from unused reporting
        """
        self.schema = schema
        self.ignore_patterns = [*schema.ignore_patterns, *ignore_patterns]

    def validate(self, variables: list[EnvVariable]) -> ValidationResult:
        """Validate variables against the schema.

        Args:
            variables: Parsed variables; duplicates resolve last-wins

        Returns:
            ValidationResult with findings and summary counts
        """
        start = time.perf_counter()
        observed = effective_variables(variables)
        by_key = {v.key: v for v in observed}

        errors: list[Finding] = []
        warnings: list[Finding] = []
        info: list[Finding] = []

        errors.extend(self._check_required(by_key))
        warnings.extend(self._check_unused(observed))

        for var in observed:
            entry = self.schema.variables.get(var.key)
            if entry is None:
                continue
            var_errors, var_warnings = self._check_variable(var, entry)
            errors.extend(var_errors)
            warnings.extend(var_warnings)

        rule_errors, rule_warnings, rule_info = apply_custom_rules(self.schema.rules, observed)
        errors.extend(rule_errors)
        warnings.extend(rule_warnings)
        info.extend(rule_info)

        summary = ValidationSummary(
            total_variables=len(observed),
            required_variables=len(self.schema.required_keys),
            missing_variables=sum(1 for e in errors if e.type == FindingType.MISSING_REQUIRED),
            unused_variables=sum(1 for w in warnings if w.type == FindingType.UNUSED_VARIABLE),
            security_issues=sum(1 for e in errors if e.type == FindingType.SECURITY_RISK),
            validation_time=(time.perf_counter() - start) * 1000,
        )
        logger.debug(
            f"Schema validation: {len(errors)} errors, {len(warnings)} warnings, {len(info)} info"
        )
        return ValidationResult.from_findings(errors, warnings, info, summary)

    def _check_required(self, by_key: dict[str, EnvVariable]) -> list[Finding]:
        findings = []
        for key, entry in self.schema.variables.items():
            if not entry.required or key in by_key:
                continue
            suggestion = f"Add {key}={entry.example or '<value>'}"
            if entry.description:
                suggestion += f" # {entry.description}"
            findings.append(
                Finding.error(
                    FindingType.MISSING_REQUIRED,
                    key,
                    f"Required environment variable '{key}' is missing",
                    suggestion=suggestion,
                )
            )
        return findings

    def _check_unused(self, observed: list[EnvVariable]) -> list[Finding]:
        findings = []
        for var in observed:
            if var.key in self.schema.variables or matches_any(var.key, self.ignore_patterns):
                continue
            findings.append(
                Finding.warning(
                    FindingType.UNUSED_VARIABLE,
                    var.key,
                    f"Variable '{var.key}' is not defined in schema",
                    line_number=var.line_number,
                    suggestion="Remove this variable or add it to your schema",
                )
            )
        return findings

    def _check_variable(
        self, var: EnvVariable, entry: VariableSchema
    ) -> tuple[list[Finding], list[Finding]]:
        errors: list[Finding] = []
        warnings: list[Finding] = []
        example_hint = f"Example: {entry.example}" if entry.example else None

        if entry.deprecated:
            if entry.alternatives:
                hint = f"Consider using: {', '.join(entry.alternatives)}"
            else:
                hint = "Consider removing this variable"
            warnings.append(
                Finding.warning(
                    FindingType.DEPRECATED,
                    var.key,
                    f"Variable '{var.key}' is deprecated",
                    line_number=var.line_number,
                    suggestion=hint,
                )
            )

        if not var.value.strip():
            if not entry.allow_empty:
                errors.append(
                    Finding.error(
                        FindingType.INVALID_FORMAT,
                        var.key,
                        f"Variable '{var.key}' cannot be empty",
                        line_number=var.line_number,
                        suggestion=example_hint,
                    )
                )
            # Nothing further to check on an empty value
            return errors, warnings

        if entry.type is not None and entry.type in TYPE_CHECKS:
            check, expected = TYPE_CHECKS[entry.type]
            if not check(var.value):
                errors.append(
                    Finding.error(
                        FindingType.INVALID_FORMAT,
                        var.key,
                        f"Variable '{var.key}' must be {expected}",
                        line_number=var.line_number,
                        suggestion=example_hint,
                    )
                )

        pattern = entry.compiled_pattern
        if pattern is not None and not pattern.search(var.value):
            errors.append(
                Finding.error(
                    FindingType.INVALID_FORMAT,
                    var.key,
                    f"Variable '{var.key}' does not match required pattern",
                    line_number=var.line_number,
                    suggestion=example_hint,
                )
            )

        return errors, warnings


__all__ = ["SchemaValidator", "apply_custom_rules", "matches_any", "TYPE_CHECKS"]
