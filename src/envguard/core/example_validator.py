"""Validate parsed variables against a reference .env.example file."""

from __future__ import annotations

import time
from typing import Callable, Iterable

from envguard.core.patterns import (
    is_placeholder,
    looks_like_boolean,
    looks_like_email,
    looks_like_number,
    looks_like_url,
)
from envguard.core.schema_validator import matches_any
from envguard.models.env import EnvVariable, effective_variables
from envguard.models.result import (
    Finding,
    FindingType,
    ValidationResult,
    ValidationSummary,
)
from envguard.utils.logging import get_logger

logger = get_logger("example_validator")

# Checked in order; the first shape the example has and the value lacks wins
SHAPES: list[tuple[str, str, Callable[[str], bool]]] = [
    ("a URL", "URL", looks_like_url),
    ("a number", "number", looks_like_number),
    ("a boolean", "boolean", looks_like_boolean),
    ("an email", "email", looks_like_email),
]


class ExampleValidator:
    """Compares variables against the variables of a reference file."""

    def __init__(
        self,
        example_variables: list[EnvVariable],
        ignore_patterns: Iterable[str] = (),
    ) -> None:
        """Initialize the validator.

        Args:
            example_variables: Variables parsed from the reference file
            ignore_patterns: Key regexes exempt from missing/unused reporting
        """
        self.example_variables = effective_variables(example_variables)
        self.ignore_patterns = list(ignore_patterns)

    def validate(self, variables: list[EnvVariable]) -> ValidationResult:
        """Validate variables against the reference file.

        Args:
            variables: Parsed variables; duplicates resolve last-wins

        Returns:
            ValidationResult with findings and summary counts
        """
        start = time.perf_counter()
        observed = effective_variables(variables)
        by_key = {v.key: v for v in observed}
        reference = {v.key: v for v in self.example_variables}

        errors: list[Finding] = []
        warnings: list[Finding] = []
        info: list[Finding] = []

        for key, ref in reference.items():
            if key in by_key or self._ignored(key):
                continue
            comment = f" # {ref.comment}" if ref.comment else ""
            errors.append(
                Finding.error(
                    FindingType.MISSING_REQUIRED,
                    key,
                    f"Variable '{key}' is present in example but missing from .env file",
                    suggestion=f"{ref.key}={ref.value}{comment}",
                )
            )

        for var in observed:
            if var.key in reference or self._ignored(var.key):
                continue
            warnings.append(
                Finding.warning(
                    FindingType.UNUSED_VARIABLE,
                    var.key,
                    f"Variable '{var.key}' is not present in .env.example",
                    line_number=var.line_number,
                    suggestion="Add this variable to .env.example or remove it if not needed",
                )
            )

        for var in observed:
            ref = reference.get(var.key)
            if ref is None:
                continue
            finding = self._compare(var, ref)
            if finding is not None:
                warnings.append(finding)
            if is_placeholder(ref.value):
                info.append(
                    Finding.note(
                        var.key,
                        f"Variable '{var.key}' uses placeholder in example: {ref.value}",
                        line_number=var.line_number,
                    )
                )

        summary = ValidationSummary(
            total_variables=len(observed),
            required_variables=len(reference),
            missing_variables=sum(1 for e in errors if e.type == FindingType.MISSING_REQUIRED),
            unused_variables=sum(1 for w in warnings if w.type == FindingType.UNUSED_VARIABLE),
            validation_time=(time.perf_counter() - start) * 1000,
        )
        logger.debug(
            f"Example validation: {len(errors)} errors, {len(warnings)} warnings, {len(info)} info"
        )
        return ValidationResult.from_findings(errors, warnings, info, summary)

    def _ignored(self, key: str) -> bool:
        return matches_any(key, self.ignore_patterns)

    @staticmethod
    def _compare(var: EnvVariable, ref: EnvVariable) -> Finding | None:
        """Compare an observed value with its reference value.

        Returns:
            A warning when the value is empty or shaped unlike the reference
        """
        example = ref.value
        if not example.strip() or is_placeholder(example):
            return None

        if not var.value.strip():
            # Counted as unused in the summary
            return Finding.warning(
                FindingType.UNUSED_VARIABLE,
                var.key,
                f"Variable '{var.key}' is empty but has a value in example",
                line_number=var.line_number,
                suggestion=f"Consider setting a value. Example: {example}",
            )

        for article_name, name, check in SHAPES:
            if check(example) and not check(var.value):
                return Finding.warning(
                    FindingType.WEAK_PATTERN,
                    var.key,
                    f"Variable '{var.key}' should be {article_name} based on example",
                    line_number=var.line_number,
                    suggestion=f"Expected {name} format like: {example}",
                )
        return None


__all__ = ["ExampleValidator", "SHAPES"]
