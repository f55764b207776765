"""Validation finding and result models."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from envguard.models.common import EnvGuardModel


class Severity(str, Enum):
    """Severity of a finding or rule."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FindingType(str, Enum):
    """Category tag of a finding."""

    MISSING_REQUIRED = "missing_required"
    INVALID_FORMAT = "invalid_format"
    SECURITY_RISK = "security_risk"
    UNUSED_VARIABLE = "unused_variable"
    WEAK_PATTERN = "weak_pattern"
    DEPRECATED = "deprecated"
    CUSTOM = "custom"
    INFO = "info"
    SUGGESTION = "suggestion"


class Finding(EnvGuardModel):
    """A single reported problem."""

    type: FindingType = Field(description="Finding category")
    variable: str = Field(default="", description="Related variable, empty for file-level findings")
    message: str = Field(description="Human-readable message")
    line_number: int | None = Field(default=None, description="Source line of the variable")
    suggestion: str | None = Field(default=None, description="How to fix it")
    severity: Severity = Field(description="Severity level")

    @property
    def dedupe_key(self) -> tuple[str, str, str]:
        return (self.type.value, self.variable, self.message)

    @classmethod
    def error(cls, type: FindingType, variable: str, message: str, **kwargs) -> "Finding":
        return cls(type=type, variable=variable, message=message, severity=Severity.ERROR, **kwargs)

    @classmethod
    def warning(cls, type: FindingType, variable: str, message: str, **kwargs) -> "Finding":
        return cls(type=type, variable=variable, message=message, severity=Severity.WARNING, **kwargs)

    @classmethod
    def note(cls, variable: str, message: str, **kwargs) -> "Finding":
        """Create an info-level finding."""
        kwargs.setdefault("type", FindingType.INFO)
        return cls(variable=variable, message=message, severity=Severity.INFO, **kwargs)


class ValidationSummary(EnvGuardModel):
    """Counters describing a validation run."""

    total_variables: int = Field(default=0, description="Variables in the validated file")
    required_variables: int = Field(default=0, description="Variables the reference requires")
    missing_variables: int = Field(default=0, description="Required variables not present")
    unused_variables: int = Field(default=0, description="Variables unknown to the reference")
    security_issues: int = Field(default=0, description="Security error findings")
    validation_time: float = Field(default=0.0, description="Elapsed time in milliseconds")


class ValidationResult(EnvGuardModel):
    """Outcome of one validation run."""

    is_valid: bool = Field(description="True when there are no errors")
    errors: list[Finding] = Field(default_factory=list, description="Error findings")
    warnings: list[Finding] = Field(default_factory=list, description="Warning findings")
    info: list[Finding] = Field(default_factory=list, description="Advisory findings")
    summary: ValidationSummary = Field(default_factory=ValidationSummary)

    @property
    def findings(self) -> list[Finding]:
        return [*self.errors, *self.warnings, *self.info]

    def passed(self, strict: bool = False) -> bool:
        """Check whether the run passes.

        Args:
            strict: Treat any warning as a failure

        Returns:
            True if the run should be reported as successful
        """
        if not self.is_valid:
            return False
        if strict and self.warnings:
            return False
        return True

    def findings_by_type(self, type: FindingType) -> list[Finding]:
        return [f for f in self.findings if f.type == type]

    @classmethod
    def from_findings(
        cls,
        errors: list[Finding],
        warnings: list[Finding],
        info: list[Finding],
        summary: ValidationSummary,
    ) -> "ValidationResult":
        return cls(
            is_valid=not errors,
            errors=errors,
            warnings=warnings,
            info=info,
            summary=summary,
        )


class SecurityAnalysis(EnvGuardModel):
    """Findings produced by the security analyzer."""

    errors: list[Finding] = Field(default_factory=list)
    warnings: list[Finding] = Field(default_factory=list)
    info: list[Finding] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)
