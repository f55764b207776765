"""SecurityAnalyzer for secret and sensitive-data detection."""

from __future__ import annotations

import re
from typing import Iterable

from envguard.core.patterns import is_placeholder, url_has_credentials
from envguard.models.env import EnvVariable
from envguard.models.result import Finding, FindingType, SecurityAnalysis, Severity
from envguard.models.schema import SecurityRule
from envguard.utils.logging import get_logger

logger = get_logger("security")

SENSITIVE_KEY_PARTS = ("secret", "key", "token", "password", "pass", "pwd", "auth", "credential", "private")
PLACEHOLDER_SENSITIVE_KEY_PARTS = ("secret", "key", "token", "password", "auth")

WEAK_SECRETS = frozenset(
    {
        "secret",
        "password",
        "admin",
        "root",
        "user",
        "test",
        "dev",
        "development",
        "123456",
        "qwerty",
        "letmein",
        "changeme",
        "default",
    }
)
MIN_SECRET_LENGTH = 8

# First match wins
SECRET_SHAPES = [
    (re.compile(r"^[A-Za-z0-9+/]{40,}={0,2}\Z"), "Base64 encoded secret"),
    (re.compile(r"^[a-f0-9]{32,}\Z", re.IGNORECASE), "Hexadecimal secret"),
    (re.compile(r"^[A-Za-z0-9_-]{32,}\Z"), "Random string secret"),
]

# (pattern, message, severity)
WEAK_VALUE_PATTERNS = [
    (re.compile(r"localhost", re.IGNORECASE), "Localhost URL detected", Severity.WARNING),
    (re.compile(r"127\.0\.0\.1"), "Localhost IP detected", Severity.WARNING),
    (
        re.compile(r"(dev|test|staging|debug)", re.IGNORECASE),
        "Development/test environment indicator",
        Severity.WARNING,
    ),
    (re.compile(r"^(true|false)\Z", re.IGNORECASE), "Boolean flag detected", Severity.INFO),
]

SENSITIVE_DATA_PATTERNS = [
    (re.compile(r"\b\d{4}[-\s]?\d{4}[-\s]?\d{4}[-\s]?\d{4}\b"), "Credit card number pattern"),
    (re.compile(r"\b\d{3}-\d{2}-\d{4}\b"), "SSN pattern"),
    (re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}"), "Email address"),
    (re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b"), "IP address"),
]


def is_weak_secret(value: str) -> bool:
    """Check if a secret value is a well-known default or too short."""
    return value.lower() in WEAK_SECRETS or len(value) < MIN_SECRET_LENGTH


class SecurityAnalyzer:
    """Analyzer for security problems in environment variables.

    Every variable goes through four independent checks: security rule
    patterns matched against ``KEY=value``, hardcoded secret detection on
    sensitive keys, development/placeholder indicators, and exposed
    sensitive data.

    Example:
        analyzer = SecurityAnalyzer()
        analysis = analyzer.analyze(parsed.variables)

        for error in analysis.errors:
            print(f"{error.variable}: {error.message}")
    """

    # Built-in rules
    BUILTIN_RULES = [
        SecurityRule(
            name="hardcoded-password",
            description="Hardcoded password detected",
            pattern=re.compile(r"password.*=.*(admin|password|123456|qwerty|letmein)", re.IGNORECASE),
            severity=Severity.ERROR,
            suggestion="Use a strong, unique password and store it securely",
        ),
        SecurityRule(
            name="hardcoded-api-key",
            description="Potential hardcoded API key detected",
            pattern=re.compile(r"api[_-]?key.*=.*[a-zA-Z0-9]{20,}", re.IGNORECASE),
            severity=Severity.WARNING,
            suggestion="Ensure API keys are not committed to version control",
        ),
        SecurityRule(
            name="hardcoded-secret",
            description="Potential hardcoded secret detected",
            pattern=re.compile(r"secret.*=.*[a-zA-Z0-9]{16,}", re.IGNORECASE),
            severity=Severity.WARNING,
            suggestion="Ensure secrets are not committed to version control",
        ),
        SecurityRule(
            name="weak-jwt-secret",
            description="Weak JWT secret detected",
            pattern=re.compile(r"jwt[_-]?secret.*=.*(secret|jwt|token|key)\Z", re.IGNORECASE),
            severity=Severity.ERROR,
            suggestion="Use a strong, randomly generated JWT secret",
        ),
        SecurityRule(
            name="default-database-credentials",
            description="Default database credentials detected",
            pattern=re.compile(
                r"(db|database)[_-]?(user|username|password).*=.*(root|admin|user|password)\Z",
                re.IGNORECASE,
            ),
            severity=Severity.ERROR,
            suggestion="Use strong, unique database credentials",
        ),
    ]

    def __init__(self, custom_rules: Iterable[SecurityRule] = ()) -> None:
        """Initialize the analyzer.

        Args:
            custom_rules: Rules evaluated after the built-in rules
        """
        self.rules: list[SecurityRule] = [*self.BUILTIN_RULES, *custom_rules]

    def analyze(self, variables: list[EnvVariable]) -> SecurityAnalysis:
        """Analyze variables for security issues.

        Args:
            variables: Variables to analyze

        Returns:
            SecurityAnalysis with findings grouped by severity
        """
        errors: list[Finding] = []
        warnings: list[Finding] = []
        info: list[Finding] = []

        for var in variables:
            for finding in (
                *self._check_rules(var),
                *self._check_hardcoded_secret(var),
                *self._check_weak_patterns(var),
                *self._check_sensitive_data(var),
            ):
                if finding.severity == Severity.ERROR:
                    errors.append(finding)
                elif finding.severity == Severity.WARNING:
                    warnings.append(finding)
                else:
                    info.append(finding)

        logger.debug(
            f"Security analysis of {len(variables)} variables: "
            f"{len(errors)} errors, {len(warnings)} warnings, {len(info)} info"
        )
        return SecurityAnalysis(errors=errors, warnings=warnings, info=info)

    def _check_rules(self, var: EnvVariable) -> list[Finding]:
        findings = []
        line = var.line
        for rule in self.rules:
            if not rule.pattern.search(line):
                continue
            if rule.severity == Severity.INFO:
                findings.append(Finding.note(var.key, rule.description, line_number=var.line_number))
            else:
                findings.append(
                    Finding(
                        type=FindingType.SECURITY_RISK,
                        variable=var.key,
                        message=rule.description,
                        line_number=var.line_number,
                        suggestion=rule.suggestion,
                        severity=rule.severity,
                    )
                )
        return findings

    def _check_hardcoded_secret(self, var: EnvVariable) -> list[Finding]:
        key = var.key.lower()
        if not any(part in key for part in SENSITIVE_KEY_PARTS):
            return []

        findings = []
        for pattern, name in SECRET_SHAPES:
            if pattern.search(var.value):
                findings.append(
                    Finding.warning(
                        FindingType.SECURITY_RISK,
                        var.key,
                        f"Potential {name} detected in sensitive variable",
                        line_number=var.line_number,
                        suggestion="Ensure this secret is not committed to version control",
                    )
                )
                break

        if is_weak_secret(var.value):
            findings.append(
                Finding.error(
                    FindingType.SECURITY_RISK,
                    var.key,
                    "Weak or default secret detected",
                    line_number=var.line_number,
                    suggestion="Use a strong, randomly generated secret",
                )
            )
        return findings

    def _check_weak_patterns(self, var: EnvVariable) -> list[Finding]:
        findings = []
        for pattern, message, severity in WEAK_VALUE_PATTERNS:
            if not pattern.search(var.value):
                continue
            if severity == Severity.INFO:
                findings.append(Finding.note(var.key, message, line_number=var.line_number))
            else:
                findings.append(
                    Finding.warning(
                        FindingType.WEAK_PATTERN,
                        var.key,
                        message,
                        line_number=var.line_number,
                        suggestion="Ensure this is appropriate for production",
                    )
                )

        key = var.key.lower()
        if any(part in key for part in PLACEHOLDER_SENSITIVE_KEY_PARTS) and is_placeholder(var.value):
            findings.append(
                Finding.warning(
                    FindingType.WEAK_PATTERN,
                    var.key,
                    "Placeholder value detected in sensitive variable",
                    line_number=var.line_number,
                    suggestion="Replace with actual secure value",
                )
            )
        return findings

    def _check_sensitive_data(self, var: EnvVariable) -> list[Finding]:
        findings = [
            Finding.warning(
                FindingType.SECURITY_RISK,
                var.key,
                f"Potential {kind} detected",
                line_number=var.line_number,
                suggestion="Verify this sensitive data should be in environment variables",
            )
            for pattern, kind in SENSITIVE_DATA_PATTERNS
            if pattern.search(var.value)
        ]

        if url_has_credentials(var.value):
            findings.append(
                Finding.warning(
                    FindingType.SECURITY_RISK,
                    var.key,
                    "URL contains embedded credentials",
                    line_number=var.line_number,
                    suggestion="Store credentials separately from URLs",
                )
            )
        return findings
