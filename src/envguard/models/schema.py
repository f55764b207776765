"""Schema and rule data models."""

from __future__ import annotations

import functools
import importlib
import re
from enum import Enum
from typing import Any, Callable

from pydantic import Field, field_validator

from envguard.models.common import EnvGuardModel
from envguard.models.result import Severity


@functools.lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a regex once and reuse it across validations."""
    return re.compile(pattern)


def resolve_predicate(path: str) -> Callable[[str], bool]:
    """Import a predicate from a ``package.module:function`` path.

    Args:
        path: Import path of the callable

    Returns:
        The imported callable

    Raises:
        ValueError: If the path is malformed or does not name a callable
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"predicate must look like 'package.module:function', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"cannot import predicate module {module_name!r}: {e}") from e
    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part, None)
        if target is None:
            raise ValueError(f"module {module_name!r} has no attribute {attr!r}")
    if not callable(target):
        raise ValueError(f"predicate {path!r} is not callable")
    return target


class VariableType(str, Enum):
    """Value types a schema can require."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    URL = "url"
    EMAIL = "email"
    JSON = "json"


class VariableSchema(EnvGuardModel):
    """Expectations for a single variable."""

    required: bool = Field(default=False, description="Variable must be present")
    type: VariableType | None = Field(default=None, description="Expected value type")
    pattern: str | None = Field(default=None, description="Regex the value must match")
    description: str | None = Field(default=None, description="What the variable is for")
    example: str | None = Field(default=None, description="Example value")
    allow_empty: bool = Field(default=False, description="Empty value is acceptable")
    deprecated: bool = Field(default=False, description="Variable is deprecated")
    alternatives: list[str] = Field(default_factory=list, description="Replacement variables")

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, v: str | None) -> str | None:
        if v is not None:
            try:
                re.compile(v)
            except re.error as e:
                raise ValueError(f"invalid regex {v!r}: {e}") from e
        return v

    @field_validator("example", mode="before")
    @classmethod
    def _coerce_example(cls, v: Any) -> Any:
        # YAML turns `example: 3000` into an int
        if v is not None and not isinstance(v, str):
            return str(v).lower() if isinstance(v, bool) else str(v)
        return v

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        if self.pattern is None:
            return None
        return compile_pattern(self.pattern)


class ValidationRule(EnvGuardModel):
    """A schema- or config-level custom rule applied to every variable.

    A rule fires when its pattern does not match a value, and separately
    when its predicate returns False for a value.
    """

    name: str = Field(min_length=1, description="Rule name")
    description: str = Field(min_length=1, description="Message reported when the rule fires")
    severity: Severity = Field(description="Severity of emitted findings")
    pattern: re.Pattern[str] | None = Field(default=None, description="Regex values must match")
    predicate: Callable[[str], bool] | None = Field(
        default=None,
        exclude=True,
        description="Callable values must satisfy",
    )
    required: bool | None = Field(default=None, description="Informational required flag")
    allow_empty: bool | None = Field(default=None, description="Informational allow-empty flag")

    @field_validator("predicate", mode="before")
    @classmethod
    def _resolve_predicate(cls, v: Any) -> Any:
        if isinstance(v, str):
            return resolve_predicate(v)
        return v


class SecurityRule(EnvGuardModel):
    """A pattern matched against ``KEY=value`` lines."""

    name: str = Field(min_length=1, description="Rule name")
    description: str = Field(min_length=1, description="Message reported on match")
    pattern: re.Pattern[str] = Field(description="Regex searched in KEY=value")
    severity: Severity = Field(description="Severity of emitted findings")
    suggestion: str | None = Field(default=None, description="Remediation hint")


class EnvSchema(EnvGuardModel):
    """Declarative description of the expected environment."""

    variables: dict[str, VariableSchema] = Field(default_factory=dict, description="Variables by key")
    rules: list[ValidationRule] = Field(default_factory=list, description="Custom rules")
    security_rules: list[SecurityRule] = Field(default_factory=list, description="Extra security rules")
    ignore_patterns: list[str] = Field(
        default_factory=list,
        description="Key regexes exempt from unused-variable reporting",
    )

    @field_validator("ignore_patterns")
    @classmethod
    def _check_ignore_patterns(cls, v: list[str]) -> list[str]:
        for p in v:
            try:
                re.compile(p)
            except re.error as e:
                raise ValueError(f"invalid ignore pattern {p!r}: {e}") from e
        return v

    @property
    def required_keys(self) -> list[str]:
        return [k for k, s in self.variables.items() if s.required]
