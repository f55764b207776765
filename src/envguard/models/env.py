"""Parsed environment file data models."""

from __future__ import annotations

from pydantic import Field

from envguard.models.common import EnvGuardModel


class EnvVariable(EnvGuardModel):
    """One parsed ``KEY=value`` assignment."""

    key: str = Field(description="Variable name")
    value: str = Field(description="Unquoted, unescaped value")
    line_number: int = Field(description="1-based source line")
    is_quoted: bool = Field(default=False, description="Value was wrapped in quotes")
    comment: str | None = Field(
        default=None,
        alias="hasComment",
        description="Inline comment text",
    )

    @property
    def line(self) -> str:
        """The ``KEY=value`` form used by rule patterns."""
        return f"{self.key}={self.value}"


class ParseError(EnvGuardModel):
    """A line that could not be parsed as an assignment."""

    line_number: int = Field(description="1-based source line")
    message: str = Field(description="What went wrong")
    line: str = Field(description="Offending line, trimmed")


def effective_variables(variables: list[EnvVariable]) -> list[EnvVariable]:
    """Resolve duplicate keys, keeping the last assignment of each key.

    The result is ordered by the line of the winning assignment.
    """
    latest: dict[str, EnvVariable] = {}
    for var in variables:
        latest.pop(var.key, None)
        latest[var.key] = var
    return list(latest.values())


class ParsedEnvFile(EnvGuardModel):
    """Result of parsing an environment file."""

    variables: list[EnvVariable] = Field(default_factory=list, description="Assignments in file order")
    comments: list[str] = Field(default_factory=list, description="Free-standing comment texts")
    empty_lines: list[int] = Field(default_factory=list, description="Blank line numbers")
    parse_errors: list[ParseError] = Field(default_factory=list, description="Malformed lines")

    @property
    def has_errors(self) -> bool:
        return bool(self.parse_errors)

    @property
    def duplicate_keys(self) -> list[str]:
        """Keys assigned more than once, in order of first appearance."""
        seen: set[str] = set()
        dupes: list[str] = []
        for var in self.variables:
            if var.key in seen and var.key not in dupes:
                dupes.append(var.key)
            seen.add(var.key)
        return dupes

    def effective_variables(self) -> list[EnvVariable]:
        """Variables after last-wins duplicate resolution."""
        return effective_variables(self.variables)

    def as_dict(self) -> dict[str, str]:
        return {v.key: v.value for v in self.variables}

    def get(self, key: str) -> EnvVariable | None:
        """Get the winning assignment for a key."""
        for var in reversed(self.variables):
            if var.key == key:
                return var
        return None
