"""Shared utilities for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from envguard.utils.errors import EnvGuardError

# Exit codes
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

# Shared console instances
console = Console()
err_console = Console(stderr=True)


def fail(error: EnvGuardError) -> NoReturn:
    """Report an error that stopped a command and exit with code 2.

    Args:
        error: The error to report
    """
    err_console.print(f"[red]Error:[/red] {escape(error.message)}")
    raise typer.Exit(EXIT_ERROR)


def parse_patterns(value: str | None) -> list[str] | None:
    """Split a comma-separated option value, dropping empty items."""
    if not value:
        return None
    patterns = [p.strip() for p in value.split(",") if p.strip()]
    return patterns or None


def severity_style(severity: str) -> str:
    """Get Rich style for a severity level.

    Args:
        severity: Severity value (error, warning, info)

    Returns:
        Rich style string
    """
    styles = {
        "error": "red",
        "warning": "yellow",
        "info": "blue",
    }
    return styles.get(severity.lower(), "white")
