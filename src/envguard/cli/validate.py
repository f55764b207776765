"""CLI commands for validating environment files."""

from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from envguard.cli.utils import (
    EXIT_INVALID,
    EXIT_OK,
    console,
    err_console,
    fail,
    parse_patterns,
    severity_style,
)
from envguard.models.result import ValidationResult
from envguard.utils.config import EnvGuardConfig, load_config, merge_cli_options
from envguard.utils.errors import EnvGuardError


def _build_config(
    config_file: Optional[Path],
    **overrides,
) -> EnvGuardConfig:
    config = load_config(config_file)
    return merge_cli_options(config, **overrides)


def _run(config: EnvGuardConfig) -> ValidationResult:
    from envguard.core.validator import EnvGuardValidator

    return EnvGuardValidator(config).validate()


def _print_breakdown(result: ValidationResult) -> None:
    """Print finding counts per severity and type to stderr."""
    counts = Counter((f.severity.value, f.type.value) for f in result.findings)
    if not counts:
        return

    table = Table(title="Findings by type")
    table.add_column("Severity")
    table.add_column("Type")
    table.add_column("Count", justify="right")
    for (severity, finding_type), count in sorted(counts.items()):
        style = severity_style(severity)
        table.add_row(f"[{style}]{severity}[/{style}]", finding_type, str(count))
    err_console.print(table)


def validate_cmd(
    env_file: Optional[str] = typer.Option(
        None,
        "--env-file",
        "-e",
        help="Environment file to validate (default: .env)",
    ),
    schema_file: Optional[str] = typer.Option(
        None,
        "--schema-file",
        "-s",
        help="Schema file (JSON or YAML)",
    ),
    example_file: Optional[str] = typer.Option(
        None,
        "--example-file",
        "-x",
        help="Reference .env.example file",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        "-c",
        help="Configuration file",
    ),
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Validation mode (schema, example, both)",
    ),
    format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (text, json, junit)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat warnings as failures",
    ),
    exit_on_error: Optional[bool] = typer.Option(
        None,
        "--exit-on-error/--no-exit-on-error",
        help="Exit with code 1 when validation fails",
    ),
    ignore_patterns: Optional[str] = typer.Option(
        None,
        "--ignore-patterns",
        help="Comma-separated key regexes to ignore",
    ),
) -> None:
    """
    Validate an environment file against a schema and/or example file.

    Security analysis runs in every mode. Exits with 1 when validation
    fails and 2 when the configuration or input files cannot be used.

    Example:
        envguard validate --env-file .env --schema-file envguard.schema.yaml --format json
    """
    from envguard.renderers import RenderContext, get_renderer

    try:
        config = _build_config(
            config_file,
            env_file=env_file,
            schema_file=schema_file,
            example_file=example_file,
            mode=mode,
            output_format=format,
            strict=strict or None,
            exit_on_error=exit_on_error,
            ignore_patterns=parse_patterns(ignore_patterns),
        )

        if config.verbose:
            err_console.print(f"[dim]Validating: {config.env_file}[/dim]")
            err_console.print(f"[dim]Format: {config.output_format}[/dim]")

        with err_console.status("Validating environment..."):
            result = _run(config)
    except EnvGuardError as e:
        fail(e)

    renderer = get_renderer(config.output_format)
    context = RenderContext(
        format=config.output_format,
        output_path=output,
        verbose=config.verbose,
        color=output is None and console.is_terminal,
    )

    if output:
        renderer.render_to_file(result, context)
        err_console.print(f"Report written to {output}")
    else:
        typer.echo(renderer.render(result, context))

    if config.verbose:
        _print_breakdown(result)

    failed = (config.exit_on_error and not result.is_valid) or (config.strict and bool(result.warnings))
    raise typer.Exit(EXIT_INVALID if failed else EXIT_OK)


def check_cmd(
    env_file: Optional[str] = typer.Option(
        None,
        "--env-file",
        "-e",
        help="Environment file to validate (default: .env)",
    ),
    schema_file: Optional[str] = typer.Option(
        None,
        "--schema-file",
        "-s",
        help="Schema file (JSON or YAML)",
    ),
    example_file: Optional[str] = typer.Option(
        None,
        "--example-file",
        "-x",
        help="Reference .env.example file",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        "-c",
        help="Configuration file",
    ),
    mode: Optional[str] = typer.Option(
        None,
        "--mode",
        "-m",
        help="Validation mode (schema, example, both)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Treat warnings as failures",
    ),
) -> None:
    """
    Quick validation check that only sets the exit code.

    Example:
        envguard check --env-file .env && echo ok
    """
    try:
        config = _build_config(
            config_file,
            env_file=env_file,
            schema_file=schema_file,
            example_file=example_file,
            mode=mode,
            strict=strict or None,
        )
        result = _run(config)
    except EnvGuardError as e:
        fail(e)

    raise typer.Exit(EXIT_OK if result.passed(strict=config.strict) else EXIT_INVALID)
