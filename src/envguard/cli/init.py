"""CLI command for creating starter files."""

from pathlib import Path

import typer

from envguard.cli.utils import console, fail
from envguard.templates import (
    DEFAULT_CONFIG_FILE,
    DEFAULT_EXAMPLE_FILE,
    DEFAULT_SCHEMA_FILE,
    create_config_template,
    create_example_template,
    create_schema_template,
)
from envguard.utils.errors import EnvGuardError


def init_cmd(
    schema: bool = typer.Option(False, "--schema", help=f"Create {DEFAULT_SCHEMA_FILE}"),
    config: bool = typer.Option(False, "--config", help=f"Create {DEFAULT_CONFIG_FILE}"),
    example: bool = typer.Option(False, "--example", help=f"Create {DEFAULT_EXAMPLE_FILE}"),
    directory: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Directory to write the files into",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """
    Create starter schema, config and .env.example files.

    All three are created when no file option is given.

    Example:
        envguard init --schema --example
    """
    if not (schema or config or example):
        schema = config = example = True

    targets = []
    if schema:
        targets.append((create_schema_template, DEFAULT_SCHEMA_FILE))
    if config:
        targets.append((create_config_template, DEFAULT_CONFIG_FILE))
    if example:
        targets.append((create_example_template, DEFAULT_EXAMPLE_FILE))

    for create, name in targets:
        try:
            path = create(directory / name, force=force)
        except EnvGuardError as e:
            fail(e)
        console.print(f"[green]Created[/green] {path}")
