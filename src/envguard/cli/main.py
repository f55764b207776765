"""Main CLI entry point for envguard."""

import typer

from envguard.cli import init, validate
from envguard.cli.utils import console

app = typer.Typer(
    name="envguard",
    help="Validate .env files against a schema or .env.example, with security checks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command(name="validate")(validate.validate_cmd)
app.command(name="check")(validate.check_cmd)
app.command(name="init")(init.init_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
    log_structured: bool = typer.Option(
        False,
        "--log-structured",
        help="Prefix log lines with time and logger name",
    ),
) -> None:
    """
    envguard: catch missing, malformed and leaked environment configuration.

    - [bold]validate[/bold]: Check an env file and print a text, JSON or JUnit report
    - [bold]check[/bold]: Same checks, exit code only
    - [bold]init[/bold]: Write a starter schema, config and .env.example
    """
    from envguard.utils.logging import configure_logging, level_for

    configure_logging(level=level_for(verbose, quiet), structured=log_structured)


@app.command()
def version() -> None:
    """Print the installed envguard version."""
    from envguard import __version__

    console.print(f"envguard version {__version__}", highlight=False)


if __name__ == "__main__":
    app()
