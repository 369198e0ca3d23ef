"""
Pyrisma CLI.

Commands:
  init         Create a starter schema and .env
  validate     Parse and validate the schema
  generate     Write the Python client module
  migrate-dev  Write migration SQL for the schema
  version      Show the installed version
"""

import typer

from .project import generate_command, init_command, migrate_dev_command, validate_command
from .utils import configure_logging, get_version, version_callback

app = typer.Typer(
    help="pyrisma - generate a type-safe Python database client from a Prisma-style schema",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Global options."""
    configure_logging(verbose)


app.command(name="init")(init_command)
app.command(name="validate")(validate_command)
app.command(name="generate")(generate_command)
app.command(name="migrate-dev")(migrate_dev_command)


@app.command(name="version")
def version_command() -> None:
    """Show the installed version."""
    typer.echo(f"pyrisma {get_version()}")


def main() -> None:
    app()


__all__ = ["app", "main"]
