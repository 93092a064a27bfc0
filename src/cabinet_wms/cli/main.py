"""Typer CLI for cutting-list nesting and the cabinet-wms service."""

import logging
from typing import Annotated

import typer

from cabinet_wms.application.config import ConfigError, load_settings
from cabinet_wms.cli.commands import (
    add_user_command,
    init_db_command,
    nest_command,
    serve_command,
)

app = typer.Typer(
    name="cabinet-wms",
    help="Nest cabinet cutting lists on sheet stock and serve the nesting API.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")
    ] = False,
) -> None:
    """Configure logging for every command."""
    level = "DEBUG"
    if not verbose:
        try:
            level = load_settings().log_level
        except ConfigError as e:
            typer.echo(f"Error: {e.message}", err=True)
            raise typer.Exit(code=1)
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.command(name="nest")(nest_command)
app.command(name="serve")(serve_command)
app.command(name="init-db")(init_db_command)
app.command(name="add-user")(add_user_command)


if __name__ == "__main__":
    app()
