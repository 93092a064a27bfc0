"""Store administration commands: schema setup and API users."""

import sqlite3
from pathlib import Path
from typing import Annotated

import typer

from cabinet_wms.application.config import ConfigError, load_settings
from cabinet_wms.infrastructure import Database, StoreUnavailableError, UserRepository

DatabaseOption = Annotated[
    Path | None,
    typer.Option(
        "--database",
        "-d",
        help="SQLite file (default: CABINET_WMS_DATABASE)",
    ),
]


def _resolve_database(database: Path | None) -> Database:
    if database is None:
        try:
            database = load_settings().database
        except ConfigError as e:
            typer.echo(f"Error: {e.message}", err=True)
            raise typer.Exit(code=1)
    if database is None:
        typer.echo("Error: no database given; pass --database or set CABINET_WMS_DATABASE", err=True)
        raise typer.Exit(code=1)
    return Database(database)


def init_db_command(database: DatabaseOption = None) -> None:
    """Create the configuration and user tables."""
    db = _resolve_database(database)
    try:
        db.init_schema()
    except (sqlite3.Error, OSError) as e:
        typer.echo(f"Error: could not initialize {db.path}: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Initialized database at {db.path}")


def add_user_command(
    username: Annotated[str, typer.Argument(help="Login name of the new user")],
    role: Annotated[str, typer.Option("--role", "-r", help="Role; admin is granted everything")] = "user",
    permissions: Annotated[
        list[str] | None,
        typer.Option("--permission", "-p", help="Permission to grant, e.g. cabinet_calc.view (repeatable)"),
    ] = None,
    email: Annotated[str | None, typer.Option("--email", help="Contact address")] = None,
    database: DatabaseOption = None,
) -> None:
    """Create an API user and print their access token.

    The token is shown once; only its hash is stored.

    Example:
        cabinet-wms add-user alice -p cabinet_calc.view -p cabinet_calc.edit
    """
    repo = UserRepository(_resolve_database(database))
    try:
        user, token = repo.create(username, role, permissions or [], email=email)
    except StoreUnavailableError as e:
        typer.echo(f"Error: {e}; run init-db first", err=True)
        raise typer.Exit(code=1)
    except sqlite3.Error as e:
        typer.echo(f"Error: could not create user {username}: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Created user {user.username} (id {user.id}, role {user.role})")
    typer.echo(f"Token: {token}")
