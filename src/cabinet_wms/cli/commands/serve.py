"""Serve command for running the REST API under uvicorn."""

from typing import Annotated

import typer
import uvicorn

from cabinet_wms.application.config import ConfigError, load_settings


def serve_command(
    host: Annotated[str, typer.Option("--host", help="Interface to bind")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Restart on code changes")] = False,
) -> None:
    """Run the REST API.

    The database, log level and CORS origins come from the CABINET_WMS_*
    environment variables.
    """
    try:
        settings = load_settings()
    except ConfigError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)

    uvicorn.run(
        "cabinet_wms.web:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )
