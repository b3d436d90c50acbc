"""Command line entry point for running the plugin server."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
import uvicorn

from azuredevops_plugin.api.context import AppContext
from azuredevops_plugin.api.main import create_app
from azuredevops_plugin.config import configure_logging, load_settings

app = typer.Typer(help="Azure DevOps REST plugin for declarative controllers.")
logger = logging.getLogger(__name__)


@app.callback()
def main() -> None:
    """Azure DevOps REST plugin."""


@app.command()
def serve(
    host: Annotated[str | None, typer.Option(help="Interface to bind", envvar="HOST")] = None,
    port: Annotated[int | None, typer.Option(help="Port to listen on", envvar="PORT")] = None,
    debug: Annotated[
        bool, typer.Option("--debug/--no-debug", help="Dump verbose output", envvar="DEBUG")
    ] = True,
    no_color: Annotated[
        bool, typer.Option("--no-color", help="Disable color output", envvar="NO_COLOR")
    ] = False,
) -> None:
    """Run the HTTP server until interrupted."""

    settings = load_settings().merged(host=host, port=port, debug=debug, no_color=no_color)
    configure_logging(settings.debug)
    logger.info("starting server on %s:%s", settings.host, settings.port)
    uvicorn.run(
        create_app(AppContext.from_settings(settings)),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
        use_colors=not settings.no_color,
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":  # pragma: no cover
    app()
