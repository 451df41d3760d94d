"""Server CLI command for the HTTP API."""

import logging

import typer
import uvicorn

from skillshelf.api import create_app
from skillshelf.core.context import SharedContext
from skillshelf.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def serve_command(ctx: typer.Context, host: str | None, port: int | None) -> None:
    """Serve the skill catalog over HTTP."""
    config = ctx.obj.get("config")

    # Enable console logging for server mode
    setup_logging(config, console_output=True)

    host = host or config.api.host
    port = port or config.api.port

    typer.echo(f"Serving skills from {config.skills_path}")
    typer.echo(f"Listening on http://{host}:{port}")
    typer.echo("Press Ctrl+C to stop")

    app = create_app(SharedContext(config))
    logger.info(f"Starting API server on {host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level="info")
