"""FastAPI application factory."""

from fastapi import FastAPI

from skillshelf import __version__
from skillshelf.api.routers import config, lint, manifest, skills
from skillshelf.core.context import SharedContext


def create_app(context: SharedContext) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Skillshelf API",
        description="Read and author skill documents in a skills repository",
        version=__version__,
    )
    app.state.context = context

    app.include_router(skills.router, prefix="/skills", tags=["skills"])
    app.include_router(manifest.router, prefix="/manifest", tags=["manifest"])
    app.include_router(lint.router, prefix="/lint", tags=["lint"])
    app.include_router(config.router, prefix="/config", tags=["config"])

    return app
