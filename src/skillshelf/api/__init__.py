"""HTTP API for skillshelf."""

from skillshelf.api.app import create_app

__all__ = ["create_app"]
