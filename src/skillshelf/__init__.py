"""skillshelf: catalog, validate and register Markdown skill documents."""

__version__ = "0.1.0"
