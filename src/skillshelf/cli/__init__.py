"""Command line interface for skillshelf."""
