"""Utilities package."""

from skillshelf.utils.def_loader import (
    DefExistsError,
    DefNotFoundError,
    InvalidDefError,
    discover_definitions,
    parse_frontmatter,
    write_definition,
)
from skillshelf.utils.logging import setup_logging

__all__ = [
    "DefExistsError",
    "DefNotFoundError",
    "InvalidDefError",
    "discover_definitions",
    "parse_frontmatter",
    "setup_logging",
    "write_definition",
]
