"""Shared utilities for loading Markdown definition files with YAML frontmatter."""

import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

T = TypeVar("T")
logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


class DefNotFoundError(Exception):
    """Definition folder or file doesn't exist."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} not found: {def_id}")
        self.kind = kind
        self.def_id = def_id


class InvalidDefError(Exception):
    """Definition file is malformed."""

    def __init__(self, kind: str, def_id: str, reason: str):
        super().__init__(f"Invalid {kind} '{def_id}': {reason}")
        self.kind = kind
        self.def_id = def_id
        self.reason = reason


class DefExistsError(Exception):
    """Definition file already exists."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} already exists: {def_id}")
        self.kind = kind
        self.def_id = def_id


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """
    Split raw file content into frontmatter text and body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter_text, body). frontmatter_text is None when the
        file has no frontmatter block or the block is never closed.
    """
    # Tolerate CRLF files written on Windows
    content = content.replace("\r\n", "\n")

    if not content.startswith(f"{FRONTMATTER_DELIMITER}\n"):
        return None, content

    # Empty frontmatter: "---\n---\n"
    if content.startswith(f"{FRONTMATTER_DELIMITER}\n{FRONTMATTER_DELIMITER}\n"):
        return "", content[8:]

    end_delimiter = content.find(f"\n{FRONTMATTER_DELIMITER}\n", 4)
    if end_delimiter == -1:
        # Closing delimiter at end of file with no trailing newline
        if content.endswith(f"\n{FRONTMATTER_DELIMITER}"):
            return content[4 : -len(FRONTMATTER_DELIMITER) - 1], ""
        return None, content

    return content[4:end_delimiter], content[end_delimiter + 5 :]


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """
    Parse YAML frontmatter and return it with the body.

    Raises:
        ValueError: If the frontmatter is not a YAML mapping
        yaml.YAMLError: If the frontmatter is not valid YAML
    """
    frontmatter_text, body = split_frontmatter(content)
    if frontmatter_text is None:
        return {}, body

    raw = yaml.safe_load(frontmatter_text)
    if raw is None:
        return {}, body
    if not isinstance(raw, dict):
        raise ValueError(
            f"frontmatter must be a mapping, got {type(raw).__name__}"
        )
    return raw, body


def parse_definition[T](
    content: str,
    def_id: str,
    parse_fn: Callable[[str, dict[str, Any], str], T],
    kind: str = "definition",
) -> T:
    """
    Parse YAML frontmatter + markdown body with type conversion.

    Args:
        content: Raw file content
        def_id: Definition ID (passed to parse_fn for context)
        parse_fn: Callback(def_id, frontmatter, body) -> typed object
        kind: Definition kind used in error messages

    Returns:
        The typed object returned by parse_fn

    Raises:
        InvalidDefError: If the frontmatter can't be parsed
        Whatever parse_fn raises (e.g., ValidationError)
    """
    try:
        frontmatter, body = parse_frontmatter(content)
    except (yaml.YAMLError, ValueError) as e:
        raise InvalidDefError(kind, def_id, f"bad frontmatter: {e}") from e

    return parse_fn(def_id, frontmatter, body)


def discover_definitions(
    path: Path,
    filename: str,
    parse_fn: Callable[[str, dict[str, Any], str], T | None],
    kind: str = "definition",
) -> list[T]:
    """
    Scan directory for definition files.

    Args:
        path: Directory containing definition folders
        filename: File to look for (e.g., "SKILL.md")
        parse_fn: Callback(def_id, frontmatter, body) -> object or None
        kind: Definition kind used in error messages

    Returns:
        List of objects from successful parses, ordered by folder name
    """
    if not path.exists():
        logger.warning(f"Definitions directory not found: {path}")
        return []

    results = []
    for def_dir in sorted(path.iterdir()):
        if not def_dir.is_dir() or def_dir.name.startswith("."):
            continue

        def_file = def_dir / filename
        if not def_file.exists():
            logger.warning(f"No {filename} found in {def_dir.name}")
            continue

        try:
            content = def_file.read_text(encoding="utf-8")
            result = parse_definition(content, def_dir.name, parse_fn, kind)
            if result is not None:
                results.append(result)
        except Exception as e:
            logger.warning(f"Failed to parse {def_dir.name}: {e}")
            continue

    return results


def write_definition(
    def_id: str,
    frontmatter: dict[str, Any],
    body: str,
    base_path: Path,
    filename: str,
) -> Path:
    """
    Write a definition file with YAML frontmatter and markdown body.

    Args:
        def_id: Definition ID (directory name)
        frontmatter: Dict of YAML frontmatter fields
        body: Markdown body content
        base_path: Base directory (e.g., skills_path)
        filename: File to write (e.g., "SKILL.md")

    Returns:
        Path to the written file
    """
    def_dir = base_path / def_id
    def_dir.mkdir(parents=True, exist_ok=True)

    # width keeps long descriptions on one line
    yaml_content = yaml.safe_dump(
        frontmatter,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=10_000,
    )
    content = f"---\n{yaml_content}---\n\n{body.strip()}\n"

    def_file = def_dir / filename
    def_file.write_text(content, encoding="utf-8")

    return def_file
