"""Lint rule catalog shared by the linter and its configuration."""

from enum import Enum


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


# rule -> (severity, summary)
RULES: dict[str, tuple[Severity, str]] = {
    "frontmatter-missing": (Severity.ERROR, "SKILL.md has no frontmatter block"),
    "frontmatter-invalid": (
        Severity.ERROR,
        "frontmatter is not a YAML mapping or the file is not UTF-8",
    ),
    "name-missing": (Severity.ERROR, "name is absent or empty"),
    "description-missing": (Severity.ERROR, "description is absent or empty"),
    "name-format": (Severity.ERROR, "name is not lowercase-hyphenated"),
    "name-too-long": (Severity.ERROR, "name exceeds the maximum length"),
    "description-too-long": (Severity.ERROR, "description exceeds the maximum length"),
    "name-duplicate": (Severity.ERROR, "two skills share a name"),
    "name-mismatch": (Severity.WARNING, "name differs from the skill directory"),
    "skill-file-missing": (Severity.WARNING, "skill directory has no SKILL.md"),
    "manifest-missing": (Severity.ERROR, "marketplace manifest does not exist"),
    "manifest-invalid": (Severity.ERROR, "marketplace manifest is malformed"),
    "manifest-path-missing": (Severity.ERROR, "manifest lists a path that does not exist"),
    "manifest-duplicate": (Severity.WARNING, "manifest lists the same skill twice"),
    "skill-unregistered": (Severity.WARNING, "skill is not listed in the manifest"),
}

LINT_RULES: frozenset[str] = frozenset(RULES)
