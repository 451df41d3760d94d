"""Core skill catalog functionality."""

from .context import SharedContext
from .exceptions import InvalidManifestError, ManifestError, ManifestNotFoundError
from .lint import Linter, LintIssue, LintReport, Severity
from .manifest import Marketplace, ManifestStore, PluginEntry
from .search import SkillMatch, SkillMatcher
from .skill_def import SkillDef, SkillMetadata
from .skill_loader import SkillLoader

__all__ = [
    "SharedContext",
    "InvalidManifestError",
    "ManifestError",
    "ManifestNotFoundError",
    "Linter",
    "LintIssue",
    "LintReport",
    "Severity",
    "Marketplace",
    "ManifestStore",
    "PluginEntry",
    "SkillMatch",
    "SkillMatcher",
    "SkillDef",
    "SkillMetadata",
    "SkillLoader",
]
