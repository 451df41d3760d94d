"""Marketplace manifest (.claude-plugin/marketplace.json) models and store."""

import json
import logging
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from skillshelf.core.exceptions import (
    InvalidManifestError,
    ManifestError,
    ManifestNotFoundError,
)
from skillshelf.core.skill_def import SKILL_FILENAME

if TYPE_CHECKING:
    from skillshelf.utils.config import Config

logger = logging.getLogger(__name__)


# ============================================================================
# Manifest Models
# ============================================================================
# The format belongs to the host platform, so unknown keys are kept as-is.


class MarketplaceOwner(BaseModel):
    """Who publishes the marketplace."""

    model_config = ConfigDict(extra="allow")

    name: str
    email: str | None = None


class MarketplaceMetadata(BaseModel):
    model_config = ConfigDict(extra="allow")

    description: str | None = None
    version: str | None = None


class PluginEntry(BaseModel):
    """A plugin listed in the marketplace, with the skill paths it installs."""

    model_config = ConfigDict(extra="allow")

    name: str
    description: str | None = None
    source: str | dict[str, Any] = "./"
    strict: bool | None = None
    skills: list[str] = Field(default_factory=list)

    @property
    def local_source(self) -> str | None:
        """Plugin root relative to the repository, or None for remote sources."""
        if isinstance(self.source, str):
            return normalize_ref(self.source)
        return None


class Marketplace(BaseModel):
    """Top-level marketplace manifest."""

    model_config = ConfigDict(extra="allow")

    name: str
    owner: MarketplaceOwner
    metadata: MarketplaceMetadata | None = None
    plugins: list[PluginEntry] = Field(default_factory=list)

    def get_plugin(self, name: str) -> PluginEntry | None:
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None


class SkillRef(BaseModel):
    """One skill path listed by a plugin."""

    plugin: str
    path: str
    resolved: Path | None


# ============================================================================
# Path helpers
# ============================================================================


def normalize_ref(ref: str) -> str:
    """
    Normalize a manifest path for comparison.

    "./skills/foo/", "skills/foo" and "skills/foo/SKILL.md" all become
    "skills/foo". The repository root becomes ".".
    """
    ref = ref.strip().replace("\\", "/")
    normalized = posixpath.normpath(ref) if ref else "."
    if posixpath.basename(normalized) == SKILL_FILENAME:
        normalized = posixpath.dirname(normalized) or "."
    return normalized


def format_ref(path: str) -> str:
    """Render a normalized path the way the manifest writes it."""
    return "./" if path == "." else f"./{path}"


# ============================================================================
# Manifest Store
# ============================================================================


class ManifestStore:
    """Read and update the marketplace manifest of a skills repository."""

    @staticmethod
    def from_config(config: "Config") -> "ManifestStore":
        """Create ManifestStore from config."""
        return ManifestStore(
            config.manifest_path, config.workspace, config.skills_dir_name
        )

    def __init__(self, manifest_path: Path, workspace: Path, skills_dir: str = "skills"):
        self.manifest_path = manifest_path
        self.workspace = workspace
        self.skills_dir = normalize_ref(skills_dir)

    def exists(self) -> bool:
        return self.manifest_path.is_file()

    def load(self) -> Marketplace:
        """
        Load and validate the manifest.

        Raises:
            ManifestNotFoundError: If the manifest file doesn't exist
            InvalidManifestError: If it isn't valid JSON or doesn't match the model
        """
        if not self.exists():
            raise ManifestNotFoundError(self.manifest_path)

        try:
            raw = json.loads(self.manifest_path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidManifestError(self.manifest_path, f"not UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise InvalidManifestError(self.manifest_path, f"bad JSON: {e}") from e

        try:
            return Marketplace.model_validate(raw)
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidManifestError(self.manifest_path, reasons) from e

    def save(self, marketplace: Marketplace) -> None:
        """Write the manifest as 2-space indented JSON."""
        self.manifest_path.parent.mkdir(parents=True, exist_ok=True)
        data = marketplace.model_dump(mode="json", exclude_unset=True)
        self.manifest_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def init(
        self,
        name: str,
        owner: str,
        plugin: str | None = None,
        description: str | None = None,
        email: str | None = None,
    ) -> Marketplace:
        """
        Create a new manifest with a single local plugin.

        Raises:
            ManifestError: If the manifest already exists
        """
        if self.exists():
            raise ManifestError(f"Marketplace manifest already exists: {self.manifest_path}")

        owner_entry = MarketplaceOwner(name=owner)
        if email:
            owner_entry.email = email

        marketplace = Marketplace(
            name=name,
            owner=owner_entry,
            plugins=[
                PluginEntry(
                    name=plugin or name,
                    description=description or f"Skills published by {owner}",
                    source="./",
                    strict=False,
                    skills=[],
                )
            ],
        )
        if description:
            marketplace.metadata = MarketplaceMetadata(description=description)

        self.save(marketplace)
        logger.info(f"Created marketplace manifest at {self.manifest_path}")
        return marketplace

    def resolve(self, path: str, plugin: PluginEntry | None = None) -> Path | None:
        """
        Resolve a manifest skill path to the SKILL.md it refers to.

        Paths are relative to the plugin's local source (the repository root
        for "./"). Returns None for plugins with a remote source.
        """
        base = "."
        if plugin is not None:
            if plugin.local_source is None:
                return None
            base = plugin.local_source

        target = self.workspace / base / normalize_ref(path)
        return target / SKILL_FILENAME

    def skill_refs(self, marketplace: Marketplace | None = None) -> list[SkillRef]:
        """List every skill path in manifest order."""
        marketplace = marketplace or self.load()
        refs = []
        for plugin in marketplace.plugins:
            for path in plugin.skills:
                refs.append(
                    SkillRef(
                        plugin=plugin.name,
                        path=path,
                        resolved=self.resolve(path, plugin),
                    )
                )
        return refs

    def skill_id_for(self, ref: SkillRef) -> str | None:
        """Skill directory name a reference points at, if it is under skills_dir."""
        if ref.resolved is None:
            return None
        skill_dir = ref.resolved.parent
        try:
            relative = skill_dir.resolve().relative_to(
                (self.workspace / self.skills_dir).resolve()
            )
        except ValueError:
            return None
        if len(relative.parts) != 1:
            return None
        return relative.parts[0]

    def registered_skill_ids(self, marketplace: Marketplace | None = None) -> set[str]:
        ids = set()
        for ref in self.skill_refs(marketplace):
            skill_id = self.skill_id_for(ref)
            if skill_id is not None:
                ids.add(skill_id)
        return ids

    def _path_for_plugin(self, skill_id: str, plugin: PluginEntry) -> str:
        """Skill path written into a plugin entry, relative to its source."""
        source = plugin.local_source
        if source is None:
            raise ManifestError(
                f"Plugin '{plugin.name}' has a remote source; can't register local skills"
            )
        skill_path = posixpath.join(self.skills_dir, skill_id)
        if source == ".":
            return format_ref(skill_path)

        relative = posixpath.relpath(skill_path, source)
        if relative.startswith(".."):
            raise ManifestError(
                f"Skill '{skill_id}' is outside plugin '{plugin.name}' source '{plugin.source}'"
            )
        return format_ref(relative)

    def register_skill(self, skill_id: str, plugin: str | None = None) -> bool:
        """
        Add a skill to a plugin's skill list.

        Args:
            skill_id: Skill directory name under the skills directory
            plugin: Plugin name; defaults to the first plugin

        Returns:
            True if the manifest changed, False if the skill was already listed

        Raises:
            ManifestError: If the plugin doesn't exist or there are no plugins
        """
        marketplace = self.load()
        if not marketplace.plugins:
            raise ManifestError("Marketplace manifest has no plugins")

        if plugin is None:
            entry = marketplace.plugins[0]
        else:
            entry = marketplace.get_plugin(plugin)
            if entry is None:
                raise ManifestError(f"Plugin not found in marketplace manifest: {plugin}")

        path = self._path_for_plugin(skill_id, entry)
        target = self.resolve(path, entry)
        for existing in entry.skills:
            if self.resolve(existing, entry) == target:
                return False

        # Assign rather than append so the field is serialized when it was unset
        entry.skills = [*entry.skills, path]
        self.save(marketplace)
        logger.info(f"Registered skill '{skill_id}' in plugin '{entry.name}'")
        return True

    def unregister_skill(self, skill_id: str) -> int:
        """
        Remove every reference to a skill.

        Returns:
            Number of references removed
        """
        marketplace = self.load()
        removed = 0
        for entry in marketplace.plugins:
            kept = []
            for path in entry.skills:
                ref = SkillRef(
                    plugin=entry.name, path=path, resolved=self.resolve(path, entry)
                )
                if self.skill_id_for(ref) == skill_id:
                    removed += 1
                else:
                    kept.append(path)
            if len(kept) != len(entry.skills):
                entry.skills = kept

        if removed:
            self.save(marketplace)
            logger.info(f"Unregistered skill '{skill_id}' ({removed} reference(s))")
        return removed
