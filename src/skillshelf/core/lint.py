"""Content validation for skill documents and the marketplace manifest."""

import logging
import re
from collections import defaultdict
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, computed_field

from skillshelf.core.exceptions import InvalidManifestError, ManifestNotFoundError
from skillshelf.core.manifest import ManifestStore, Marketplace
from skillshelf.core.skill_def import SKILL_FILENAME
from skillshelf.utils.config import LintConfig
from skillshelf.utils.def_loader import split_frontmatter
from skillshelf.utils.lint_rules import RULES, Severity

logger = logging.getLogger(__name__)

NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


class LintIssue(BaseModel):
    """A single validation finding."""

    rule: str
    severity: Severity
    message: str
    skill_id: str | None = None
    path: str | None = None


class LintReport(BaseModel):
    """All findings from one lint run."""

    issues: list[LintIssue] = Field(default_factory=list)
    skills_checked: int = 0
    strict: bool = False

    @property
    def errors(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        if self.errors:
            return False
        return not (self.strict and self.warnings)

    def by_skill(self) -> dict[str | None, list[LintIssue]]:
        grouped: dict[str | None, list[LintIssue]] = defaultdict(list)
        for issue in self.issues:
            grouped[issue.skill_id].append(issue)
        return dict(grouped)


class _SkillRecord(BaseModel):
    """Frontmatter fields of a skill that parsed far enough to be checked."""

    skill_id: str
    path: str
    name: str | None


class Linter:
    """Run content checks over a skills repository."""

    def __init__(self, config: LintConfig | None = None):
        self.config = config or LintConfig()

    def run(
        self,
        skills_path: Path,
        manifest: ManifestStore | None = None,
        strict: bool | None = None,
    ) -> LintReport:
        """
        Validate every skill under skills_path and, if given, the manifest.

        Args:
            skills_path: Directory holding one folder per skill
            manifest: Manifest store to cross-check against
            strict: Treat warnings as failures (defaults to config)

        Returns:
            LintReport with issues ordered by path, then rule
        """
        lint_run = _LintRun(
            self.config, manifest.workspace if manifest else skills_path.parent
        )

        records = lint_run.check_skills(skills_path)
        lint_run.check_unique_names(records)
        if manifest is not None:
            lint_run.check_manifest(manifest, {r.skill_id for r in records}, skills_path)

        issues = sorted(lint_run.issues, key=lambda i: (i.path or "", i.rule))
        logger.info(
            f"Linted {len(records)} skill(s): "
            f"{sum(i.severity == Severity.ERROR for i in issues)} error(s), "
            f"{sum(i.severity == Severity.WARNING for i in issues)} warning(s)"
        )
        return LintReport(
            issues=issues,
            skills_checked=len(records),
            strict=self.config.strict if strict is None else strict,
        )


class _LintRun:
    """Issues collected by one call to Linter.run."""

    def __init__(self, config: LintConfig, root: Path):
        self.config = config
        self.root = root
        self.issues: list[LintIssue] = []
        self._disabled = set(config.disabled_rules)

    def _report(
        self,
        rule: str,
        message: str,
        skill_id: str | None = None,
        path: Path | str | None = None,
    ) -> None:
        if rule in self._disabled:
            return
        severity, _ = RULES[rule]
        if isinstance(path, Path):
            path = self._display(path)
        self.issues.append(
            LintIssue(
                rule=rule,
                severity=severity,
                message=message,
                skill_id=skill_id,
                path=path,
            )
        )

    def _display(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return str(path)

    # ------------------------------------------------------------------
    # Skill documents
    # ------------------------------------------------------------------

    def check_skills(self, skills_path: Path) -> list[_SkillRecord]:
        if not skills_path.is_dir():
            logger.warning(f"Skills directory not found: {skills_path}")
            return []

        records = []
        for skill_dir in sorted(skills_path.iterdir()):
            if not skill_dir.is_dir() or skill_dir.name.startswith("."):
                continue

            skill_file = skill_dir / SKILL_FILENAME
            if not skill_file.is_file():
                self._report(
                    "skill-file-missing",
                    f"No {SKILL_FILENAME} in '{skill_dir.name}'",
                    skill_dir.name,
                    skill_dir,
                )
                continue

            records.append(self._check_skill_file(skill_dir.name, skill_file))
        return records

    def _check_skill_file(self, skill_id: str, skill_file: Path) -> _SkillRecord:
        record = _SkillRecord(
            skill_id=skill_id, path=self._display(skill_file), name=None
        )
        try:
            content = skill_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            self._report(
                "frontmatter-invalid",
                f"File is not valid UTF-8: {e.reason} at byte {e.start}",
                skill_id,
                skill_file,
            )
            return record

        frontmatter_text, _ = split_frontmatter(content)
        if frontmatter_text is None:
            self._report(
                "frontmatter-missing",
                "Expected a '---' delimited YAML block at the top of the file",
                skill_id,
                skill_file,
            )
            return record

        try:
            frontmatter: Any = yaml.safe_load(frontmatter_text)
        except yaml.YAMLError as e:
            self._report(
                "frontmatter-invalid",
                f"Frontmatter is not valid YAML: {e}".splitlines()[0],
                skill_id,
                skill_file,
            )
            return record

        if frontmatter is None:
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            self._report(
                "frontmatter-invalid",
                f"Frontmatter must be a mapping, got {type(frontmatter).__name__}",
                skill_id,
                skill_file,
            )
            return record

        name = frontmatter.get("name")
        description = frontmatter.get("description")

        if not isinstance(name, str) or not name.strip():
            self._report("name-missing", "Frontmatter 'name' is required", skill_id, skill_file)
        else:
            name = name.strip()
            record.name = name
            self._check_name(skill_id, skill_file, name)

        if not isinstance(description, str) or not description.strip():
            self._report(
                "description-missing",
                "Frontmatter 'description' is required",
                skill_id,
                skill_file,
            )
        elif len(description.strip()) > self.config.max_description_length:
            self._report(
                "description-too-long",
                f"Description is {len(description.strip())} characters "
                f"(max {self.config.max_description_length})",
                skill_id,
                skill_file,
            )

        return record

    def _check_name(self, skill_id: str, skill_file: Path, name: str) -> None:
        if not NAME_PATTERN.match(name):
            self._report(
                "name-format",
                f"Name '{name}' must be lowercase letters, digits and single hyphens",
                skill_id,
                skill_file,
            )
        if len(name) > self.config.max_name_length:
            self._report(
                "name-too-long",
                f"Name is {len(name)} characters (max {self.config.max_name_length})",
                skill_id,
                skill_file,
            )
        if name != skill_id:
            self._report(
                "name-mismatch",
                f"Name '{name}' differs from directory '{skill_id}'",
                skill_id,
                skill_file,
            )

    def check_unique_names(self, records: list[_SkillRecord]) -> None:
        by_name: dict[str, list[_SkillRecord]] = defaultdict(list)
        for record in records:
            if record.name:
                by_name[record.name].append(record)

        for name, owners in by_name.items():
            if len(owners) < 2:
                continue
            for record in owners:
                others = ", ".join(o.skill_id for o in owners if o is not record)
                self._report(
                    "name-duplicate",
                    f"Name '{name}' is also used by: {others}",
                    record.skill_id,
                    record.path,
                )

    # ------------------------------------------------------------------
    # Marketplace manifest
    # ------------------------------------------------------------------

    def check_manifest(
        self, store: ManifestStore, skill_ids: set[str], skills_path: Path
    ) -> None:
        manifest_display = self._display(store.manifest_path)
        try:
            marketplace: Marketplace = store.load()
        except ManifestNotFoundError:
            if self.config.require_manifest:
                self._report(
                    "manifest-missing",
                    "No marketplace manifest; run 'skillshelf manifest init'",
                    path=manifest_display,
                )
            return
        except InvalidManifestError as e:
            self._report("manifest-invalid", e.reason, path=manifest_display)
            return

        registered: set[str] = set()
        seen: dict[Path, str] = {}
        for ref in store.skill_refs(marketplace):
            label = f"{ref.plugin}: {ref.path}"
            if ref.resolved is None:
                # Remote plugin sources aren't on disk
                continue

            skill_id = store.skill_id_for(ref)
            if not ref.resolved.is_file():
                self._report(
                    "manifest-path-missing",
                    f"Manifest entry '{label}' does not exist "
                    f"(expected {self._display(ref.resolved)})",
                    skill_id,
                    manifest_display,
                )
                continue

            key = ref.resolved.resolve()
            if key in seen:
                self._report(
                    "manifest-duplicate",
                    f"Manifest entry '{label}' duplicates '{seen[key]}'",
                    skill_id,
                    manifest_display,
                )
            else:
                seen[key] = label

            if skill_id is not None:
                registered.add(skill_id)

        for skill_id in sorted(skill_ids - registered):
            self._report(
                "skill-unregistered",
                f"Skill '{skill_id}' is not listed in the marketplace manifest",
                skill_id,
                skills_path / skill_id / SKILL_FILENAME,
            )


def describe_rules() -> list[dict[str, str]]:
    """Rule catalog for help output."""
    return [
        {"rule": rule, "severity": severity.value, "summary": summary}
        for rule, (severity, summary) in RULES.items()
    ]
