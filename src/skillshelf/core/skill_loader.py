"""Skill loader for discovering, loading and authoring skills."""

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

from skillshelf.core.skill_def import SKILL_FILENAME, SkillDef
from skillshelf.utils.def_loader import (
    DefExistsError,
    DefNotFoundError,
    InvalidDefError,
    discover_definitions,
    parse_definition,
    write_definition,
)

if TYPE_CHECKING:
    from skillshelf.utils.config import Config

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "description")


def missing_required_fields(frontmatter: dict[str, Any]) -> list[str]:
    """Return required frontmatter fields that are absent, empty or not text."""
    missing = []
    for field in REQUIRED_FIELDS:
        value = frontmatter.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


def scaffold_body(name: str, description: str) -> str:
    """Starter Markdown body for a newly created skill."""
    title = name.replace("-", " ").title()
    return f"""# {title}

{description}

## When to use

Describe the situations in which this skill should be activated.

## Instructions

1. Step-by-step guidance for the assistant.

## Examples

```bash
# Illustrative commands or snippets
```
"""


class SkillLoader:
    """Load and manage skill definitions from filesystem."""

    @staticmethod
    def from_config(config: "Config") -> "SkillLoader":
        """Create SkillLoader from config."""
        return SkillLoader(config.skills_path)

    def __init__(self, skills_path: Path):
        self.skills_path = skills_path

    def skill_file(self, skill_id: str) -> Path:
        # IDs are single directory names under skills_path
        if not skill_id or skill_id.startswith(".") or "/" in skill_id or "\\" in skill_id:
            raise InvalidDefError("skill", skill_id, "invalid skill id")
        return self.skills_path / skill_id / SKILL_FILENAME

    def discover_skills(self) -> list[SkillDef]:
        """Scan skills directory and return list of valid SkillDef."""
        return discover_definitions(
            self.skills_path, SKILL_FILENAME, self._parse_skill, "skill"
        )

    def _parse_skill(
        self, def_id: str, frontmatter: dict[str, Any], body: str
    ) -> Optional[SkillDef]:
        """Parse skill from frontmatter (callback for discover_definitions)."""
        missing = missing_required_fields(frontmatter)
        if missing:
            logger.warning(
                f"Missing required fields in skill '{def_id}': {', '.join(missing)}"
            )
            return None

        return SkillDef(
            id=def_id,
            name=frontmatter["name"].strip(),
            description=frontmatter["description"].strip(),
            content=body.strip(),
        )

    def load_skill(self, skill_id: str) -> SkillDef:
        """Load full skill definition by ID.

        Args:
            skill_id: The skill directory name

        Returns:
            SkillDef with full content

        Raises:
            DefNotFoundError: If skill doesn't exist
            InvalidDefError: If skill is invalid (malformed, missing fields)
        """
        skill_file = self.skill_file(skill_id)
        if not skill_file.is_file():
            raise DefNotFoundError("skill", skill_id)

        try:
            content = skill_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise InvalidDefError("skill", skill_id, f"not UTF-8: {e}") from e

        def parse(def_id: str, frontmatter: dict[str, Any], body: str) -> SkillDef:
            if not frontmatter:
                raise InvalidDefError("skill", def_id, "no valid frontmatter")
            missing = missing_required_fields(frontmatter)
            if missing:
                raise InvalidDefError(
                    "skill", def_id, f"missing required fields: {', '.join(missing)}"
                )
            return SkillDef(
                id=def_id,
                name=frontmatter["name"].strip(),
                description=frontmatter["description"].strip(),
                content=body.strip(),
            )

        return parse_definition(content, skill_id, parse, "skill")

    def find_by_name(self, name: str) -> SkillDef:
        """Find a skill by its frontmatter name.

        Raises:
            DefNotFoundError: If no valid skill has that name
        """
        for skill in self.discover_skills():
            if skill.name == name:
                return skill
        raise DefNotFoundError("skill", name)

    def resolve(self, ref: str) -> SkillDef:
        """Load a skill by directory ID, falling back to frontmatter name."""
        try:
            return self.load_skill(ref)
        except DefNotFoundError:
            return self.find_by_name(ref)

    def _write_skill(
        self, skill_id: str, name: str, description: str, content: str
    ) -> SkillDef:
        frontmatter = {"name": name, "description": description}
        missing = missing_required_fields(frontmatter)
        if missing:
            # Nothing is written for an invalid skill
            raise InvalidDefError(
                "skill", skill_id, f"missing required fields: {', '.join(missing)}"
            )
        write_definition(
            skill_id, frontmatter, content, self.skills_path, SKILL_FILENAME
        )
        return self.load_skill(skill_id)

    def create_skill(
        self,
        skill_id: str,
        name: str,
        description: str,
        content: str | None = None,
    ) -> SkillDef:
        """Create a new skill on disk.

        Args:
            skill_id: Directory name for the skill
            name: Frontmatter name
            description: Frontmatter description
            content: Markdown body; a starter body is generated when omitted

        Raises:
            DefExistsError: If the skill file already exists
            InvalidDefError: If name or description is empty; nothing is written
        """
        if self.skill_file(skill_id).exists():
            raise DefExistsError("skill", skill_id)

        body = content if content is not None else scaffold_body(name, description)
        skill = self._write_skill(skill_id, name, description, body)
        logger.info(f"Created skill '{skill_id}'")
        return skill

    def update_skill(
        self, skill_id: str, name: str, description: str, content: str
    ) -> SkillDef:
        """Overwrite an existing skill.

        Raises:
            DefNotFoundError: If the skill doesn't exist
            InvalidDefError: If name or description is empty; the skill is left as is
        """
        if not self.skill_file(skill_id).exists():
            raise DefNotFoundError("skill", skill_id)

        skill = self._write_skill(skill_id, name, description, content)
        logger.info(f"Updated skill '{skill_id}'")
        return skill

    def delete_skill(self, skill_id: str) -> None:
        """Remove a skill directory.

        Raises:
            DefNotFoundError: If the skill doesn't exist
        """
        skill_dir = self.skill_file(skill_id).parent
        if not skill_dir.is_dir():
            raise DefNotFoundError("skill", skill_id)

        shutil.rmtree(skill_dir)
        logger.info(f"Deleted skill '{skill_id}'")
