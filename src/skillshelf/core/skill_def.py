"""Skill definition models."""

from pydantic import BaseModel, ConfigDict

SKILL_FILENAME = "SKILL.md"


class SkillMetadata(BaseModel):
    """Lightweight skill info for discovery."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    description: str


class SkillDef(BaseModel):
    """Loaded skill definition."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    description: str
    content: str

    @property
    def metadata(self) -> SkillMetadata:
        return SkillMetadata(id=self.id, name=self.name, description=self.description)
