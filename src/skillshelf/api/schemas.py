"""Pydantic schemas for API request/response models."""

from typing import Any

from pydantic import BaseModel, Field, create_model

from skillshelf.core.skill_def import SkillDef


def make_create_model(model_cls: type[BaseModel], exclude: set[str]) -> type[BaseModel]:
    """Derive a Create model from existing model, excluding specified fields."""
    fields: dict[str, Any] = {}
    for name, field in model_cls.model_fields.items():
        if name in exclude:
            continue
        if field.is_required():
            fields[name] = (field.annotation, ...)
        else:
            fields[name] = (field.annotation, field.default)

    return create_model(f"{model_cls.__name__}Create", **fields)


# Created at runtime, so mypy needs type: ignore
SkillCreate: type[BaseModel] = make_create_model(SkillDef, exclude={"id"})  # type: ignore[assignment]


class SkillMatchResponse(BaseModel):
    """One search hit."""

    id: str
    name: str
    description: str
    score: float
    matched_terms: list[str] = Field(default_factory=list)


class ConfigUpdate(BaseModel):
    """Lint settings to persist; fields left unset are not changed."""

    disabled_rules: list[str] | None = None
    max_name_length: int | None = None
    max_description_length: int | None = None
    require_manifest: bool | None = None
    strict: bool | None = None
