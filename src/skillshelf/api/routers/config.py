"""Config resource router."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from skillshelf.api.deps import get_context
from skillshelf.api.schemas import ConfigUpdate
from skillshelf.core.context import SharedContext
from skillshelf.utils.config import LintConfig

router = APIRouter()


@router.get("", response_model=LintConfig)
def get_config(ctx: SharedContext = Depends(get_context)) -> LintConfig:
    """Get current lint settings."""
    return ctx.config.lint


@router.patch("", response_model=LintConfig)
def update_config(
    data: ConfigUpdate, ctx: SharedContext = Depends(get_context)
) -> LintConfig:
    """Persist lint settings to skillshelf.local.yaml."""
    updates = data.model_dump(exclude_unset=True)

    # Validate everything before the first write
    try:
        LintConfig.model_validate({**ctx.config.lint.model_dump(), **updates})
    except ValidationError as e:
        raise HTTPException(
            status_code=422, detail=[err["msg"] for err in e.errors()]
        )

    for key, value in updates.items():
        ctx.config.set_local(f"lint.{key}", value)

    return ctx.config.lint
