"""Lint router."""

from fastapi import APIRouter, Depends

from skillshelf.api.deps import get_context
from skillshelf.core.context import SharedContext
from skillshelf.core.lint import LintReport

router = APIRouter()


@router.get("", response_model=LintReport)
def lint_workspace(
    strict: bool | None = None, ctx: SharedContext = Depends(get_context)
) -> LintReport:
    """Validate skills and the marketplace manifest."""
    return ctx.lint(strict=strict)
