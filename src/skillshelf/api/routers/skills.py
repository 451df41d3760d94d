"""Skill resource router."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from skillshelf.api.deps import get_context
from skillshelf.api.schemas import SkillCreate, SkillMatchResponse
from skillshelf.core.context import SharedContext
from skillshelf.core.exceptions import InvalidManifestError
from skillshelf.core.skill_def import SkillDef
from skillshelf.utils.def_loader import DefExistsError, DefNotFoundError, InvalidDefError

router = APIRouter()


@router.get("", response_model=list[SkillDef])
def list_skills(ctx: SharedContext = Depends(get_context)) -> list[SkillDef]:
    """List all valid skills."""
    return ctx.skill_loader.discover_skills()


@router.get("/search", response_model=list[SkillMatchResponse])
def search_skills(
    q: str = Query(..., min_length=1, description="Task description to match"),
    limit: int = Query(5, gt=0, le=100),
    ctx: SharedContext = Depends(get_context),
) -> list[SkillMatchResponse]:
    """Rank skills by how well their name and description match a query."""
    matches = ctx.matcher.rank(q, ctx.skill_loader.discover_skills(), limit=limit)
    return [
        SkillMatchResponse(
            id=m.skill.id,
            name=m.skill.name,
            description=m.skill.description,
            score=m.score,
            matched_terms=m.matched_terms,
        )
        for m in matches
    ]


@router.get("/{skill_id}", response_model=SkillDef)
def get_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> SkillDef:
    """Get skill by ID."""
    try:
        return ctx.skill_loader.load_skill(skill_id)
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post(
    "/{skill_id}", response_model=SkillDef, status_code=status.HTTP_201_CREATED
)
def create_skill(
    skill_id: str, data: SkillCreate, ctx: SharedContext = Depends(get_context)  # type: ignore[valid-type]
) -> SkillDef:
    """Create a new skill."""
    try:
        return ctx.skill_loader.create_skill(
            skill_id,
            data.name,  # type: ignore[attr-defined]
            data.description,  # type: ignore[attr-defined]
            data.content,  # type: ignore[attr-defined]
        )
    except DefExistsError:
        raise HTTPException(status_code=409, detail=f"Skill already exists: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/{skill_id}", response_model=SkillDef)
def update_skill(
    skill_id: str, data: SkillCreate, ctx: SharedContext = Depends(get_context)  # type: ignore[valid-type]
) -> SkillDef:
    """Update an existing skill."""
    try:
        return ctx.skill_loader.update_skill(
            skill_id,
            data.name,  # type: ignore[attr-defined]
            data.description,  # type: ignore[attr-defined]
            data.content,  # type: ignore[attr-defined]
        )
    except DefNotFoundError:
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")
    except InvalidDefError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(skill_id: str, ctx: SharedContext = Depends(get_context)) -> None:
    """Delete a skill and drop it from the marketplace manifest."""
    # Manifest is validated before anything is removed
    manifest_exists = ctx.manifest_store.exists()
    if manifest_exists:
        try:
            ctx.manifest_store.load()
        except InvalidManifestError as e:
            raise HTTPException(status_code=422, detail=str(e))

    try:
        ctx.skill_loader.delete_skill(skill_id)
    except (DefNotFoundError, InvalidDefError):
        raise HTTPException(status_code=404, detail=f"Skill not found: {skill_id}")

    if manifest_exists:
        ctx.manifest_store.unregister_skill(skill_id)
