"""Marketplace manifest router."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from skillshelf.api.deps import get_context
from skillshelf.core.context import SharedContext
from skillshelf.core.exceptions import InvalidManifestError, ManifestNotFoundError

router = APIRouter()


@router.get("")
def get_manifest(ctx: SharedContext = Depends(get_context)) -> dict[str, Any]:
    """Return the marketplace manifest as stored on disk."""
    try:
        marketplace = ctx.manifest_store.load()
    except ManifestNotFoundError:
        raise HTTPException(status_code=404, detail="Marketplace manifest not found")
    except InvalidManifestError as e:
        raise HTTPException(status_code=422, detail=e.reason)

    return marketplace.model_dump(mode="json", exclude_unset=True)
