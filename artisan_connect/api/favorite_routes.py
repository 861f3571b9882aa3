"""Artisan Connect — Favorite Routes."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from artisan_connect.api.deps import get_store
from artisan_connect.core.identity import Identity, get_identity
from artisan_connect.core.store import EventStore
from artisan_connect.tracking.favorites import (
    UNAUTHORIZED,
    FavoriteResult,
    check_is_favorite,
    list_favorite_artisan_ids,
    toggle_favorite,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("api.favorites")

router = APIRouter(prefix="/favorites", tags=["Favorites"])


class ToggleFavoriteRequest(BaseModel):
    """Request body for POST /favorites/{artisan_id}/toggle."""

    is_favorite: bool
    """Favorite state before this toggle, as currently shown to the buyer."""


@router.post("/{artisan_id}/toggle", response_model=FavoriteResult)
async def toggle(
    artisan_id: str,
    request: ToggleFavoriteRequest,
    identity: Optional[Identity] = Depends(get_identity),
    store: EventStore = Depends(get_store),
):
    """Add or remove a favorite. Failures return `success: false` so the
    client can roll back its optimistic state."""
    result = toggle_favorite(store, identity, artisan_id, request.is_favorite)
    if not result.success:
        status_code = 401 if result.error == UNAUTHORIZED else 409
        return JSONResponse(status_code=status_code, content=result.model_dump())
    return result


@router.get("/{artisan_id}")
async def is_favorite(
    artisan_id: str,
    identity: Optional[Identity] = Depends(get_identity),
    store: EventStore = Depends(get_store),
):
    return {"artisan_id": artisan_id, "is_favorite": check_is_favorite(store, identity, artisan_id)}


@router.get("")
async def list_favorites(
    identity: Optional[Identity] = Depends(get_identity),
    store: EventStore = Depends(get_store),
):
    """Artisan ids the current buyer has favorited."""
    if identity is None:
        raise HTTPException(status_code=401, detail=UNAUTHORIZED)
    ids = list_favorite_artisan_ids(store, identity)
    return {"status": "success", "count": len(ids), "artisan_ids": ids}
