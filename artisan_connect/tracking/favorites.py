"""Artisan Connect — Favorite Toggle.

`is_favorite` is always the state *before* the toggle: True removes the
edge, False creates it. Callers holding optimistic UI state roll it back
whenever the result reports failure.
"""

from typing import List, Optional

from pydantic import BaseModel

from artisan_connect.core.identity import Identity
from artisan_connect.core.store import EventStore, StoreError
from artisan_connect.core.logging import get_logger

logger = get_logger("tracking.favorites")

FAVORITES_TABLE = "favorite_artisans"

UNAUTHORIZED = "Unauthorized"
UPDATE_FAILED = "Failed to update favorite"


class FavoriteResult(BaseModel):
    """Outcome of a toggle. `is_favorite` is the state after it, when it succeeded."""

    success: bool
    error: Optional[str] = None
    is_favorite: Optional[bool] = None


def toggle_favorite(
    store: EventStore,
    identity: Optional[Identity],
    artisan_id: str,
    is_favorite: bool,
) -> FavoriteResult:
    """Flip the (buyer, artisan) favorite edge."""
    if identity is None:
        return FavoriteResult(success=False, error=UNAUTHORIZED)

    edge = {"buyer_id": identity.user_id, "artisan_id": artisan_id}
    try:
        if is_favorite:
            store.delete_record(FAVORITES_TABLE, edge)
        else:
            store.insert_record(FAVORITES_TABLE, edge)
    except StoreError as e:
        logger.error(
            f"Error toggling favorite: {e}",
            extra={"entity_id": artisan_id, "user_id": identity.user_id},
        )
        return FavoriteResult(success=False, error=UPDATE_FAILED)

    return FavoriteResult(success=True, is_favorite=not is_favorite)


def check_is_favorite(
    store: EventStore, identity: Optional[Identity], artisan_id: str
) -> bool:
    if identity is None:
        return False
    row = store.select_one(
        FAVORITES_TABLE, {"buyer_id": identity.user_id, "artisan_id": artisan_id}
    )
    return row is not None


def list_favorite_artisan_ids(store: EventStore, identity: Identity) -> List[str]:
    """Artisan ids the buyer has favorited, newest first."""
    rows = store.select_many(
        FAVORITES_TABLE,
        {"buyer_id": identity.user_id},
        order_by="created_at",
        descending=True,
    )
    return [r.artisan_id for r in rows]
