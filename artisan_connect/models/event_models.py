"""Artisan Connect — Interaction Event Models.

Contact and modal events are append-only: rows are inserted once and never
updated or deleted by the application. Favorites are the one mutable edge.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from sqlmodel import SQLModel, Field, UniqueConstraint


def _uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContactType(str, Enum):
    WHATSAPP = "whatsapp"
    CALL = "call"


class ModalEventType(str, Enum):
    """Auth prompt lifecycle events."""

    SHOWN = "modal_shown"
    CONVERTED = "modal_converted"
    DISMISSED = "modal_dismissed"


class ConversionAction(str, Enum):
    LOGIN = "login"
    SIGNUP = "signup"


class FavoriteArtisan(SQLModel, table=True):
    """Buyer → artisan favorite edge.

    Unique on (buyer_id, artisan_id): a duplicate insert is rejected by the
    store, which is how concurrent toggles on the same pair are resolved.
    """

    __tablename__ = "favorite_artisans"
    __table_args__ = (
        UniqueConstraint("buyer_id", "artisan_id", name="uq_favorite_buyer_artisan"),
    )

    id: str = Field(default_factory=_uuid, primary_key=True)
    buyer_id: str = Field(index=True)
    artisan_id: str = Field(index=True)
    created_at: datetime = Field(default_factory=_utcnow)


class ContactEvent(SQLModel, table=True):
    """A buyer initiating a call or WhatsApp message to an artisan."""

    __tablename__ = "contact_events"

    id: str = Field(default_factory=_uuid, primary_key=True)
    buyer_id: str = Field(index=True)
    artisan_id: str = Field(index=True)
    contact_type: str = Field(description="whatsapp | call")
    contacted_at: datetime = Field(default_factory=_utcnow)
    review_requested_at: Optional[datetime] = None
    review_submitted: bool = False
    created_at: datetime = Field(default_factory=_utcnow, index=True)


class AuthModalEvent(SQLModel, table=True):
    """Impression / conversion / dismissal of the auth prompt."""

    __tablename__ = "auth_modal_events"

    id: str = Field(default_factory=_uuid, primary_key=True)
    event_type: str = Field(index=True, description="modal_shown | modal_converted | modal_dismissed")
    artisan_id: Optional[str] = Field(default=None, index=True)
    session_id: str = Field(default="", index=True)
    conversion_action: Optional[str] = None
    user_id: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow, index=True)
