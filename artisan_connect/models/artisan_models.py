"""Artisan Connect — Marketplace Models (artisans, reviews)."""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


def _uuid() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArtisanStatus(str, Enum):
    """Lifecycle of an artisan profile."""

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class VerificationMethod(str, Enum):
    """How an admin verified the artisan."""

    NIN = "nin"
    PHONE_CALL = "phone_call"
    IN_PERSON = "in_person"


class ReviewStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ArtisanProfile(SQLModel, table=True):
    """A service-provider profile. Buyers browse, favorite and contact these."""

    __tablename__ = "artisan_profiles"

    id: str = Field(default_factory=_uuid, primary_key=True)
    user_id: str = Field(default="", index=True)
    business_name: str
    artisan_name: str = ""
    phone_number: str = ""
    whatsapp_number: Optional[str] = None

    # ── Service Details ──
    category: str = Field(index=True, description="One of ARTISAN_CATEGORIES")
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON))
    experience_years: int = 0
    bio: str = ""

    # ── Location ──
    estate_zone: str = Field(default="", index=True)
    city: str = ""
    state: str = ""

    # ── Media ──
    profile_image_url: Optional[str] = None
    portfolio_images: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    # ── Verification & Status ──
    is_verified: bool = False
    status: str = Field(default=ArtisanStatus.PENDING.value, index=True)
    verification_method: Optional[str] = None
    verified_at: Optional[datetime] = None
    verified_by: Optional[str] = None

    # ── Metrics ──
    rating: float = 0.0
    total_reviews: int = 0
    total_contacts: int = 0

    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)


class Review(SQLModel, table=True):
    """Buyer review of an artisan. Visible only once approved by an admin."""

    __tablename__ = "reviews"

    id: str = Field(default_factory=_uuid, primary_key=True)
    artisan_id: str = Field(index=True, foreign_key="artisan_profiles.id")
    buyer_id: str = Field(index=True)
    contact_event_id: Optional[str] = None

    rating: int = Field(ge=1, le=5, description="1-5 stars")
    comment: str = ""
    is_verified_hire: bool = False

    # ── Moderation ──
    status: str = Field(default=ReviewStatus.PENDING.value, index=True)
    moderated_by: Optional[str] = None
    moderated_at: Optional[datetime] = None

    created_at: datetime = Field(default_factory=_utcnow, index=True)
    updated_at: datetime = Field(default_factory=_utcnow)
