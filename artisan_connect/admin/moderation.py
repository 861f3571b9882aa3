"""Artisan Connect — Moderation Actions.

Approve/reject artisans and reviews. Each successful change is followed by
one audit row; audit failures are logged and do not undo the change.
"""

from datetime import datetime, timezone
from typing import Optional

from artisan_connect.core.identity import Identity
from artisan_connect.core.store import EventStore
from artisan_connect.models.artisan_models import (
    ArtisanProfile,
    ArtisanStatus,
    Review,
    ReviewStatus,
    VerificationMethod,
)
from artisan_connect.admin.audit import AuditLogEntry, log_admin_action
from artisan_connect.core.logging import get_logger

logger = get_logger("admin.moderation")


class NotFoundError(Exception):
    """Raised when the moderated record does not exist."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} {record_id} not found")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def approve_artisan(
    store: EventStore,
    admin: Identity,
    artisan_id: str,
    method: VerificationMethod,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> ArtisanProfile:
    now = _now()
    artisan = store.update_record(
        "artisan_profiles",
        artisan_id,
        {
            "status": ArtisanStatus.ACTIVE.value,
            "is_verified": True,
            "verification_method": VerificationMethod(method).value,
            "verified_at": now,
            "verified_by": admin.user_id,
            "updated_at": now,
        },
    )
    if artisan is None:
        raise NotFoundError("artisan_profiles", artisan_id)

    log_admin_action(
        store,
        admin,
        AuditLogEntry(
            action="approve_artisan",
            target_type="artisan",
            target_id=artisan_id,
            details={
                "artisan_name": artisan.business_name or "Unknown",
                "verification_method": VerificationMethod(method).value,
            },
            ip_address=ip_address,
            user_agent=user_agent,
        ),
    )
    logger.info("Artisan approved", extra={"entity_id": artisan_id, "user_id": admin.user_id})
    return artisan


def reject_artisan(
    store: EventStore,
    admin: Identity,
    artisan_id: str,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> ArtisanProfile:
    artisan = store.update_record(
        "artisan_profiles",
        artisan_id,
        {"status": ArtisanStatus.SUSPENDED.value, "updated_at": _now()},
    )
    if artisan is None:
        raise NotFoundError("artisan_profiles", artisan_id)

    log_admin_action(
        store,
        admin,
        AuditLogEntry(
            action="reject_artisan",
            target_type="artisan",
            target_id=artisan_id,
            details={"artisan_name": artisan.business_name or "Unknown"},
            ip_address=ip_address,
            user_agent=user_agent,
        ),
    )
    logger.info("Artisan rejected", extra={"entity_id": artisan_id, "user_id": admin.user_id})
    return artisan


def moderate_review(
    store: EventStore,
    admin: Identity,
    review_id: str,
    status: ReviewStatus,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Review:
    """Approve or reject a pending review."""
    status = ReviewStatus(status)
    if status == ReviewStatus.PENDING:
        raise ValueError("A review can only be moderated to approved or rejected")

    now = _now()
    review = store.update_record(
        "reviews",
        review_id,
        {
            "status": status.value,
            "moderated_by": admin.user_id,
            "moderated_at": now,
            "updated_at": now,
        },
    )
    if review is None:
        raise NotFoundError("reviews", review_id)

    action = "approve_review" if status == ReviewStatus.APPROVED else "reject_review"
    log_admin_action(
        store,
        admin,
        AuditLogEntry(
            action=action,
            target_type="review",
            target_id=review_id,
            ip_address=ip_address,
            user_agent=user_agent,
        ),
    )
    logger.info(f"Review {status.value}", extra={"entity_id": review_id, "user_id": admin.user_id})
    return review
