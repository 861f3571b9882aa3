"""Artisan Connect — Engagement Engine.

Artisan performance ranking, buyer engagement and the contact → review
funnel. All figures are computed from raw event rows.
"""

from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlmodel import Session, select

from artisan_connect.models.artisan_models import ArtisanProfile, ArtisanStatus, Review
from artisan_connect.models.event_models import (
    AuthModalEvent,
    ContactEvent,
    ModalEventType,
)
from artisan_connect.models.analysis_models import (
    ArtisanPerformanceMetrics,
    EngagementFunnel,
    UserEngagementMetrics,
)
from artisan_connect.analyzer.trend_engine import parse_timestamp
from artisan_connect.core.logging import get_logger

logger = get_logger("analyzer.engagement")

# Weights for the performance score; rating is 0-5, doubled to 0-10
PERFORMANCE_WEIGHTS = {
    "conversions": 0.4,
    "contacts": 0.3,
    "reviews": 0.2,
    "rating": 0.1,
}


def performance_score(
    conversions: int, total_contacts: int, total_reviews: int, rating: float
) -> float:
    score = (
        conversions * PERFORMANCE_WEIGHTS["conversions"]
        + total_contacts * PERFORMANCE_WEIGHTS["contacts"]
        + total_reviews * PERFORMANCE_WEIGHTS["reviews"]
        + rating * 2 * PERFORMANCE_WEIGHTS["rating"]
    )
    return round(score, 2)


def compute_artisan_performance(session: Session) -> List[ArtisanPerformanceMetrics]:
    """Active artisans ranked by performance score, best first."""
    artisans = session.exec(
        select(ArtisanProfile).where(ArtisanProfile.status == ArtisanStatus.ACTIVE.value)
    ).all()
    if not artisans:
        return []

    conversions = Counter(
        artisan_id
        for artisan_id in session.exec(
            select(AuthModalEvent.artisan_id).where(
                AuthModalEvent.event_type == ModalEventType.CONVERTED.value
            )
        ).all()
        if artisan_id
    )

    metrics = [
        ArtisanPerformanceMetrics(
            id=a.id,
            business_name=a.business_name,
            category=a.category,
            profile_image_url=a.profile_image_url,
            conversions=conversions.get(a.id, 0),
            total_contacts=a.total_contacts,
            rating=a.rating,
            total_reviews=a.total_reviews,
            performance_score=performance_score(
                conversions.get(a.id, 0), a.total_contacts, a.total_reviews, a.rating
            ),
        )
        for a in artisans
    ]
    metrics.sort(key=lambda m: m.performance_score, reverse=True)
    logger.info(f"Ranked {len(metrics)} artisans by performance")
    return metrics


def _pct(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole > 0 else 0


def compute_user_engagement(
    session: Session, now: Optional[datetime] = None
) -> UserEngagementMetrics:
    """Repeat-contact rate and activity retention over 1/7/30 days."""
    now = now or datetime.now(timezone.utc)
    contacts = session.exec(
        select(ContactEvent.buyer_id, ContactEvent.created_at).order_by(
            ContactEvent.created_at  # type: ignore
        )
    ).all()
    if not contacts:
        return UserEngagementMetrics()

    per_user = Counter(buyer_id for buyer_id, _ in contacts)
    total_users = len(per_user)
    repeat_users = sum(1 for count in per_user.values() if count > 1)

    active_since: dict[int, set] = defaultdict(set)
    for buyer_id, created_at in contacts:
        ts = parse_timestamp(created_at)
        if ts is None:
            continue
        for days in (1, 7, 30):
            if ts >= now - timedelta(days=days):
                active_since[days].add(buyer_id)

    return UserEngagementMetrics(
        total_users=total_users,
        repeat_contact_rate=_pct(repeat_users, total_users),
        day1_retention=_pct(len(active_since[1]), total_users),
        day7_retention=_pct(len(active_since[7]), total_users),
        day30_retention=_pct(len(active_since[30]), total_users),
    )


def compute_engagement_funnel(session: Session) -> EngagementFunnel:
    """Contacting buyers → reviewing buyers.

    Signup times live with the auth provider, so contacting buyers stand in
    for signups and the contact rate is 100 by construction.
    """
    contact_users = set(session.exec(select(ContactEvent.buyer_id)).all())
    review_users = set(session.exec(select(Review.buyer_id)).all())

    first_contact = len(contact_users)
    return EngagementFunnel(
        signups=first_contact,
        first_contact=first_contact,
        review_submission=len(review_users),
        contact_rate=100 if first_contact else 0,
        review_rate=_pct(len(review_users), first_contact),
    )
