"""Artisan Connect — Admin Dashboard Builder.

Runs the full dashboard data flow:
  load rows → stats → trends → daily chart series → modal conversion → DashboardOutput
"""

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from sqlmodel import Session, select

from artisan_connect.config import settings
from artisan_connect.models.artisan_models import (
    ArtisanProfile,
    ArtisanStatus,
    Review,
    ReviewStatus,
)
from artisan_connect.models.event_models import (
    AuthModalEvent,
    ContactEvent,
    ModalEventType,
)
from artisan_connect.models.analysis_models import (
    ChartData,
    ChartPoint,
    DashboardOutput,
    DashboardStats,
    ModalChartPoint,
    ModalStats,
    TopArtisan,
)
from artisan_connect.analyzer.trend_engine import (
    calculate_dashboard_trends,
    parse_timestamp,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("analyzer.dashboard")


def last_n_days(now: datetime, days: int) -> List[str]:
    """YYYY-MM-DD strings for the last `days` days, oldest first, ending today."""
    today = now.date()
    return [(today - timedelta(days=days - 1 - i)).isoformat() for i in range(days)]


def _day(value) -> str:
    ts = parse_timestamp(value)
    return ts.date().isoformat() if ts else ""


def daily_series(records: Iterable, days: List[str]) -> List[ChartPoint]:
    """Count records per day for each day in `days`."""
    per_day = Counter(_day(r.created_at) for r in records)
    return [ChartPoint(name=d, value=per_day.get(d, 0)) for d in days]


def _modal_stats(
    events: List[AuthModalEvent], days: List[str]
) -> tuple[ModalStats, List[ModalChartPoint]]:
    shown = sum(1 for e in events if e.event_type == ModalEventType.SHOWN.value)
    converted = sum(1 for e in events if e.event_type == ModalEventType.CONVERTED.value)
    rate = round(converted / shown * 100) if shown > 0 else 0

    per_day: dict[tuple[str, str], int] = Counter(
        (_day(e.created_at), e.event_type) for e in events
    )
    chart = [
        ModalChartPoint(
            date=d,
            shown=per_day.get((d, ModalEventType.SHOWN.value), 0),
            converted=per_day.get((d, ModalEventType.CONVERTED.value), 0),
            dismissed=per_day.get((d, ModalEventType.DISMISSED.value), 0),
        )
        for d in days
    ]
    return (
        ModalStats(conversion_rate=rate, total_shown=shown, total_converted=converted),
        chart,
    )


def build_dashboard(session: Session, now: Optional[datetime] = None) -> DashboardOutput:
    """Assemble the admin dashboard payload."""
    now = now or datetime.now(timezone.utc)

    # ── Step 1: Pending moderation queues ──
    pending_artisans = session.exec(
        select(ArtisanProfile)
        .where(ArtisanProfile.status == ArtisanStatus.PENDING.value)
        .order_by(ArtisanProfile.created_at.desc())  # type: ignore
    ).all()
    pending_reviews = session.exec(
        select(Review)
        .where(Review.status == ReviewStatus.PENDING.value)
        .order_by(Review.created_at.desc())  # type: ignore
    ).all()

    # ── Step 2: Active catalogue and activity ──
    artisans = session.exec(
        select(ArtisanProfile).where(ArtisanProfile.status == ArtisanStatus.ACTIVE.value)
    ).all()
    reviews = session.exec(
        select(Review).where(Review.status == ReviewStatus.APPROVED.value)
    ).all()
    contacts = session.exec(select(ContactEvent)).all()
    modal_events = session.exec(select(AuthModalEvent)).all()

    # ── Step 3: Stats ──
    avg_rating = sum(r.rating for r in reviews) / len(reviews) if reviews else 0
    stats = DashboardStats(
        total_artisans=len(artisans),
        pending_approvals=len(pending_artisans),
        total_reviews=len(reviews),
        total_contacts=len(contacts),
        avg_rating=round(avg_rating, 1),
    )

    # ── Step 4: Trends ──
    trends = calculate_dashboard_trends(artisans, reviews, contacts, now=now)

    # ── Step 5: Chart series ──
    days = last_n_days(now, settings.chart_days)
    category_counts = Counter(a.category for a in artisans)
    chart_data = ChartData(
        growth=daily_series(artisans, days),
        reviews=daily_series(reviews, days),
        contacts=daily_series(contacts, days),
        categories=[ChartPoint(name=k, value=v) for k, v in category_counts.items()],
    )

    top = sorted(artisans, key=lambda a: a.rating, reverse=True)[: settings.top_artisans_limit]
    top_artisans = [
        TopArtisan(
            id=a.id,
            business_name=a.business_name,
            category=a.category,
            rating=a.rating,
            profile_image_url=a.profile_image_url,
        )
        for a in top
    ]

    # ── Step 6: Auth modal conversion ──
    modal_stats, modal_chart = _modal_stats(list(modal_events), days)

    logger.info(
        f"Dashboard built: {stats.total_artisans} artisans, "
        f"{stats.total_reviews} reviews, {stats.total_contacts} contacts"
    )
    return DashboardOutput(
        generated_at=now.isoformat(),
        stats=stats,
        trends=trends,
        chart_data=chart_data,
        top_artisans=top_artisans,
        modal_stats=modal_stats,
        modal_chart_data=modal_chart,
        pending_artisan_ids=[a.id for a in pending_artisans],
        pending_review_ids=[r.id for r in pending_reviews],
    )


def load_trend_inputs(session: Session) -> tuple[list, list, list]:
    """Rows feeding the trend map: active artisans, approved reviews, all contacts."""
    artisans = session.exec(
        select(ArtisanProfile.created_at).where(
            ArtisanProfile.status == ArtisanStatus.ACTIVE.value
        )
    ).all()
    reviews = session.exec(
        select(Review.created_at).where(Review.status == ReviewStatus.APPROVED.value)
    ).all()
    contacts = session.exec(select(ContactEvent.created_at)).all()
    return (
        [{"created_at": ts} for ts in artisans],
        [{"created_at": ts} for ts in reviews],
        [{"created_at": ts} for ts in contacts],
    )
