"""Artisan Connect — Trend Engine.

Compares the current window against the window before it for dashboard
metrics. Produces a rounded percentage magnitude plus a direction flag.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from artisan_connect.config import settings
from artisan_connect.models.analysis_models import DashboardTrends, TrendResult
from artisan_connect.core.logging import get_logger

logger = get_logger("analyzer.trend")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Coerce a datetime or ISO-8601 string to an aware UTC datetime.

    Naive values are taken to be UTC (SQLite drops tzinfo on the way back).
    """
    if value is None:
        return None
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    if not isinstance(value, datetime):
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _created_at(record: Any) -> Optional[datetime]:
    if isinstance(record, dict):
        return parse_timestamp(record.get("created_at"))
    return parse_timestamp(getattr(record, "created_at", None))


def compute_windows(
    now: datetime, window_days: int
) -> tuple[datetime, datetime]:
    """Return (current_start, previous_start).

    current window:  [current_start, now]
    previous window: [previous_start, current_start)
    """
    current_start = now - timedelta(days=window_days)
    previous_start = now - timedelta(days=2 * window_days)
    return current_start, previous_start


def count_windows(
    records: Optional[Iterable[Any]],
    now: datetime,
    window_days: Optional[int] = None,
) -> tuple[int, int]:
    """Count records in (current, previous) windows. Older rows are ignored."""
    window_days = window_days or settings.trend_window_days
    current_start, previous_start = compute_windows(now, window_days)

    current = 0
    previous = 0
    for record in records or ():
        ts = _created_at(record)
        if ts is None:
            continue
        if current_start <= ts <= now:
            current += 1
        elif previous_start <= ts < current_start:
            previous += 1
    return current, previous


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def calculate_trend(current: int, previous: int) -> TrendResult:
    """Percentage change from previous to current.

    Zero baseline has no defined percentage: any activity reports as
    100% up, no activity as no change.
    """
    if previous == 0:
        return TrendResult(value=100 if current > 0 else 0, is_positive=True)

    change = (current - previous) / previous * 100
    return TrendResult(
        value=_round_half_up(abs(change)),
        is_positive=change >= 0,
    )


def calculate_dashboard_trends(
    artisans: Optional[Iterable[Any]],
    reviews: Optional[Iterable[Any]],
    contacts: Optional[Iterable[Any]],
    now: Optional[datetime] = None,
    window_days: Optional[int] = None,
) -> DashboardTrends:
    """Trend map for new artisans, new reviews and new contacts."""
    now = parse_timestamp(now) or _utc_now()

    counts = {
        "artisans": count_windows(artisans, now, window_days),
        "reviews": count_windows(reviews, now, window_days),
        "contacts": count_windows(contacts, now, window_days),
    }
    trends = {name: calculate_trend(*pair) for name, pair in counts.items()}

    logger.debug(f"Dashboard trend counts (current, previous): {counts}")
    return DashboardTrends(**trends)
