"""Artisan Connect — Analytics Output Models.

Derived values only: nothing here is persisted, everything is recomputed
from raw rows on each request.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


# ─────────────────────────────────────────────
# TRENDS
# ─────────────────────────────────────────────


class TrendResult(BaseModel):
    """Signed percentage change between two windows."""

    model_config = ConfigDict(populate_by_name=True)

    value: int = Field(ge=0, description="Rounded percentage magnitude")
    is_positive: bool = Field(alias="isPositive")


class DashboardTrends(BaseModel):
    """Per-metric trend map: last window vs the window before it."""

    artisans: TrendResult
    reviews: TrendResult
    contacts: TrendResult


# ─────────────────────────────────────────────
# DASHBOARD
# ─────────────────────────────────────────────


class DashboardStats(BaseModel):
    total_artisans: int = 0
    pending_approvals: int = 0
    total_reviews: int = 0
    total_contacts: int = 0
    avg_rating: float = 0.0


class ChartPoint(BaseModel):
    """One day (or category) in a chart series."""

    name: str
    value: int = 0


class ChartData(BaseModel):
    growth: List[ChartPoint] = []
    reviews: List[ChartPoint] = []
    contacts: List[ChartPoint] = []
    categories: List[ChartPoint] = []


class ModalStats(BaseModel):
    conversion_rate: int = 0
    total_shown: int = 0
    total_converted: int = 0


class ModalChartPoint(BaseModel):
    date: str
    shown: int = 0
    converted: int = 0
    dismissed: int = 0


class TopArtisan(BaseModel):
    id: str
    business_name: str
    category: str
    rating: float = 0.0
    profile_image_url: Optional[str] = None


class DashboardOutput(BaseModel):
    """Everything the admin dashboard renders in one payload."""

    generated_at: str = ""
    stats: DashboardStats = DashboardStats()
    trends: DashboardTrends
    chart_data: ChartData = ChartData()
    top_artisans: List[TopArtisan] = []
    modal_stats: ModalStats = ModalStats()
    modal_chart_data: List[ModalChartPoint] = []
    pending_artisan_ids: List[str] = []
    pending_review_ids: List[str] = []


# ─────────────────────────────────────────────
# ANALYTICS QUERIES
# ─────────────────────────────────────────────


class ArtisanPerformanceMetrics(BaseModel):
    id: str
    business_name: str
    category: str
    profile_image_url: Optional[str] = None
    conversions: int = 0
    total_contacts: int = 0
    rating: float = 0.0
    total_reviews: int = 0
    performance_score: float = 0.0


class UserEngagementMetrics(BaseModel):
    """Engagement derived from contact activity.

    Time-to-first-contact needs signup times held by the auth provider,
    so those two fields stay at 0.
    """

    total_users: int = 0
    avg_time_to_first_contact: float = 0
    median_time_to_first_contact: float = 0
    repeat_contact_rate: int = 0
    day1_retention: int = 0
    day7_retention: int = 0
    day30_retention: int = 0


class EngagementFunnel(BaseModel):
    signups: int = 0
    first_contact: int = 0
    review_submission: int = 0
    contact_rate: int = 0
    review_rate: int = 0


class CategoryCount(BaseModel):
    category: str
    count: int


class MonthlySummary(BaseModel):
    """Monthly report: counts for artisans created, reviews approved, contacts made."""

    period_start: str
    period_end: str
    new_artisans: int = 0
    new_reviews: int = 0
    contact_events: int = 0
    avg_rating: str = "0.00"
    categories: List[CategoryCount] = []
    generated_at: str = ""
