"""Artisan Connect — Admin Analytics & Moderation Routes."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel
from sqlmodel import Session

from artisan_connect.api.deps import get_store
from artisan_connect.database import get_session
from artisan_connect.core.identity import Identity, require_admin
from artisan_connect.core.store import EventStore, StoreError
from artisan_connect.models.artisan_models import ReviewStatus, VerificationMethod
from artisan_connect.models.analysis_models import (
    DashboardOutput,
    DashboardTrends,
    EngagementFunnel,
    UserEngagementMetrics,
)
from artisan_connect.analyzer.dashboard import build_dashboard, load_trend_inputs
from artisan_connect.analyzer.trend_engine import calculate_dashboard_trends
from artisan_connect.analyzer.engagement_engine import (
    compute_artisan_performance,
    compute_engagement_funnel,
    compute_user_engagement,
)
from artisan_connect.admin.audit import (
    AuditLogFilters,
    AuditLogPage,
    AuditLogRead,
    get_recent_activity,
    get_relative_time,
    search_audit_logs,
)
from artisan_connect.admin.moderation import (
    NotFoundError,
    approve_artisan,
    moderate_review,
    reject_artisan,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("api.admin")

router = APIRouter(prefix="/admin", tags=["Admin"])


class ApproveArtisanRequest(BaseModel):
    method: VerificationMethod


def _client_meta(request: Request) -> dict:
    return {
        "ip_address": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


# ── Analytics ──


@router.get("/dashboard", response_model=DashboardOutput)
async def dashboard(
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Stats, trends, chart series and moderation queues in one payload."""
    try:
        return build_dashboard(session)
    except Exception as e:
        logger.error(f"Dashboard failed: {e}")
        raise HTTPException(status_code=500, detail=f"Dashboard failed: {str(e)}")


@router.get("/trends", response_model=DashboardTrends)
async def trends(
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Last 30 days vs the 30 days before, per metric."""
    artisans, reviews, contacts = load_trend_inputs(session)
    return calculate_dashboard_trends(artisans, reviews, contacts)


@router.get("/analytics/performance")
async def artisan_performance(
    limit: int = Query(50, ge=1, le=500),
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    metrics = compute_artisan_performance(session)
    return {"status": "success", "count": len(metrics), "artisans": metrics[:limit]}


@router.get("/analytics/engagement", response_model=UserEngagementMetrics)
async def user_engagement(
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return compute_user_engagement(session)


@router.get("/analytics/funnel", response_model=EngagementFunnel)
async def engagement_funnel(
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return compute_engagement_funnel(session)


# ── Audit Trail ──


@router.get("/activity")
async def activity_feed(
    limit: int = Query(20, ge=1, le=100),
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Most recent admin actions, newest first."""
    rows = get_recent_activity(session, limit)
    return {
        "status": "success",
        "count": len(rows),
        "activity": [
            {
                **AuditLogRead.from_row(r).model_dump(mode="json"),
                "relative_time": get_relative_time(r.created_at),
            }
            for r in rows
        ],
    }


@router.get("/audit-logs", response_model=AuditLogPage)
async def audit_logs(
    admin_user_id: Optional[str] = None,
    action_type: Optional[str] = None,
    target_type: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=200),
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    filters = AuditLogFilters(
        admin_user_id=admin_user_id,
        action_type=action_type,
        target_type=target_type,
        start_date=start_date,
        end_date=end_date,
        page=page,
        page_size=page_size,
    )
    return search_audit_logs(session, filters)


# ── Moderation ──


@router.post("/artisans/{artisan_id}/approve")
async def approve(
    artisan_id: str,
    body: ApproveArtisanRequest,
    request: Request,
    admin: Identity = Depends(require_admin),
    store: EventStore = Depends(get_store),
):
    try:
        artisan = approve_artisan(store, admin, artisan_id, body.method, **_client_meta(request))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Approval failed: {str(e)}")
    return {"status": "success", "artisan_id": artisan.id, "artisan_status": artisan.status}


@router.post("/artisans/{artisan_id}/reject")
async def reject(
    artisan_id: str,
    request: Request,
    admin: Identity = Depends(require_admin),
    store: EventStore = Depends(get_store),
):
    try:
        artisan = reject_artisan(store, admin, artisan_id, **_client_meta(request))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Rejection failed: {str(e)}")
    return {"status": "success", "artisan_id": artisan.id, "artisan_status": artisan.status}


@router.post("/reviews/{review_id}/{decision}")
async def moderate(
    review_id: str,
    decision: str,
    request: Request,
    admin: Identity = Depends(require_admin),
    store: EventStore = Depends(get_store),
):
    """decision: approve | reject"""
    statuses = {"approve": ReviewStatus.APPROVED, "reject": ReviewStatus.REJECTED}
    if decision not in statuses:
        raise HTTPException(status_code=404, detail=f"Unknown decision: {decision}")
    try:
        review = moderate_review(store, admin, review_id, statuses[decision], **_client_meta(request))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"Moderation failed: {str(e)}")
    return {"status": "success", "review_id": review.id, "review_status": review.status}
