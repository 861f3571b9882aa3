"""Artisan Connect — Admin Export Routes."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlmodel import Session

from artisan_connect.database import get_session
from artisan_connect.core.catalog import is_valid_category
from artisan_connect.core.identity import Identity, require_admin
from artisan_connect.models.analysis_models import MonthlySummary
from artisan_connect.admin.export import (
    ExportFilters,
    build_monthly_summary,
    export_artisans_csv,
    export_audit_logs_csv,
    export_contacts_csv,
    export_filename,
    export_reviews_csv,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("api.export")

router = APIRouter(prefix="/admin", tags=["Reports"])

EXPORTERS = {
    "artisans": export_artisans_csv,
    "reviews": export_reviews_csv,
    "contacts": export_contacts_csv,
    "audit-logs": export_audit_logs_csv,
}


@router.get("/exports/{kind}.csv")
async def export_csv(
    kind: str,
    status: Optional[str] = None,
    category: Optional[str] = None,
    is_verified: Optional[bool] = None,
    estate_zone: Optional[str] = None,
    artisan_id: Optional[str] = None,
    contact_type: Optional[str] = None,
    admin_user_id: Optional[str] = None,
    action_type: Optional[str] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """Download a filtered CSV export."""
    exporter = EXPORTERS.get(kind)
    if exporter is None:
        raise HTTPException(status_code=404, detail=f"Unknown export: {kind}")
    if category and not is_valid_category(category):
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")

    filters = ExportFilters(
        status=status,
        category=category,
        is_verified=is_verified,
        estate_zone=estate_zone,
        artisan_id=artisan_id,
        contact_type=contact_type,
        admin_user_id=admin_user_id,
        action_type=action_type,
        start_date=start_date,
        end_date=end_date,
    )
    try:
        content, count = exporter(session, filters)
    except Exception as e:
        logger.error(f"Export {kind} failed: {e}")
        raise HTTPException(status_code=500, detail=f"Export failed: {str(e)}")

    filename = export_filename(kind.replace("-", "_"))
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Row-Count": str(count),
        },
    )


@router.get("/reports/monthly", response_model=MonthlySummary)
async def monthly_report(
    year: int = Query(..., ge=2000, le=2100),
    month: int = Query(..., ge=1, le=12),
    admin: Identity = Depends(require_admin),
    session: Session = Depends(get_session),
):
    return build_monthly_summary(session, year, month)
