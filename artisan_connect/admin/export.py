"""Artisan Connect — Admin Exports.

CSV exports for artisans, reviews, contacts and the audit trail, plus the
monthly summary report.
"""

import csv
import io
import json
from collections import Counter
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel
from sqlmodel import Session, select

from artisan_connect.models.artisan_models import ArtisanProfile, Review, ReviewStatus
from artisan_connect.models.audit_models import AdminAuditLog
from artisan_connect.models.event_models import ContactEvent
from artisan_connect.models.analysis_models import CategoryCount, MonthlySummary
from artisan_connect.core.logging import get_logger

logger = get_logger("admin.export")


class ExportFilters(BaseModel):
    status: Optional[str] = None
    category: Optional[str] = None
    is_verified: Optional[bool] = None
    estate_zone: Optional[str] = None
    artisan_id: Optional[str] = None
    contact_type: Optional[str] = None
    admin_user_id: Optional[str] = None
    action_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


ARTISAN_COLUMNS = [
    "Business Name", "Artisan Name", "Phone", "WhatsApp", "Category",
    "Experience (Years)", "Estate/Zone", "City", "State", "Rating",
    "Total Reviews", "Total Contacts", "Status", "Verified",
    "Verification Method", "Created At",
]
REVIEW_COLUMNS = [
    "Artisan", "Rating", "Comment", "Verified Hire", "Status",
    "Created At", "Moderated At",
]
CONTACT_COLUMNS = [
    "Artisan", "Contact Type", "Contacted At", "Review Submitted",
    "Review Requested At",
]
AUDIT_COLUMNS = [
    "Admin User ID", "Action", "Target Type", "Target ID", "Details",
    "IP Address", "Created At",
]


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def _datetime(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else ""


def to_csv(columns: List[str], rows: Iterable[Dict[str, Any]]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=columns, quoting=csv.QUOTE_MINIMAL)
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return buf.getvalue()


def export_filename(kind: str, today: Optional[datetime] = None) -> str:
    today = today or datetime.now(timezone.utc)
    return f"{kind}_export_{today.date().isoformat()}.csv"


def _business_names(session: Session, artisan_ids: Iterable[str]) -> Dict[str, str]:
    ids = set(artisan_ids)
    if not ids:
        return {}
    rows = session.exec(
        select(ArtisanProfile.id, ArtisanProfile.business_name).where(
            ArtisanProfile.id.in_(ids)  # type: ignore
        )
    ).all()
    return dict(rows)


# ── CSV Exports ──


def export_artisans_csv(session: Session, filters: ExportFilters) -> tuple[str, int]:
    query = select(ArtisanProfile)
    if filters.status:
        query = query.where(ArtisanProfile.status == filters.status)
    if filters.category:
        query = query.where(ArtisanProfile.category == filters.category)
    if filters.is_verified is not None:
        query = query.where(ArtisanProfile.is_verified == filters.is_verified)
    if filters.estate_zone:
        query = query.where(ArtisanProfile.estate_zone == filters.estate_zone)
    artisans = session.exec(query.order_by(ArtisanProfile.created_at.desc())).all()  # type: ignore

    rows = [
        {
            "Business Name": a.business_name,
            "Artisan Name": a.artisan_name,
            "Phone": a.phone_number,
            "WhatsApp": a.whatsapp_number or "",
            "Category": a.category,
            "Experience (Years)": a.experience_years,
            "Estate/Zone": a.estate_zone,
            "City": a.city,
            "State": a.state,
            "Rating": a.rating,
            "Total Reviews": a.total_reviews,
            "Total Contacts": a.total_contacts,
            "Status": a.status,
            "Verified": _yes_no(a.is_verified),
            "Verification Method": a.verification_method or "",
            "Created At": _date(a.created_at),
        }
        for a in artisans
    ]
    logger.info(f"Exported {len(rows)} artisans")
    return to_csv(ARTISAN_COLUMNS, rows), len(rows)


def export_reviews_csv(session: Session, filters: ExportFilters) -> tuple[str, int]:
    query = select(Review)
    if filters.status:
        query = query.where(Review.status == filters.status)
    if filters.artisan_id:
        query = query.where(Review.artisan_id == filters.artisan_id)
    if filters.start_date:
        query = query.where(Review.created_at >= filters.start_date)
    if filters.end_date:
        query = query.where(Review.created_at <= filters.end_date)
    reviews = session.exec(query.order_by(Review.created_at.desc())).all()  # type: ignore
    names = _business_names(session, (r.artisan_id for r in reviews))

    rows = [
        {
            "Artisan": names.get(r.artisan_id, "Unknown"),
            "Rating": r.rating,
            "Comment": r.comment,
            "Verified Hire": _yes_no(r.is_verified_hire),
            "Status": r.status,
            "Created At": _date(r.created_at),
            "Moderated At": _date(r.moderated_at),
        }
        for r in reviews
    ]
    logger.info(f"Exported {len(rows)} reviews")
    return to_csv(REVIEW_COLUMNS, rows), len(rows)


def export_contacts_csv(session: Session, filters: ExportFilters) -> tuple[str, int]:
    query = select(ContactEvent)
    if filters.artisan_id:
        query = query.where(ContactEvent.artisan_id == filters.artisan_id)
    if filters.contact_type:
        query = query.where(ContactEvent.contact_type == filters.contact_type)
    if filters.start_date:
        query = query.where(ContactEvent.contacted_at >= filters.start_date)
    if filters.end_date:
        query = query.where(ContactEvent.contacted_at <= filters.end_date)
    contacts = session.exec(query.order_by(ContactEvent.contacted_at.desc())).all()  # type: ignore
    names = _business_names(session, (c.artisan_id for c in contacts))

    rows = [
        {
            "Artisan": names.get(c.artisan_id, "Unknown"),
            "Contact Type": c.contact_type,
            "Contacted At": _datetime(c.contacted_at),
            "Review Submitted": _yes_no(c.review_submitted),
            "Review Requested At": _datetime(c.review_requested_at),
        }
        for c in contacts
    ]
    logger.info(f"Exported {len(rows)} contact events")
    return to_csv(CONTACT_COLUMNS, rows), len(rows)


def export_audit_logs_csv(session: Session, filters: ExportFilters) -> tuple[str, int]:
    query = select(AdminAuditLog)
    if filters.admin_user_id:
        query = query.where(AdminAuditLog.admin_user_id == filters.admin_user_id)
    if filters.action_type:
        query = query.where(AdminAuditLog.action_type == filters.action_type)
    if filters.start_date:
        query = query.where(AdminAuditLog.created_at >= filters.start_date)
    if filters.end_date:
        query = query.where(AdminAuditLog.created_at <= filters.end_date)
    logs = session.exec(query.order_by(AdminAuditLog.created_at.desc())).all()  # type: ignore

    rows = [
        {
            "Admin User ID": log.admin_user_id,
            "Action": log.action_type,
            "Target Type": log.target_type or "",
            "Target ID": log.target_id or "",
            "Details": json.dumps(log.details or {}),
            "IP Address": log.ip_address or "",
            "Created At": _datetime(log.created_at),
        }
        for log in logs
    ]
    logger.info(f"Exported {len(rows)} audit log entries")
    return to_csv(AUDIT_COLUMNS, rows), len(rows)


# ── Monthly Summary ──


def _month_range(year: int, month: int) -> tuple[datetime, datetime]:
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    if month == 12:
        end = datetime(year + 1, 1, 1, tzinfo=timezone.utc)
    else:
        end = datetime(year, month + 1, 1, tzinfo=timezone.utc)
    return start, end


def build_monthly_summary(session: Session, year: int, month: int) -> MonthlySummary:
    """New artisans, approved reviews and contacts within [month start, next month start)."""
    start, end = _month_range(year, month)

    artisans = session.exec(
        select(ArtisanProfile).where(
            ArtisanProfile.created_at >= start, ArtisanProfile.created_at < end
        )
    ).all()
    reviews = session.exec(
        select(Review).where(
            Review.status == ReviewStatus.APPROVED.value,
            Review.created_at >= start,
            Review.created_at < end,
        )
    ).all()
    contacts = session.exec(
        select(ContactEvent).where(
            ContactEvent.contacted_at >= start, ContactEvent.contacted_at < end
        )
    ).all()

    avg_rating = (
        f"{sum(r.rating for r in reviews) / len(reviews):.2f}" if reviews else "0.00"
    )
    categories = Counter(a.category for a in artisans)

    return MonthlySummary(
        period_start=start.date().isoformat(),
        period_end=end.date().isoformat(),
        new_artisans=len(artisans),
        new_reviews=len(reviews),
        contact_events=len(contacts),
        avg_rating=avg_rating,
        categories=[CategoryCount(category=k, count=v) for k, v in categories.items()],
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
