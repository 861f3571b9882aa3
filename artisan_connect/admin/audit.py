"""Artisan Connect — Admin Audit Trail.

Writing to the audit log never fails the admin action it describes.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import func
from sqlmodel import Session, select

from artisan_connect.core.identity import Identity
from artisan_connect.core.store import EventStore, StoreError
from artisan_connect.models.audit_models import AdminAuditLog
from artisan_connect.analyzer.trend_engine import parse_timestamp
from artisan_connect.core.logging import get_logger

logger = get_logger("admin.audit")

AUDIT_TABLE = "admin_audit_logs"

ACTION_LABELS = {
    "approve_artisan": "approved artisan",
    "reject_artisan": "rejected artisan",
    "suspend_artisan": "suspended artisan",
    "activate_artisan": "activated artisan",
    "edit_artisan": "edited artisan",
    "create_artisan": "manually onboarded artisan",
    "approve_review": "approved review",
    "reject_review": "rejected review",
    "delete_review": "deleted review",
    "feature_artisan": "featured artisan",
    "unfeature_artisan": "removed featured artisan",
}


class AuditLogEntry(BaseModel):
    action: str
    target_type: Optional[str] = None
    target_id: Optional[str] = None
    details: Dict[str, Any] = {}
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class AuditLogFilters(BaseModel):
    admin_user_id: Optional[str] = None
    action_type: Optional[str] = None
    target_type: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    page: int = 1
    page_size: int = 50


class AuditLogRead(BaseModel):
    """Audit row as returned by the API, with a display label."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    admin_user_id: str
    action_type: str
    target_type: Optional[str] = None
    target_id: Optional[str] = None
    details: Dict[str, Any] = {}
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime
    description: str = ""

    @classmethod
    def from_row(cls, row: AdminAuditLog) -> "AuditLogRead":
        item = cls.model_validate(row)
        item.description = format_audit_action(row.action_type)
        return item


class AuditLogPage(BaseModel):
    data: List[AuditLogRead]
    count: int
    page: int
    page_size: int
    total_pages: int


def log_admin_action(
    store: EventStore, identity: Optional[Identity], entry: AuditLogEntry
) -> bool:
    """Append an audit row for the acting admin. Returns whether it was written."""
    if identity is None:
        logger.error("Cannot log action: no authenticated user")
        return False
    try:
        store.insert_record(
            AUDIT_TABLE,
            {
                "admin_user_id": identity.user_id,
                "action_type": entry.action,
                "target_type": entry.target_type,
                "target_id": entry.target_id,
                "details": entry.details or {},
                "ip_address": entry.ip_address,
                "user_agent": entry.user_agent,
            },
        )
    except StoreError as e:
        logger.error(f"Failed to log admin action: {e}", extra={"user_id": identity.user_id})
        return False
    return True


def get_recent_activity(session: Session, limit: int = 20) -> List[AdminAuditLog]:
    return list(
        session.exec(
            select(AdminAuditLog)
            .order_by(AdminAuditLog.created_at.desc())  # type: ignore
            .limit(limit)
        ).all()
    )


def _apply_filters(query, filters: AuditLogFilters):
    if filters.admin_user_id:
        query = query.where(AdminAuditLog.admin_user_id == filters.admin_user_id)
    if filters.action_type:
        query = query.where(AdminAuditLog.action_type == filters.action_type)
    if filters.target_type:
        query = query.where(AdminAuditLog.target_type == filters.target_type)
    if filters.start_date:
        query = query.where(AdminAuditLog.created_at >= filters.start_date)
    if filters.end_date:
        query = query.where(AdminAuditLog.created_at <= filters.end_date)
    return query


def search_audit_logs(session: Session, filters: AuditLogFilters) -> AuditLogPage:
    """Filtered, newest-first, paginated audit search."""
    page = max(filters.page, 1)
    page_size = max(filters.page_size, 1)

    count = session.exec(
        _apply_filters(select(func.count()).select_from(AdminAuditLog), filters)
    ).one()
    rows = session.exec(
        _apply_filters(select(AdminAuditLog), filters)
        .order_by(AdminAuditLog.created_at.desc())  # type: ignore
        .offset((page - 1) * page_size)
        .limit(page_size)
    ).all()

    return AuditLogPage(
        data=[AuditLogRead.from_row(r) for r in rows],
        count=count,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(count / page_size),
    )


def format_audit_action(action_type: str) -> str:
    label = ACTION_LABELS.get(action_type, action_type.replace("_", " "))
    return f"Admin {label}"


def get_relative_time(timestamp, now: Optional[datetime] = None) -> str:
    """'just now', '5 minutes ago', '2 days ago'; a date beyond a week."""
    then = parse_timestamp(timestamp)
    if then is None:
        return ""
    now = now or datetime.now(timezone.utc)
    secs = int((now - then).total_seconds())
    mins = secs // 60
    hours = mins // 60
    days = hours // 24

    if secs < 60:
        return "just now"
    if mins < 60:
        return f"{mins} minute{'s' if mins > 1 else ''} ago"
    if hours < 24:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if days < 7:
        return f"{days} day{'s' if days > 1 else ''} ago"
    return then.date().isoformat()
