"""Artisan Connect — Admin Audit Trail Model."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field


class AdminAuditLog(SQLModel, table=True):
    """Immutable record of an admin action.

    Append-only; rows are never modified.
    """

    __tablename__ = "admin_audit_logs"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    admin_user_id: str = Field(index=True)
    action_type: str = Field(index=True, description="e.g. approve_artisan")
    target_type: Optional[str] = Field(default=None, index=True)
    target_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), index=True
    )
