"""Artisan Connect — Request Identity.

The upstream auth provider terminates sessions and forwards the resolved
user in headers. Identity is resolved once here, at the request boundary,
and passed explicitly into every core operation.

The headers are trusted as-is, so the service must only be reachable
through that proxy. `ADMIN_USER_IDS` additionally pins who may claim the
admin role.
"""

from enum import Enum
from typing import Optional

from fastapi import Depends, Header, HTTPException
from pydantic import BaseModel

from artisan_connect.config import settings
from artisan_connect.core.logging import get_logger

logger = get_logger("identity")


class UserRole(str, Enum):
    BUYER = "buyer"
    ARTISAN = "artisan"
    ADMIN = "admin"


class Identity(BaseModel):
    """The acting user for the current request."""

    user_id: str
    role: UserRole = UserRole.BUYER
    email: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


def get_identity(
    x_user_id: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
    x_user_email: Optional[str] = Header(None),
) -> Optional[Identity]:
    """Dependency: the current identity, or None for anonymous requests."""
    if not x_user_id:
        return None
    try:
        role = UserRole(x_user_role) if x_user_role else UserRole.BUYER
    except ValueError:
        role = UserRole.BUYER
    if (
        role == UserRole.ADMIN
        and settings.admin_user_ids
        and x_user_id not in settings.admin_user_ids
    ):
        logger.warning("Admin role claimed by unlisted user", extra={"user_id": x_user_id})
        role = UserRole.BUYER
    return Identity(user_id=x_user_id, role=role, email=x_user_email)


def require_admin(identity: Optional[Identity] = Depends(get_identity)) -> Identity:
    """Dependency: reject anything that is not an admin."""
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity
