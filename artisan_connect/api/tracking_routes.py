"""Artisan Connect — Tracking Routes.

Telemetry endpoints always answer 202: a failed write is logged server-side
and never blocks the call/WhatsApp/login action the client is performing.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from artisan_connect.api.deps import get_store
from artisan_connect.core.identity import Identity, get_identity
from artisan_connect.core.session_context import (
    SESSION_COOKIE_NAME,
    SessionContext,
    get_session_context,
)
from artisan_connect.core.store import EventStore
from artisan_connect.models.artisan_models import ArtisanProfile
from artisan_connect.models.event_models import ContactType, ConversionAction
from artisan_connect.tracking.contact_tracking import (
    generate_call_link,
    generate_whatsapp_link,
    track_contact_event,
)
from artisan_connect.tracking.modal_tracking import (
    track_modal_converted,
    track_modal_dismissed,
    track_modal_shown,
)
from artisan_connect.core.logging import get_logger

logger = get_logger("api.tracking")

router = APIRouter(prefix="/tracking", tags=["Tracking"])


# ── Request Models ──


class ContactEventRequest(BaseModel):
    artisan_id: str
    contact_type: ContactType


class ModalEventRequest(BaseModel):
    artisan_id: Optional[str] = None


class ModalConversionRequest(ModalEventRequest):
    action: ConversionAction


def _contact_link(session: Session, artisan_id: str, contact_type: ContactType) -> Optional[str]:
    try:
        artisan = session.get(ArtisanProfile, artisan_id)
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Contact link lookup failed: {e}", extra={"entity_id": artisan_id})
        return None
    if artisan is None:
        return None
    if contact_type == ContactType.WHATSAPP:
        number = artisan.whatsapp_number or artisan.phone_number
        return generate_whatsapp_link(number, artisan.artisan_name or artisan.business_name)
    return generate_call_link(artisan.phone_number)


def _keep_session(response: Response, session_ctx: SessionContext) -> None:
    if session_ctx.generated:
        response.set_cookie(SESSION_COOKIE_NAME, session_ctx.session_id, httponly=True, samesite="lax")


# ── Endpoints ──


@router.post("/contact", status_code=202)
async def contact(
    request: ContactEventRequest,
    identity: Optional[Identity] = Depends(get_identity),
    store: EventStore = Depends(get_store),
):
    """Record a call/WhatsApp contact and hand back the link to open."""
    recorded = track_contact_event(store, identity, request.artisan_id, request.contact_type)
    return {
        "status": "accepted",
        "recorded": recorded,
        "link": _contact_link(store.session, request.artisan_id, request.contact_type),
    }


@router.post("/modal/shown", status_code=202)
async def modal_shown(
    request: ModalEventRequest,
    response: Response,
    session_ctx: SessionContext = Depends(get_session_context),
    store: EventStore = Depends(get_store),
):
    recorded = track_modal_shown(store, session_ctx, request.artisan_id)
    _keep_session(response, session_ctx)
    return {"status": "accepted", "recorded": recorded}


@router.post("/modal/converted", status_code=202)
async def modal_converted(
    request: ModalConversionRequest,
    response: Response,
    identity: Optional[Identity] = Depends(get_identity),
    session_ctx: SessionContext = Depends(get_session_context),
    store: EventStore = Depends(get_store),
):
    recorded = track_modal_converted(
        store, session_ctx, request.action, request.artisan_id, identity
    )
    _keep_session(response, session_ctx)
    return {"status": "accepted", "recorded": recorded}


@router.post("/modal/dismissed", status_code=202)
async def modal_dismissed(
    request: ModalEventRequest,
    response: Response,
    session_ctx: SessionContext = Depends(get_session_context),
    store: EventStore = Depends(get_store),
):
    recorded = track_modal_dismissed(store, session_ctx, request.artisan_id)
    _keep_session(response, session_ctx)
    return {"status": "accepted", "recorded": recorded}
