"""Artisan Connect — Auth Modal Tracking.

Impressions, conversions and dismissals of the login/signup prompt, keyed by
the anonymous session id. Fire-and-forget: failures are logged, never raised.
"""

from typing import Optional

from artisan_connect.core.identity import Identity
from artisan_connect.core.session_context import SessionContext
from artisan_connect.core.store import EventStore, StoreError
from artisan_connect.models.event_models import ConversionAction, ModalEventType
from artisan_connect.core.logging import get_logger

logger = get_logger("tracking.modal")

MODAL_TABLE = "auth_modal_events"


def _record(store: EventStore, fields: dict) -> bool:
    try:
        store.insert_record(MODAL_TABLE, fields)
        return True
    except StoreError as e:
        logger.error(
            f"Error tracking {fields.get('event_type')}: {e}",
            extra={"entity_id": fields.get("artisan_id")},
        )
        return False


def track_modal_shown(
    store: EventStore, session_ctx: SessionContext, artisan_id: Optional[str] = None
) -> bool:
    return _record(
        store,
        {
            "event_type": ModalEventType.SHOWN.value,
            "artisan_id": artisan_id or None,
            "session_id": session_ctx.session_id,
        },
    )


def track_modal_converted(
    store: EventStore,
    session_ctx: SessionContext,
    action: ConversionAction,
    artisan_id: Optional[str] = None,
    identity: Optional[Identity] = None,
) -> bool:
    """Record a login/signup click. Attaches the user id when already known."""
    try:
        conversion_action = ConversionAction(action).value
    except ValueError as e:
        logger.error(f"Error tracking modal_converted: {e}", extra={"entity_id": artisan_id})
        return False

    return _record(
        store,
        {
            "event_type": ModalEventType.CONVERTED.value,
            "artisan_id": artisan_id or None,
            "conversion_action": conversion_action,
            "session_id": session_ctx.session_id,
            "user_id": identity.user_id if identity else None,
        },
    )


def track_modal_dismissed(
    store: EventStore, session_ctx: SessionContext, artisan_id: Optional[str] = None
) -> bool:
    return _record(
        store,
        {
            "event_type": ModalEventType.DISMISSED.value,
            "artisan_id": artisan_id or None,
            "session_id": session_ctx.session_id,
        },
    )
