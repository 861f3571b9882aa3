"""Artisan Connect — Contact Tracking.

Contact events are best-effort telemetry: nothing here raises. Opening the
call or WhatsApp link proceeds whether or not the row was written.
"""

import re
from typing import Optional
from urllib.parse import quote

from artisan_connect.core.identity import Identity
from artisan_connect.core.store import EventStore, StoreError
from artisan_connect.models.event_models import ContactType
from artisan_connect.core.logging import get_logger

logger = get_logger("tracking.contact")

CONTACT_TABLE = "contact_events"


def generate_whatsapp_link(phone_number: str, artisan_name: str) -> str:
    """wa.me deep link with a pre-filled greeting."""
    message = quote(
        f"Hi {artisan_name}, I found your profile on Artisan Connect. I need your services.",
        safe="",
    )
    clean_number = re.sub(r"[^0-9]", "", phone_number)
    return f"https://wa.me/{clean_number}?text={message}"


def generate_call_link(phone_number: str) -> str:
    return f"tel:{phone_number}"


def track_contact_event(
    store: EventStore,
    identity: Optional[Identity],
    artisan_id: str,
    contact_type: ContactType,
) -> bool:
    """Append one contact event. Returns whether a row was written."""
    if identity is None:
        logger.warning("Contact not tracked: user not authenticated", extra={"entity_id": artisan_id})
        return False

    try:
        store.insert_record(
            CONTACT_TABLE,
            {
                "buyer_id": identity.user_id,
                "artisan_id": artisan_id,
                "contact_type": ContactType(contact_type).value,
            },
        )
    except (StoreError, ValueError) as e:
        logger.error(
            f"Error tracking contact event: {e}",
            extra={"entity_id": artisan_id, "user_id": identity.user_id},
        )
        return False

    logger.info(
        f"Contact tracked: {contact_type}",
        extra={"entity_id": artisan_id, "user_id": identity.user_id},
    )
    return True
