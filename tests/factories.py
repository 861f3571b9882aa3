"""Row factories shared by the test modules."""

from datetime import datetime, timedelta, timezone

from artisan_connect.models.artisan_models import ArtisanProfile, Review
from artisan_connect.models.event_models import AuthModalEvent, ContactEvent

NOW = datetime(2026, 6, 15, 12, 0, 0, tzinfo=timezone.utc)

ADMIN_HEADERS = {"X-User-Id": "admin-1", "X-User-Role": "admin"}
BUYER_HEADERS = {"X-User-Id": "buyer-1", "X-User-Role": "buyer"}


def days_ago(days: float, now: datetime = NOW) -> datetime:
    return now - timedelta(days=days)


def make_artisan(session, **overrides) -> ArtisanProfile:
    fields = {
        "business_name": "Bright Sparks",
        "artisan_name": "Tunde",
        "phone_number": "+234 801 234 5678",
        "category": "Electrician",
        "status": "active",
        "estate_zone": "Magboro",
        "city": "Magboro",
        "state": "Ogun",
    }
    fields.update(overrides)
    artisan = ArtisanProfile(**fields)
    session.add(artisan)
    session.commit()
    session.refresh(artisan)
    return artisan


def make_review(session, artisan_id: str, **overrides) -> Review:
    fields = {
        "artisan_id": artisan_id,
        "buyer_id": "buyer-1",
        "rating": 5,
        "comment": "Great work",
        "status": "approved",
    }
    fields.update(overrides)
    review = Review(**fields)
    session.add(review)
    session.commit()
    session.refresh(review)
    return review


def make_contact(session, artisan_id: str, **overrides) -> ContactEvent:
    fields = {"buyer_id": "buyer-1", "artisan_id": artisan_id, "contact_type": "call"}
    fields.update(overrides)
    event = ContactEvent(**fields)
    session.add(event)
    session.commit()
    session.refresh(event)
    return event


def make_modal_event(session, event_type: str, **overrides) -> AuthModalEvent:
    fields = {"event_type": event_type, "session_id": "session_1_abc"}
    fields.update(overrides)
    event = AuthModalEvent(**fields)
    session.add(event)
    session.commit()
    return event
