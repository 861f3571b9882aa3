"""Tests for contact and auth-modal tracking."""

import re
from unittest.mock import patch

from sqlmodel import select

from artisan_connect.core.session_context import SessionContext, generate_session_id
from artisan_connect.core.store import StoreError
from artisan_connect.models.event_models import (
    AuthModalEvent,
    ContactEvent,
    ContactType,
    ConversionAction,
)
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


# ── Contact events ──


def test_contact_event_is_appended(store, session, buyer):
    assert track_contact_event(store, buyer, "art-1", ContactType.WHATSAPP) is True

    rows = session.exec(select(ContactEvent)).all()
    assert len(rows) == 1
    assert rows[0].buyer_id == "buyer-1"
    assert rows[0].artisan_id == "art-1"
    assert rows[0].contact_type == "whatsapp"
    assert rows[0].created_at is not None
    assert rows[0].review_submitted is False


def test_contact_without_identity_is_soft_failure(store, session):
    assert track_contact_event(store, None, "art-1", ContactType.CALL) is False
    assert session.exec(select(ContactEvent)).all() == []


def test_contact_store_failure_is_swallowed(store, buyer):
    with patch.object(store, "insert_record", side_effect=StoreError("db down")):
        assert track_contact_event(store, buyer, "art-1", ContactType.CALL) is False


def test_whatsapp_link_strips_non_digits_and_encodes_message():
    link = generate_whatsapp_link("+234 801-234-5678", "Tunde")
    assert link.startswith("https://wa.me/2348012345678?text=")
    assert "Hi%20Tunde%2C%20I%20found%20your%20profile" in link


def test_call_link():
    assert generate_call_link("+2348012345678") == "tel:+2348012345678"


# ── Session context ──


def test_session_id_format():
    assert re.fullmatch(r"session_\d+_[0-9a-z]{9}", generate_session_id())


def test_session_context_generates_once_and_caches():
    ctx = SessionContext()
    assert ctx.initialized is False

    first = ctx.session_id
    assert ctx.initialized is True
    assert ctx.generated is True
    assert ctx.session_id == first


def test_session_context_keeps_existing_id():
    ctx = SessionContext("session_1_abcdefghi")
    assert ctx.session_id == "session_1_abcdefghi"
    assert ctx.generated is False


def test_new_sessions_get_new_ids():
    assert SessionContext().session_id != SessionContext().session_id


# ── Modal events ──


def test_modal_events_share_the_session_id(store, session, buyer):
    ctx = SessionContext()
    assert track_modal_shown(store, ctx, "art-1")
    assert track_modal_converted(store, ctx, ConversionAction.SIGNUP, "art-1", buyer)
    assert track_modal_dismissed(store, ctx)

    rows = session.exec(select(AuthModalEvent).order_by(AuthModalEvent.created_at)).all()
    assert {r.session_id for r in rows} == {ctx.session_id}
    by_type = {r.event_type: r for r in rows}
    assert set(by_type) == {"modal_shown", "modal_converted", "modal_dismissed"}
    assert by_type["modal_converted"].conversion_action == "signup"
    assert by_type["modal_converted"].user_id == "buyer-1"
    assert by_type["modal_shown"].user_id is None
    assert by_type["modal_dismissed"].artisan_id is None


def test_anonymous_conversion_has_no_user(store, session):
    ctx = SessionContext()
    assert track_modal_converted(store, ctx, ConversionAction.LOGIN)
    row = session.exec(select(AuthModalEvent)).one()
    assert row.user_id is None
    assert row.conversion_action == "login"


def test_modal_store_failure_is_swallowed(store):
    with patch.object(store, "insert_record", side_effect=StoreError("db down")):
        assert track_modal_shown(store, SessionContext(), "art-1") is False


def test_unknown_conversion_action_is_swallowed(store, session):
    assert track_modal_converted(store, SessionContext(), "bogus", "art-1") is False
    assert session.exec(select(AuthModalEvent)).all() == []
