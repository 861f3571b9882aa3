"""HTTP-level tests for the routers."""

from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from artisan_connect.database import get_session
from artisan_connect.core.session_context import SESSION_COOKIE_NAME
from artisan_connect.core.store import StoreError
from tests.factories import ADMIN_HEADERS, BUYER_HEADERS, make_artisan, make_review


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


# ── Favorites ──


def test_favorite_round_trip(client, session):
    a = make_artisan(session)

    r = client.post(f"/favorites/{a.id}/toggle", json={"is_favorite": False}, headers=BUYER_HEADERS)
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert client.get(f"/favorites/{a.id}", headers=BUYER_HEADERS).json()["is_favorite"] is True
    assert client.get("/favorites", headers=BUYER_HEADERS).json()["artisan_ids"] == [a.id]

    r = client.post(f"/favorites/{a.id}/toggle", json={"is_favorite": True}, headers=BUYER_HEADERS)
    assert r.json()["success"] is True
    assert client.get(f"/favorites/{a.id}", headers=BUYER_HEADERS).json()["is_favorite"] is False


def test_favorite_unauthenticated(client):
    r = client.post("/favorites/a1/toggle", json={"is_favorite": False})
    assert r.status_code == 401
    assert r.json() == {"success": False, "error": "Unauthorized", "is_favorite": None}


def test_favorite_duplicate_is_conflict(client):
    client.post("/favorites/a1/toggle", json={"is_favorite": False}, headers=BUYER_HEADERS)
    r = client.post("/favorites/a1/toggle", json={"is_favorite": False}, headers=BUYER_HEADERS)
    assert r.status_code == 409
    assert r.json()["error"] == "Failed to update favorite"


# ── Tracking ──


def test_contact_tracking_returns_link(client, session):
    a = make_artisan(session, whatsapp_number="+234 809 000 0000")
    r = client.post(
        "/tracking/contact",
        json={"artisan_id": a.id, "contact_type": "whatsapp"},
        headers=BUYER_HEADERS,
    )
    assert r.status_code == 202
    body = r.json()
    assert body["recorded"] is True
    assert body["link"].startswith("https://wa.me/2348090000000?text=")


def test_contact_tracking_anonymous_still_accepted(client, session):
    a = make_artisan(session)
    r = client.post("/tracking/contact", json={"artisan_id": a.id, "contact_type": "call"})
    assert r.status_code == 202
    assert r.json()["recorded"] is False
    assert r.json()["link"] == "tel:+234 801 234 5678"


def test_contact_tracking_store_failure_still_accepted(client, session):
    a = make_artisan(session)
    with patch("artisan_connect.core.store.EventStore.insert_record", side_effect=StoreError("down")):
        r = client.post(
            "/tracking/contact",
            json={"artisan_id": a.id, "contact_type": "call"},
            headers=BUYER_HEADERS,
        )
    assert r.status_code == 202
    assert r.json()["recorded"] is False


def test_contact_tracking_database_down_still_accepted():
    from artisan_connect.main import app

    # No tables: both the event insert and the artisan lookup fail
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    with Session(engine) as broken:

        def _get_session():
            yield broken

        app.dependency_overrides[get_session] = _get_session
        try:
            r = TestClient(app).post(
                "/tracking/contact",
                json={"artisan_id": "a1", "contact_type": "call"},
                headers=BUYER_HEADERS,
            )
        finally:
            app.dependency_overrides.clear()
    engine.dispose()

    assert r.status_code == 202
    assert r.json() == {"status": "accepted", "recorded": False, "link": None}


def test_modal_session_cookie_is_issued_once(client):
    r = client.post("/tracking/modal/shown", json={"artisan_id": "a1"})
    assert r.status_code == 202
    session_id = r.cookies.get(SESSION_COOKIE_NAME)
    assert session_id and session_id.startswith("session_")

    r = client.post(
        "/tracking/modal/converted",
        json={"artisan_id": "a1", "action": "signup"},
        cookies={SESSION_COOKIE_NAME: session_id},
    )
    assert r.status_code == 202
    assert SESSION_COOKIE_NAME not in r.cookies


# ── Admin ──


def test_admin_routes_require_admin(client):
    assert client.get("/admin/dashboard").status_code == 401
    assert client.get("/admin/dashboard", headers=BUYER_HEADERS).status_code == 403


def test_admin_role_limited_to_allow_list(client, monkeypatch):
    from artisan_connect.config import settings

    monkeypatch.setattr(settings, "admin_user_ids", ["someone-else"])
    assert client.get("/admin/trends", headers=ADMIN_HEADERS).status_code == 403

    monkeypatch.setattr(settings, "admin_user_ids", ["admin-1"])
    assert client.get("/admin/trends", headers=ADMIN_HEADERS).status_code == 200


def test_admin_dashboard_and_trends(client, session):
    a = make_artisan(session, rating=4.0)
    make_review(session, a.id)

    r = client.get("/admin/dashboard", headers=ADMIN_HEADERS)
    assert r.status_code == 200
    body = r.json()
    assert body["stats"]["total_artisans"] == 1
    assert body["trends"]["artisans"] == {"value": 100, "isPositive": True}

    r = client.get("/admin/trends", headers=ADMIN_HEADERS)
    assert r.json()["contacts"] == {"value": 0, "isPositive": True}


def test_admin_moderation_and_activity(client, session):
    a = make_artisan(session, status="pending")
    r = client.post(
        f"/admin/artisans/{a.id}/approve",
        json={"method": "phone_call"},
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 200
    assert r.json()["artisan_status"] == "active"

    feed = client.get("/admin/activity", headers=ADMIN_HEADERS).json()
    assert feed["count"] == 1
    assert feed["activity"][0]["description"] == "Admin approved artisan"
    assert feed["activity"][0]["relative_time"] == "just now"

    logs = client.get("/admin/audit-logs?action_type=approve_artisan", headers=ADMIN_HEADERS).json()
    assert logs["count"] == 1


def test_admin_moderation_not_found(client):
    r = client.post("/admin/reviews/missing/approve", headers=ADMIN_HEADERS)
    assert r.status_code == 404
    r = client.post("/admin/reviews/missing/shelve", headers=ADMIN_HEADERS)
    assert r.status_code == 404


def test_admin_csv_export(client, session):
    make_artisan(session)
    r = client.get("/admin/exports/artisans.csv", headers=ADMIN_HEADERS)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert r.headers["x-row-count"] == "1"
    assert "artisans_export_" in r.headers["content-disposition"]

    assert client.get("/admin/exports/payments.csv", headers=ADMIN_HEADERS).status_code == 404
    r = client.get("/admin/exports/artisans.csv?category=Astronaut", headers=ADMIN_HEADERS)
    assert r.status_code == 400


def test_admin_monthly_report(client):
    r = client.get("/admin/reports/monthly?year=2026&month=2", headers=ADMIN_HEADERS)
    assert r.status_code == 200
    assert r.json()["period_start"] == "2026-02-01"


# ── Catalog / uploads ──


def test_catalog(client):
    cats = client.get("/catalog/categories").json()["categories"]
    assert len(cats) == 14
    assert cats[0] == {"name": "Electrician", "icon": "⚡", "description": "Wiring, installations, repairs"}
    assert client.get("/catalog/locations").json()["default"] == {"city": "Arepo", "state": "Ogun"}


def test_upload_requires_identity(client):
    r = client.post("/uploads/profiles", files={"file": ("a.png", b"x", "image/png")})
    assert r.status_code == 401


def test_upload_without_storage_configured(client, monkeypatch):
    from artisan_connect.config import settings

    monkeypatch.setattr(settings, "storage_url", "")
    r = client.post(
        "/uploads/profiles",
        files={"file": ("a.png", b"x", "image/png")},
        headers=BUYER_HEADERS,
    )
    assert r.status_code == 503


def test_upload_unknown_folder(client):
    r = client.post(
        "/uploads/avatars",
        files={"file": ("a.png", b"x", "image/png")},
        headers=BUYER_HEADERS,
    )
    assert r.status_code == 404
