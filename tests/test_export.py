"""Tests for CSV exports and the monthly summary."""

import csv
import io
from datetime import datetime, timezone

import pytest

from artisan_connect.admin.audit import AuditLogEntry, log_admin_action
from artisan_connect.admin.export import (
    ARTISAN_COLUMNS,
    CONTACT_COLUMNS,
    ExportFilters,
    build_monthly_summary,
    export_artisans_csv,
    export_audit_logs_csv,
    export_contacts_csv,
    export_filename,
    export_reviews_csv,
)
from tests.factories import make_artisan, make_contact, make_review


def _rows(content: str):
    return list(csv.DictReader(io.StringIO(content)))


def test_artisans_csv_with_filters(session):
    make_artisan(session, whatsapp_number=None, is_verified=True, verification_method="nin")
    make_artisan(session, business_name="Flow Pipes", category="Plumber")

    content, count = export_artisans_csv(session, ExportFilters(category="Plumber"))

    assert count == 1
    assert content.splitlines()[0].split(",")[:3] == ARTISAN_COLUMNS[:3]
    [row] = _rows(content)
    assert row["Business Name"] == "Flow Pipes"
    assert row["Verified"] == "No"
    assert row["WhatsApp"] == ""


def test_reviews_csv_joins_business_name(session):
    a = make_artisan(session, business_name="Bright, Sparks & Co")
    make_review(session, a.id, comment='Said "excellent"')
    make_review(session, "missing-artisan", status="pending")

    content, count = export_reviews_csv(session, ExportFilters(status="approved"))

    assert count == 1
    [row] = _rows(content)
    assert row["Artisan"] == "Bright, Sparks & Co"
    assert row["Comment"] == 'Said "excellent"'
    assert row["Verified Hire"] == "No"


def test_contacts_csv(session):
    a = make_artisan(session)
    make_contact(session, a.id, contact_type="whatsapp")
    make_contact(session, a.id, contact_type="call")

    content, count = export_contacts_csv(session, ExportFilters(contact_type="whatsapp"))

    assert count == 1
    assert list(_rows(content)[0].keys()) == CONTACT_COLUMNS
    assert _rows(content)[0]["Contact Type"] == "whatsapp"


def test_audit_csv_serialises_details(store, session, admin):
    log_admin_action(store, admin, AuditLogEntry(action="edit_artisan", details={"field": "bio"}))

    content, count = export_audit_logs_csv(session, ExportFilters())

    assert count == 1
    assert _rows(content)[0]["Details"] == '{"field": "bio"}'


def test_export_filename():
    today = datetime(2026, 3, 9, tzinfo=timezone.utc)
    assert export_filename("artisans", today) == "artisans_export_2026-03-09.csv"


def test_monthly_summary(session):
    may = datetime(2026, 5, 10, tzinfo=timezone.utc)
    june = datetime(2026, 6, 2, tzinfo=timezone.utc)
    a = make_artisan(session, created_at=may)
    make_artisan(session, category="Plumber", created_at=may)
    make_artisan(session, created_at=june)
    make_review(session, a.id, rating=5, created_at=may)
    make_review(session, a.id, rating=4, created_at=may)
    make_review(session, a.id, rating=1, status="pending", created_at=may)
    make_contact(session, a.id, contacted_at=may)
    make_contact(session, a.id, contacted_at=june)

    summary = build_monthly_summary(session, 2026, 5)

    assert summary.period_start == "2026-05-01"
    assert summary.period_end == "2026-06-01"
    assert summary.new_artisans == 2
    assert summary.new_reviews == 2
    assert summary.contact_events == 1
    assert summary.avg_rating == "4.50"
    assert {c.category: c.count for c in summary.categories} == {"Electrician": 1, "Plumber": 1}


def test_monthly_summary_december_rolls_over(session):
    summary = build_monthly_summary(session, 2025, 12)
    assert summary.period_end == "2026-01-01"
    assert summary.avg_rating == "0.00"


def test_monthly_summary_rejects_bad_month(session):
    with pytest.raises(ValueError):
        build_monthly_summary(session, 2026, 13)
