"""Tests for the admin dashboard builder."""

from artisan_connect.analyzer.dashboard import build_dashboard, last_n_days
from tests.factories import (
    NOW,
    days_ago,
    make_artisan,
    make_contact,
    make_modal_event,
    make_review,
)


def test_empty_dashboard(session):
    out = build_dashboard(session, now=NOW)

    assert out.stats.total_artisans == 0
    assert out.stats.avg_rating == 0
    assert out.trends.artisans.value == 0
    assert out.trends.artisans.is_positive is True
    assert len(out.chart_data.growth) == 30
    assert all(p.value == 0 for p in out.chart_data.growth)
    assert out.modal_stats.conversion_rate == 0
    assert out.top_artisans == []


def test_last_n_days_ends_today():
    days = last_n_days(NOW, 30)
    assert len(days) == 30
    assert days[-1] == "2026-06-15"
    assert days[0] == "2026-05-17"


def test_stats_and_queues(session):
    a1 = make_artisan(session, rating=4.5, created_at=days_ago(2))
    a2 = make_artisan(session, business_name="Flow Pipes", category="Plumber", rating=3.0, created_at=days_ago(40))
    pending = make_artisan(session, business_name="New Guy", status="pending")
    make_review(session, a1.id, rating=5, created_at=days_ago(1))
    make_review(session, a1.id, rating=4, created_at=days_ago(3))
    pending_review = make_review(session, a2.id, rating=1, status="pending")
    make_contact(session, a1.id, created_at=days_ago(1))

    out = build_dashboard(session, now=NOW)

    assert out.stats.total_artisans == 2
    assert out.stats.pending_approvals == 1
    assert out.stats.total_reviews == 2
    assert out.stats.total_contacts == 1
    assert out.stats.avg_rating == 4.5
    assert out.pending_artisan_ids == [pending.id]
    assert out.pending_review_ids == [pending_review.id]

    # One active artisan in each window
    assert (out.trends.artisans.value, out.trends.artisans.is_positive) == (0, True)
    assert (out.trends.reviews.value, out.trends.reviews.is_positive) == (100, True)

    assert [t.id for t in out.top_artisans] == [a1.id, a2.id]
    categories = {p.name: p.value for p in out.chart_data.categories}
    assert categories == {"Electrician": 1, "Plumber": 1}


def test_daily_series_buckets_by_day(session):
    a = make_artisan(session, created_at=days_ago(0))
    make_contact(session, a.id, created_at=days_ago(0))
    make_contact(session, a.id, created_at=days_ago(1))
    make_contact(session, a.id, created_at=days_ago(1))

    out = build_dashboard(session, now=NOW)
    contacts = {p.name: p.value for p in out.chart_data.contacts}
    assert contacts["2026-06-15"] == 1
    assert contacts["2026-06-14"] == 2
    assert sum(contacts.values()) == 3


def test_modal_conversion(session):
    for _ in range(4):
        make_modal_event(session, "modal_shown", created_at=days_ago(1))
    make_modal_event(session, "modal_converted", created_at=days_ago(1))
    make_modal_event(session, "modal_dismissed", created_at=days_ago(0))

    out = build_dashboard(session, now=NOW)

    assert out.modal_stats.total_shown == 4
    assert out.modal_stats.total_converted == 1
    assert out.modal_stats.conversion_rate == 25
    by_day = {p.date: p for p in out.modal_chart_data}
    assert by_day["2026-06-14"].shown == 4
    assert by_day["2026-06-14"].converted == 1
    assert by_day["2026-06-15"].dismissed == 1
