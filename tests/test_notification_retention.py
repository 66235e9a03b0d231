"""Tests for the retention sweep."""

from datetime import timedelta

from conftest import draft_notification
from talentbook.application.use_cases.notifications import purge_stale_notifications
from talentbook.application.use_cases.notifications import retention
from talentbook.infrastructure.repositories import NotificationRepository


def test_purge_removes_only_rows_past_the_window(session, clock, make_user):
    user = make_user()
    repository = NotificationRepository(session, clock=clock)
    start = clock.now
    clock.now = start - timedelta(days=31)
    repository.create(draft_notification(user.id, "stale"))
    clock.now = start - timedelta(days=29)
    repository.create(draft_notification(user.id, "recent"))
    clock.now = start

    removed = purge_stale_notifications(session, days=30, clock=clock)

    assert removed == 1
    assert [n.title for n in repository.list_for_user(user.id)] == ["recent"]


def test_purge_defaults_to_configured_retention(session, clock, make_user):
    user = make_user()
    repository = NotificationRepository(session, clock=clock)
    clock.now = clock.now - timedelta(days=45)
    repository.create(draft_notification(user.id))
    clock.advance(days=45)

    assert purge_stale_notifications(session, clock=clock) == 1


def test_purge_skips_while_another_sweep_runs(session, clock, caplog):
    assert retention._sweep_lock.acquire(blocking=False)
    try:
        with caplog.at_level("INFO"):
            assert purge_stale_notifications(session, days=30, clock=clock) is None
    finally:
        retention._sweep_lock.release()

    assert "already running" in caplog.text
    assert purge_stale_notifications(session, days=30, clock=clock) == 0
