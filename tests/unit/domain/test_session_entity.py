"""Unit tests for the Session entity."""

from datetime import datetime, timedelta, timezone

from app.domain.entities.session import CONTEXT_RESET_AT, SESSION_TTL, WARNING_AT, Session

T0 = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
EPSILON = timedelta(seconds=1)


def test_timing_constants():
    """Test the inactivity policy: reset at 8, warn at 12, expire at 15 minutes."""
    assert CONTEXT_RESET_AT == timedelta(minutes=8)
    assert WARNING_AT == timedelta(minutes=12)
    assert SESSION_TTL == timedelta(minutes=15)


def test_not_expired_just_before_ttl():
    """Test a session is alive at TTL minus epsilon."""
    session = Session(user_id="u", created_at=T0, last_activity_at=T0)

    assert session.is_expired(T0 + SESSION_TTL - EPSILON) is False


def test_not_expired_exactly_at_ttl():
    """Test expiry requires strictly more than the TTL."""
    session = Session(user_id="u", created_at=T0, last_activity_at=T0)

    assert session.is_expired(T0 + SESSION_TTL) is False


def test_expired_just_after_ttl():
    """Test a session is expired at TTL plus epsilon."""
    session = Session(user_id="u", created_at=T0, last_activity_at=T0)

    assert session.is_expired(T0 + SESSION_TTL + EPSILON) is True


def test_touch_refreshes_activity_and_rearms_notices():
    """Test touch moves activity forward and clears every notice flag."""
    session = Session(
        user_id="u",
        created_at=T0,
        last_activity_at=T0,
        warning_sent=True,
        expiry_notice_sent=True,
        context_reset_sent=True,
    )

    session.touch(T0 + timedelta(minutes=5))

    assert session.last_activity_at == T0 + timedelta(minutes=5)
    assert session.created_at == T0
    assert not session.warning_sent
    assert not session.expiry_notice_sent
    assert not session.context_reset_sent


def test_refresh_activity_is_monotonic_and_keeps_flags():
    """Test refresh never moves activity backwards and keeps notice flags."""
    session = Session(user_id="u", created_at=T0, last_activity_at=T0, context_reset_sent=True)

    session.refresh_activity(T0 - timedelta(minutes=1))
    assert session.last_activity_at == T0

    session.refresh_activity(T0 + timedelta(minutes=1))
    assert session.last_activity_at == T0 + timedelta(minutes=1)
    assert session.context_reset_sent is True


def test_elapsed():
    """Test elapsed time since last activity."""
    session = Session(user_id="u", created_at=T0, last_activity_at=T0)

    assert session.elapsed(T0 + timedelta(minutes=9)) == timedelta(minutes=9)
