"""Session entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from app.domain.value_objects.customer_identity import CustomerIdentity

SESSION_TTL = timedelta(minutes=15)
WARNING_AT = timedelta(minutes=12)
CONTEXT_RESET_AT = timedelta(minutes=8)


@dataclass
class Session:
    """Time-bounded record of user activity governing conversation expiry."""

    user_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_activity_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    warning_sent: bool = False
    expiry_notice_sent: bool = False
    context_reset_sent: bool = False
    customer: Optional[CustomerIdentity] = None

    def touch(self, now: datetime) -> None:
        """
        Register user activity and re-arm every inactivity notice.

        Args:
            now: Current instant
        """
        self.refresh_activity(now)
        self.warning_sent = False
        self.expiry_notice_sent = False
        self.context_reset_sent = False

    def refresh_activity(self, now: datetime) -> None:
        """
        Move last activity forward without re-arming notices.

        Args:
            now: Current instant
        """
        if now > self.last_activity_at:
            self.last_activity_at = now

    def elapsed(self, now: datetime) -> timedelta:
        """Time since the last registered activity."""
        return now - self.last_activity_at

    def is_expired(self, now: datetime) -> bool:
        """
        Check whether the inactivity window has been exceeded.

        Args:
            now: Current instant

        Returns:
            True if more than SESSION_TTL has elapsed since last activity
        """
        return self.elapsed(now) > SESSION_TTL
