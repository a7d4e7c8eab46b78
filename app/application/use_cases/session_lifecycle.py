"""Session lifecycle service: touch, expiry and reset cascade."""

from datetime import datetime, timezone
from typing import Callable, Optional

from app.application.ports.cart_repository import CartRepository
from app.application.ports.conversation_state_repository import ConversationStateRepository
from app.application.ports.session_repository import SessionRepository
from app.domain.entities.session import Session
from app.domain.value_objects.customer_identity import CustomerIdentity


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(timezone.utc)


class SessionLifecycle:
    """Owns session creation, refresh, expiry checks and full resets."""

    def __init__(
        self,
        session_repository: SessionRepository,
        state_repository: ConversationStateRepository,
        cart_repository: CartRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize session lifecycle.

        Args:
            session_repository: Session store
            state_repository: Conversation state store (cleared on reset)
            cart_repository: Cart store (cleared on reset)
            clock: Callable returning the current instant
        """
        self._sessions = session_repository
        self._states = state_repository
        self._carts = cart_repository
        self._clock = clock

    def now(self) -> datetime:
        """Current instant according to the injected clock."""
        return self._clock()

    async def get_session(self, user_id: str) -> Optional[Session]:
        """Return the session for a user, if any."""
        return await self._sessions.get(user_id)

    async def exists(self, user_id: str) -> bool:
        """True when the user has a session."""
        return await self._sessions.get(user_id) is not None

    async def list_user_ids(self) -> list[str]:
        """Users that currently hold a session."""
        return await self._sessions.list_user_ids()

    async def save(self, session: Session) -> None:
        """Persist a session mutated by the caller."""
        await self._sessions.save(session)

    async def touch(self, user_id: str) -> Session:
        """
        Create or refresh a session.

        A new session starts with every notice flag cleared; an existing one
        has its activity moved to now and its notice flags re-armed.

        Args:
            user_id: User identifier

        Returns:
            The stored session
        """
        now = self.now()
        session = await self._sessions.get(user_id)
        if session is None:
            session = Session(user_id=user_id, created_at=now, last_activity_at=now)
        else:
            session.touch(now)
        await self._sessions.save(session)
        return session

    async def is_expired(self, user_id: str) -> bool:
        """
        Check whether a user's session has expired.

        Args:
            user_id: User identifier

        Returns:
            False for unknown users, which are new rather than expired
        """
        session = await self._sessions.get(user_id)
        if session is None:
            return False
        return session.is_expired(self.now())

    async def remove(self, user_id: str) -> None:
        """Delete the session only (idempotent)."""
        await self._sessions.delete(user_id)

    async def reset(self, user_id: str) -> None:
        """
        Remove session, conversation state and cart for a user.

        Args:
            user_id: User identifier
        """
        await self._sessions.delete(user_id)
        await self._states.delete(user_id)
        await self._carts.delete(user_id)

    async def cache_customer(self, user_id: str, customer: CustomerIdentity) -> None:
        """
        Remember the resolved customer on the session.

        Args:
            user_id: User identifier
            customer: Backend customer identity
        """
        session = await self._sessions.get(user_id)
        if session is None:
            session = Session(user_id=user_id, created_at=self.now(), last_activity_at=self.now())
        session.customer = customer
        await self._sessions.save(session)
