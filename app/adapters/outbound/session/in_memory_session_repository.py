"""In-memory session repository adapter."""

from typing import Optional

from app.application.ports.session_repository import SessionRepository
from app.domain.entities.session import Session


class InMemorySessionRepository(SessionRepository):
    """In-memory implementation of session repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, Session] = {}

    async def get(self, user_id: str) -> Optional[Session]:
        """
        Get session for a user.

        Args:
            user_id: User identifier

        Returns:
            Session entity, or None if not found
        """
        return self._storage.get(user_id)

    async def save(self, session: Session) -> None:
        """
        Save session.

        Args:
            session: Session entity to save
        """
        self._storage[session.user_id] = session

    async def delete(self, user_id: str) -> None:
        """
        Delete session for a user.

        Args:
            user_id: User identifier
        """
        self._storage.pop(user_id, None)

    async def list_user_ids(self) -> list[str]:
        """
        List users with an active session.

        Returns:
            Snapshot of user identifiers
        """
        return list(self._storage.keys())
