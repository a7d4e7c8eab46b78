"""Session repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.session import Session


class SessionRepository(ABC):
    """Port interface for session repository."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Session]:
        """
        Get session for a user.

        Args:
            user_id: User identifier

        Returns:
            Session entity, or None if the user has no active session
        """
        pass

    @abstractmethod
    async def save(self, session: Session) -> None:
        """
        Save session.

        Args:
            session: Session entity to save
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """
        Delete session for a user (idempotent).

        Args:
            user_id: User identifier
        """
        pass

    @abstractmethod
    async def list_user_ids(self) -> list[str]:
        """
        List users with an active session.

        Returns:
            Snapshot of user identifiers
        """
        pass
