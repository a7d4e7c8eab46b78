"""Conversation state repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.conversation_state import ConversationState


class ConversationStateRepository(ABC):
    """Port interface for conversation state repository."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[ConversationState]:
        """
        Get conversation state for a user.

        Args:
            user_id: User identifier

        Returns:
            Conversation state entity, or None if not found
        """
        pass

    @abstractmethod
    async def save(self, state: ConversationState) -> None:
        """
        Save conversation state.

        Args:
            state: Conversation state entity to save
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """
        Delete conversation state for a user (idempotent).

        Args:
            user_id: User identifier
        """
        pass
