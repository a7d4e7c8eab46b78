"""In-memory conversation state repository adapter."""

from typing import Optional

from app.application.ports.conversation_state_repository import ConversationStateRepository
from app.domain.entities.conversation_state import ConversationState


class InMemoryConversationStateRepository(ConversationStateRepository):
    """In-memory implementation of conversation state repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, ConversationState] = {}

    async def get(self, user_id: str) -> Optional[ConversationState]:
        """
        Get conversation state for a user.

        Args:
            user_id: User identifier

        Returns:
            Conversation state entity, or None if not found
        """
        return self._storage.get(user_id)

    async def save(self, state: ConversationState) -> None:
        """
        Save conversation state.

        Args:
            state: Conversation state entity to save
        """
        state.touch()
        self._storage[state.user_id] = state

    async def delete(self, user_id: str) -> None:
        """
        Delete conversation state for a user.

        Args:
            user_id: User identifier
        """
        if user_id in self._storage:
            del self._storage[user_id]
