"""Conversation state repository outbound adapter."""

from app.adapters.outbound.conversation_state_repository.in_memory_conversation_state_repository import (  # noqa: E501
    InMemoryConversationStateRepository,
)

__all__ = [
    "InMemoryConversationStateRepository",
]
