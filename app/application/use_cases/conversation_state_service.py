"""Conversation state service over the injected state repository."""

from typing import Any, Optional, TypeVar

from app.application.ports.conversation_state_repository import ConversationStateRepository
from app.domain.entities.conversation_state import ConversationState, DialogueState, Scratch

ScratchT = TypeVar("ScratchT", bound=Scratch)


class ConversationStateService:
    """Reads and writes a user's dialogue state and flow scratch data."""

    def __init__(self, repository: ConversationStateRepository) -> None:
        """
        Initialize conversation state service.

        Args:
            repository: Conversation state repository
        """
        self._repository = repository

    async def _load(self, user_id: str) -> ConversationState:
        state = await self._repository.get(user_id)
        if state is None:
            state = ConversationState(user_id=user_id)
        return state

    async def snapshot(self, user_id: str) -> ConversationState:
        """Full conversation record, the default initial one when nothing is stored."""
        return await self._load(user_id)

    async def get_state(self, user_id: str) -> DialogueState:
        """
        Get the current dialogue state.

        Args:
            user_id: User identifier

        Returns:
            Current state, INITIAL when nothing is stored
        """
        return (await self._load(user_id)).state

    async def set_state(self, user_id: str, state: DialogueState) -> None:
        """
        Move the user to a new dialogue state, keeping scratch data.

        Args:
            user_id: User identifier
            state: New state
        """
        conversation = await self._load(user_id)
        conversation.state = state
        await self._repository.save(conversation)

    async def clear(self, user_id: str) -> None:
        """Drop state and scratch data (idempotent)."""
        await self._repository.delete(user_id)

    async def get_scratch(self, user_id: str, kind: type[ScratchT]) -> Optional[ScratchT]:
        """
        Get the active scratch data if it is of the requested variant.

        Args:
            user_id: User identifier
            kind: Scratch variant expected by the caller

        Returns:
            Scratch of that variant, or None if absent or of another variant
        """
        scratch = (await self._load(user_id)).scratch
        if isinstance(scratch, kind):
            return scratch
        return None

    async def set_scratch(self, user_id: str, scratch: Optional[Scratch]) -> None:
        """Replace the active scratch data."""
        conversation = await self._load(user_id)
        conversation.scratch = scratch
        await self._repository.save(conversation)

    async def patch_scratch(
        self, user_id: str, kind: type[ScratchT], **changes: Any
    ) -> ScratchT:
        """
        Merge fields into the active scratch variant.

        Fields passed overwrite the stored ones and the rest are preserved. When
        the active scratch is absent or of another variant, a fresh one is patched.

        Args:
            user_id: User identifier
            kind: Scratch variant to patch
            **changes: Fields to overwrite

        Returns:
            The stored scratch after the patch
        """
        conversation = await self._load(user_id)
        current = conversation.scratch if isinstance(conversation.scratch, kind) else kind()
        patched = current.patch(**changes)
        conversation.scratch = patched
        await self._repository.save(conversation)
        return patched

    async def clear_scratch(self, user_id: str) -> None:
        """Drop the active scratch data but keep the dialogue state."""
        await self.set_scratch(user_id, None)
