"""Shared plumbing for dialogue flows."""

from typing import Any, Callable, Optional

from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState


class FlowBase:
    """Base class giving flows messaging, state transitions and logging."""

    component = "flow"

    def __init__(
        self,
        messenger: Messenger,
        states: ConversationStateService,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize flow.

        Args:
            messenger: Best-effort outbound messenger
            states: Conversation state service
            logger: Optional logger function (session_id, turn_id, component, **kwargs)
        """
        self._messenger = messenger
        self._states = states
        self._logger = logger

    def _log(self, session_id: str, turn_id: str, **kwargs: Any) -> None:
        """
        Log event if logger is available.

        Args:
            session_id: Session identifier
            turn_id: Turn identifier
            **kwargs: Additional log fields
        """
        if self._logger:
            self._logger(session_id, turn_id, self.component, **kwargs)

    async def _send(self, user_id: str, text: str, turn_id: str) -> None:
        await self._messenger.send(user_id, text, turn_id)

    async def _transition(self, user_id: str, state: DialogueState) -> None:
        await self._states.set_state(user_id, state)

    async def show_main_menu(self, user_id: str, turn_id: str) -> None:
        """Send the main menu and move the user to MENU."""
        await self._send(user_id, UserMessagesES.MAIN_MENU, turn_id)
        await self._transition(user_id, DialogueState.MENU)
