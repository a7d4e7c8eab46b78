"""Best-effort outbound messaging."""

import logging
from typing import Any, Callable, Optional

from app.application.ports.message_sender import MessageSender


class Messenger:
    """Sends messages through the injected sender without letting failures escape."""

    def __init__(
        self,
        sender: MessageSender,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize messenger.

        Args:
            sender: Outbound message sender
            logger: Optional logger function (session_id, turn_id, component, **kwargs)
        """
        self._sender = sender
        self._logger = logger

    def _log(self, session_id: str, turn_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(session_id, turn_id, component, **kwargs)

    async def send(self, user_id: str, text: str, turn_id: str = "-") -> bool:
        """
        Send a message, logging instead of raising on failure.

        Args:
            user_id: Recipient
            text: Message body
            turn_id: Turn identifier for log correlation

        Returns:
            True if the sender accepted the message
        """
        try:
            await self._sender.send_message(user_id, text)
        except Exception as e:
            self._log(
                user_id,
                turn_id,
                "messenger",
                level=logging.ERROR,
                action="send_failed",
                error=str(e),
            )
            return False
        return True
