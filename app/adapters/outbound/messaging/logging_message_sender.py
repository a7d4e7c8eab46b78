"""Message sender that only logs (local development)."""

from collections import deque

from app.application.ports.message_sender import MessageSender
from app.infrastructure.logging.logger import logger


class LoggingMessageSender(MessageSender):
    """Writes outbound messages to the log instead of delivering them."""

    def __init__(self) -> None:
        """Initialize sender."""
        self.sent: deque[tuple[str, str]] = deque(maxlen=100)

    async def send_message(self, user_id: str, text: str) -> None:
        """
        Log a text message.

        Args:
            user_id: Recipient identifier
            text: Message body
        """
        self.sent.append((user_id, text))
        logger.info(f"component='outbound_message' | to={user_id!r} | body={text!r}")
