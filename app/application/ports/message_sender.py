"""Outbound message sender port."""

from abc import ABC, abstractmethod


class MessageSender(ABC):
    """Port interface for delivering chat messages to a user."""

    @abstractmethod
    async def send_message(self, user_id: str, text: str) -> None:
        """
        Send a text message.

        Args:
            user_id: Recipient identifier (WhatsApp phone number)
            text: Message body

        Raises:
            Exception: If delivery fails
        """
        pass
