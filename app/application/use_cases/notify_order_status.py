"""Order status change notification use case."""

from typing import Any, Callable, Optional

from app.application.ports.message_sender import MessageSender
from app.application.use_cases.user_messages_es import UserMessagesES


class NotifyOrderStatusUseCase:
    """Tells a customer that the backend changed the status of their order."""

    def __init__(
        self,
        sender: MessageSender,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize notification use case.

        Args:
            sender: Outbound message sender
            logger: Optional logger function (session_id, turn_id, component, **kwargs)
        """
        self._sender = sender
        self._logger = logger

    def _log(self, session_id: str, turn_id: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(session_id, turn_id, "order_notification", **kwargs)

    async def execute(self, order_id: str, status: str, phone: str, turn_id: str = "-") -> None:
        """
        Send the status change message.

        Args:
            order_id: Backend order identifier
            status: New order status
            phone: Customer WhatsApp number
            turn_id: Turn identifier for log correlation

        Raises:
            Exception: Whatever the sender raises; the caller reports delivery failure
        """
        await self._sender.send_message(
            phone, UserMessagesES.order_status_changed(order_id, status)
        )
        self._log(phone, turn_id, action="status_notified", order_id=order_id, status=status)
