"""Welcome and registration flow."""

import logging
from typing import Callable, Optional

from app.application.errors import BackendApiError
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.customer_identity_service import CustomerIdentityService
from app.application.use_cases.flow_base import FlowBase
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState

MIN_NAME_PART_LENGTH = 2


class WelcomeFlow(FlowBase):
    """Greets returning customers and registers new ones."""

    component = "welcome_flow"

    def __init__(
        self,
        messenger: Messenger,
        states: ConversationStateService,
        customers: CustomerIdentityService,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize welcome flow.

        Args:
            messenger: Best-effort outbound messenger
            states: Conversation state service
            customers: Customer identity service
            logger: Optional logger function
        """
        super().__init__(messenger, states, logger)
        self._customers = customers

    async def start(self, user_id: str, turn_id: str) -> None:
        """
        Enter the welcome flow.

        A registered customer is greeted and shown the menu; anyone else is
        asked for first name and last name.

        Args:
            user_id: WhatsApp phone number
            turn_id: Turn identifier
        """
        try:
            customer = await self._customers.resolve(user_id)
        except BackendApiError as e:
            self._log(user_id, turn_id, level=logging.WARNING, action="resolve_failed", error=e.detail)
            await self._send(user_id, UserMessagesES.REGISTRATION_UNAVAILABLE, turn_id)
            return

        if customer is not None:
            self._log(user_id, turn_id, action="returning_customer", customer_id=customer.customer_id)
            await self._send(
                user_id, UserMessagesES.welcome_returning_user(customer.first_name), turn_id
            )
            await self._transition(user_id, DialogueState.MENU)
            return

        self._log(user_id, turn_id, action="new_user")
        await self._send(user_id, UserMessagesES.WELCOME_NEW_USER, turn_id)
        await self._transition(user_id, DialogueState.AWAITING_FIRST_NAME_LASTNAME)

    async def handle_full_name(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Register the user from a "nombre apellido" reply.

        Args:
            user_id: WhatsApp phone number
            text: Raw reply
            turn_id: Turn identifier
        """
        parts = text.strip().split()
        if len(parts) != 2:
            await self._send(user_id, UserMessagesES.ASK_FULL_NAME, turn_id)
            return

        first_name, last_name = parts
        if len(first_name) < MIN_NAME_PART_LENGTH:
            await self._send(user_id, UserMessagesES.INVALID_FIRST_NAME, turn_id)
            return
        if len(last_name) < MIN_NAME_PART_LENGTH:
            await self._send(user_id, UserMessagesES.INVALID_LAST_NAME, turn_id)
            return

        try:
            customer = await self._customers.register(user_id, f"{first_name} {last_name}")
        except BackendApiError as e:
            # 409: the phone was registered meanwhile
            customer = None
            if e.status_code == 409:
                customer = await self._resolve_quietly(user_id, turn_id)
            if customer is None:
                self._log(
                    user_id, turn_id, level=logging.WARNING, action="register_failed", error=e.detail
                )
                await self._send(user_id, UserMessagesES.REGISTRATION_UNAVAILABLE, turn_id)
                return

        self._log(user_id, turn_id, action="registered", customer_id=customer.customer_id)
        await self._send(
            user_id, UserMessagesES.registration_completed(customer.first_name), turn_id
        )
        await self._transition(user_id, DialogueState.MENU)

    async def _resolve_quietly(self, user_id: str, turn_id: str):
        try:
            return await self._customers.resolve(user_id)
        except BackendApiError as e:
            self._log(user_id, turn_id, level=logging.WARNING, action="resolve_failed", error=e.detail)
            return None
