"""Main menu, orders submenu and FAQ flow."""

import logging
from typing import Callable, Optional

from app.application.errors import BackendApiError
from app.application.ports.order_gateway import OrderGateway
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.customer_identity_service import CustomerIdentityService
from app.application.use_cases.detectors import detect_faq
from app.application.use_cases.flow_base import FlowBase
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.order_capture_flow import OrderCaptureFlow
from app.application.use_cases.order_message_formatter import OrderMessageFormatter
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState


class MenuFlow(FlowBase):
    """Routes numeric menu choices and answers FAQs."""

    component = "menu_flow"

    def __init__(
        self,
        messenger: Messenger,
        states: ConversationStateService,
        order_flow: OrderCaptureFlow,
        customers: CustomerIdentityService,
        orders: OrderGateway,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize menu flow.

        Args:
            messenger: Best-effort outbound messenger
            states: Conversation state service
            order_flow: Order capture flow started from the orders submenu
            customers: Customer identity service
            orders: Backend order gateway for "mis pedidos"
            logger: Optional logger function
        """
        super().__init__(messenger, states, logger)
        self._order_flow = order_flow
        self._customers = customers
        self._orders = orders

    async def handle_main_menu(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Handle a main menu choice.

        Args:
            user_id: User identifier
            text: Expected "1", "2" or "3"
            turn_id: Turn identifier
        """
        option = text.strip()
        if option == "1":
            await self._send(user_id, UserMessagesES.PRODUCTS_INFO, turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_INFO)
        elif option == "2":
            await self._send(user_id, UserMessagesES.ORDERS_MENU, turn_id)
            await self._transition(user_id, DialogueState.ORDERS_MENU)
        elif option == "3":
            await self._send(user_id, UserMessagesES.FAQ_MENU, turn_id)
            await self._transition(user_id, DialogueState.FAQ)
        else:
            await self._send(user_id, UserMessagesES.INVALID_MENU_OPTION, turn_id)

    async def handle_orders_menu(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Handle an orders submenu choice.

        Args:
            user_id: User identifier
            text: Expected "1" (new order) or "2" (my orders)
            turn_id: Turn identifier
        """
        option = text.strip()
        if option == "1":
            await self._order_flow.start(user_id, turn_id)
        elif option == "2":
            await self.show_customer_orders(user_id, turn_id)
        else:
            await self._send(user_id, UserMessagesES.INVALID_ORDERS_MENU_OPTION, turn_id)

    async def show_customer_orders(self, user_id: str, turn_id: str) -> None:
        """
        List the customer's orders in progress.

        Args:
            user_id: User identifier
            turn_id: Turn identifier
        """
        try:
            customer = await self._customers.resolve(user_id)
            if customer is None:
                await self._send(user_id, UserMessagesES.MY_ORDERS_MISSING_CUSTOMER, turn_id)
                return
            orders = await self._orders.list_customer_orders(customer.customer_id)
        except BackendApiError as e:
            self._log(user_id, turn_id, level=logging.ERROR, action="my_orders_failed", error=e.detail)
            await self._send(user_id, UserMessagesES.MY_ORDERS_ERROR, turn_id)
            return

        if not orders:
            await self._send(user_id, UserMessagesES.MY_ORDERS_EMPTY, turn_id)
            return
        await self._send(user_id, OrderMessageFormatter.format_customer_orders(orders), turn_id)

    async def handle_faq(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Answer a FAQ by option number or by detected topic.

        Args:
            user_id: User identifier
            text: Option "1"-"6" or a free-text question
            turn_id: Turn identifier
        """
        option = text.strip()
        topic = UserMessagesES.FAQ_OPTIONS.get(option)
        if topic is None:
            detection = detect_faq(option)
            topic = detection.category if detection.matched else None

        if topic is not None:
            self._log(user_id, turn_id, faq_topic=topic)
            await self._send(user_id, UserMessagesES.FAQ_ANSWERS[topic], turn_id)
            return
        await self._send(user_id, UserMessagesES.faq_question_received(option), turn_id)
