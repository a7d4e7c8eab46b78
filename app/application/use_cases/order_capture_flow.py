"""Order capture flow: product list, disambiguation, delivery and confirmation."""

import logging
import re
from typing import Callable, Optional

from app.application.dtos.order import OrderPayload
from app.application.errors import BackendApiError, ProductExtractionError
from app.application.ports.order_gateway import OrderGateway
from app.application.ports.product_catalog import ProductCatalog
from app.application.ports.product_extractor import ProductExtractor
from app.application.use_cases.cart_service import CartService
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.customer_identity_service import CustomerIdentityService
from app.application.use_cases.flow_base import FlowBase
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.order_message_formatter import (
    SEPARATOR,
    AddedItem,
    OrderMessageFormatter,
    RejectedItem,
)
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import AmbiguousOption, DialogueState, OrderDraft
from app.domain.value_objects.customer_identity import CustomerIdentity
from app.domain.value_objects.delivery import (
    DELIVERY_MINIMUM_CLP,
    STORE_PICKUP_ADDRESS,
    Courier,
    DeliveryMethod,
)

CATALOG_MATCH_LIMIT = 3
MIN_ADDRESS_LENGTH = 5
MIN_PLACE_LENGTH = 3

_SELECTION_WITH_QUANTITY = re.compile(r"^(\d+)\s*[:\-]\s*(\d+)$")
_SELECTION_NUMBER = re.compile(r"^\d+$")


def parse_selections(text: str) -> list[tuple[int, Optional[int]]]:
    """
    Parse an ambiguous-product selection.

    Accepts comma-separated option numbers ("1, 3") or number:quantity pairs
    ("1: 5, 2: 3"). Malformed tokens are skipped.

    Args:
        text: Raw reply

    Returns:
        (option number, explicit quantity or None) pairs
    """
    selections: list[tuple[int, Optional[int]]] = []
    for token in text.strip().split(","):
        token = token.strip()
        match = _SELECTION_WITH_QUANTITY.match(token)
        if match:
            number, quantity = int(match.group(1)), int(match.group(2))
            if number > 0 and quantity > 0:
                selections.append((number, quantity))
        elif _SELECTION_NUMBER.match(token):
            number = int(token)
            if number > 0:
                selections.append((number, None))
    return selections


class OrderCaptureFlow(FlowBase):
    """Builds a cart from free text and submits the order to the backend."""

    component = "order_flow"

    def __init__(
        self,
        messenger: Messenger,
        states: ConversationStateService,
        sessions: SessionLifecycle,
        extractor: ProductExtractor,
        catalog: ProductCatalog,
        cart: CartService,
        customers: CustomerIdentityService,
        orders: OrderGateway,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize order capture flow.

        Args:
            messenger: Best-effort outbound messenger
            states: Conversation state service
            sessions: Session lifecycle, used for resets on session errors
            extractor: Multi-product extractor
            catalog: Catalog search
            cart: Cart engine
            customers: Customer identity service
            orders: Backend order gateway
            logger: Optional logger function
        """
        super().__init__(messenger, states, logger)
        self._sessions = sessions
        self._extractor = extractor
        self._catalog = catalog
        self._cart = cart
        self._customers = customers
        self._orders = orders

    async def _draft(self, user_id: str) -> OrderDraft:
        draft = await self._states.get_scratch(user_id, OrderDraft)
        return draft if draft is not None else OrderDraft()

    async def _discard_order(self, user_id: str) -> None:
        await self._cart.clear(user_id)
        await self._states.clear_scratch(user_id)

    async def _abort_with_reset(self, user_id: str, message: str, turn_id: str) -> None:
        """Unrecoverable session error: apologise, reset everything, show the menu."""
        self._log(user_id, turn_id, level=logging.ERROR, action="session_error_reset")
        await self._send(user_id, message, turn_id)
        await self._sessions.reset(user_id)
        await self._sessions.touch(user_id)
        await self.show_main_menu(user_id, turn_id)

    async def _resolve_customer(self, user_id: str, turn_id: str) -> Optional[CustomerIdentity]:
        try:
            return await self._customers.resolve(user_id)
        except BackendApiError as e:
            self._log(
                user_id,
                turn_id,
                level=logging.WARNING,
                action="customer_resolve_failed",
                error=e.detail,
            )
            return None

    async def start(self, user_id: str, turn_id: str) -> None:
        """
        Start a new order with an empty cart and draft.

        Args:
            user_id: User identifier
            turn_id: Turn identifier
        """
        await self._cart.clear(user_id)
        await self._states.set_scratch(user_id, OrderDraft())
        await self._resolve_customer(user_id, turn_id)
        await self._send(user_id, UserMessagesES.ORDER_START, turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_PRODUCT_LIST)

    async def show_cart(self, user_id: str, turn_id: str) -> None:
        """Send the current cart summary."""
        cart = await self._cart.get_cart(user_id)
        await self._send(user_id, OrderMessageFormatter.format_cart_summary(cart), turn_id)

    async def _cancel_to_menu(self, user_id: str, turn_id: str) -> None:
        await self._discard_order(user_id)
        await self._send(user_id, UserMessagesES.ORDER_CANCELLED_TO_MENU, turn_id)
        await self.show_main_menu(user_id, turn_id)

    async def handle_product_list(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Resolve a free-text product list against the catalog.

        Single matches go straight to the cart, multiple matches become
        numbered options and the rest are reported as not found.

        Args:
            user_id: User identifier
            text: Free-text product list
            turn_id: Turn identifier
        """
        reply = text.strip().lower()
        if reply == "cancelar":
            await self._cancel_to_menu(user_id, turn_id)
            return
        if reply == "finalizar" and await self._cart.has_items(user_id):
            await self.request_delivery_method(user_id, turn_id)
            return

        try:
            items = await self._extractor.extract_multiple_with_quantities(text)
        except ProductExtractionError as e:
            self._log(user_id, turn_id, level=logging.ERROR, action="extraction_failed", error=str(e))
            await self._send(user_id, UserMessagesES.EXTRACTION_UNAVAILABLE, turn_id)
            return

        if not items:
            await self._send(user_id, UserMessagesES.NO_PRODUCTS_IDENTIFIED, turn_id)
            return

        added: list[AddedItem] = []
        rejected: list[RejectedItem] = []
        options: list[AmbiguousOption] = []
        for item in items:
            try:
                matches = await self._catalog.search_products(item.name, limit=CATALOG_MATCH_LIMIT)
            except BackendApiError as e:
                rejected.append(RejectedItem(name=item.name, reason=e.detail))
                continue

            self._log(
                user_id,
                turn_id,
                catalog_term=item.name,
                catalog_results_count=len(matches),
            )
            if not matches:
                rejected.append(RejectedItem(name=item.name))
            elif len(matches) == 1:
                product = matches[0]
                result = await self._cart.add_to_cart(user_id, product, item.quantity)
                if result.success:
                    added.append(AddedItem(name=product.name, quantity=item.quantity))
                else:
                    rejected.append(RejectedItem(name=item.name, reason=result.message))
            else:
                for product in matches:
                    options.append(
                        AmbiguousOption(
                            number=len(options) + 1,
                            requested_name=item.name,
                            requested_quantity=item.quantity,
                            product=product,
                        )
                    )

        if options:
            await self._states.patch_scratch(user_id, OrderDraft, options=tuple(options))

        await self._send(
            user_id,
            OrderMessageFormatter.format_processing_summary(added, options, rejected),
            turn_id,
        )

        if options:
            await self._send(user_id, UserMessagesES.SELECTION_INSTRUCTIONS, turn_id)
            await self._transition(user_id, DialogueState.ORDER_RESOLVING_AMBIGUOUS_PRODUCTS)
        elif added:
            await self.ask_add_more(user_id, turn_id)
        else:
            await self._send(user_id, UserMessagesES.NOTHING_ADDED, turn_id)

    async def handle_ambiguous_selection(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Add the chosen ambiguous options to the cart.

        Args:
            user_id: User identifier
            text: Selection such as "1, 3" or "1: 5, 2: 3"
            turn_id: Turn identifier
        """
        draft = await self._states.get_scratch(user_id, OrderDraft)
        if draft is None or not draft.options:
            await self._abort_with_reset(user_id, UserMessagesES.ORDER_OPTIONS_LOST, turn_id)
            return

        selections = parse_selections(text)
        if not selections:
            await self._send(user_id, UserMessagesES.SELECTION_UNPARSABLE, turn_id)
            return

        added: list[AddedItem] = []
        errors: list[str] = []
        for number, quantity in selections:
            option = draft.find_option(number)
            if option is None:
                continue
            quantity = quantity or option.requested_quantity
            result = await self._cart.add_to_cart(user_id, option.product, quantity)
            if result.success:
                added.append(AddedItem(name=option.product.name, quantity=quantity))
            else:
                errors.append(f"{option.product.name}: {result.message}")

        await self._send(
            user_id, OrderMessageFormatter.format_selection_result(added, errors), turn_id
        )
        await self._states.patch_scratch(user_id, OrderDraft, options=())
        await self.ask_add_more(user_id, turn_id)

    async def ask_add_more(self, user_id: str, turn_id: str) -> None:
        """Show the cart and offer to add more products or finish."""
        cart = await self._cart.get_cart(user_id)
        message = (
            f"{OrderMessageFormatter.format_cart_summary(cart)}\n\n"
            f"{SEPARATOR}\n\n"
            f"{UserMessagesES.ADD_MORE_OPTIONS}"
        )
        await self._send(user_id, message, turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_ADD_MORE_DECISION)

    async def _continue_adding(self, user_id: str, turn_id: str) -> None:
        await self._send(user_id, UserMessagesES.ADD_MORE_PRODUCTS, turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_PRODUCT_LIST)

    async def handle_add_more_decision(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Continue adding products or move on to delivery.

        While the delivery minimum is pending, the options are add more,
        switch to pickup or cancel.

        Args:
            user_id: User identifier
            text: Reply to the add-more prompt
            turn_id: Turn identifier
        """
        draft = await self._draft(user_id)
        reply = text.strip().lower()

        if draft.awaiting_minimum_decision:
            await self._handle_minimum_decision(user_id, reply, turn_id)
            return

        if reply == "2" or "finalizar" in reply:
            await self.request_delivery_method(user_id, turn_id)
        elif reply == "1" or any(word in reply for word in ("agregar", "mas", "más")):
            await self._continue_adding(user_id, turn_id)
        else:
            await self._send(user_id, UserMessagesES.ADD_MORE_REPROMPT, turn_id)

    async def _handle_minimum_decision(self, user_id: str, reply: str, turn_id: str) -> None:
        if reply == "1" or any(word in reply for word in ("agregar", "mas", "más")):
            await self._states.patch_scratch(
                user_id, OrderDraft, awaiting_minimum_decision=False, delivery_method=None
            )
            await self._continue_adding(user_id, turn_id)
        elif reply == "2" or "retiro" in reply or "tienda" in reply:
            await self._select_pickup(user_id, turn_id)
        elif reply == "3" or "cancelar" in reply:
            await self._cancel_order(user_id, turn_id)
        else:
            await self._send(user_id, UserMessagesES.MINIMUM_DECISION_REPROMPT, turn_id)

    async def request_delivery_method(self, user_id: str, turn_id: str) -> None:
        """Ask how the order will be received; an empty cart goes back to the menu."""
        cart = await self._cart.get_cart(user_id)
        if cart.is_empty():
            await self._send(user_id, UserMessagesES.EMPTY_CART_CANNOT_FINISH, turn_id)
            await self._states.clear_scratch(user_id)
            await self.show_main_menu(user_id, turn_id)
            return

        message = (
            f"{OrderMessageFormatter.format_cart_summary(cart)}\n\n"
            f"{SEPARATOR}\n\n"
            f"{UserMessagesES.DELIVERY_METHOD_OPTIONS}"
        )
        await self._send(user_id, message, turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_DELIVERY_METHOD)

    async def handle_delivery_method(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Record pickup or delivery.

        Delivery below the minimum total sends the user back to the add-more
        decision with the shortfall.

        Args:
            user_id: User identifier
            text: "1"/pickup keyword or "2"/delivery keyword
            turn_id: Turn identifier
        """
        reply = text.strip().lower()
        if reply == "1" or "retiro" in reply or "tienda" in reply:
            await self._select_pickup(user_id, turn_id)
            return

        if reply == "2" or any(word in reply for word in ("domicilio", "envio", "envío")):
            totals = await self._cart.get_totals(user_id)
            if totals.total < DELIVERY_MINIMUM_CLP:
                await self._states.patch_scratch(
                    user_id,
                    OrderDraft,
                    delivery_method=DeliveryMethod.DELIVERY,
                    awaiting_minimum_decision=True,
                )
                self._log(user_id, turn_id, action="delivery_minimum_not_reached", total=totals.total)
                await self._send(
                    user_id,
                    UserMessagesES.minimum_not_reached(totals.total, DELIVERY_MINIMUM_CLP),
                    turn_id,
                )
                await self._transition(user_id, DialogueState.ORDER_AWAITING_ADD_MORE_DECISION)
                return

            await self._states.patch_scratch(
                user_id,
                OrderDraft,
                delivery_method=DeliveryMethod.DELIVERY,
                awaiting_minimum_decision=False,
            )
            await self._send(user_id, UserMessagesES.DELIVERY_SELECTED, turn_id)
            await self._transition(user_id, DialogueState.ORDER_AWAITING_ADDRESS)
            return

        await self._send(user_id, UserMessagesES.INVALID_DELIVERY_METHOD, turn_id)

    async def _select_pickup(self, user_id: str, turn_id: str) -> None:
        await self._states.patch_scratch(
            user_id,
            OrderDraft,
            delivery_method=DeliveryMethod.PICKUP,
            address=STORE_PICKUP_ADDRESS,
            city=None,
            district=None,
            courier=Courier.IN_PERSON,
            awaiting_minimum_decision=False,
        )
        await self._send(user_id, UserMessagesES.PICKUP_SELECTED, turn_id)
        await self.request_confirmation(user_id, turn_id)

    async def handle_address(self, user_id: str, text: str, turn_id: str) -> None:
        """Capture the delivery address."""
        address = text.strip()
        if len(address) < MIN_ADDRESS_LENGTH:
            await self._send(user_id, UserMessagesES.ADDRESS_TOO_SHORT, turn_id)
            return
        await self._states.patch_scratch(user_id, OrderDraft, address=address)
        await self._send(user_id, UserMessagesES.address_saved(address), turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_CITY)

    async def handle_city(self, user_id: str, text: str, turn_id: str) -> None:
        """Capture the delivery city."""
        city = text.strip()
        if len(city) < MIN_PLACE_LENGTH:
            await self._send(user_id, UserMessagesES.CITY_TOO_SHORT, turn_id)
            return
        await self._states.patch_scratch(user_id, OrderDraft, city=city)
        await self._send(user_id, UserMessagesES.city_saved(city), turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_DISTRICT)

    async def handle_district(self, user_id: str, text: str, turn_id: str) -> None:
        """Capture the delivery district (comuna)."""
        district = text.strip()
        if len(district) < MIN_PLACE_LENGTH:
            await self._send(user_id, UserMessagesES.DISTRICT_TOO_SHORT, turn_id)
            return
        await self._states.patch_scratch(user_id, OrderDraft, district=district)
        await self._send(user_id, UserMessagesES.district_saved(district), turn_id)
        await self._transition(user_id, DialogueState.ORDER_AWAITING_COURIER)

    async def handle_courier(self, user_id: str, text: str, turn_id: str) -> None:
        """Capture the courier (1 Starken, 2 Chevalier, 3 Varmontt)."""
        courier = Courier.from_choice(text)
        if courier is None:
            await self._send(user_id, UserMessagesES.INVALID_COURIER, turn_id)
            return
        await self._states.patch_scratch(user_id, OrderDraft, courier=courier)
        await self._send(user_id, UserMessagesES.courier_selected(courier.display_name), turn_id)
        await self.request_confirmation(user_id, turn_id)

    async def request_confirmation(self, user_id: str, turn_id: str) -> None:
        """Show the full order summary and wait for confirmar/cancelar."""
        cart = await self._cart.get_cart(user_id)
        if cart.is_empty():
            await self._send(user_id, UserMessagesES.EMPTY_CART_CANNOT_CONFIRM, turn_id)
            await self._states.clear_scratch(user_id)
            await self.show_main_menu(user_id, turn_id)
            return

        draft = await self._draft(user_id)
        await self._send(
            user_id, OrderMessageFormatter.format_confirmation_summary(cart, draft), turn_id
        )
        await self._transition(user_id, DialogueState.ORDER_AWAITING_CONFIRMATION)

    async def handle_confirmation(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Submit, cancel or re-prompt at the final confirmation.

        Args:
            user_id: User identifier
            text: Reply containing "confirmar", or "cancelar"/"no"
            turn_id: Turn identifier
        """
        reply = text.strip().lower()
        if "confirmar" in reply:
            await self._submit(user_id, turn_id)
        elif reply in ("cancelar", "no"):
            await self._cancel_order(user_id, turn_id)
        else:
            await self._send(user_id, UserMessagesES.CONFIRMATION_REPROMPT, turn_id)

    async def _cancel_order(self, user_id: str, turn_id: str) -> None:
        await self._discard_order(user_id)
        await self._send(user_id, UserMessagesES.ORDER_CANCELLED, turn_id)
        await self.show_main_menu(user_id, turn_id)

    async def _submit(self, user_id: str, turn_id: str) -> None:
        await self._send(user_id, UserMessagesES.ORDER_PROCESSING, turn_id)

        customer = await self._resolve_customer(user_id, turn_id)
        draft = await self._states.get_scratch(user_id, OrderDraft)
        if customer is None or draft is None or draft.delivery_method is None:
            await self._abort_with_reset(user_id, UserMessagesES.ORDER_SESSION_ERROR, turn_id)
            return

        if draft.delivery_method == DeliveryMethod.PICKUP:
            courier = Courier.IN_PERSON
            address = STORE_PICKUP_ADDRESS
        else:
            courier = draft.courier or Courier.IN_PERSON
            address = f"{draft.address}, {draft.district}, {draft.city}"

        line_items = await self._cart.order_line_items(user_id)
        totals = await self._cart.get_totals(user_id)
        payload = OrderPayload(
            customer_id=customer.customer_id,
            delivery_address=address,
            courier=courier.value,
            line_items=line_items,
        )

        try:
            created = await self._orders.create_order(payload)
        except BackendApiError as e:
            self._log(user_id, turn_id, level=logging.ERROR, action="order_failed", error=e.detail)
            await self._send(user_id, UserMessagesES.order_creation_failed(e.detail), turn_id)
            return

        self._log(user_id, turn_id, action="order_created", order_id=created.order_id)
        await self._send(
            user_id,
            OrderMessageFormatter.format_order_created(
                created.order_id, totals.total, draft.delivery_method, courier
            ),
            turn_id,
        )
        await self._discard_order(user_id)
        await self.show_main_menu(user_id, turn_id)
