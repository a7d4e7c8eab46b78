"""Product search flow: query, selection and details."""

import logging
import re
from typing import Callable, Optional

from app.application.errors import BackendApiError
from app.application.ports.product_catalog import ProductCatalog
from app.application.ports.product_extractor import ProductExtractor
from app.application.use_cases.cart_service import CartService
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.detectors.text_normalization import normalize
from app.application.use_cases.flow_base import FlowBase
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.product_message_formatter import ProductMessageFormatter
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState, SearchScratch
from app.domain.value_objects.product import Product

SEARCH_LIMIT = 3
AFFIRMATIVE_REPLIES = ("si", "agregar", "comprar")
SEARCH_AGAIN_REPLIES = ("no", "buscar otro", "otro")


def _starts_with_reply(reply: str, options: tuple[str, ...]) -> bool:
    """True if the normalized reply is one of the options or opens with one."""
    return any(reply == option or reply.startswith(f"{option} ") for option in options)


class ProductSearchFlow(FlowBase):
    """Finds catalog products from free text and adds the chosen one to the cart."""

    component = "product_search"

    def __init__(
        self,
        messenger: Messenger,
        states: ConversationStateService,
        extractor: ProductExtractor,
        catalog: ProductCatalog,
        cart: CartService,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize product search flow.

        Args:
            messenger: Best-effort outbound messenger
            states: Conversation state service
            extractor: Product term extractor
            catalog: Catalog search
            cart: Cart engine
            logger: Optional logger function
        """
        super().__init__(messenger, states, logger)
        self._extractor = extractor
        self._catalog = catalog
        self._cart = cart

    async def start(self, user_id: str, turn_id: str) -> None:
        """Ask for a product and wait for the query."""
        await self._states.set_scratch(user_id, SearchScratch())
        await self._send(user_id, ProductMessageFormatter.format_search_welcome(), turn_id)
        await self._transition(user_id, DialogueState.PRODUCT_SEARCH_AWAITING_QUERY)

    async def _search(self, user_id: str, term: str, turn_id: str) -> list[Product]:
        products = await self._catalog.search_products(term, limit=SEARCH_LIMIT)
        self._log(
            user_id,
            turn_id,
            catalog_term=term,
            catalog_results_count=len(products),
        )
        return products

    async def _present(
        self, user_id: str, term: str, products: list[Product], turn_id: str
    ) -> None:
        """Show 1 product as details or N products as a numbered list."""
        if len(products) == 1:
            await self._states.set_scratch(
                user_id,
                SearchScratch(
                    search_term=term,
                    candidates=tuple(products),
                    selected_product=products[0],
                ),
            )
            await self._send(user_id, ProductMessageFormatter.format_details(products[0]), turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_SEARCH_SHOWING_DETAILS)
            return

        await self._states.set_scratch(
            user_id, SearchScratch(search_term=term, candidates=tuple(products))
        )
        await self._send(user_id, ProductMessageFormatter.format_list(products, term), turn_id)
        await self._transition(user_id, DialogueState.PRODUCT_SEARCH_AWAITING_SELECTION)

    async def handle_query(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Search the catalog for the product mentioned in a message.

        Args:
            user_id: User identifier
            text: Free-text query
            turn_id: Turn identifier
        """
        term = await self._extractor.extract_single_term(text)
        if not term:
            await self._send(user_id, ProductMessageFormatter.format_cannot_identify(), turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_SEARCH_AWAITING_QUERY)
            return

        try:
            products = await self._search(user_id, term, turn_id)
        except BackendApiError as e:
            self._log(user_id, turn_id, level=logging.ERROR, action="search_failed", error=e.detail)
            await self._send(user_id, ProductMessageFormatter.format_api_error(), turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_SEARCH_AWAITING_QUERY)
            return

        if not products:
            await self._send(user_id, ProductMessageFormatter.format_no_results(term), turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_SEARCH_AWAITING_QUERY)
            return

        await self._present(user_id, term, products, turn_id)

    async def handle_selection(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Pick one product from the listed results.

        Args:
            user_id: User identifier
            text: Reply expected to be a number in range
            turn_id: Turn identifier
        """
        scratch = await self._states.get_scratch(user_id, SearchScratch)
        if scratch is None or not scratch.candidates:
            await self._send(user_id, UserMessagesES.SEARCH_RESTART_ERROR, turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_SEARCH_AWAITING_QUERY)
            return

        reply = text.strip()
        count = len(scratch.candidates)
        if not re.fullmatch(r"\d+", reply) or not 1 <= int(reply) <= count:
            await self._send(user_id, ProductMessageFormatter.format_invalid_selection(count), turn_id)
            return

        product = scratch.candidates[int(reply) - 1]
        await self._states.set_scratch(user_id, scratch.patch(selected_product=product))
        await self._send(user_id, ProductMessageFormatter.format_details(product), turn_id)
        await self._transition(user_id, DialogueState.PRODUCT_SEARCH_SHOWING_DETAILS)

    async def handle_details_action(self, user_id: str, text: str, turn_id: str) -> None:
        """
        Act on the reply to a product detail card.

        Args:
            user_id: User identifier
            text: Affirmative, search-again or anything else
            turn_id: Turn identifier
        """
        scratch = await self._states.get_scratch(user_id, SearchScratch)
        if scratch is None or scratch.selected_product is None:
            await self._send(user_id, UserMessagesES.SEARCH_DETAILS_ERROR, turn_id)
            await self._transition(user_id, DialogueState.PRODUCT_INFO)
            return

        product = scratch.selected_product
        reply = normalize(text)
        if _starts_with_reply(reply, AFFIRMATIVE_REPLIES):
            result = await self._cart.add_to_cart(user_id, product, 1)
            if result.success:
                message = ProductMessageFormatter.format_product_added(product, 1)
            else:
                message = result.message
            self._log(
                user_id,
                turn_id,
                action="add_to_cart",
                product_id=product.product_id,
                success=result.success,
            )
            await self._send(user_id, message, turn_id)
            await self._states.clear_scratch(user_id)
            await self._transition(user_id, DialogueState.PRODUCT_INFO)
            return

        if _starts_with_reply(reply, SEARCH_AGAIN_REPLIES):
            await self.start(user_id, turn_id)
            return

        await self._send(user_id, UserMessagesES.search_details_reprompt(product.name), turn_id)

    async def quick_lookup(self, user_id: str, text: str, turn_id: str) -> bool:
        """
        Answer a product question asked outside the search flow.

        Args:
            user_id: User identifier
            text: Free-text message
            turn_id: Turn identifier

        Returns:
            True if a reply was produced, False if no product was identified
            or the catalog could not be searched
        """
        term = await self._extractor.extract_single_term(text)
        if not term:
            return False

        try:
            products = await self._search(user_id, term, turn_id)
        except BackendApiError as e:
            self._log(
                user_id,
                turn_id,
                level=logging.WARNING,
                action="quick_lookup_failed",
                error=e.detail,
            )
            return False

        if not products:
            await self._send(user_id, ProductMessageFormatter.format_no_results(term), turn_id)
            return True

        await self._present(user_id, term, products, turn_id)
        return True
