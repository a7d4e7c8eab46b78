"""Dialogue router: per-message entry point of the conversation state machine."""

import logging
import re
from typing import Any, Callable, Optional
from uuid import uuid4

from app.application.dtos.nlp import NLPAnalysis
from app.application.ports.nlp_classifier import NLPClassifier
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.detectors import (
    detect_faq,
    detect_farewell,
    detect_greeting,
    detect_product_query,
)
from app.application.use_cases.menu_flow import MenuFlow
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.order_capture_flow import OrderCaptureFlow
from app.application.use_cases.product_search_flow import ProductSearchFlow
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.application.use_cases.user_locks import UserLockRegistry
from app.application.use_cases.user_messages_es import UserMessagesES
from app.application.use_cases.welcome_flow import WelcomeFlow
from app.domain.entities.conversation_state import (
    IDLE_STATES,
    MENU_FLOW_STATES,
    PRODUCT_CONTEXT_STATES,
    DialogueState,
)

AUTO_REPLY_CONFIDENCE = 0.85
INTENT_CONFIDENCE = 0.7
FAREWELL_ANSWER_CONFIDENCE = 0.8
GREETING_CONFIDENCE = 0.7
NEGATIVE_SENTIMENT = -0.5

FAREWELL_INTENTS = ("despedida", "agradecimiento")
GREETING_INTENT = "saludo"
HELP_INTENT = "solicitar_ayuda"

MENU_KEYWORDS = ("menu", "menú")
ORDER_KEYWORDS = ("crear pedido", "hacer pedido", "hacer un pedido", "quiero pedir", "nuevo pedido")
CART_KEYWORDS = ("carrito",)
PRICE_KEYWORDS = ("precio", "precios", "catalogo", "catálogo", "buscar producto")

_SINGLE_DIGIT = re.compile(r"^\d$")


class HandleInboundMessageUseCase:
    """Routes each inbound WhatsApp message to the flow owning the user's state."""

    def __init__(
        self,
        sessions: SessionLifecycle,
        states: ConversationStateService,
        messenger: Messenger,
        nlp: NLPClassifier,
        welcome_flow: WelcomeFlow,
        menu_flow: MenuFlow,
        search_flow: ProductSearchFlow,
        order_flow: OrderCaptureFlow,
        locks: UserLockRegistry,
        logger: Optional[Callable[..., None]] = None,
        transition_logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize the dialogue router.

        Args:
            sessions: Session lifecycle service
            states: Conversation state service
            messenger: Best-effort outbound messenger
            nlp: Intent and sentiment classifier
            welcome_flow: Welcome and registration flow
            menu_flow: Main menu, orders submenu and FAQ flow
            search_flow: Product search flow
            order_flow: Order capture flow
            locks: Per-user lock registry shared with the session monitor
            logger: Optional logger function (session_id, turn_id, component, **kwargs)
            transition_logger: Optional state transition logger
                (session_id, turn_id, state_before, state_after)
        """
        self._sessions = sessions
        self._states = states
        self._messenger = messenger
        self._nlp = nlp
        self._welcome = welcome_flow
        self._menu = menu_flow
        self._search = search_flow
        self._order = order_flow
        self._locks = locks
        self._logger = logger
        self._transition_logger = transition_logger

    async def reset_user(self, user_id: str) -> None:
        """
        Drop session, state and cart once no message of the user is in flight.

        Args:
            user_id: WhatsApp phone number
        """
        async with self._locks.lock_for(user_id):
            await self._sessions.reset(user_id)

    def _log(self, session_id: str, turn_id: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(session_id, turn_id, "router", **kwargs)

    async def execute(self, user_id: str, text: str, turn_id: Optional[str] = None) -> None:
        """
        Handle one inbound message.

        Messages from the same user are processed one at a time. Any
        unexpected failure is logged and answered with a generic apology.

        Args:
            user_id: WhatsApp phone number
            text: Message body
            turn_id: Optional turn identifier for log correlation
        """
        turn_id = turn_id or str(uuid4())
        async with self._locks.lock_for(user_id):
            state_before = await self._states.get_state(user_id)
            try:
                await self._route(user_id, text, state_before, turn_id)
            except Exception as e:
                self._log(
                    user_id,
                    turn_id,
                    level=logging.ERROR,
                    action="unhandled_error",
                    error=repr(e),
                    exc_info=True,
                )
                await self._messenger.send(user_id, UserMessagesES.GENERIC_ERROR, turn_id)
                return

            state_after = await self._states.get_state(user_id)
            if self._transition_logger and state_after != state_before:
                self._transition_logger(user_id, turn_id, state_before.value, state_after.value)

    @staticmethod
    def should_classify(state: DialogueState, text: str) -> bool:
        """
        Decide whether free-text classification applies to a message.

        Args:
            state: Current dialogue state
            text: Raw message

        Returns:
            False in menu-flow and order states, and for bare single digits
        """
        return state not in MENU_FLOW_STATES and not _SINGLE_DIGIT.match(text.strip())

    async def _analyze(self, user_id: str, text: str, turn_id: str) -> Optional[NLPAnalysis]:
        try:
            return await self._nlp.analyze(text)
        except Exception as e:
            self._log(user_id, turn_id, level=logging.WARNING, action="nlp_failed", error=str(e))
            return None

    async def _route(
        self, user_id: str, text: str, state: DialogueState, turn_id: str
    ) -> None:
        classify = self.should_classify(state, text)
        analysis = await self._analyze(user_id, text, turn_id) if classify else None
        self._log(
            user_id,
            turn_id,
            state=state.value,
            classify=classify,
            intent=analysis.intent if analysis else None,
        )

        if await self._handle_farewell(user_id, text, analysis, turn_id):
            return

        if not await self._sessions.exists(user_id):
            await self._sessions.touch(user_id)
            await self._welcome.start(user_id, turn_id)
            return

        if await self._sessions.is_expired(user_id):
            self._log(user_id, turn_id, action="session_expired")
            await self._sessions.reset(user_id)
            await self._messenger.send(user_id, UserMessagesES.SESSION_EXPIRED, turn_id)
            await self._sessions.touch(user_id)
            await self._welcome.start(user_id, turn_id)
            return

        await self._sessions.touch(user_id)

        if analysis is not None and await self._handle_classification(
            user_id, text, state, analysis, turn_id
        ):
            return

        if (
            classify
            and state not in PRODUCT_CONTEXT_STATES
            and detect_product_query(text).matched
            and await self._search.quick_lookup(user_id, text, turn_id)
        ):
            return

        if state == DialogueState.FAQ and detect_faq(text).matched:
            await self._menu.handle_faq(user_id, text, turn_id)
            return

        if await self._handle_shortcuts(user_id, text, state, turn_id):
            return

        await self._dispatch(user_id, text, state, turn_id)

    async def _handle_farewell(
        self, user_id: str, text: str, analysis: Optional[NLPAnalysis], turn_id: str
    ) -> bool:
        detection = detect_farewell(text)
        nlp_farewell = (
            analysis is not None
            and analysis.intent in FAREWELL_INTENTS
            and analysis.confidence > INTENT_CONFIDENCE
        )
        if not detection.matched and not nlp_farewell:
            return False

        if nlp_farewell and analysis.answer and analysis.confidence > FAREWELL_ANSWER_CONFIDENCE:
            reply = analysis.answer
        else:
            reply = UserMessagesES.farewell(detection.category or "despedida_general")

        self._log(user_id, turn_id, action="farewell", category=detection.category)
        await self._messenger.send(user_id, reply, turn_id)
        await self._sessions.reset(user_id)
        return True

    async def _handle_classification(
        self,
        user_id: str,
        text: str,
        state: DialogueState,
        analysis: NLPAnalysis,
        turn_id: str,
    ) -> bool:
        if analysis.answer and analysis.confidence > AUTO_REPLY_CONFIDENCE:
            self._log(user_id, turn_id, action="auto_reply", intent=analysis.intent)
            await self._messenger.send(user_id, analysis.answer, turn_id)
            return True

        greeting = detect_greeting(text)
        nlp_greeting = analysis.intent == GREETING_INTENT and analysis.confidence > INTENT_CONFIDENCE
        if (greeting.confidence >= GREETING_CONFIDENCE or nlp_greeting) and state in IDLE_STATES:
            await self._welcome.start(user_id, turn_id)
            return True

        if state in PRODUCT_CONTEXT_STATES:
            return False

        if analysis.intent == HELP_INTENT and analysis.confidence > INTENT_CONFIDENCE:
            await self._messenger.send(user_id, UserMessagesES.HELP, turn_id)
            await self._menu.show_main_menu(user_id, turn_id)
            return True

        if analysis.sentiment_score is not None and analysis.sentiment_score < NEGATIVE_SENTIMENT:
            self._log(user_id, turn_id, action="negative_sentiment", score=analysis.sentiment_score)
            await self._messenger.send(user_id, UserMessagesES.EMPATHETIC_REDIRECT, turn_id)
            await self._menu.show_main_menu(user_id, turn_id)
            return True

        return False

    async def _handle_shortcuts(
        self, user_id: str, text: str, state: DialogueState, turn_id: str
    ) -> bool:
        lowered = text.strip().lower()

        if lowered in MENU_KEYWORDS:
            await self._menu.show_main_menu(user_id, turn_id)
            return True

        if (
            any(keyword in lowered for keyword in ORDER_KEYWORDS)
            and "confirmar" not in lowered
            and not state.is_order_state
        ):
            await self._order.start(user_id, turn_id)
            return True

        if any(keyword in lowered for keyword in CART_KEYWORDS):
            await self._order.show_cart(user_id, turn_id)
            return True

        if (
            any(keyword in lowered for keyword in PRICE_KEYWORDS)
            and not state.is_product_search_state
            and not state.is_order_state
        ):
            await self._search.start(user_id, turn_id)
            return True

        return False

    async def _dispatch(
        self, user_id: str, text: str, state: DialogueState, turn_id: str
    ) -> None:
        handlers: dict[DialogueState, Callable[[str, str, str], Any]] = {
            DialogueState.AWAITING_FIRST_NAME_LASTNAME: self._welcome.handle_full_name,
            DialogueState.MENU: self._menu.handle_main_menu,
            DialogueState.PRODUCT_INFO: self._search.handle_query,
            DialogueState.ORDERS_MENU: self._menu.handle_orders_menu,
            DialogueState.FAQ: self._menu.handle_faq,
            DialogueState.PRODUCT_SEARCH_AWAITING_QUERY: self._search.handle_query,
            DialogueState.PRODUCT_SEARCH_AWAITING_SELECTION: self._search.handle_selection,
            DialogueState.PRODUCT_SEARCH_SHOWING_DETAILS: self._search.handle_details_action,
            DialogueState.ORDER_AWAITING_PRODUCT_LIST: self._order.handle_product_list,
            DialogueState.ORDER_RESOLVING_AMBIGUOUS_PRODUCTS: self._order.handle_ambiguous_selection,
            DialogueState.ORDER_AWAITING_ADD_MORE_DECISION: self._order.handle_add_more_decision,
            DialogueState.ORDER_AWAITING_DELIVERY_METHOD: self._order.handle_delivery_method,
            DialogueState.ORDER_AWAITING_ADDRESS: self._order.handle_address,
            DialogueState.ORDER_AWAITING_CITY: self._order.handle_city,
            DialogueState.ORDER_AWAITING_DISTRICT: self._order.handle_district,
            DialogueState.ORDER_AWAITING_COURIER: self._order.handle_courier,
            DialogueState.ORDER_AWAITING_CONFIRMATION: self._order.handle_confirmation,
        }
        handler = handlers.get(state)
        if handler is None:
            await self._welcome.start(user_id, turn_id)
            return
        await handler(user_id, text, turn_id)
