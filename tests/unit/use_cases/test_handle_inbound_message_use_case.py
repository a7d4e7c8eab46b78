"""Unit tests for the dialogue router."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.application.dtos.nlp import NLPAnalysis
from app.application.ports.nlp_classifier import NLPClassifier
from app.application.use_cases.handle_inbound_message_use_case import HandleInboundMessageUseCase
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState
from app.domain.value_objects.customer_identity import CustomerIdentity

USER = "56966666666"
TURN = "turn-1"


class StubNLP(NLPClassifier):
    """Returns a fixed analysis, or raises."""

    def __init__(self, analysis=None, error=None):
        self.analysis = analysis or NLPAnalysis()
        self.error = error

    async def analyze(self, text):
        if self.error:
            raise self.error
        return self.analysis


def _router(bot, nlp, transition_logger=None):
    return HandleInboundMessageUseCase(
        bot.sessions,
        bot.states,
        bot.messenger,
        nlp,
        bot.welcome_flow,
        bot.menu_flow,
        bot.search_flow,
        bot.order_flow,
        bot.locks,
        transition_logger=transition_logger,
    )


async def _active_in(bot, state):
    await bot.sessions.touch(USER)
    await bot.states.set_state(USER, state)


def _register(bot):
    bot.directory.customers[USER] = CustomerIdentity(customer_id=7, name="Lucas Pérez", phone=USER)


@pytest.mark.parametrize(
    "state, text, expected",
    [
        (DialogueState.INITIAL, "hola", True),
        (DialogueState.FAQ, "donde están", True),
        (DialogueState.PRODUCT_INFO, "almendras", True),
        (DialogueState.MENU, "hola", False),
        (DialogueState.AWAITING_FIRST_NAME_LASTNAME, "Lucas Pérez", False),
        (DialogueState.PRODUCT_SEARCH_AWAITING_SELECTION, "el primero", False),
        (DialogueState.ORDER_AWAITING_CITY, "Talca", False),
        (DialogueState.FAQ, " 3 ", False),
    ],
)
def test_should_classify(state, text, expected):
    """Test classification is off in menu-flow and order states and for single digits."""
    assert HandleInboundMessageUseCase.should_classify(state, text) is expected


@pytest.mark.asyncio
async def test_new_user_greeting_starts_registration(bot):
    """Test a first message creates a session and asks for the full name."""
    await bot.router.execute(USER, "hola", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.WELCOME_NEW_USER]
    assert await bot.sessions.exists(USER)
    assert await bot.states.get_state(USER) == DialogueState.AWAITING_FIRST_NAME_LASTNAME


@pytest.mark.asyncio
async def test_registration_completes_and_shows_menu(bot):
    """Test a valid full name registers the customer."""
    await bot.router.execute(USER, "hola", TURN)

    await bot.router.execute(USER, "Lucas Pérez", TURN)

    assert bot.sender.last(USER) == UserMessagesES.registration_completed("Lucas")
    assert bot.directory.customers[USER].name == "Lucas Pérez"
    assert await bot.states.get_state(USER) == DialogueState.MENU


@pytest.mark.asyncio
async def test_registration_rejects_single_word(bot):
    """Test the name prompt repeats for a one-word reply."""
    await bot.router.execute(USER, "hola", TURN)

    await bot.router.execute(USER, "Lucas", TURN)

    assert bot.sender.last(USER) == UserMessagesES.ASK_FULL_NAME
    assert await bot.states.get_state(USER) == DialogueState.AWAITING_FIRST_NAME_LASTNAME


@pytest.mark.asyncio
async def test_returning_customer_is_greeted_by_name(bot):
    """Test a registered phone skips registration."""
    _register(bot)

    await bot.router.execute(USER, "hola", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.welcome_returning_user("Lucas")]
    assert await bot.states.get_state(USER) == DialogueState.MENU


@pytest.mark.asyncio
async def test_expired_session_restarts_conversation(bot, almonds):
    """Test a message after the TTL resets and re-enters the welcome flow."""
    await _active_in(bot, DialogueState.MENU)
    await bot.cart.add_to_cart(USER, almonds, 1)
    bot.clock.advance(minutes=16)

    await bot.router.execute(USER, "1", TURN)

    assert bot.sender.texts(USER) == [
        UserMessagesES.SESSION_EXPIRED,
        UserMessagesES.WELCOME_NEW_USER,
    ]
    assert not await bot.cart.has_items(USER)
    assert await bot.states.get_state(USER) == DialogueState.AWAITING_FIRST_NAME_LASTNAME


@pytest.mark.asyncio
async def test_farewell_mid_order_resets_session(bot, almonds):
    """Test a farewell is honoured in any state, even without classification."""
    await _active_in(bot, DialogueState.ORDER_AWAITING_ADDRESS)
    await bot.cart.add_to_cart(USER, almonds, 2)

    await bot.router.execute(USER, "gracias, nos vemos", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.farewell("gratitud")]
    assert not await bot.sessions.exists(USER)
    assert not await bot.cart.has_items(USER)
    assert await bot.states.get_state(USER) == DialogueState.INITIAL


@pytest.mark.asyncio
async def test_confident_nlp_farewell_uses_its_answer(bot):
    """Test a confident farewell intent replies with the classifier answer."""
    await _active_in(bot, DialogueState.FAQ)
    nlp = StubNLP(NLPAnalysis(intent="despedida", confidence=0.9, answer="¡Chao!"))

    await _router(bot, nlp).execute(USER, "me retiro por hoy", TURN)

    assert bot.sender.texts(USER) == ["¡Chao!"]
    assert not await bot.sessions.exists(USER)


@pytest.mark.asyncio
async def test_menu_keyword_from_order_state(bot):
    """Test "menu" leaves the order flow for the main menu."""
    await _active_in(bot, DialogueState.ORDER_AWAITING_CITY)

    await bot.router.execute(USER, "Menú", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.MAIN_MENU]
    assert await bot.states.get_state(USER) == DialogueState.MENU


@pytest.mark.asyncio
async def test_order_keyword_starts_order(bot):
    """Test an order phrase outside the order flow starts a new order."""
    await _active_in(bot, DialogueState.MENU)

    await bot.router.execute(USER, "quiero hacer un pedido", TURN)

    assert bot.sender.last(USER) == UserMessagesES.ORDER_START
    assert await bot.states.get_state(USER) == DialogueState.ORDER_AWAITING_PRODUCT_LIST


@pytest.mark.asyncio
async def test_cart_keyword_shows_cart(bot, almonds):
    """Test "carrito" shows the cart without changing state."""
    await _active_in(bot, DialogueState.ORDER_AWAITING_DELIVERY_METHOD)
    await bot.cart.add_to_cart(USER, almonds, 1)

    await bot.router.execute(USER, "ver carrito", TURN)

    assert "Resumen del Carrito" in bot.sender.last(USER)
    assert await bot.states.get_state(USER) == DialogueState.ORDER_AWAITING_DELIVERY_METHOD


@pytest.mark.asyncio
async def test_price_keyword_starts_search(bot):
    """Test a catalogue request enters the product search flow."""
    await _active_in(bot, DialogueState.MENU)

    await bot.router.execute(USER, "precios", TURN)

    assert await bot.states.get_state(USER) == DialogueState.PRODUCT_SEARCH_AWAITING_QUERY


@pytest.mark.asyncio
async def test_confident_intent_auto_reply(bot):
    """Test a confident intent with a canned answer replies directly."""
    await _active_in(bot, DialogueState.FAQ)

    await bot.router.execute(USER, "hola", TURN)

    assert bot.sender.texts(USER) == ["¡Hola! 👋 ¿En qué puedo ayudarte hoy?"]
    assert await bot.states.get_state(USER) == DialogueState.FAQ


@pytest.mark.asyncio
async def test_greeting_in_idle_state_reenters_welcome(bot):
    """Test a short greeting from an idle state shows the welcome again."""
    _register(bot)
    await _active_in(bot, DialogueState.ORDERS_MENU)

    await bot.router.execute(USER, "buenas", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.welcome_returning_user("Lucas")]
    assert await bot.states.get_state(USER) == DialogueState.MENU


@pytest.mark.asyncio
async def test_help_intent_shows_menu(bot):
    """Test a help request outside product context shows help and the menu."""
    await _active_in(bot, DialogueState.FAQ)
    nlp = StubNLP(NLPAnalysis(intent="solicitar_ayuda", confidence=0.8))

    await _router(bot, nlp).execute(USER, "me pueden orientar", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.HELP, UserMessagesES.MAIN_MENU]


@pytest.mark.asyncio
async def test_help_intent_ignored_in_product_context(bot):
    """Test product-context states fall through to their handler."""
    await _active_in(bot, DialogueState.PRODUCT_INFO)
    nlp = StubNLP(NLPAnalysis(intent="solicitar_ayuda", confidence=0.8))

    await _router(bot, nlp).execute(USER, "me pueden orientar", TURN)

    assert UserMessagesES.HELP not in bot.sender.texts(USER)


@pytest.mark.asyncio
async def test_negative_sentiment_redirects(bot):
    """Test strongly negative messages get an empathetic redirect."""
    await _active_in(bot, DialogueState.ORDERS_MENU)
    nlp = StubNLP(NLPAnalysis(sentiment_score=-0.8))

    await _router(bot, nlp).execute(USER, "esto es horrible", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.EMPATHETIC_REDIRECT, UserMessagesES.MAIN_MENU]


@pytest.mark.asyncio
async def test_nlp_failure_falls_through_to_state_handler(bot):
    """Test classifier errors do not break routing."""
    await _active_in(bot, DialogueState.FAQ)
    nlp = StubNLP(error=RuntimeError("nlp down"))

    await _router(bot, nlp).execute(USER, "tienen estacionamiento propio", TURN)

    assert bot.sender.last(USER) == UserMessagesES.faq_question_received(
        "tienen estacionamiento propio"
    )


@pytest.mark.asyncio
async def test_quick_product_lookup_outside_search(bot, almonds):
    """Test a product question from FAQ shows the product directly."""
    await _active_in(bot, DialogueState.FAQ)
    bot.extractor.terms["¿tienen almendras?"] = "almendras"
    bot.catalog.products["almendras"] = [almonds]

    await bot.router.execute(USER, "¿tienen almendras?", TURN)

    assert "Almendras Enteras 1kg" in bot.sender.last(USER)
    assert await bot.states.get_state(USER) == DialogueState.PRODUCT_SEARCH_SHOWING_DETAILS


@pytest.mark.asyncio
async def test_faq_question_detected_in_faq_state(bot):
    """Test free-text FAQ questions are answered by topic."""
    await _active_in(bot, DialogueState.FAQ)

    await bot.router.execute(USER, "cuando cierran el sabado", TURN)

    assert bot.sender.last(USER) == UserMessagesES.FAQ_ANSWERS["horarios"]


@pytest.mark.asyncio
async def test_main_menu_dispatch(bot):
    """Test numeric options in MENU are dispatched to the menu flow."""
    await _active_in(bot, DialogueState.MENU)

    await bot.router.execute(USER, "3", TURN)

    assert bot.sender.last(USER) == UserMessagesES.FAQ_MENU
    assert await bot.states.get_state(USER) == DialogueState.FAQ


@pytest.mark.asyncio
async def test_unexpected_error_sends_generic_apology(bot):
    """Test handler failures are contained and answered."""
    await _active_in(bot, DialogueState.MENU)
    bot.menu_flow.handle_main_menu = AsyncMock(side_effect=RuntimeError("boom"))

    await bot.router.execute(USER, "1", TURN)

    assert bot.sender.texts(USER) == [UserMessagesES.GENERIC_ERROR]
    assert await bot.states.get_state(USER) == DialogueState.MENU


@pytest.mark.asyncio
async def test_transition_logger_receives_state_change(bot):
    """Test state transitions are reported with before and after values."""
    transition_logger = MagicMock()
    router = _router(bot, StubNLP(), transition_logger=transition_logger)

    await router.execute(USER, "hola", TURN)

    transition_logger.assert_called_once_with(
        USER, TURN, "INITIAL", "AWAITING_FIRST_NAME_LASTNAME"
    )


@pytest.mark.asyncio
async def test_messages_from_same_user_are_serialized(bot):
    """Test two concurrent messages are handled one after the other."""
    _register(bot)
    await _active_in(bot, DialogueState.MENU)

    await asyncio.gather(
        bot.router.execute(USER, "2", "turn-a"),
        bot.router.execute(USER, "1", "turn-b"),
    )

    assert bot.sender.texts(USER)[0] == UserMessagesES.ORDERS_MENU
    assert bot.sender.texts(USER)[1] == UserMessagesES.ORDER_START
    assert await bot.states.get_state(USER) == DialogueState.ORDER_AWAITING_PRODUCT_LIST


@pytest.mark.asyncio
async def test_reset_user_waits_for_in_flight_message(bot, almonds):
    """Test a reset does not interleave with a message still being handled."""
    await _active_in(bot, DialogueState.MENU)
    await bot.cart.add_to_cart(USER, almonds, 1)
    entered = asyncio.Event()
    release = asyncio.Event()

    async def in_flight_message():
        async with bot.locks.lock_for(USER):
            entered.set()
            await release.wait()

    holder = asyncio.create_task(in_flight_message())
    await entered.wait()
    reset = asyncio.create_task(bot.router.reset_user(USER))
    await asyncio.sleep(0)
    assert await bot.sessions.exists(USER)

    release.set()
    await asyncio.gather(holder, reset)

    assert not await bot.sessions.exists(USER)
    assert await bot.states.get_state(USER) == DialogueState.INITIAL
    assert not await bot.cart.has_items(USER)
