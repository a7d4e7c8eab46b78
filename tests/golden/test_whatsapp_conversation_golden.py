"""Golden tests for full WhatsApp conversations to prevent regressions."""

import pytest

from app.application.dtos.extraction import ExtractedItem
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState
from app.domain.value_objects.delivery import STORE_PICKUP_ADDRESS
from app.domain.value_objects.product import Product

USER = "56977777777"

PEANUTS = Product(product_id=10, name="Maní Salado 1kg", unit_price=30000, bulk_price=None, stock=20)
TEA_GREEN = Product(product_id=20, name="Té Verde", unit_price=2500, bulk_price=None, stock=5)
ALMONDS_SLICED = Product(
    product_id=2, name="Almendras Laminadas 500g", unit_price=7500, bulk_price=6900, stock=8
)


async def _say(bot, text):
    await bot.router.execute(USER, text)
    return await bot.states.get_state(USER)


async def _registered_in_order(bot):
    """Register through the welcome flow and open a new order."""
    assert await _say(bot, "hola") == DialogueState.AWAITING_FIRST_NAME_LASTNAME
    assert await _say(bot, "Lucas Pérez") == DialogueState.MENU
    assert await _say(bot, "2") == DialogueState.ORDERS_MENU
    assert await _say(bot, "1") == DialogueState.ORDER_AWAITING_PRODUCT_LIST


@pytest.mark.asyncio
async def test_golden_new_user_registration(bot):
    """Golden: a new user greets, registers and lands on the main menu."""
    await _say(bot, "hola")
    await _say(bot, "Lucas Pérez")

    assert bot.sender.texts(USER) == [
        UserMessagesES.WELCOME_NEW_USER,
        UserMessagesES.registration_completed("Lucas"),
    ]
    assert bot.directory.customers[USER].name == "Lucas Pérez"


@pytest.mark.asyncio
async def test_golden_order_with_ambiguous_products_and_pickup(bot, almonds):
    """Golden: mixed single and ambiguous matches, selection, pickup and submission."""
    bot.extractor.items["2 almendras, 1 te"] = [
        ExtractedItem(name="almendras", quantity=2),
        ExtractedItem(name="te", quantity=1),
    ]
    bot.catalog.products["almendras"] = [almonds, ALMONDS_SLICED]
    bot.catalog.products["te"] = [TEA_GREEN]

    await _registered_in_order(bot)

    assert await _say(bot, "2 almendras, 1 te") == DialogueState.ORDER_RESOLVING_AMBIGUOUS_PRODUCTS
    assert await _say(bot, "1: 2") == DialogueState.ORDER_AWAITING_ADD_MORE_DECISION

    cart = await bot.cart.get_cart(USER)
    assert [(line.product_id, line.quantity) for line in cart.lines] == [(20, 1), (1, 2)]
    assert cart.totals().total == 4500

    assert await _say(bot, "2") == DialogueState.ORDER_AWAITING_DELIVERY_METHOD
    assert await _say(bot, "1") == DialogueState.ORDER_AWAITING_CONFIRMATION
    assert await _say(bot, "confirmar pedido") == DialogueState.MENU

    payload = bot.orders.payloads[0]
    assert payload.customer_id == bot.directory.customers[USER].customer_id
    assert payload.courier == "presencial"
    assert payload.delivery_address == STORE_PICKUP_ADDRESS
    texts = bot.sender.texts(USER)
    assert "#501" in texts[-2]
    assert texts[-1] == UserMessagesES.MAIN_MENU
    assert not await bot.cart.has_items(USER)


@pytest.mark.asyncio
async def test_golden_bulk_pricing(bot, almonds):
    """Golden: four units pay the unit price, the fifth switches the line to the bulk price."""
    bot.extractor.items["4 almendras"] = [ExtractedItem(name="almendras", quantity=4)]
    bot.extractor.items["1 almendras"] = [ExtractedItem(name="almendras", quantity=1)]
    bot.catalog.products["almendras"] = [almonds]

    await _registered_in_order(bot)
    await _say(bot, "4 almendras")

    totals = await bot.cart.get_totals(USER)
    assert totals.total == 4000
    assert totals.discount == 0

    assert await _say(bot, "1") == DialogueState.ORDER_AWAITING_PRODUCT_LIST
    await _say(bot, "1 almendras")

    line = (await bot.cart.get_cart(USER)).lines[0]
    assert line.quantity == 5
    assert line.bulk_price_applied is True

    totals = await bot.cart.get_totals(USER)
    assert totals.subtotal_at_unit_price == 5000
    assert totals.total == 4000
    assert totals.discount == 1000
    assert totals.discounted_line_count == 1


@pytest.mark.asyncio
async def test_golden_delivery_below_minimum_switches_to_pickup(bot):
    """Golden: delivery under the minimum offers pickup instead."""
    bot.extractor.items["1 mani"] = [ExtractedItem(name="mani", quantity=1)]
    bot.catalog.products["mani"] = [PEANUTS]

    await _registered_in_order(bot)
    await _say(bot, "1 mani")
    await _say(bot, "2")

    assert await _say(bot, "2") == DialogueState.ORDER_AWAITING_ADD_MORE_DECISION
    shortfall = bot.sender.last(USER)
    assert "Tu pedido actual: $30.000" in shortfall
    assert "Falta: $20.000" in shortfall

    assert await _say(bot, "2") == DialogueState.ORDER_AWAITING_CONFIRMATION


@pytest.mark.asyncio
async def test_golden_farewell_while_giving_address(bot):
    """Golden: a farewell in the middle of delivery data ends the session."""
    bot.extractor.items["2 mani"] = [ExtractedItem(name="mani", quantity=2)]
    bot.catalog.products["mani"] = [PEANUTS]

    await _registered_in_order(bot)
    await _say(bot, "2 mani")
    await _say(bot, "2")
    assert await _say(bot, "2") == DialogueState.ORDER_AWAITING_ADDRESS

    assert await _say(bot, "gracias, nos vemos") == DialogueState.INITIAL

    assert bot.sender.last(USER) == UserMessagesES.farewell("gratitud")
    assert not await bot.sessions.exists(USER)
    assert not await bot.cart.has_items(USER)


@pytest.mark.asyncio
async def test_golden_inactivity_resets_context_then_expires(bot, almonds):
    """Golden: the monitor resets context at 8 minutes, then expires the idle session."""
    bot.extractor.items["1 almendras"] = [ExtractedItem(name="almendras", quantity=1)]
    bot.catalog.products["almendras"] = [almonds]

    await _registered_in_order(bot)
    await _say(bot, "1 almendras")

    bot.clock.advance(minutes=8, seconds=30)
    await bot.monitor.sweep()
    assert await bot.states.get_state(USER) == DialogueState.MENU
    assert await bot.cart.has_items(USER)

    bot.clock.advance(minutes=15, seconds=1)
    assert (await bot.monitor.sweep())[USER] == "expired"
    assert not await bot.sessions.exists(USER)
    assert not await bot.cart.has_items(USER)
