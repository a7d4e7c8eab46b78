"""Unit tests for SessionLifecycle and ConversationStateService."""

from datetime import timedelta

import pytest

from app.domain.entities.conversation_state import DialogueState, OrderDraft, SearchScratch
from app.domain.value_objects.customer_identity import CustomerIdentity
from app.domain.value_objects.delivery import DeliveryMethod

USER = "56922222222"


@pytest.mark.asyncio
async def test_touch_creates_session_with_cleared_flags(bot):
    """Test the first touch creates a fresh session."""
    session = await bot.sessions.touch(USER)

    assert session.created_at == bot.clock.now
    assert session.last_activity_at == bot.clock.now
    assert not session.warning_sent
    assert not session.expiry_notice_sent
    assert not session.context_reset_sent


@pytest.mark.asyncio
async def test_touch_refreshes_existing_session(bot):
    """Test a later touch keeps creation time and moves activity."""
    created = (await bot.sessions.touch(USER)).created_at
    bot.clock.advance(minutes=4)

    session = await bot.sessions.touch(USER)

    assert session.created_at == created
    assert session.last_activity_at == created + timedelta(minutes=4)


@pytest.mark.asyncio
async def test_is_expired_false_for_unknown_user(bot):
    """Test a never-seen user is new, not expired."""
    assert await bot.sessions.is_expired("nobody") is False


@pytest.mark.asyncio
async def test_is_expired_boundary(bot):
    """Test expiry flips just after the TTL."""
    await bot.sessions.touch(USER)

    bot.clock.advance(minutes=15)
    assert await bot.sessions.is_expired(USER) is False

    bot.clock.advance(seconds=1)
    assert await bot.sessions.is_expired(USER) is True


@pytest.mark.asyncio
async def test_reset_cascades_to_state_and_cart(bot, almonds):
    """Test reset removes session, conversation state and cart."""
    await bot.sessions.touch(USER)
    await bot.states.set_state(USER, DialogueState.ORDER_AWAITING_CITY)
    await bot.states.set_scratch(USER, OrderDraft(address="Calle Falsa 123"))
    await bot.cart.add_to_cart(USER, almonds, 2)

    await bot.sessions.reset(USER)

    assert not await bot.sessions.exists(USER)
    assert await bot.states.get_state(USER) == DialogueState.INITIAL
    assert await bot.states.get_scratch(USER, OrderDraft) is None
    assert (await bot.cart.get_cart(USER)).is_empty()


@pytest.mark.asyncio
async def test_remove_is_idempotent(bot):
    """Test removing a missing session does not fail."""
    await bot.sessions.remove(USER)
    await bot.sessions.touch(USER)
    await bot.sessions.remove(USER)

    assert not await bot.sessions.exists(USER)


@pytest.mark.asyncio
async def test_cache_customer_survives_touch(bot):
    """Test the cached customer identity stays on the session."""
    customer = CustomerIdentity(customer_id=7, name="Lucas Pérez", phone=USER)
    await bot.sessions.cache_customer(USER, customer)
    await bot.sessions.touch(USER)

    assert await bot.customers.cached(USER) == customer


@pytest.mark.asyncio
async def test_set_state_keeps_scratch(bot):
    """Test a state change does not drop scratch data."""
    await bot.states.set_scratch(USER, SearchScratch(search_term="nueces"))
    await bot.states.set_state(USER, DialogueState.PRODUCT_SEARCH_AWAITING_SELECTION)

    scratch = await bot.states.get_scratch(USER, SearchScratch)
    assert scratch.search_term == "nueces"


@pytest.mark.asyncio
async def test_get_scratch_filters_by_variant(bot):
    """Test a handler only sees the scratch variant it asks for."""
    await bot.states.set_scratch(USER, SearchScratch(search_term="nueces"))

    assert await bot.states.get_scratch(USER, OrderDraft) is None


@pytest.mark.asyncio
async def test_patch_scratch_merges_incrementally(bot):
    """Test successive patches accumulate on the order draft."""
    await bot.states.patch_scratch(USER, OrderDraft, delivery_method=DeliveryMethod.DELIVERY)
    await bot.states.patch_scratch(USER, OrderDraft, address="Av. Matta 1200")
    await bot.states.patch_scratch(USER, OrderDraft, city="Santiago")

    draft = await bot.states.get_scratch(USER, OrderDraft)
    assert draft.delivery_method == DeliveryMethod.DELIVERY
    assert draft.address == "Av. Matta 1200"
    assert draft.city == "Santiago"


@pytest.mark.asyncio
async def test_patch_scratch_replaces_other_variant(bot):
    """Test patching an order draft over search scratch starts a fresh draft."""
    await bot.states.set_scratch(USER, SearchScratch(search_term="nueces"))

    await bot.states.patch_scratch(USER, OrderDraft, city="Talca")

    draft = await bot.states.get_scratch(USER, OrderDraft)
    assert draft == OrderDraft(city="Talca")


@pytest.mark.asyncio
async def test_clear_scratch_keeps_state(bot):
    """Test clearing scratch leaves the dialogue state."""
    await bot.states.set_state(USER, DialogueState.PRODUCT_INFO)
    await bot.states.set_scratch(USER, SearchScratch())

    await bot.states.clear_scratch(USER)

    assert await bot.states.get_state(USER) == DialogueState.PRODUCT_INFO
    assert (await bot.states.snapshot(USER)).scratch is None
