"""Unit tests for CartService."""

import pytest

from app.application.use_cases.cart_service import (
    INVALID_QUANTITY,
    PRODUCT_NOT_IN_CART,
    STOCK_INSUFFICIENT,
)
from app.domain.value_objects.product import Product

USER = "56911111111"


@pytest.mark.asyncio
async def test_add_to_cart_creates_line_with_bulk_price(bot, almonds):
    """Test adding five units applies the bulk price."""
    result = await bot.cart.add_to_cart(USER, almonds, 5)

    assert result.success is True
    assert result.line.applied_price == 800
    assert result.line.line_total == 4000
    assert result.line.bulk_price_applied is True
    assert result.totals.discount == 1000


@pytest.mark.asyncio
async def test_add_to_cart_at_unit_price_below_threshold(bot, almonds):
    """Test adding four units keeps the unit price."""
    result = await bot.cart.add_to_cart(USER, almonds, 4)

    assert result.line.applied_price == 1000
    assert result.line.line_total == 4000
    assert result.line.bulk_price_applied is False


@pytest.mark.asyncio
async def test_add_same_product_merges_quantity(bot, almonds):
    """Test a second add merges into the existing line and reprices it."""
    await bot.cart.add_to_cart(USER, almonds, 3)
    result = await bot.cart.add_to_cart(USER, almonds, 2)

    cart = await bot.cart.get_cart(USER)
    assert len(cart.lines) == 1
    assert cart.lines[0].quantity == 5
    assert cart.lines[0].applied_price == 800
    assert result.totals.unit_count == 5


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [0, -1, 2.5, True])
async def test_add_rejects_invalid_quantity(bot, almonds, quantity):
    """Test non-positive or non-integer quantities are rejected."""
    result = await bot.cart.add_to_cart(USER, almonds, quantity)

    assert result.success is False
    assert result.error_code == INVALID_QUANTITY
    assert not await bot.cart.has_items(USER)


@pytest.mark.asyncio
async def test_add_rejects_quantity_above_stock(bot, almonds):
    """Test a single add cannot exceed available stock."""
    result = await bot.cart.add_to_cart(USER, almonds, 11)

    assert result.success is False
    assert result.error_code == STOCK_INSUFFICIENT
    assert "10" in result.message


@pytest.mark.asyncio
async def test_merged_quantity_cannot_exceed_stock(bot, almonds):
    """Test the merged quantity is validated and the line left untouched."""
    await bot.cart.add_to_cart(USER, almonds, 8)
    result = await bot.cart.add_to_cart(USER, almonds, 3)

    assert result.success is False
    assert result.error_code == STOCK_INSUFFICIENT
    assert "Ya tienes 8" in result.message
    assert (await bot.cart.get_cart(USER)).lines[0].quantity == 8


@pytest.mark.asyncio
async def test_update_quantity_validates_cached_stock(bot, almonds):
    """Test quantity updates use the stock recorded on the line."""
    await bot.cart.add_to_cart(USER, almonds, 2)

    too_many = await bot.cart.update_quantity(USER, almonds.product_id, 11)
    updated = await bot.cart.update_quantity(USER, almonds.product_id, 6)

    assert too_many.error_code == STOCK_INSUFFICIENT
    assert updated.success is True
    assert updated.line.applied_price == 800


@pytest.mark.asyncio
async def test_update_and_remove_missing_product(bot):
    """Test operations on a product that is not in the cart."""
    update = await bot.cart.update_quantity(USER, 99, 1)
    remove = await bot.cart.remove_from_cart(USER, 99)

    assert update.error_code == PRODUCT_NOT_IN_CART
    assert remove.error_code == PRODUCT_NOT_IN_CART


@pytest.mark.asyncio
async def test_remove_from_cart_returns_line_and_totals(bot, almonds):
    """Test removing a line returns it with the new totals."""
    tea = Product(product_id=2, name="Té Verde", unit_price=2500, bulk_price=None, stock=3)
    await bot.cart.add_to_cart(USER, almonds, 1)
    await bot.cart.add_to_cart(USER, tea, 1)

    result = await bot.cart.remove_from_cart(USER, almonds.product_id)

    assert result.success is True
    assert result.line.product_id == almonds.product_id
    assert result.totals.total == 2500


@pytest.mark.asyncio
async def test_totals_are_stable_without_mutation(bot, almonds):
    """Test get_totals is idempotent."""
    await bot.cart.add_to_cart(USER, almonds, 6)

    first = await bot.cart.get_totals(USER)
    second = await bot.cart.get_totals(USER)

    assert first == second
    assert first.discount == first.subtotal_at_unit_price - first.total


@pytest.mark.asyncio
async def test_clear_is_idempotent(bot, almonds):
    """Test clearing twice leaves an empty cart."""
    await bot.cart.add_to_cart(USER, almonds, 1)

    await bot.cart.clear(USER)
    await bot.cart.clear(USER)

    assert not await bot.cart.has_items(USER)


@pytest.mark.asyncio
async def test_get_cart_discards_cart_of_expired_session(bot, almonds):
    """Test cart reads are expiry-aware between monitor sweeps."""
    await bot.sessions.touch(USER)
    await bot.cart.add_to_cart(USER, almonds, 2)

    bot.clock.advance(minutes=16)

    assert (await bot.cart.get_cart(USER)).is_empty()
    assert await bot.cart_repository.get(USER) is None


@pytest.mark.asyncio
async def test_order_line_items(bot, almonds):
    """Test the cart converts into backend line items."""
    await bot.cart.add_to_cart(USER, almonds, 3)

    items = await bot.cart.order_line_items(USER)

    assert [(item.product_id, item.quantity) for item in items] == [(1, 3)]
