"""Unit tests for cart line pricing and totals."""

import pytest

from app.domain.entities.cart import BULK_THRESHOLD, Cart, CartLine, applied_unit_price


def _line(quantity: int, unit_price: int = 1000, bulk_price=800, stock: int = 10) -> CartLine:
    return CartLine(
        product_id=1,
        name="Almendras",
        quantity=quantity,
        unit_price=unit_price,
        bulk_price=bulk_price,
        available_stock=stock,
    )


def test_bulk_threshold_is_five():
    """Test bulk pricing starts at five units."""
    assert BULK_THRESHOLD == 5


def test_unit_price_below_threshold():
    """Test four units are charged at unit price."""
    line = _line(4)

    assert line.applied_price == 1000
    assert line.line_total == 4000
    assert line.bulk_price_applied is False


def test_bulk_price_at_threshold():
    """Test five units switch to the bulk price."""
    line = _line(5)

    assert line.applied_price == 800
    assert line.line_total == 4000
    assert line.bulk_price_applied is True


@pytest.mark.parametrize(
    "bulk_price",
    [None, 0, 1000, 1200],
)
def test_bulk_price_ignored_when_not_a_discount(bulk_price):
    """Test missing, zero or non-discount bulk prices keep the unit price."""
    assert applied_unit_price(10, 1000, bulk_price) == 1000


def test_set_quantity_reprices_line():
    """Test changing quantity recomputes price and total."""
    line = _line(2)
    line.set_quantity(6)

    assert line.applied_price == 800
    assert line.line_total == 4800

    line.set_quantity(1)
    assert line.applied_price == 1000
    assert line.line_total == 1000


def test_totals_discount_is_subtotal_minus_total():
    """Test totals aggregate lines and report the bulk discount."""
    cart = Cart(user_id="56911111111")
    cart.lines.append(_line(5))
    cart.lines.append(
        CartLine(
            product_id=2,
            name="Té Verde",
            quantity=2,
            unit_price=2500,
            bulk_price=None,
            available_stock=20,
        )
    )

    totals = cart.totals()

    assert totals.subtotal_at_unit_price == 10000
    assert totals.total == 9000
    assert totals.discount == totals.subtotal_at_unit_price - totals.total == 1000
    assert totals.line_count == 2
    assert totals.unit_count == 7
    assert totals.discounted_line_count == 1
    assert cart.totals() == totals


def test_empty_cart_totals():
    """Test an empty cart has zero totals."""
    cart = Cart(user_id="56911111111")

    assert cart.is_empty()
    assert cart.totals().total == 0
    assert cart.totals().line_count == 0


def test_remove_line():
    """Test removing a line returns it and leaves the cart empty."""
    cart = Cart(user_id="56911111111", lines=[_line(1)])

    removed = cart.remove_line(1)

    assert removed is not None
    assert cart.is_empty()
    assert cart.remove_line(1) is None
