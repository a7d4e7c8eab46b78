"""Cart entity and quantity-tier pricing rules."""

from dataclasses import dataclass, field
from typing import Optional

BULK_THRESHOLD = 5


def applied_unit_price(quantity: int, unit_price: int, bulk_price: Optional[int]) -> int:
    """
    Resolve the per-unit price for a quantity.

    The bulk price applies only from BULK_THRESHOLD units on, and only when it
    is a real discount over the unit price.

    Args:
        quantity: Units in the line
        unit_price: Regular per-unit price
        bulk_price: Wholesale per-unit price (may be None or 0)

    Returns:
        Price charged per unit
    """
    if quantity >= BULK_THRESHOLD and bulk_price and 0 < bulk_price < unit_price:
        return bulk_price
    return unit_price


@dataclass
class CartLine:
    """One product's quantity and computed pricing within a cart."""

    product_id: int
    name: str
    quantity: int
    unit_price: int
    bulk_price: Optional[int]
    available_stock: int
    applied_price: int = 0
    line_total: int = 0
    bulk_price_applied: bool = False

    def __post_init__(self) -> None:
        """Compute pricing for the initial quantity."""
        self.reprice()

    def reprice(self) -> None:
        """Recompute applied price and line total from the current quantity."""
        self.applied_price = applied_unit_price(self.quantity, self.unit_price, self.bulk_price)
        self.bulk_price_applied = self.applied_price != self.unit_price
        self.line_total = self.applied_price * self.quantity

    def set_quantity(self, quantity: int) -> None:
        """Change quantity and reprice."""
        self.quantity = quantity
        self.reprice()

    @property
    def subtotal_at_unit_price(self) -> int:
        """Line total if no bulk discount applied."""
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CartTotals:
    """Aggregated cart figures."""

    subtotal_at_unit_price: int = 0
    discount: int = 0
    total: int = 0
    line_count: int = 0
    unit_count: int = 0
    discounted_line_count: int = 0


@dataclass
class Cart:
    """Per-user ordered list of cart lines."""

    user_id: str
    lines: list[CartLine] = field(default_factory=list)

    def find_line(self, product_id: int) -> Optional[CartLine]:
        """Return the line for a product, if present."""
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def remove_line(self, product_id: int) -> Optional[CartLine]:
        """Remove and return the line for a product, if present."""
        line = self.find_line(product_id)
        if line is not None:
            self.lines.remove(line)
        return line

    def is_empty(self) -> bool:
        """True when the cart holds no lines."""
        return not self.lines

    def totals(self) -> CartTotals:
        """
        Compute cart totals.

        Returns:
            CartTotals where discount equals subtotal minus total
        """
        subtotal = sum(line.subtotal_at_unit_price for line in self.lines)
        total = sum(line.line_total for line in self.lines)
        return CartTotals(
            subtotal_at_unit_price=subtotal,
            discount=subtotal - total,
            total=total,
            line_count=len(self.lines),
            unit_count=sum(line.quantity for line in self.lines),
            discounted_line_count=sum(1 for line in self.lines if line.bulk_price_applied),
        )
