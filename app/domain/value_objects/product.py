"""Catalog product value object."""

from dataclasses import dataclass
from typing import Optional

LOW_STOCK_LIMIT = 10


@dataclass(frozen=True)
class Product:
    """Product as returned by the catalog search."""

    product_id: int
    name: str
    unit_price: int
    bulk_price: Optional[int]
    stock: int

    @property
    def has_bulk_price(self) -> bool:
        """True when the bulk price is a real discount."""
        return bool(self.bulk_price) and 0 < self.bulk_price < self.unit_price

    @property
    def in_stock(self) -> bool:
        """True when at least one unit is available."""
        return self.stock > 0

    @property
    def low_stock(self) -> bool:
        """True when few units remain."""
        return 0 < self.stock <= LOW_STOCK_LIMIT
