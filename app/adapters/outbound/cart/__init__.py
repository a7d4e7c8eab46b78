"""Cart repository outbound adapter."""

from app.adapters.outbound.cart.in_memory_cart_repository import InMemoryCartRepository

__all__ = [
    "InMemoryCartRepository",
]
