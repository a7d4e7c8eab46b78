"""In-memory cart repository adapter."""

from typing import Optional

from app.application.ports.cart_repository import CartRepository
from app.domain.entities.cart import Cart


class InMemoryCartRepository(CartRepository):
    """In-memory implementation of cart repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, Cart] = {}

    async def get(self, user_id: str) -> Optional[Cart]:
        """
        Get cart for a user.

        Args:
            user_id: User identifier

        Returns:
            Cart entity, or None if not found
        """
        return self._storage.get(user_id)

    async def save(self, cart: Cart) -> None:
        """
        Save cart.

        Args:
            cart: Cart entity to save
        """
        self._storage[cart.user_id] = cart

    async def delete(self, user_id: str) -> None:
        """
        Delete cart for a user.

        Args:
            user_id: User identifier
        """
        self._storage.pop(user_id, None)
