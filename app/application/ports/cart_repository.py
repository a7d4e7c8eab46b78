"""Cart repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.cart import Cart


class CartRepository(ABC):
    """Port interface for cart repository."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[Cart]:
        """
        Get cart for a user.

        Args:
            user_id: User identifier

        Returns:
            Cart entity, or None if the user has no cart
        """
        pass

    @abstractmethod
    async def save(self, cart: Cart) -> None:
        """
        Save cart.

        Args:
            cart: Cart entity to save
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """
        Delete cart for a user (idempotent).

        Args:
            user_id: User identifier
        """
        pass
