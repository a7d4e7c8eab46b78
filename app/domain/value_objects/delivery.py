"""Delivery modality and courier value objects."""

from enum import Enum
from typing import Optional

STORE_PICKUP_ADDRESS = "Retiro en tienda"
DELIVERY_MINIMUM_CLP = 50000


class DeliveryMethod(str, Enum):
    """How the customer receives the order."""

    PICKUP = "pickup"
    DELIVERY = "delivery"


class Courier(str, Enum):
    """Courier identifiers accepted by the backend order API."""

    STARKEN = "starken"
    CHEVALIER = "chevalier"
    VARMONTT = "varmontt"
    IN_PERSON = "presencial"

    @property
    def display_name(self) -> str:
        """Name shown to the customer."""
        if self is Courier.IN_PERSON:
            return "Retiro presencial"
        return self.value.capitalize()

    @classmethod
    def from_choice(cls, text: str) -> Optional["Courier"]:
        """
        Resolve a courier from a numeric option or a keyword.

        Args:
            text: Raw user reply

        Returns:
            Matching courier, or None if the reply is not a valid choice
        """
        normalized = text.strip().lower()
        by_number = {"1": cls.STARKEN, "2": cls.CHEVALIER, "3": cls.VARMONTT}
        if normalized in by_number:
            return by_number[normalized]
        for courier in (cls.STARKEN, cls.CHEVALIER, cls.VARMONTT):
            if courier.value in normalized:
                return courier
        return None
