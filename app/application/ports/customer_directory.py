"""Customer directory port."""

from abc import ABC, abstractmethod

from app.application.dtos.customer import CustomerValidation
from app.domain.value_objects.customer_identity import CustomerIdentity


class CustomerDirectory(ABC):
    """Port interface for customer validation and registration."""

    @abstractmethod
    async def validate_by_phone(self, phone: str) -> CustomerValidation:
        """
        Check whether a phone number belongs to a registered customer.

        Args:
            phone: WhatsApp phone number

        Returns:
            Validation result with the customer when registered

        Raises:
            BackendApiError: If the backend is unreachable or fails
        """
        pass

    @abstractmethod
    async def register_customer(self, phone: str, full_name: str) -> CustomerIdentity:
        """
        Register a new customer.

        Args:
            phone: WhatsApp phone number
            full_name: First name and last name

        Returns:
            Registered customer identity

        Raises:
            BackendApiError: If registration is rejected or fails
        """
        pass
