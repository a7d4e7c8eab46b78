"""Order gateway port."""

from abc import ABC, abstractmethod

from app.application.dtos.order import CustomerOrder, OrderCreated, OrderPayload


class OrderGateway(ABC):
    """Port interface for order submission and lookup."""

    @abstractmethod
    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        """
        Submit a complete order.

        Args:
            payload: Order creation request

        Returns:
            Created order acknowledgement

        Raises:
            BackendApiError: With a human-readable detail on any failure
        """
        pass

    @abstractmethod
    async def list_customer_orders(self, customer_id: int) -> list[CustomerOrder]:
        """
        List orders in progress for a customer.

        Args:
            customer_id: Backend customer identifier

        Returns:
            Orders in progress (empty if none)

        Raises:
            BackendApiError: If the backend is unreachable or fails
        """
        pass
