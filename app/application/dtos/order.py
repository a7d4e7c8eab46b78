"""Order DTOs."""

from typing import Any, Optional

from pydantic import Field

from app.application.dtos.base import DTO


class OrderLineItem(DTO):
    """Product and quantity sent to the backend."""

    product_id: int
    quantity: int = Field(..., ge=1)


class OrderPayload(DTO):
    """Order creation request."""

    customer_id: int
    delivery_address: str
    courier: str
    channel: str = "whatsapp"
    payment_method: str = "transferencia"
    line_items: list[OrderLineItem]
    manual_discount: int = 0

    def to_api(self) -> dict[str, Any]:
        """
        Serialize with the backend's field names.

        Returns:
            JSON-ready dictionary
        """
        return {
            "id_cliente": self.customer_id,
            "direccion_envio": self.delivery_address,
            "courier": self.courier,
            "canal": self.channel,
            "metodo_pago": self.payment_method,
            "detalles": [
                {"id_producto": item.product_id, "cantidad": item.quantity}
                for item in self.line_items
            ],
            "descuento_manual": self.manual_discount,
        }


class OrderCreated(DTO):
    """Backend acknowledgement of a created order."""

    order_id: str


class CustomerOrderItem(DTO):
    """Line of an existing order."""

    quantity: int
    name: str


class CustomerOrder(DTO):
    """Order in progress as listed by the backend."""

    order_id: str
    created_at: Optional[str] = None
    status: str = ""
    payment_status: str = ""
    total: int = 0
    items: list[CustomerOrderItem] = Field(default_factory=list)
