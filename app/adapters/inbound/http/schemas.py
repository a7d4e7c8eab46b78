"""HTTP adapter schemas for external integrations."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatusNotification(BaseModel):
    """Order status change pushed by the backend."""

    id_pedido: Optional[str] = None
    estado: Optional[str] = None
    telefono: Optional[str] = None

    model_config = ConfigDict(
        coerce_numbers_to_str=True,
        json_schema_extra={
            "example": {
                "id_pedido": "1024",
                "estado": "despachado",
                "telefono": "56912345678",
            }
        },
    )

    def is_complete(self) -> bool:
        """True when every field is present and non-empty."""
        return bool(self.id_pedido and self.estado and self.telefono)


class NotificationResponse(BaseModel):
    """Result of an order status notification."""

    success: bool
    message: str = Field(..., description="Human-readable outcome")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Notificación enviada",
            }
        }
    )
