"""Product extraction DTOs."""

from pydantic import Field

from app.application.dtos.base import DTO


class ExtractedItem(DTO):
    """A product mention with its requested quantity."""

    name: str = Field(..., min_length=1, description="Product name as mentioned, lowercased")
    quantity: int = Field(default=1, ge=1, description="Requested units")
