"""Customer DTOs."""

from typing import Optional

from app.application.dtos.base import DTO
from app.domain.value_objects.customer_identity import CustomerIdentity


class CustomerValidation(DTO):
    """Result of looking a phone number up in the backend."""

    registered: bool
    customer: Optional[CustomerIdentity] = None
