"""Customer identity value object."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CustomerIdentity:
    """Customer as known by the backend, cached for the lifetime of a session."""

    customer_id: int
    name: str
    phone: Optional[str] = None

    @property
    def first_name(self) -> str:
        """First word of the registered name."""
        parts = self.name.split()
        return parts[0] if parts else self.name
