"""Money in Chilean Pesos value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MoneyCLP:
    """Money value object in Chilean Pesos (no minor units)."""

    amount: int

    def __post_init__(self) -> None:
        """Validate money amount."""
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    def format(self) -> str:
        """
        Format using the es-CL convention.

        Returns:
            Amount with dot thousands separators, e.g. "$5.990"
        """
        return "$" + f"{self.amount:,}".replace(",", ".")


def format_clp(amount: int) -> str:
    """Format a raw integer amount as Chilean Pesos."""
    return MoneyCLP(amount).format()
