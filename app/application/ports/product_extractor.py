"""Product extractor port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.application.dtos.extraction import ExtractedItem


class ProductExtractor(ABC):
    """Port interface for turning free text into product requests."""

    @abstractmethod
    async def extract_single_term(self, text: str) -> Optional[str]:
        """
        Extract the main product search term.

        Args:
            text: User message

        Returns:
            Search term, or None if no product is mentioned
        """
        pass

    @abstractmethod
    async def extract_multiple_with_quantities(self, text: str) -> list[ExtractedItem]:
        """
        Extract every product mention with its quantity.

        Args:
            text: User message (e.g. "2 almendras, 1 te")

        Returns:
            Extracted items (empty if none found)
        """
        pass
