"""Deterministic keyword-based product extractor."""

import re
from typing import Optional

from app.application.dtos.extraction import ExtractedItem
from app.application.ports.product_extractor import ProductExtractor

PRODUCT_KEYWORDS = (
    "almendra",
    "almendras",
    "nuez",
    "nueces",
    "maní",
    "mani",
    "pistacho",
    "pistachos",
    "cashew",
    "cashews",
    "castaña",
    "castañas",
    "avellana",
    "avellanas",
    "arándano",
    "arándanos",
    "arandano",
    "arandanos",
    "pasas",
    "pasa",
    "té verde",
    "te verde",
    "té negro",
    "te negro",
    "canela",
    "cacao",
    "chocolate",
    "gomitas",
    "mixto",
    "mix",
    "semilla",
    "semillas",
)

# "3 almendras", "2 kilos de maní", "1 paquete de canela"
QUANTITY_PATTERN = re.compile(
    r"(\d+)\s*(kilos?|kg|gramos?|gr|paquetes?|unidades?)?\s*(de\s+)?(\w+)",
    re.IGNORECASE,
)


def _contains_keyword(text: str, keyword: str) -> bool:
    return re.search(rf"\b{re.escape(keyword)}\b", text) is not None


class KeywordProductExtractor(ProductExtractor):
    """Extracts products by matching a fixed keyword list."""

    def __init__(self, keywords: tuple[str, ...] = PRODUCT_KEYWORDS) -> None:
        """
        Initialize extractor.

        Args:
            keywords: Known product keywords, in priority order
        """
        self._keywords = keywords

    async def extract_single_term(self, text: str) -> Optional[str]:
        """
        Return the first known product keyword found in the text.

        Args:
            text: User message

        Returns:
            Matching keyword, or None
        """
        lowered = text.lower().strip()
        for keyword in self._keywords:
            if _contains_keyword(lowered, keyword):
                return keyword
        return None

    async def extract_multiple_with_quantities(self, text: str) -> list[ExtractedItem]:
        """
        Extract "<quantity> <product>" pairs, falling back to bare keywords.

        Args:
            text: User message

        Returns:
            Extracted items without duplicates
        """
        lowered = text.lower().strip()
        items: list[ExtractedItem] = []
        seen: set[str] = set()

        for match in QUANTITY_PATTERN.finditer(lowered):
            quantity = int(match.group(1))
            keyword = self._match_keyword(match.group(4), lowered[match.end() :])
            if keyword and keyword not in seen and quantity > 0:
                items.append(ExtractedItem(name=keyword, quantity=quantity))
                seen.add(keyword)

        if not items:
            for keyword in self._keywords:
                if keyword not in seen and _contains_keyword(lowered, keyword):
                    items.append(ExtractedItem(name=keyword, quantity=1))
                    seen.add(keyword)

        return items

    def _match_keyword(self, word: str, rest: str) -> Optional[str]:
        """Map a matched word (plus the text after it) to a known keyword."""
        following = re.match(r"\s*(\w+)", rest)
        next_word = following.group(1) if following else ""
        two_words = f"{word} {next_word}".strip()
        if two_words in self._keywords:
            return two_words
        if word in self._keywords:
            return word

        prefixes = [k for k in self._keywords if " " not in k and word.startswith(k)]
        if prefixes:
            return max(prefixes, key=len)

        if len(word) >= 2:
            for keyword in self._keywords:
                if " " in keyword and _contains_keyword(keyword, word):
                    return keyword
        return None
