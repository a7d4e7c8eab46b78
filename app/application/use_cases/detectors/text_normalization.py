"""Text normalization helpers shared by message detectors."""

import re
import unicodedata
from collections.abc import Iterable

_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


def strip_accents(text: str) -> str:
    """Remove diacritics ("está" -> "esta"); "ñ" is kept."""
    decomposed = unicodedata.normalize("NFD", text.replace("ñ", "\0"))
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped).replace("\0", "ñ")


def normalize(text: str) -> str:
    """
    Lowercase, drop punctuation, collapse whitespace and strip accents.

    Args:
        text: Raw message

    Returns:
        Normalized message
    """
    lowered = (text or "").lower().strip()
    cleaned = _SPACES.sub(" ", _NON_WORD.sub(" ", lowered)).strip()
    return strip_accents(cleaned)


def contains_phrase(normalized_text: str, phrase: str) -> bool:
    """True if the phrase appears as whole words in an already normalized text."""
    target = normalize(phrase)
    if not target:
        return False
    return re.search(rf"\b{re.escape(target)}\b", normalized_text) is not None


def count_phrases(normalized_text: str, phrases: Iterable[str]) -> int:
    """Number of distinct phrases present as whole words."""
    return sum(1 for phrase in set(normalize(p) for p in phrases) if contains_phrase(normalized_text, phrase))
