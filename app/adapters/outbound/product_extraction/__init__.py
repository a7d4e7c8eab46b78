"""Product extraction outbound adapters."""

from app.adapters.outbound.product_extraction.fallback_product_extractor import (
    FallbackProductExtractor,
)
from app.adapters.outbound.product_extraction.keyword_product_extractor import (
    KeywordProductExtractor,
)
from app.adapters.outbound.product_extraction.llm_product_extractor import LLMProductExtractor

__all__ = [
    "FallbackProductExtractor",
    "KeywordProductExtractor",
    "LLMProductExtractor",
]
