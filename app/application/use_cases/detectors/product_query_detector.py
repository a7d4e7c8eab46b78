"""Product inquiry detector."""

import re

from app.application.dtos.detection import DetectionResult
from app.application.use_cases.detectors.text_normalization import contains_phrase, normalize

QUERY_PATTERNS = tuple(
    re.compile(pattern)
    for pattern in (
        r"\btienen\s+(.+)",
        r"\bhay\s+(.+)",
        r"\bvenden\s+(.+)",
        r"\bmanejan\s+(.+)",
        r"\btrabajan\s+con\s+(.+)",
        r"\bcuanto\s+(cuesta|cuestan|vale|valen|sale|salen|cobran)\s+(.+)",
        r"\b(precio|valor|costo)\s+(de|del|de las|de los)\s+(.+)",
        r"\bme\s+interesa\s+(.+)",
        r"\bbusco\s+(.+)",
        r"\bestoy\s+buscando\s+(.+)",
        r"\bdonde\s+(encuentro|consigo|tienen|venden)\s+(.+)",
        r"\bcomo\s+consigo\s+(.+)",
        r"\b(stock|disponibilidad)\s+(de|del)\s+(.+)",
        r"\ben\s+stock\s+(.+)",
        r"\bquienes?\s+(tienen|venden|manejan)\s+(.+)",
        r"\bquiero\s+(.+)",
        r"\bnecesito\s+(.+)",
    )
)

PRODUCT_CONTEXT_KEYWORDS = (
    "almendra", "almendras", "nuez", "nueces", "mani", "pistacho", "pistachos",
    "castaña", "castañas", "avellana", "avellanas", "cashew", "cashews", "anacardo",
    "anacardos", "cacao", "chocolate", "chocolates", "cocoa", "hierba", "hierbas",
    "menta", "albahaca", "romero", "tomillo", "cilantro", "salvia", "laurel", "eneldo",
    "mejorana", "te", "tes", "infusion", "infusiones", "tisana", "tisanas", "oregano",
    "comino", "pimienta", "pimenton", "ajo", "cebolla", "perejil", "paprika", "merken",
    "canela", "clavo", "clavos", "jengibre", "curcuma", "curry", "cardamomo", "azafran",
    "nuez moscada", "anis", "mostaza", "mango", "mangos", "piña", "piñas", "pina", "pinas",
    "durazno", "duraznos", "damasco", "damascos", "higo", "higos", "ciruela", "ciruelas",
    "papaya", "papayas", "platano", "frutilla", "frutillas", "frambuesa", "frambuesas",
    "arandano", "arandanos", "cranberry", "cranberries", "mora", "moras", "pasas", "pasa",
    "uva", "uvas", "gomita", "gomitas", "dulce", "dulces", "caramelo", "caramelos",
    "goma", "gomas", "gelatina", "gelatinas", "chicle", "chicles", "semilla", "semillas",
    "chia", "linaza", "sesamo", "girasol", "calabaza", "zapallo", "mix", "mixto", "mixta",
    "mezcla", "surtido",
)


def detect_product_query(message: str) -> DetectionResult:
    """
    Detect whether a message asks about a product.

    Args:
        message: Raw user message

    Returns:
        DetectionResult with category "query_pattern" (inquiry phrasing, with or
        without a known product) or "product_keyword" (known product only)
    """
    normalized = normalize(message)
    if not normalized:
        return DetectionResult.no_match()

    has_pattern = any(pattern.search(normalized) for pattern in QUERY_PATTERNS)
    has_product = any(contains_phrase(normalized, keyword) for keyword in PRODUCT_CONTEXT_KEYWORDS)

    if has_pattern and has_product:
        return DetectionResult(matched=True, category="query_pattern", confidence=0.9)
    if has_product:
        return DetectionResult(matched=True, category="product_keyword", confidence=0.7)
    if has_pattern:
        return DetectionResult(matched=True, category="query_pattern", confidence=0.6)
    return DetectionResult.no_match()
