"""Pure message detectors returning DetectionResult."""

from app.application.use_cases.detectors.faq_detector import detect_faq
from app.application.use_cases.detectors.farewell_detector import detect_farewell
from app.application.use_cases.detectors.greeting_detector import detect_greeting
from app.application.use_cases.detectors.product_query_detector import detect_product_query

__all__ = [
    "detect_faq",
    "detect_farewell",
    "detect_greeting",
    "detect_product_query",
]
