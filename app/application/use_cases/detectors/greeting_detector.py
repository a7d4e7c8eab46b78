"""Greeting detector."""

import re

from app.application.dtos.detection import DetectionResult
from app.application.use_cases.detectors.text_normalization import contains_phrase, normalize

GREETING_PHRASES = (
    "hola",
    "hello",
    "hi",
    "hey",
    "ey",
    "buen dia",
    "buenos dias",
    "buenas tardes",
    "buenas noches",
    "buena tarde",
    "buena noche",
    "saludos",
    "cordial saludo",
    "un saludo",
    "que tal",
    "como estas",
    "como esta",
    "como andas",
    "ola",
    "holaa",
    "holaaa",
    "holi",
    "holiii",
)

# Conversation openers: weak signal, reported below the greeting threshold
OPENER_PHRASES = (
    "disculpe",
    "disculpa",
    "perdon",
    "con permiso",
    "necesito",
    "quiero",
    "quisiera",
    "me gustaria",
    "podria",
    "podrias",
    "pueden",
    "ayuda",
    "informacion",
    "consulta",
)

SHORT_GREETINGS = ("hola", "ola", "buenas", "hello", "hey")

FULL_MESSAGE_PATTERNS = (
    re.compile(r"^ho+la+$"),
    re.compile(r"^bu+en+\s*dia+$"),
    re.compile(r"^bu+en+as?\s*(tardes?|noches?)$"),
    re.compile(r"^que\s*tal"),
    re.compile(r"^como\s*(estas?|andas?)"),
)

SHORT_MESSAGE_LENGTH = 15


def _greeting_category(normalized: str) -> str:
    if contains_phrase(normalized, "buenos dias") or contains_phrase(normalized, "buen dia"):
        return "morning"
    if contains_phrase(normalized, "buenas tardes") or contains_phrase(normalized, "buena tarde"):
        return "afternoon"
    if contains_phrase(normalized, "buenas noches") or contains_phrase(normalized, "buena noche"):
        return "evening"
    if any(contains_phrase(normalized, p) for p in ("que tal", "como estas", "como andas")):
        return "casual"
    return "general"


def detect_greeting(message: str) -> DetectionResult:
    """
    Detect whether a message is a greeting.

    Args:
        message: Raw user message

    Returns:
        DetectionResult with category morning/afternoon/evening/casual/general,
        or "opener" with low confidence for polite request openers
    """
    normalized = normalize(message)
    if not normalized:
        return DetectionResult.no_match()

    if any(pattern.search(normalized) for pattern in FULL_MESSAGE_PATTERNS):
        return DetectionResult(matched=True, category=_greeting_category(normalized), confidence=1.0)

    if any(contains_phrase(normalized, phrase) for phrase in GREETING_PHRASES):
        return DetectionResult(matched=True, category=_greeting_category(normalized), confidence=0.9)

    if len(normalized) <= SHORT_MESSAGE_LENGTH and any(
        token.startswith(g) for token in normalized.split() for g in SHORT_GREETINGS
    ):
        return DetectionResult(matched=True, category="general", confidence=0.75)

    if any(contains_phrase(normalized, phrase) for phrase in OPENER_PHRASES):
        return DetectionResult(matched=True, category="opener", confidence=0.5)

    return DetectionResult.no_match()
