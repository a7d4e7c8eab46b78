"""Farewell and gratitude detector."""

import re

from app.application.dtos.detection import DetectionResult
from app.application.use_cases.detectors.text_normalization import normalize

FAREWELL_PHRASES = frozenset(
    normalize(phrase)
    for phrase in (
        "gracias",
        "muchas gracias",
        "mil gracias",
        "te agradezco",
        "agradezco",
        "thank you",
        "thanks",
        "adiós",
        "chao",
        "chau",
        "bye",
        "hasta luego",
        "hasta la vista",
        "nos vemos",
        "hasta pronto",
        "que tengas buen día",
        "que tengas buena tarde",
        "que tengas buena noche",
        "buen día",
        "buena tarde",
        "buena noche",
        "gracias por todo",
        "gracias por la ayuda",
        "gracias por la información",
        "muchas gracias por todo",
        "te agradezco mucho",
        "muy agradecido",
        "muy agradecida",
        "eso es todo",
        "es todo por ahora",
        "no necesito más",
        "ya no necesito nada",
        "perfecto gracias",
        "excelente gracias",
        "listo gracias",
        "ok gracias",
        "está bien gracias",
        "muy bien gracias",
        "que tenga buen día",
        "que tenga buena tarde",
        "que tenga buena noche",
        "saludos",
        "cordiales saludos",
        "hasta otra oportunidad",
        "nos estaremos comunicando",
        "nos vemos luego",
        "hablamos después",
        "cuídate",
        "que estés bien",
    )
)

FAREWELL_PATTERNS = (
    re.compile(r"^(muchas\s+)?gracias(\s+(por\s+todo|por\s+la\s+ayuda|por\s+la\s+informacion))?$"),
    re.compile(r"^(muy\s+)?(agradecid[oa]|agradezco)(\s+mucho)?$"),
    re.compile(r"^(adios|chao|chau|bye)(\s+y\s+gracias)?$"),
    re.compile(r"^hasta\s+(luego|pronto|la\s+vista|otra\s+oportunidad)$"),
    re.compile(r"^que\s+(tengas?|tenga)\s+(buen|buena)\s+(dia|tarde|noche)$"),
    re.compile(r"^(eso\s+es\s+todo|es\s+todo\s+por\s+ahora)(\s+gracias)?$"),
    re.compile(r"^(ya\s+)?no\s+necesito\s+(mas|nada)(\s+gracias)?$"),
    re.compile(r"^(perfecto|excelente|listo|ok|esta\s+bien|muy\s+bien)\s+gracias$"),
    re.compile(r"^nos\s+(vemos|estaremos\s+comunicando)(\s+(luego|despues))?$"),
)

SHORT_MESSAGE_KEYWORDS = ("gracias", "chao", "bye", "adios", "hasta")
SHORT_MESSAGE_LENGTH = 20


def _farewell_category(normalized: str) -> str:
    if "gracias" in normalized or "agradezco" in normalized:
        return "gratitud"
    if any(word in normalized for word in ("adios", "chao", "bye")):
        return "despedida"
    if "hasta" in normalized:
        return "despedida_temporal"
    if "buen" in normalized:
        return "buenos_deseos"
    if "todo" in normalized or "necesito" in normalized:
        return "finalizacion"
    return "despedida_general"


def detect_farewell(message: str) -> DetectionResult:
    """
    Detect whether a message closes the conversation.

    Args:
        message: Raw user message

    Returns:
        DetectionResult with category gratitud/despedida/despedida_temporal/
        buenos_deseos/finalizacion/despedida_general
    """
    normalized = normalize(message)
    if not normalized:
        return DetectionResult.no_match()

    if normalized in FAREWELL_PHRASES:
        return DetectionResult(matched=True, category=_farewell_category(normalized), confidence=1.0)

    if any(pattern.search(normalized) for pattern in FAREWELL_PATTERNS):
        return DetectionResult(matched=True, category=_farewell_category(normalized), confidence=0.95)

    if len(normalized) <= SHORT_MESSAGE_LENGTH and any(
        token.startswith(keyword)
        for token in normalized.split()
        for keyword in SHORT_MESSAGE_KEYWORDS
    ):
        return DetectionResult(matched=True, category=_farewell_category(normalized), confidence=0.75)

    return DetectionResult.no_match()
