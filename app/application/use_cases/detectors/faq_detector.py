"""Frequently-asked-question detector."""

from app.application.dtos.detection import DetectionResult
from app.application.use_cases.detectors.text_normalization import (
    contains_phrase,
    count_phrases,
    normalize,
)

# Evaluated in order; the first matching category wins
FAQ_PATTERNS: dict[str, dict[str, tuple[str, ...]]] = {
    "horarios": {
        "keywords": (
            "hora", "horario", "horarios", "abren", "abre", "cierran", "cierra",
            "atienden", "atiende", "funcionan", "funciona", "trabajan", "trabaja",
            "abierto", "abiertos", "cerrado", "cerrados",
        ),
        "phrases": (
            "a que hora", "que hora", "hasta que hora", "desde que hora",
            "horario de atencion", "horarios de trabajo", "cuando abren", "cuando cierran",
        ),
    },
    "ubicacion": {
        "keywords": (
            "donde", "ubicacion", "direccion", "local", "tienda", "negocio",
            "establecimiento", "sede", "sucursal", "llegar", "encuentro", "queda",
        ),
        "phrases": (
            "donde esta", "donde queda", "donde se encuentra", "como llegar", "como llego",
            "cual es la direccion", "donde los encuentro",
        ),
    },
    "pedidos": {
        "keywords": (
            "pedido", "pedidos", "entregar", "entrega", "entregas", "domicilio",
            "delivery", "envio", "envios", "despacho", "despachos", "llevar",
            "traer", "mandar", "enviar",
        ),
        "phrases": (
            "hacen pedidos", "toman pedidos", "reciben pedidos", "hacen entregas",
            "entregan a domicilio", "llevan a domicilio", "hacen delivery", "tienen delivery",
            "envian a domicilio", "como pedir", "como hacer pedido",
        ),
    },
    "despacho": {
        "keywords": (
            "despachan", "despacho", "empresa", "empresas", "compania", "companias",
            "transportan", "transporte", "courier", "mensajeria",
        ),
        "phrases": (
            "por cual empresa", "que empresa", "cuales empresas", "con que empresa",
            "quien despacha", "como despachan", "por donde despachan",
        ),
    },
    "pago": {
        "keywords": (
            "pago", "pagos", "pagar", "cobran", "cobra", "efectivo", "tarjeta",
            "tarjetas", "transferencia", "transferencias", "movil", "debito", "credito",
        ),
        "phrases": (
            "como pagar", "formas de pago", "metodos de pago", "como se paga",
            "aceptan tarjeta", "reciben tarjeta", "pago con tarjeta", "pago movil",
        ),
    },
}

SHORT_MESSAGE_LENGTH = 20


def detect_faq(message: str) -> DetectionResult:
    """
    Detect a frequently asked question topic.

    A topic phrase matches outright; otherwise two topic keywords are needed,
    or one keyword in a short message.

    Args:
        message: Raw user message

    Returns:
        DetectionResult with category horarios/ubicacion/pedidos/despacho/pago
    """
    normalized = normalize(message)
    if not normalized:
        return DetectionResult.no_match()

    for category, patterns in FAQ_PATTERNS.items():
        if any(contains_phrase(normalized, phrase) for phrase in patterns["phrases"]):
            return DetectionResult(matched=True, category=category, confidence=0.9)

        keyword_matches = count_phrases(normalized, patterns["keywords"])
        if keyword_matches >= 2:
            return DetectionResult(matched=True, category=category, confidence=0.8)
        if keyword_matches == 1 and len(normalized) <= SHORT_MESSAGE_LENGTH:
            return DetectionResult(matched=True, category=category, confidence=0.6)

    return DetectionResult.no_match()
