"""Deterministic intent and sentiment classifier."""

from app.application.dtos.nlp import NLPAnalysis
from app.application.ports.nlp_classifier import NLPClassifier
from app.application.use_cases.detectors.text_normalization import contains_phrase, normalize

INTENT_DOCUMENTS: dict[str, tuple[str, ...]] = {
    "saludo": (
        "hola", "buenos días", "buenas tardes", "buenas noches", "qué tal",
        "cómo estás", "hey", "saludos",
    ),
    "despedida": (
        "adiós", "hasta luego", "nos vemos", "chau", "bye", "hasta pronto",
        "me voy", "gracias por todo",
    ),
    "agradecimiento": (
        "gracias", "muchas gracias", "te agradezco", "muy amable",
        "perfecto gracias", "excelente",
    ),
    "consulta_servicios": (
        "qué servicios ofrecen", "cuáles son sus servicios", "qué hacen",
        "información sobre servicios",
    ),
    "solicitar_ayuda": (
        "ayuda", "necesito ayuda", "puedes ayudarme", "no entiendo",
        "estoy perdido", "qué opciones tengo",
    ),
    "consulta_horarios": (
        "qué horarios tienen", "cuándo están abiertos", "horarios de atención",
        "a qué hora abren",
    ),
    "contacto": (
        "cómo los contacto", "número de teléfono", "dirección",
        "dónde están ubicados", "email",
    ),
}

INTENT_ANSWERS: dict[str, str] = {
    "saludo": "¡Hola! 👋 ¿En qué puedo ayudarte hoy?",
    "despedida": "¡Hasta luego! 👋 Que tengas un excelente día.",
    "agradecimiento": "¡De nada! 😊 Estoy aquí para ayudarte cuando lo necesites.",
    "consulta_servicios": (
        "Te puedo ayudar con información sobre nuestros servicios. "
        'Escribe "menú" para ver todas las opciones disponibles.'
    ),
    "solicitar_ayuda": (
        "Por supuesto, estoy aquí para ayudarte. "
        'Escribe "menú" para ver las opciones o dime específicamente qué necesitas.'
    ),
    "consulta_horarios": (
        "Nuestros horarios de atención son de lunes a viernes de 7:30 AM a 16:30 PM."
    ),
    "contacto": (
        'Puedes contactarnos por WhatsApp o escribir "contacto" para ver toda la información.'
    ),
}

NEGATIVE_TERMS = (
    "malo", "mala", "pesimo", "pesima", "horrible", "terrible", "molesto", "molesta",
    "enojado", "enojada", "frustrado", "frustrada", "odio", "basura", "estafa",
    "no funciona", "no me gusta", "lento", "peor", "decepcionado", "decepcionada",
)

POSITIVE_TERMS = (
    "bueno", "buena", "excelente", "genial", "perfecto", "gracias", "feliz",
    "encanta", "maravilloso", "rapido",
)


class KeywordNLPClassifier(NLPClassifier):
    """
    Scores a message against a small Spanish intent corpus.

    An exact corpus phrase yields confidence 1.0; a phrase contained in a longer
    message scales from 0.5 towards 1.0 with the share of words it covers.
    """

    async def analyze(self, text: str) -> NLPAnalysis:
        """
        Classify a message.

        Args:
            text: User message

        Returns:
            Best intent with its canned answer, plus a sentiment score
        """
        normalized = normalize(text)
        if not normalized:
            return NLPAnalysis()

        best_intent = None
        best_confidence = 0.0
        word_count = len(normalized.split())

        for intent, documents in INTENT_DOCUMENTS.items():
            for document in documents:
                target = normalize(document)
                if normalized == target:
                    confidence = 1.0
                elif contains_phrase(normalized, target):
                    coverage = len(target.split()) / word_count
                    confidence = round(0.5 + 0.5 * coverage, 3)
                else:
                    continue
                if confidence > best_confidence:
                    best_intent, best_confidence = intent, confidence

        return NLPAnalysis(
            intent=best_intent,
            confidence=best_confidence,
            answer=INTENT_ANSWERS.get(best_intent) if best_intent else None,
            sentiment_score=self._sentiment(normalized),
        )

    @staticmethod
    def _sentiment(normalized: str) -> float:
        negatives = sum(1 for term in NEGATIVE_TERMS if contains_phrase(normalized, term))
        positives = sum(1 for term in POSITIVE_TERMS if contains_phrase(normalized, term))
        if negatives + positives == 0:
            return 0.0
        return round((positives - negatives) / (negatives + positives), 3)
