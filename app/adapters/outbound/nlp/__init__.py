"""NLP classifier outbound adapter."""

from app.adapters.outbound.nlp.keyword_nlp_classifier import KeywordNLPClassifier

__all__ = [
    "KeywordNLPClassifier",
]
