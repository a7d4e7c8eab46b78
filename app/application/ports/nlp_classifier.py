"""NLP classifier port."""

from abc import ABC, abstractmethod

from app.application.dtos.nlp import NLPAnalysis


class NLPClassifier(ABC):
    """Port interface for intent and sentiment classification."""

    @abstractmethod
    async def analyze(self, text: str) -> NLPAnalysis:
        """
        Classify a message.

        Args:
            text: User message

        Returns:
            Intent, confidence, optional canned answer and sentiment score
        """
        pass
