"""NLP classification DTOs."""

from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO


class NLPAnalysis(DTO):
    """Intent and sentiment classification of a message."""

    intent: Optional[str] = Field(default=None, description="Detected intent name")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    answer: Optional[str] = Field(default=None, description="Canned answer for the intent")
    sentiment_score: Optional[float] = Field(
        default=None, ge=-1.0, le=1.0, description="Negative values mean negative sentiment"
    )
