"""Heuristic detector DTOs."""

from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO


class DetectionResult(DTO):
    """Outcome of a pattern-based message detector."""

    matched: bool = False
    category: Optional[str] = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)

    @classmethod
    def no_match(cls) -> "DetectionResult":
        """Result for a message the detector does not recognise."""
        return cls(matched=False, category=None, confidence=0.0)
