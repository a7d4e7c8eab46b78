"""Two-stage product extractor with a circuit breaker."""

import logging
import time
from typing import Callable, Optional

from app.application.dtos.extraction import ExtractedItem
from app.application.ports.product_extractor import ProductExtractor
from app.infrastructure.logging.logger import logger


class FallbackProductExtractor(ProductExtractor):
    """
    Primary extractor guarded by a deterministic fallback.

    Any primary failure is answered by the fallback. After ``failure_threshold``
    consecutive failures the primary is skipped until ``cooldown_seconds`` pass.
    """

    def __init__(
        self,
        primary: Optional[ProductExtractor],
        fallback: ProductExtractor,
        failure_threshold: int = 3,
        cooldown_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize extractor.

        Args:
            primary: Preferred extractor (None to always use the fallback)
            fallback: Extractor used when the primary fails or is open
            failure_threshold: Consecutive failures that open the circuit
            cooldown_seconds: Time the circuit stays open
            clock: Monotonic clock (injectable for tests)
        """
        self._primary = primary
        self._fallback = fallback
        self._failure_threshold = failure_threshold
        self._cooldown_seconds = cooldown_seconds
        self._clock = clock
        self._consecutive_failures = 0
        self._opened_at: Optional[float] = None

    @property
    def is_open(self) -> bool:
        """True while the primary extractor is being skipped."""
        if self._opened_at is None:
            return False
        if self._clock() - self._opened_at >= self._cooldown_seconds:
            # Half-open: allow the next call through
            self._opened_at = None
            self._consecutive_failures = self._failure_threshold - 1
            return False
        return True

    async def extract_single_term(self, text: str) -> Optional[str]:
        """
        Extract the main product search term.

        Args:
            text: User message

        Returns:
            Search term, or None if no product is mentioned
        """
        if self._primary is not None and not self.is_open:
            try:
                term = await self._primary.extract_single_term(text)
                self._record_success()
                return term
            except Exception as err:
                self._record_failure(err)
        return await self._fallback.extract_single_term(text)

    async def extract_multiple_with_quantities(self, text: str) -> list[ExtractedItem]:
        """
        Extract every product mention with its quantity.

        Args:
            text: User message

        Returns:
            Extracted items (empty if none found)
        """
        if self._primary is not None and not self.is_open:
            try:
                items = await self._primary.extract_multiple_with_quantities(text)
                self._record_success()
                return items
            except Exception as err:
                self._record_failure(err)
        return await self._fallback.extract_multiple_with_quantities(text)

    def _record_success(self) -> None:
        self._consecutive_failures = 0

    def _record_failure(self, err: Exception) -> None:
        self._consecutive_failures += 1
        logger.log(
            logging.WARNING,
            "component='product_extraction' | event='primary_failed' | "
            f"error={str(err)!r} | consecutive_failures={self._consecutive_failures}",
        )
        if self._consecutive_failures >= self._failure_threshold:
            self._opened_at = self._clock()
