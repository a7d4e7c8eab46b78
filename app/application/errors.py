"""Application-level errors raised by collaborators."""

from typing import Optional


class BackendApiError(Exception):
    """Backend API call failed; carries a message fit for the customer."""

    def __init__(self, detail: str, status_code: Optional[int] = None) -> None:
        """
        Initialize error.

        Args:
            detail: Human-readable detail in Spanish
            status_code: HTTP status code, or None for transport failures
        """
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class ProductExtractionError(Exception):
    """Language-model product extraction failed."""
