"""Message de-duplication store port."""

from abc import ABC, abstractmethod


class MessageDeduplicationStore(ABC):
    """Port interface for remembering already-handled webhook messages."""

    @abstractmethod
    async def is_processed(self, key: str) -> bool:
        """
        Check if a key has been processed.

        Args:
            key: Unique identifier for the processed item

        Returns:
            True if the key has been processed, False otherwise
        """
        pass

    @abstractmethod
    async def mark_processed(self, key: str, ttl_seconds: int) -> None:
        """
        Mark a key as processed with a TTL.

        Args:
            key: Unique identifier for the processed item
            ttl_seconds: Time-to-live in seconds
        """
        pass

    async def close(self) -> None:
        """Release any connection held by the store."""
        pass
