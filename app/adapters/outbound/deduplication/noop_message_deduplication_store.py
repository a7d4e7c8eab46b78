"""No-op de-duplication store for when de-duplication is disabled."""

from app.application.ports.message_deduplication_store import MessageDeduplicationStore


class NoOpMessageDeduplicationStore(MessageDeduplicationStore):
    """No-op adapter that never reports a message as already handled."""

    async def is_processed(self, key: str) -> bool:
        """
        Always return False (not processed).

        Args:
            key: Unique identifier (ignored)

        Returns:
            Always False
        """
        return False

    async def mark_processed(self, key: str, ttl_seconds: int) -> None:
        """
        No-op (does nothing).

        Args:
            key: Unique identifier (ignored)
            ttl_seconds: TTL (ignored)
        """
        pass
