"""Redis de-duplication store adapter."""

from typing import Optional

from redis import asyncio as aioredis

from app.application.ports.message_deduplication_store import MessageDeduplicationStore


class RedisMessageDeduplicationStore(MessageDeduplicationStore):
    """Redis adapter remembering handled WhatsApp message ids."""

    KEY_PREFIX = "whatsapp:processed:"

    def __init__(self, redis_url: str) -> None:
        """
        Initialize Redis de-duplication store.

        Args:
            redis_url: Redis connection URL
        """
        self._redis_url = redis_url
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, message_id: str) -> str:
        """
        Make Redis key for a message id.

        Args:
            message_id: WhatsApp message identifier (wamid)

        Returns:
            Redis key string
        """
        return f"{self.KEY_PREFIX}{message_id}"

    async def is_processed(self, key: str) -> bool:
        """
        Check if a message has been handled.

        Args:
            key: WhatsApp message identifier

        Returns:
            True if the message has been handled, False otherwise
        """
        client = await self._get_client()
        exists = await client.exists(self._make_key(key))
        return exists > 0

    async def mark_processed(self, key: str, ttl_seconds: int) -> None:
        """
        Mark a message as handled with a TTL.

        Args:
            key: WhatsApp message identifier
            ttl_seconds: Time-to-live in seconds
        """
        client = await self._get_client()
        await client.setex(self._make_key(key), ttl_seconds, "1")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.close()
            self._client = None
