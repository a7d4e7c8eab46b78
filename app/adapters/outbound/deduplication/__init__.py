"""Webhook message de-duplication outbound adapters."""

from app.adapters.outbound.deduplication.noop_message_deduplication_store import (
    NoOpMessageDeduplicationStore,
)
from app.adapters.outbound.deduplication.redis_message_deduplication_store import (
    RedisMessageDeduplicationStore,
)

__all__ = [
    "NoOpMessageDeduplicationStore",
    "RedisMessageDeduplicationStore",
]
