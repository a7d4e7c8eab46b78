"""Session repository outbound adapter."""

from app.adapters.outbound.session.in_memory_session_repository import (
    InMemorySessionRepository,
)

__all__ = [
    "InMemorySessionRepository",
]
