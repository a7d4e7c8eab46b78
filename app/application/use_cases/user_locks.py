"""Per-user serialization of message handling and monitor sweeps."""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable


class _UserLock:
    """A lock plus the number of tasks holding or waiting for it."""

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class UserLockRegistry:
    """One asyncio.Lock per user id, shared by the router and the session monitor."""

    def __init__(self) -> None:
        self._locks: dict[str, _UserLock] = {}

    @asynccontextmanager
    async def lock_for(self, user_id: str) -> AsyncIterator[None]:
        """
        Hold the lock of a user for the duration of the block.

        The entry counts every task inside the block or queued for it, so a
        waiter that has been woken but not yet scheduled keeps it alive.

        Args:
            user_id: User to serialize on
        """
        entry = self._locks.get(user_id)
        if entry is None:
            entry = _UserLock()
            self._locks[user_id] = entry
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1

    def is_locked(self, user_id: str) -> bool:
        entry = self._locks.get(user_id)
        return entry is not None and entry.lock.locked()

    def prune(self, active_user_ids: Iterable[str]) -> int:
        """
        Drop unused locks of users without a session.

        Args:
            active_user_ids: Users that still hold a session

        Returns:
            Number of locks removed
        """
        active = set(active_user_ids)
        stale = [
            user_id
            for user_id, entry in self._locks.items()
            if user_id not in active and entry.users == 0
        ]
        for user_id in stale:
            del self._locks[user_id]
        return len(stale)

    def __len__(self) -> int:
        return len(self._locks)
