"""Background sweep emitting inactivity warnings, context resets and expiries."""

import asyncio
import logging
from typing import Any, Callable, Optional

from app.application.ports.cart_repository import CartRepository
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.application.use_cases.user_locks import UserLockRegistry
from app.application.use_cases.user_messages_es import UserMessagesES
from app.domain.entities.conversation_state import DialogueState
from app.domain.entities.session import CONTEXT_RESET_AT, SESSION_TTL, WARNING_AT

MONITOR_TURN_ID = "session-monitor"


class SessionMonitor:
    """
    Periodically checks every session for inactivity.

    For each user, in priority order and at most one action per sweep:
    expiry notice plus full reset, then the 3-minute warning, then the
    context reset back to the main menu. Each notice fires once per session
    until the user is active again.
    """

    def __init__(
        self,
        sessions: SessionLifecycle,
        states: ConversationStateService,
        cart_repository: CartRepository,
        messenger: Messenger,
        locks: UserLockRegistry,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize session monitor.

        Args:
            sessions: Session lifecycle service
            states: Conversation state service
            cart_repository: Raw cart store (read without the expiry side effect)
            messenger: Best-effort outbound messenger
            locks: Per-user lock registry shared with the router
            logger: Optional session event logger (session_id, event, level, **kwargs)
        """
        self._sessions = sessions
        self._states = states
        self._carts = cart_repository
        self._messenger = messenger
        self._locks = locks
        self._logger = logger

    def _log(self, session_id: str, event: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(session_id, event, **kwargs)

    async def sweep(self) -> dict[str, Optional[str]]:
        """
        Run one pass over all sessions.

        A failure for one user is logged and does not affect the others.

        Returns:
            Mapping of user id to the action taken ("expired", "warned",
            "context_reset", or None)
        """
        user_ids = await self._sessions.list_user_ids()
        results = await asyncio.gather(
            *(self._check_user_locked(user_id) for user_id in user_ids),
            return_exceptions=True,
        )

        actions: dict[str, Optional[str]] = {}
        for user_id, result in zip(user_ids, results):
            if isinstance(result, Exception):
                self._log(user_id, "monitor_failed", level=logging.ERROR, error=repr(result))
                actions[user_id] = None
            else:
                actions[user_id] = result

        self._locks.prune(await self._sessions.list_user_ids())
        return actions

    async def _check_user_locked(self, user_id: str) -> Optional[str]:
        async with self._locks.lock_for(user_id):
            return await self.check_user(user_id)

    async def check_user(self, user_id: str) -> Optional[str]:
        """
        Apply the highest-priority pending inactivity action for one user.

        Args:
            user_id: User identifier

        Returns:
            The action taken, or None
        """
        session = await self._sessions.get_session(user_id)
        if session is None:
            return None

        now = self._sessions.now()
        elapsed = session.elapsed(now)

        if elapsed >= SESSION_TTL:
            if session.expiry_notice_sent:
                return None
            cart = await self._carts.get(user_id)
            had_items = cart is not None and not cart.is_empty()
            session.expiry_notice_sent = True
            await self._sessions.save(session)
            await self._messenger.send(
                user_id, UserMessagesES.session_finished(had_items), MONITOR_TURN_ID
            )
            await self._sessions.reset(user_id)
            self._log(user_id, "expired", cart_discarded=had_items)
            return "expired"

        if elapsed >= WARNING_AT:
            if session.warning_sent:
                return None
            session.warning_sent = True
            await self._sessions.save(session)
            await self._messenger.send(user_id, UserMessagesES.SESSION_WARNING, MONITOR_TURN_ID)
            self._log(user_id, "warning_sent", elapsed_seconds=int(elapsed.total_seconds()))
            return "warned"

        if elapsed >= CONTEXT_RESET_AT and not session.context_reset_sent:
            session.context_reset_sent = True
            session.refresh_activity(now)
            await self._sessions.save(session)
            await self._states.clear(user_id)
            await self._messenger.send(user_id, UserMessagesES.CONTEXT_RESET, MONITOR_TURN_ID)
            await self._messenger.send(user_id, UserMessagesES.MAIN_MENU, MONITOR_TURN_ID)
            await self._states.set_state(user_id, DialogueState.MENU)
            self._log(user_id, "context_reset")
            return "context_reset"

        return None

    async def run(self, interval_seconds: float) -> None:
        """
        Sweep forever at a fixed interval until cancelled.

        Args:
            interval_seconds: Seconds between sweeps
        """
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.sweep()
            except Exception as e:
                self._log("-", "sweep_failed", level=logging.ERROR, error=repr(e))
