"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with key=value structured format
_logger = logging.getLogger("manicero_commerce_bot")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def _format_fields(fields: dict[str, Any]) -> str:
    return " | ".join(f"{k}={v!r}" for k, v in fields.items())


def log_turn(
    session_id: str,
    turn_id: str,
    component: str,
    level: int = logging.INFO,
    exc_info: bool = False,
    **kwargs: Any,
) -> None:
    """
    Log structured event for an inbound message turn.

    Args:
        session_id: User identifier (WhatsApp phone number)
        turn_id: Turn identifier (UUID string)
        component: Component name (e.g., 'http', 'router', 'order_flow')
        level: Log level (default: INFO)
        exc_info: Attach the current exception traceback
        **kwargs: Additional structured fields to log
    """
    fields = {
        "session_id": session_id,
        "turn_id": turn_id,
        "component": component,
    }
    fields.update(kwargs)

    _logger.log(level, _format_fields(fields), exc_info=exc_info)


def log_state_transition(
    session_id: str,
    turn_id: str,
    state_before: Optional[str] = None,
    state_after: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log dialogue state transition.

    Args:
        session_id: User identifier
        turn_id: Turn identifier
        state_before: Previous dialogue state
        state_after: New dialogue state
        **kwargs: Additional fields
    """
    fields = {}
    if state_before is not None:
        fields["state_before"] = state_before
    if state_after is not None:
        fields["state_after"] = state_after
    fields.update(kwargs)

    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="state",
        **fields,
    )


def log_session_event(
    session_id: str,
    event: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log session lifecycle event (monitor notices, resets, expiry).

    Args:
        session_id: User identifier
        event: Event name (e.g., 'warning_sent', 'expired', 'context_reset')
        level: Log level (default: INFO)
        **kwargs: Additional fields
    """
    fields = {
        "session_id": session_id,
        "component": "session",
        "event": event,
    }
    fields.update(kwargs)

    _logger.log(level, _format_fields(fields))


# Export logger instance for direct use
logger = _logger
