"""WhatsApp Cloud API (Meta) utility functions for webhook handling."""

import hashlib
import hmac
from typing import Any, Optional

from fastapi import HTTPException, Request, status

from app.infrastructure.config.settings import settings

SIGNATURE_HEADER = "X-Hub-Signature-256"


def verify_subscription(mode: Optional[str], token: Optional[str]) -> bool:
    """
    Check a webhook verification handshake.

    Args:
        mode: hub.mode query parameter
        token: hub.verify_token query parameter

    Returns:
        True if the mode is "subscribe" and the token matches META_VERIFY_TOKEN
    """
    if mode != "subscribe" or not token or not settings.meta_verify_token:
        return False
    return hmac.compare_digest(token, settings.meta_verify_token)


async def validate_meta_signature(request: Request) -> bool:
    """
    Validate the X-Hub-Signature-256 header of a webhook request.

    Args:
        request: FastAPI request object

    Returns:
        True if signature is valid or validation is disabled, False otherwise

    Raises:
        HTTPException: 500 if validation is enabled without META_APP_SECRET,
            403 if the header is missing
    """
    if not settings.meta_validate_signature:
        return True

    if not settings.meta_app_secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Meta signature validation enabled but META_APP_SECRET not configured",
        )

    signature = request.headers.get(SIGNATURE_HEADER)
    if not signature:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Missing {SIGNATURE_HEADER} header",
        )

    body = await request.body()
    computed = hmac.new(
        settings.meta_app_secret.encode("utf-8"),
        body,
        hashlib.sha256,
    ).hexdigest()

    return hmac.compare_digest(f"sha256={computed}", signature)


def extract_text_message(payload: dict[str, Any]) -> Optional[dict[str, str]]:
    """
    Extract the first text message of a webhook payload.

    Args:
        payload: Parsed webhook JSON

    Returns:
        {"from", "text", "message_id"} or None for status updates and non-text messages
    """
    try:
        value = payload["entry"][0]["changes"][0]["value"]
    except (KeyError, IndexError, TypeError):
        return None

    messages = value.get("messages") or []
    if not messages:
        return None

    message = messages[0]
    if message.get("type") != "text":
        return None

    body = (message.get("text") or {}).get("body")
    sender = message.get("from")
    if not body or not sender:
        return None

    return {
        "from": sender,
        "text": body,
        "message_id": message.get("id", ""),
    }
