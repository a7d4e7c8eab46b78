"""HTTP routes."""

from uuid import uuid4

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from app.adapters.inbound.http.meta_utils import (
    extract_text_message,
    validate_meta_signature,
    verify_subscription,
)
from app.adapters.inbound.http.schemas import NotificationResponse, OrderStatusNotification
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_turn, logger
from app.infrastructure.wiring.container import container

router = APIRouter()


def _require_debug_mode() -> None:
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.get("/health/backend", status_code=status.HTTP_200_OK)
async def backend_health_check() -> dict[str, str]:
    """
    Report whether the backend REST API answers its health check.

    Returns:
        "ok" or "unavailable"
    """
    available = await container.backend.check_health()
    return {"status": "ok" if available else "unavailable"}


@router.get("/webhook")
async def verify_webhook(request: Request) -> Response:
    """
    Answer the WhatsApp Cloud API verification handshake.

    Args:
        request: FastAPI request carrying hub.mode, hub.verify_token and hub.challenge

    Returns:
        The challenge as plain text

    Raises:
        HTTPException: 403 if the mode or token do not match
    """
    params = request.query_params
    if not verify_subscription(params.get("hub.mode"), params.get("hub.verify_token")):
        logger.warning("Webhook verification rejected")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Verification failed")

    return PlainTextResponse(params.get("hub.challenge", ""), status_code=status.HTTP_200_OK)


@router.post("/webhook")
async def whatsapp_webhook(request: Request, background_tasks: BackgroundTasks) -> Response:
    """
    Receive WhatsApp Cloud API events.

    Text messages are handed to the dialogue router in the background and
    acknowledged immediately; replies go out through the message sender.

    Args:
        request: FastAPI request object (for signature validation and body)
        background_tasks: FastAPI background task queue

    Returns:
        200 acknowledgement

    Raises:
        HTTPException: 403 on an invalid signature, 404 if the body is not a WhatsApp event
    """
    if not await validate_meta_signature(request):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid Meta signature",
        )

    payload = await request.json()
    if not isinstance(payload, dict) or not payload.get("object"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not a WhatsApp event")

    message = extract_text_message(payload)
    if message is None:
        # Delivery/read statuses and non-text messages
        return JSONResponse({"status": "ignored"}, status_code=status.HTTP_200_OK)

    user_id = message["from"]
    message_id = message["message_id"]
    turn_id = str(uuid4())

    if message_id:
        if await container.dedup_store.is_processed(message_id):
            log_turn(user_id, turn_id, "whatsapp_webhook", action="duplicate", message_id=message_id)
            return JSONResponse({"status": "duplicate"}, status_code=status.HTTP_200_OK)
        await container.dedup_store.mark_processed(message_id, settings.webhook_dedup_ttl_seconds)

    log_turn(
        session_id=user_id,
        turn_id=turn_id,
        component="whatsapp_webhook",
        message_length=len(message["text"]),
        message_id=message_id,
    )

    background_tasks.add_task(container.router.execute, user_id, message["text"], turn_id)
    return JSONResponse({"status": "accepted"}, status_code=status.HTTP_200_OK)


@router.post("/api/notificar-pedido", response_model=NotificationResponse)
async def notify_order_status(notification: OrderStatusNotification) -> JSONResponse:
    """
    Notify a customer that their order changed status.

    Args:
        notification: Order id, new status and customer phone

    Returns:
        200 on delivery, 400 if a field is missing, 500 if sending failed
    """
    if not notification.is_complete():
        return JSONResponse(
            NotificationResponse(
                success=False, message="Faltan campos: id_pedido, estado, telefono"
            ).model_dump(),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    try:
        await container.notify_order_status.execute(
            notification.id_pedido, notification.estado, notification.telefono
        )
    except Exception as e:
        logger.error(f"Order notification failed for {notification.id_pedido}: {e}")
        return JSONResponse(
            NotificationResponse(success=False, message="Error al enviar la notificación").model_dump(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return JSONResponse(
        NotificationResponse(success=True, message="Notificación enviada").model_dump(),
        status_code=status.HTTP_200_OK,
    )


@router.get("/debug/session/{user_id}", status_code=status.HTTP_200_OK)
async def get_session_debug(user_id: str) -> dict:
    """
    Get debug information for a user (only enabled if DEBUG_MODE=true).

    Args:
        user_id: WhatsApp phone number

    Returns:
        Session timing, dialogue state, scratch kind and cart totals

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    _require_debug_mode()

    session = await container.sessions.get_session(user_id)
    conversation = await container.states.snapshot(user_id)
    totals = (await container.cart.get_cart(user_id)).totals()

    return {
        "user_id": user_id,
        "session": (
            {
                "created_at": session.created_at.isoformat(),
                "last_activity_at": session.last_activity_at.isoformat(),
                "elapsed_seconds": int(session.elapsed(container.sessions.now()).total_seconds()),
                "warning_sent": session.warning_sent,
                "expiry_notice_sent": session.expiry_notice_sent,
                "context_reset_sent": session.context_reset_sent,
                "customer_id": session.customer.customer_id if session.customer else None,
            }
            if session
            else None
        ),
        "state": conversation.state.value,
        "scratch": type(conversation.scratch).__name__ if conversation.scratch else None,
        "cart": {
            "line_count": totals.line_count,
            "unit_count": totals.unit_count,
            "subtotal": totals.subtotal_at_unit_price,
            "discount": totals.discount,
            "total": totals.total,
        },
    }


@router.post("/debug/session/{user_id}/reset", status_code=status.HTTP_200_OK)
async def reset_session(user_id: str) -> dict:
    """
    Reset session, state and cart for a user (only enabled if DEBUG_MODE=true).

    Args:
        user_id: WhatsApp phone number

    Returns:
        Confirmation message

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    _require_debug_mode()

    await container.router.reset_user(user_id)

    return {
        "user_id": user_id,
        "message": "Session reset successfully",
        "status": "reset",
    }


@router.get("/debug/sessions", status_code=status.HTTP_200_OK)
async def list_sessions_debug() -> dict:
    """
    Active session statistics (only enabled if DEBUG_MODE=true).

    Returns:
        Number of sessions and per-user inactivity in seconds

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    _require_debug_mode()

    now = container.sessions.now()
    sessions = []
    for user_id in await container.sessions.list_user_ids():
        session = await container.sessions.get_session(user_id)
        if session is None:
            continue
        sessions.append(
            {
                "user_id": user_id,
                "elapsed_seconds": int(session.elapsed(now).total_seconds()),
                "state": (await container.states.get_state(user_id)).value,
            }
        )

    return {"sessions": sessions, "count": len(sessions)}
