"""Outbound messaging adapters."""

from app.adapters.outbound.messaging.logging_message_sender import LoggingMessageSender
from app.adapters.outbound.messaging.whatsapp_cloud_message_sender import (
    WhatsAppCloudMessageSender,
)

__all__ = [
    "LoggingMessageSender",
    "WhatsAppCloudMessageSender",
]
