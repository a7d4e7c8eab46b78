"""WhatsApp Cloud API message sender adapter."""

from typing import Optional

import httpx

from app.application.ports.message_sender import MessageSender
from app.infrastructure.config.settings import settings

GRAPH_API_BASE_URL = "https://graph.facebook.com"


class WhatsAppCloudMessageSender(MessageSender):
    """Sends text messages through the Meta Graph API."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        phone_number_id: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize sender.

        Args:
            access_token: Graph API token (defaults to settings.meta_access_token)
            phone_number_id: Sender phone number id (defaults to settings.meta_phone_number_id)
            api_version: Graph API version (defaults to settings.meta_api_version)
            timeout_seconds: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self._access_token = access_token or settings.meta_access_token
        self._phone_number_id = phone_number_id or settings.meta_phone_number_id
        self._api_version = api_version or settings.meta_api_version
        self._timeout = timeout_seconds
        self._transport = transport

        if not self._access_token or not self._phone_number_id:
            raise ValueError("META_ACCESS_TOKEN and META_PHONE_NUMBER_ID are required")

    @property
    def messages_url(self) -> str:
        """Graph API messages endpoint."""
        return f"{GRAPH_API_BASE_URL}/{self._api_version}/{self._phone_number_id}/messages"

    async def send_message(self, user_id: str, text: str) -> None:
        """
        Send a text message.

        Args:
            user_id: Recipient phone number
            text: Message body

        Raises:
            httpx.HTTPError: If the request fails or the API answers with an error
        """
        payload = {
            "messaging_product": "whatsapp",
            "to": user_id,
            "type": "text",
            "text": {"body": text},
        }
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(self.messages_url, json=payload, headers=headers)
            response.raise_for_status()
