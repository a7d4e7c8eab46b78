"""Dependency injection factory functions."""

from typing import Optional

from app.adapters.outbound.backend_api import BackendApiClient
from app.adapters.outbound.cart import InMemoryCartRepository
from app.adapters.outbound.conversation_state_repository import (
    InMemoryConversationStateRepository,
)
from app.adapters.outbound.deduplication import (
    NoOpMessageDeduplicationStore,
    RedisMessageDeduplicationStore,
)
from app.adapters.outbound.llm.openai_llm_client import OpenAILLMClient
from app.adapters.outbound.messaging import LoggingMessageSender, WhatsAppCloudMessageSender
from app.adapters.outbound.nlp import KeywordNLPClassifier
from app.adapters.outbound.product_extraction import (
    FallbackProductExtractor,
    KeywordProductExtractor,
    LLMProductExtractor,
)
from app.adapters.outbound.session import InMemorySessionRepository
from app.application.ports.cart_repository import CartRepository
from app.application.ports.conversation_state_repository import ConversationStateRepository
from app.application.ports.llm_client import LLMClient
from app.application.ports.message_deduplication_store import MessageDeduplicationStore
from app.application.ports.message_sender import MessageSender
from app.application.ports.nlp_classifier import NLPClassifier
from app.application.ports.product_extractor import ProductExtractor
from app.application.ports.session_repository import SessionRepository
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger


def create_session_repository() -> SessionRepository:
    """
    Factory function to create session repository.

    Returns:
        SessionRepository instance
    """
    return InMemorySessionRepository()


def create_cart_repository() -> CartRepository:
    """
    Factory function to create cart repository.

    Returns:
        CartRepository instance
    """
    return InMemoryCartRepository()


def create_conversation_state_repository() -> ConversationStateRepository:
    """
    Factory function to create conversation state repository.

    Returns:
        ConversationStateRepository instance
    """
    return InMemoryConversationStateRepository()


def create_backend_api_client() -> BackendApiClient:
    """
    Factory function to create the backend REST client.

    Returns:
        BackendApiClient serving catalog, customer and order ports
    """
    return BackendApiClient(settings.api_base_url, settings.api_timeout_seconds)


def create_llm_client() -> Optional[LLMClient]:
    """
    Factory function to create LLM client if enabled.

    Returns:
        LLMClient instance if enabled, None otherwise
    """
    if not settings.llm_enabled:
        return None

    try:
        return OpenAILLMClient()
    except ValueError as e:
        # Missing API key: extraction runs on the keyword fallback only
        logger.warning(f"LLM disabled: {e}")
        return None


def create_product_extractor() -> ProductExtractor:
    """
    Factory function to create the two-stage product extractor.

    Returns:
        FallbackProductExtractor with the LLM extractor as primary when available
    """
    llm_client = create_llm_client()
    primary = LLMProductExtractor(llm_client) if llm_client is not None else None
    return FallbackProductExtractor(primary, KeywordProductExtractor())


def create_message_sender() -> MessageSender:
    """
    Factory function to create the outbound WhatsApp sender.

    Returns:
        WhatsAppCloudMessageSender when sending is enabled, LoggingMessageSender otherwise
    """
    if not settings.whatsapp_send_enabled:
        return LoggingMessageSender()

    try:
        return WhatsAppCloudMessageSender()
    except ValueError as e:
        logger.warning(f"WhatsApp sending disabled: {e}")
        return LoggingMessageSender()


def create_nlp_classifier() -> NLPClassifier:
    """
    Factory function to create NLP classifier.

    Returns:
        NLPClassifier instance
    """
    return KeywordNLPClassifier()


def create_message_deduplication_store() -> MessageDeduplicationStore:
    """
    Factory function to create webhook de-duplication store.

    Returns:
        MessageDeduplicationStore instance (Redis or NoOp)
    """
    if not settings.webhook_dedup_enabled:
        return NoOpMessageDeduplicationStore()

    if not settings.redis_url:
        # De-duplication requested without Redis: accept every message
        return NoOpMessageDeduplicationStore()

    return RedisMessageDeduplicationStore(settings.redis_url)
