"""Dependency injection container."""

from app.adapters.outbound.backend_api import BackendApiClient
from app.application.ports.cart_repository import CartRepository
from app.application.ports.conversation_state_repository import ConversationStateRepository
from app.application.ports.message_deduplication_store import MessageDeduplicationStore
from app.application.ports.message_sender import MessageSender
from app.application.ports.session_repository import SessionRepository
from app.application.use_cases.cart_service import CartService
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.customer_identity_service import CustomerIdentityService
from app.application.use_cases.handle_inbound_message_use_case import HandleInboundMessageUseCase
from app.application.use_cases.menu_flow import MenuFlow
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.notify_order_status import NotifyOrderStatusUseCase
from app.application.use_cases.order_capture_flow import OrderCaptureFlow
from app.application.use_cases.product_search_flow import ProductSearchFlow
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.application.use_cases.session_monitor import SessionMonitor
from app.application.use_cases.user_locks import UserLockRegistry
from app.application.use_cases.welcome_flow import WelcomeFlow
from app.infrastructure.logging.logger import log_session_event, log_state_transition, log_turn
from app.infrastructure.wiring.dependencies import (
    create_backend_api_client,
    create_cart_repository,
    create_conversation_state_repository,
    create_message_deduplication_store,
    create_message_sender,
    create_nlp_classifier,
    create_product_extractor,
    create_session_repository,
)


class Container:
    """Single shared object graph for the router, the session monitor and the HTTP routes."""

    def __init__(self) -> None:
        """Initialize container with dependencies."""
        # Stores
        self._session_repository: SessionRepository = create_session_repository()
        self._cart_repository: CartRepository = create_cart_repository()
        self._state_repository: ConversationStateRepository = (
            create_conversation_state_repository()
        )

        # Collaborators
        self._backend: BackendApiClient = create_backend_api_client()
        self._sender: MessageSender = create_message_sender()
        self._dedup_store: MessageDeduplicationStore = create_message_deduplication_store()
        extractor = create_product_extractor()

        # Services
        self._sessions = SessionLifecycle(
            self._session_repository, self._state_repository, self._cart_repository
        )
        self._states = ConversationStateService(self._state_repository)
        self._cart = CartService(self._cart_repository, self._sessions)
        self._messenger = Messenger(self._sender, logger=log_turn)
        self._locks = UserLockRegistry()
        customers = CustomerIdentityService(self._backend, self._sessions)

        # Flows
        order_flow = OrderCaptureFlow(
            self._messenger,
            self._states,
            self._sessions,
            extractor,
            self._backend,
            self._cart,
            customers,
            self._backend,
            logger=log_turn,
        )
        self._router = HandleInboundMessageUseCase(
            self._sessions,
            self._states,
            self._messenger,
            create_nlp_classifier(),
            WelcomeFlow(self._messenger, self._states, customers, logger=log_turn),
            MenuFlow(
                self._messenger, self._states, order_flow, customers, self._backend, logger=log_turn
            ),
            ProductSearchFlow(
                self._messenger, self._states, extractor, self._backend, self._cart, logger=log_turn
            ),
            order_flow,
            self._locks,
            logger=log_turn,
            transition_logger=log_state_transition,
        )

        # Background and notification use cases
        self._monitor = SessionMonitor(
            self._sessions,
            self._states,
            self._cart_repository,
            self._messenger,
            self._locks,
            logger=log_session_event,
        )
        self._notify_order_status = NotifyOrderStatusUseCase(self._sender, logger=log_turn)

    @property
    def router(self) -> HandleInboundMessageUseCase:
        """Get dialogue router."""
        return self._router

    @property
    def session_monitor(self) -> SessionMonitor:
        """Get session monitor."""
        return self._monitor

    @property
    def notify_order_status(self) -> NotifyOrderStatusUseCase:
        """Get order status notification use case."""
        return self._notify_order_status

    @property
    def sessions(self) -> SessionLifecycle:
        """Get session lifecycle service."""
        return self._sessions

    @property
    def states(self) -> ConversationStateService:
        """Get conversation state service."""
        return self._states

    @property
    def cart(self) -> CartService:
        """Get cart service."""
        return self._cart

    @property
    def backend(self) -> BackendApiClient:
        """Get backend API client."""
        return self._backend

    @property
    def dedup_store(self) -> MessageDeduplicationStore:
        """Get webhook de-duplication store."""
        return self._dedup_store


# Global container instance
container = Container()
