"""Shared fixtures: in-memory stores, fake collaborators and a wired bot."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Optional

import pytest

from app.adapters.outbound.cart import InMemoryCartRepository
from app.adapters.outbound.conversation_state_repository import (
    InMemoryConversationStateRepository,
)
from app.adapters.outbound.nlp import KeywordNLPClassifier
from app.adapters.outbound.session import InMemorySessionRepository
from app.application.dtos.customer import CustomerValidation
from app.application.dtos.extraction import ExtractedItem
from app.application.dtos.order import CustomerOrder, OrderCreated, OrderPayload
from app.application.errors import BackendApiError
from app.application.ports.customer_directory import CustomerDirectory
from app.application.ports.message_sender import MessageSender
from app.application.ports.order_gateway import OrderGateway
from app.application.ports.product_catalog import ProductCatalog
from app.application.ports.product_extractor import ProductExtractor
from app.application.use_cases.cart_service import CartService
from app.application.use_cases.conversation_state_service import ConversationStateService
from app.application.use_cases.customer_identity_service import CustomerIdentityService
from app.application.use_cases.handle_inbound_message_use_case import HandleInboundMessageUseCase
from app.application.use_cases.menu_flow import MenuFlow
from app.application.use_cases.messenger import Messenger
from app.application.use_cases.order_capture_flow import OrderCaptureFlow
from app.application.use_cases.product_search_flow import ProductSearchFlow
from app.application.use_cases.session_lifecycle import SessionLifecycle
from app.application.use_cases.session_monitor import SessionMonitor
from app.application.use_cases.user_locks import UserLockRegistry
from app.application.use_cases.welcome_flow import WelcomeFlow
from app.domain.value_objects.customer_identity import CustomerIdentity
from app.domain.value_objects.product import Product


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingSender(MessageSender):
    """Collects outbound messages; can be told to fail."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    async def send_message(self, user_id: str, text: str) -> None:
        if self.fail:
            raise RuntimeError("delivery failed")
        self.sent.append((user_id, text))

    def texts(self, user_id: str) -> list[str]:
        return [text for recipient, text in self.sent if recipient == user_id]

    def last(self, user_id: str) -> str:
        return self.texts(user_id)[-1]


class FakeCatalog(ProductCatalog):
    """Catalog answering from a term -> products table."""

    def __init__(self) -> None:
        self.products: dict[str, list[Product]] = {}
        self.error: Optional[BackendApiError] = None
        self.searches: list[tuple[str, int]] = []

    async def search_products(self, term: str, limit: int = 5) -> list[Product]:
        self.searches.append((term, limit))
        if self.error:
            raise self.error
        return self.products.get(term, [])[:limit]


class ScriptedExtractor(ProductExtractor):
    """Extractor answering from fixed text -> result tables."""

    def __init__(self) -> None:
        self.terms: dict[str, Optional[str]] = {}
        self.items: dict[str, list[ExtractedItem]] = {}

    async def extract_single_term(self, text: str) -> Optional[str]:
        return self.terms.get(text)

    async def extract_multiple_with_quantities(self, text: str) -> list[ExtractedItem]:
        return self.items.get(text, [])


class FakeCustomerDirectory(CustomerDirectory):
    """Backend customer registry kept in memory."""

    def __init__(self) -> None:
        self.customers: dict[str, CustomerIdentity] = {}
        self.error: Optional[BackendApiError] = None
        self.lookups = 0
        self._next_id = 100

    async def validate_by_phone(self, phone: str) -> CustomerValidation:
        self.lookups += 1
        if self.error:
            raise self.error
        customer = self.customers.get(phone)
        return CustomerValidation(registered=customer is not None, customer=customer)

    async def register_customer(self, phone: str, full_name: str) -> CustomerIdentity:
        if self.error:
            raise self.error
        if phone in self.customers:
            raise BackendApiError("El cliente ya está registrado en el sistema.", 409)
        self._next_id += 1
        customer = CustomerIdentity(customer_id=self._next_id, name=full_name, phone=phone)
        self.customers[phone] = customer
        return customer


class FakeOrderGateway(OrderGateway):
    """Order backend recording submitted payloads."""

    def __init__(self) -> None:
        self.payloads: list[OrderPayload] = []
        self.orders: list[CustomerOrder] = []
        self.error: Optional[BackendApiError] = None

    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        if self.error:
            raise self.error
        self.payloads.append(payload)
        return OrderCreated(order_id=str(500 + len(self.payloads)))

    async def list_customer_orders(self, customer_id: int) -> list[CustomerOrder]:
        if self.error:
            raise self.error
        return self.orders


@pytest.fixture
def clock():
    """Deterministic clock."""
    return FakeClock()


@pytest.fixture
def sender():
    """Recording message sender."""
    return RecordingSender()


@pytest.fixture
def catalog():
    """Fake product catalog."""
    return FakeCatalog()


@pytest.fixture
def extractor():
    """Scripted product extractor."""
    return ScriptedExtractor()


@pytest.fixture
def directory():
    """Fake customer directory."""
    return FakeCustomerDirectory()


@pytest.fixture
def order_gateway():
    """Fake order gateway."""
    return FakeOrderGateway()


@pytest.fixture
def almonds():
    """Product with a bulk price."""
    return Product(product_id=1, name="Almendras Enteras 1kg", unit_price=1000, bulk_price=800, stock=10)


@pytest.fixture
def bot(clock, sender, catalog, extractor, directory, order_gateway):
    """Full object graph wired with in-memory stores and fake collaborators."""
    session_repository = InMemorySessionRepository()
    cart_repository = InMemoryCartRepository()
    state_repository = InMemoryConversationStateRepository()

    sessions = SessionLifecycle(session_repository, state_repository, cart_repository, clock=clock)
    states = ConversationStateService(state_repository)
    cart = CartService(cart_repository, sessions)
    messenger = Messenger(sender)
    locks = UserLockRegistry()
    customers = CustomerIdentityService(directory, sessions)

    order_flow = OrderCaptureFlow(
        messenger, states, sessions, extractor, catalog, cart, customers, order_gateway
    )
    search_flow = ProductSearchFlow(messenger, states, extractor, catalog, cart)
    welcome_flow = WelcomeFlow(messenger, states, customers)
    menu_flow = MenuFlow(messenger, states, order_flow, customers, order_gateway)
    router = HandleInboundMessageUseCase(
        sessions,
        states,
        messenger,
        KeywordNLPClassifier(),
        welcome_flow,
        menu_flow,
        search_flow,
        order_flow,
        locks,
    )
    monitor = SessionMonitor(sessions, states, cart_repository, messenger, locks)

    return SimpleNamespace(
        clock=clock,
        sender=sender,
        catalog=catalog,
        extractor=extractor,
        directory=directory,
        orders=order_gateway,
        session_repository=session_repository,
        cart_repository=cart_repository,
        state_repository=state_repository,
        sessions=sessions,
        states=states,
        cart=cart,
        messenger=messenger,
        locks=locks,
        customers=customers,
        order_flow=order_flow,
        search_flow=search_flow,
        welcome_flow=welcome_flow,
        menu_flow=menu_flow,
        router=router,
        monitor=monitor,
    )
