"""Conversation state entity."""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from app.domain.value_objects.delivery import Courier, DeliveryMethod
from app.domain.value_objects.product import Product


class DialogueState(str, Enum):
    """Closed set of positions a user can occupy in the dialogue."""

    INITIAL = "INITIAL"
    AWAITING_FIRST_NAME_LASTNAME = "AWAITING_FIRST_NAME_LASTNAME"
    MENU = "MENU"
    PRODUCT_INFO = "PRODUCT_INFO"
    ORDERS_MENU = "ORDERS_MENU"
    FAQ = "FAQ"
    PRODUCT_SEARCH_AWAITING_QUERY = "PRODUCT_SEARCH_AWAITING_QUERY"
    PRODUCT_SEARCH_AWAITING_SELECTION = "PRODUCT_SEARCH_AWAITING_SELECTION"
    PRODUCT_SEARCH_SHOWING_DETAILS = "PRODUCT_SEARCH_SHOWING_DETAILS"
    ORDER_AWAITING_PRODUCT_LIST = "ORDER_AWAITING_PRODUCT_LIST"
    ORDER_RESOLVING_AMBIGUOUS_PRODUCTS = "ORDER_RESOLVING_AMBIGUOUS_PRODUCTS"
    ORDER_AWAITING_ADD_MORE_DECISION = "ORDER_AWAITING_ADD_MORE_DECISION"
    ORDER_AWAITING_DELIVERY_METHOD = "ORDER_AWAITING_DELIVERY_METHOD"
    ORDER_AWAITING_ADDRESS = "ORDER_AWAITING_ADDRESS"
    ORDER_AWAITING_CITY = "ORDER_AWAITING_CITY"
    ORDER_AWAITING_DISTRICT = "ORDER_AWAITING_DISTRICT"
    ORDER_AWAITING_COURIER = "ORDER_AWAITING_COURIER"
    ORDER_AWAITING_CONFIRMATION = "ORDER_AWAITING_CONFIRMATION"

    @property
    def is_order_state(self) -> bool:
        """True for every order-capture state."""
        return self.value.startswith("ORDER_")

    @property
    def is_product_search_state(self) -> bool:
        """True for every product-search state."""
        return self.value.startswith("PRODUCT_SEARCH_")


# Free-text classification is suppressed in these states
MENU_FLOW_STATES = frozenset(
    {
        DialogueState.MENU,
        DialogueState.AWAITING_FIRST_NAME_LASTNAME,
        DialogueState.PRODUCT_SEARCH_AWAITING_SELECTION,
    }
    | {state for state in DialogueState if state.is_order_state}
)

# Help and negative-sentiment shortcuts are suppressed in these states
PRODUCT_CONTEXT_STATES = frozenset(
    {
        DialogueState.PRODUCT_INFO,
        DialogueState.ORDER_AWAITING_PRODUCT_LIST,
        DialogueState.ORDER_RESOLVING_AMBIGUOUS_PRODUCTS,
        DialogueState.ORDER_AWAITING_ADD_MORE_DECISION,
    }
    | {state for state in DialogueState if state.is_product_search_state}
)

# Greetings re-enter the welcome flow only from these states
IDLE_STATES = frozenset(
    {
        DialogueState.INITIAL,
        DialogueState.PRODUCT_INFO,
        DialogueState.ORDERS_MENU,
        DialogueState.FAQ,
    }
)


class _PatchMixin:
    """Explicit patch operation shared by scratch variants."""

    def patch(self, **changes):
        """
        Return a copy with the given fields overwritten and the rest preserved.

        Raises:
            ValueError: If a field does not belong to this scratch variant
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(
                f"Unknown fields for {type(self).__name__}: {', '.join(sorted(unknown))}"
            )
        return replace(self, **changes)


@dataclass(frozen=True)
class SearchScratch(_PatchMixin):
    """Scratch data for the product search flow."""

    search_term: Optional[str] = None
    candidates: tuple[Product, ...] = ()
    selected_product: Optional[Product] = None


@dataclass(frozen=True)
class AmbiguousOption:
    """Numbered option mapping a shown choice back to a concrete product."""

    number: int
    requested_name: str
    requested_quantity: int
    product: Product


@dataclass(frozen=True)
class OrderDraft(_PatchMixin):
    """Scratch data accumulated across order-capture states."""

    options: tuple[AmbiguousOption, ...] = ()
    delivery_method: Optional[DeliveryMethod] = None
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    courier: Optional[Courier] = None
    awaiting_minimum_decision: bool = False

    def find_option(self, number: int) -> Optional[AmbiguousOption]:
        """Look up an ambiguous-product option by its shown number."""
        for option in self.options:
            if option.number == number:
                return option
        return None


Scratch = Union[SearchScratch, OrderDraft]


@dataclass
class ConversationState:
    """Current position of a user in the dialogue plus flow scratch data."""

    user_id: str
    state: DialogueState = DialogueState.INITIAL
    scratch: Optional[Scratch] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)
