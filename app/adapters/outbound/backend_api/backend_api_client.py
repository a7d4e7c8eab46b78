"""HTTP client for the store backend bot API."""

from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, TypeVar

import httpx

from app.application.dtos.customer import CustomerValidation
from app.application.dtos.order import (
    CustomerOrder,
    CustomerOrderItem,
    OrderCreated,
    OrderPayload,
)
from app.application.errors import BackendApiError
from app.application.ports.customer_directory import CustomerDirectory
from app.application.ports.order_gateway import OrderGateway
from app.application.ports.product_catalog import ProductCatalog
from app.domain.value_objects.customer_identity import CustomerIdentity
from app.domain.value_objects.product import Product
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger

CONNECTION_ERROR_DETAIL = "No se pudo conectar con el servidor. Por favor, intenta más tarde."
INVALID_RESPONSE_DETAIL = "Error del servidor: respuesta inválida"
HEALTH_TIMEOUT_SECONDS = 2.0
MIN_SEARCH_TERM_LENGTH = 2
MAX_SEARCH_LIMIT = 10

T = TypeVar("T")


def _to_int(value: Any, default: int = 0) -> int:
    """Convert numbers or decimal strings ("5990.00") to int."""
    if value is None or value == "":
        return default
    try:
        return int(Decimal(str(value)).to_integral_value())
    except (InvalidOperation, ValueError):
        return default


def _error_detail(response: httpx.Response) -> str:
    """Extract the backend's error detail from a response."""
    try:
        data = response.json()
    except ValueError:
        return response.text or "Error desconocido"
    if isinstance(data, dict):
        detail = data.get("detail") or data.get("message")
        if detail:
            return str(detail)
    return "Error desconocido"


def _parse_customer(data: dict[str, Any], phone: Optional[str] = None) -> CustomerIdentity:
    """Build a customer identity; the id may arrive as id, id_cliente or id_usuario."""
    customer_id = data.get("id") or data.get("id_cliente") or data.get("id_usuario")
    if customer_id is None:
        raise BackendApiError("Respuesta del servidor sin identificador de cliente.")
    return CustomerIdentity(
        customer_id=int(customer_id),
        name=str(data.get("nombre") or ""),
        phone=data.get("telefono") or phone,
    )


def _parse_product(data: dict[str, Any]) -> Product:
    bulk_price = _to_int(data.get("precio_por_mayor"), default=0)
    return Product(
        product_id=int(data["id_producto"]),
        name=str(data.get("nombre", "")),
        unit_price=_to_int(data.get("precio_unitario")),
        bulk_price=bulk_price or None,
        stock=_to_int(data.get("stock_actual")),
    )


def _parse_order(data: dict[str, Any]) -> CustomerOrder:
    return CustomerOrder(
        order_id=str(data.get("id_pedido", "")),
        created_at=data.get("fecha_pedido") or data.get("fecha_creacion"),
        status=str(data.get("estado") or ""),
        payment_status=str(data.get("pago_estado") or ""),
        total=_to_int(data.get("total")),
        items=[
            CustomerOrderItem(
                quantity=_to_int(detail.get("cantidad"), default=1),
                name=str(detail.get("nombre_producto", "")),
            )
            for detail in data.get("detalles") or []
        ],
    )


def _parse_body(response: httpx.Response, parse: Callable[[Any], T]) -> T:
    """
    Decode a successful response body with the given parser.

    Raises:
        BackendApiError: If the body is not the JSON shape the parser expects
    """
    try:
        return parse(response.json())
    except (KeyError, ValueError, TypeError, AttributeError) as err:
        logger.error(
            f"component='backend_api' | event='invalid_response' | "
            f"path={response.request.url.path!r} | error={str(err)!r}"
        )
        raise BackendApiError(INVALID_RESPONSE_DETAIL, response.status_code) from err


class BackendApiClient(ProductCatalog, CustomerDirectory, OrderGateway):
    """httpx-based adapter for catalog, customer and order endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize backend client.

        Args:
            base_url: API base URL (defaults to settings.api_base_url)
            timeout_seconds: Request timeout (defaults to settings.api_timeout_seconds)
            transport: Optional httpx transport (used by tests)
        """
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._timeout = timeout_seconds or settings.api_timeout_seconds
        self._transport = transport

    def _client(self, timeout: Optional[float] = None) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=timeout or self._timeout,
            headers={"Content-Type": "application/json"},
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Perform a request, translating transport failures.

        Raises:
            BackendApiError: If the server cannot be reached
        """
        try:
            async with self._client() as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as err:
            logger.error(f"component='backend_api' | path={path!r} | error={str(err)!r}")
            raise BackendApiError(CONNECTION_ERROR_DETAIL) from err

    async def validate_by_phone(self, phone: str) -> CustomerValidation:
        """
        Check whether a phone number belongs to a registered customer.

        Args:
            phone: WhatsApp phone number

        Returns:
            Validation result (404 means not registered)

        Raises:
            BackendApiError: On server or transport failure
        """
        response = await self._request("GET", f"/api/v1/bot/validar-telefono/{phone}")
        if response.status_code == 404:
            return CustomerValidation(registered=False)
        if response.is_error:
            raise BackendApiError(
                f"Error del servidor: {_error_detail(response)}", response.status_code
            )

        def parse(data: dict[str, Any]) -> CustomerValidation:
            if not data.get("registrado") or not data.get("cliente"):
                return CustomerValidation(registered=False)
            return CustomerValidation(
                registered=True,
                customer=_parse_customer(data["cliente"], phone=phone),
            )

        return _parse_body(response, parse)

    async def register_customer(self, phone: str, full_name: str) -> CustomerIdentity:
        """
        Register a new customer.

        Args:
            phone: WhatsApp phone number
            full_name: First name and last name

        Returns:
            Registered customer identity

        Raises:
            BackendApiError: If registration is rejected or fails
        """
        response = await self._request(
            "POST",
            "/api/v1/bot/registrar-cliente",
            json={"telefono": phone, "nombre": full_name, "email": None},
        )
        if response.status_code == 400:
            raise BackendApiError(f"Datos inválidos: {_error_detail(response)}", 400)
        if response.status_code == 409:
            raise BackendApiError("El cliente ya está registrado en el sistema.", 409)
        if response.is_error:
            raise BackendApiError(
                f"Error del servidor: {_error_detail(response)}", response.status_code
            )

        def parse(data: dict[str, Any]) -> CustomerIdentity:
            if isinstance(data.get("cliente"), dict):
                data = data["cliente"]
            return _parse_customer(data, phone=phone)

        return _parse_body(response, parse)

    async def search_products(self, term: str, limit: int = 5) -> list[Product]:
        """
        Search products by name.

        Args:
            term: Search term (shorter than 2 characters yields no results)
            limit: Maximum number of results, clamped to 1..10

        Returns:
            Matching products (404 is normalized to an empty list)

        Raises:
            BackendApiError: On server or transport failure
        """
        term = term.strip()
        if len(term) < MIN_SEARCH_TERM_LENGTH:
            return []
        limit = max(1, min(limit, MAX_SEARCH_LIMIT))

        response = await self._request(
            "GET",
            "/api/v1/bot/buscar-productos",
            params={"nombre": term, "limit": limit},
        )
        if response.status_code == 404:
            return []
        if response.is_error:
            raise BackendApiError(
                f"Error del servidor: {_error_detail(response)}", response.status_code
            )

        return _parse_body(response, lambda data: [_parse_product(item) for item in data or []])

    async def create_order(self, payload: OrderPayload) -> OrderCreated:
        """
        Submit a complete order.

        Args:
            payload: Order creation request

        Returns:
            Created order acknowledgement

        Raises:
            BackendApiError: With a human-readable detail on any failure
        """
        response = await self._request(
            "POST",
            "/api/v1/bot/crear-pedido-completo",
            json=payload.to_api(),
        )
        if response.is_error:
            detail = _error_detail(response)
            prefixes = {
                400: "Datos inválidos",
                404: "Cliente o producto no encontrado",
                409: "Conflicto",
                422: "Validación fallida",
            }
            prefix = prefixes.get(response.status_code, "Error del servidor")
            raise BackendApiError(f"{prefix}: {detail}", response.status_code)

        def parse(data: Optional[dict[str, Any]]) -> OrderCreated:
            data = data or {}
            order = data.get("pedido") if isinstance(data.get("pedido"), dict) else data
            return OrderCreated(order_id=str(order.get("id_pedido") or "N/A"))

        return _parse_body(response, parse)

    async def list_customer_orders(self, customer_id: int) -> list[CustomerOrder]:
        """
        List orders in progress for a customer.

        Args:
            customer_id: Backend customer identifier

        Returns:
            Orders in progress (404 is normalized to an empty list)

        Raises:
            BackendApiError: On server or transport failure
        """
        response = await self._request(
            "GET",
            "/api/v1/bot/mis-pedidos/",
            params={"id_cliente": customer_id},
        )
        if response.status_code == 404:
            return []
        if response.is_error:
            raise BackendApiError(
                f"Error del servidor: {_error_detail(response)}", response.status_code
            )

        return _parse_body(response, lambda data: [_parse_order(item) for item in data or []])

    async def check_health(self) -> bool:
        """
        Check backend availability.

        Returns:
            True if the backend health endpoint answers 200
        """
        try:
            async with self._client(timeout=HEALTH_TIMEOUT_SECONDS) as client:
                response = await client.get("/health")
            return response.status_code == 200
        except httpx.HTTPError as err:
            logger.warning(f"component='backend_api' | event='health_failed' | error={str(err)!r}")
            return False
