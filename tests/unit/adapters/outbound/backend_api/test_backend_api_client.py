"""Unit tests for BackendApiClient using httpx.MockTransport."""

import json

import httpx
import pytest

from app.adapters.outbound.backend_api import BackendApiClient
from app.adapters.outbound.backend_api.backend_api_client import (
    CONNECTION_ERROR_DETAIL,
    INVALID_RESPONSE_DETAIL,
)
from app.application.dtos.order import OrderLineItem, OrderPayload
from app.application.errors import BackendApiError

BASE_URL = "http://backend.test"


def _client(handler):
    return BackendApiClient(
        base_url=BASE_URL,
        timeout_seconds=1.0,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_search_products_parses_decimal_prices():
    """Test product parsing, query params and bulk price normalization."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(
            200,
            json=[
                {
                    "id_producto": 1,
                    "nombre": "Almendras",
                    "precio_unitario": "5990.00",
                    "precio_por_mayor": "4990.00",
                    "stock_actual": 12,
                },
                {
                    "id_producto": 2,
                    "nombre": "Almendras Laminadas",
                    "precio_unitario": 7000,
                    "precio_por_mayor": None,
                    "stock_actual": "0",
                },
            ],
        )

    products = await _client(handler).search_products(" almendras ", limit=50)

    assert requests[0].url.path == "/api/v1/bot/buscar-productos"
    assert requests[0].url.params["nombre"] == "almendras"
    assert requests[0].url.params["limit"] == "10"
    assert products[0].unit_price == 5990
    assert products[0].bulk_price == 4990
    assert products[1].bulk_price is None
    assert products[1].stock == 0


@pytest.mark.asyncio
async def test_search_products_short_term_skips_request():
    """Test terms shorter than two characters return nothing."""

    def handler(request):
        raise AssertionError("no request expected")

    assert await _client(handler).search_products("a") == []


@pytest.mark.asyncio
async def test_search_products_404_is_empty():
    """Test a 404 means no results."""
    products = await _client(lambda request: httpx.Response(404)).search_products("kiwi")

    assert products == []


@pytest.mark.asyncio
async def test_search_products_server_error():
    """Test a 500 raises with the backend detail."""

    def handler(request):
        return httpx.Response(500, json={"detail": "db caída"})

    with pytest.raises(BackendApiError) as exc_info:
        await _client(handler).search_products("nueces")

    assert exc_info.value.status_code == 500
    assert "db caída" in exc_info.value.detail


@pytest.mark.asyncio
async def test_transport_failure_raises_connection_error():
    """Test connection failures become a customer-friendly error."""

    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(BackendApiError) as exc_info:
        await _client(handler).search_products("nueces")

    assert exc_info.value.detail == CONNECTION_ERROR_DETAIL
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_validate_by_phone_registered():
    """Test a registered phone returns the customer."""

    def handler(request):
        assert request.url.path == "/api/v1/bot/validar-telefono/56911111111"
        return httpx.Response(
            200, json={"registrado": True, "cliente": {"id_cliente": 4, "nombre": "Lucas Pérez"}}
        )

    validation = await _client(handler).validate_by_phone("56911111111")

    assert validation.registered is True
    assert validation.customer.customer_id == 4
    assert validation.customer.phone == "56911111111"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [httpx.Response(404), httpx.Response(200, json={"registrado": False})],
)
async def test_validate_by_phone_not_registered(response):
    """Test 404 and registrado=false both mean not registered."""
    validation = await _client(lambda request: response).validate_by_phone("569")

    assert validation.registered is False
    assert validation.customer is None


@pytest.mark.asyncio
async def test_register_customer_sends_payload():
    """Test the registration body and the nested customer response."""
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"cliente": {"id_usuario": 11, "nombre": "Ana Rojas"}})

    customer = await _client(handler).register_customer("569", "Ana Rojas")

    assert bodies == [{"telefono": "569", "nombre": "Ana Rojas", "email": None}]
    assert customer.customer_id == 11


@pytest.mark.asyncio
async def test_register_customer_conflict():
    """Test a 409 is surfaced with its status."""
    with pytest.raises(BackendApiError) as exc_info:
        await _client(lambda request: httpx.Response(409)).register_customer("569", "Ana Rojas")

    assert exc_info.value.status_code == 409


@pytest.mark.asyncio
async def test_create_order_serializes_backend_fields():
    """Test the order body uses backend field names and the id is read back."""
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json={"pedido": {"id_pedido": 321}})

    payload = OrderPayload(
        customer_id=4,
        delivery_address="Retiro en tienda",
        courier="presencial",
        line_items=[OrderLineItem(product_id=1, quantity=5)],
    )

    created = await _client(handler).create_order(payload)

    assert created.order_id == "321"
    assert bodies[0] == {
        "id_cliente": 4,
        "direccion_envio": "Retiro en tienda",
        "courier": "presencial",
        "canal": "whatsapp",
        "metodo_pago": "transferencia",
        "detalles": [{"id_producto": 1, "cantidad": 5}],
        "descuento_manual": 0,
    }


@pytest.mark.asyncio
async def test_create_order_validation_error_detail():
    """Test failures carry a status-specific prefix."""

    def handler(request):
        return httpx.Response(422, json={"detail": "cantidad inválida"})

    payload = OrderPayload(
        customer_id=4,
        delivery_address="x",
        courier="starken",
        line_items=[OrderLineItem(product_id=1, quantity=1)],
    )

    with pytest.raises(BackendApiError, match="Validación fallida: cantidad inválida"):
        await _client(handler).create_order(payload)


@pytest.mark.asyncio
async def test_list_customer_orders():
    """Test order listing and item parsing."""

    def handler(request):
        assert request.url.params["id_cliente"] == "4"
        return httpx.Response(
            200,
            json=[
                {
                    "id_pedido": 9,
                    "fecha_pedido": "2024-05-09T15:30:00",
                    "estado": "pendiente",
                    "total": "45000.00",
                    "detalles": [{"cantidad": 2, "nombre_producto": "Almendras"}],
                }
            ],
        )

    orders = await _client(handler).list_customer_orders(4)

    assert orders[0].order_id == "9"
    assert orders[0].total == 45000
    assert orders[0].items[0].name == "Almendras"


@pytest.mark.asyncio
async def test_check_health():
    """Test health reflects the backend status and connection failures."""
    assert await _client(lambda request: httpx.Response(200)).check_health() is True

    def handler(request):
        raise httpx.ConnectTimeout("slow", request=request)

    assert await _client(handler).check_health() is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response, call",
    [
        (
            httpx.Response(200, text="<html>proxy error</html>"),
            lambda client: client.search_products("almendras"),
        ),
        (
            httpx.Response(200, json=[{"nombre": "Almendras"}]),
            lambda client: client.search_products("almendras"),
        ),
        (
            httpx.Response(200, json=[]),
            lambda client: client.validate_by_phone("56911111111"),
        ),
        (
            httpx.Response(201, json="ok"),
            lambda client: client.create_order(
                OrderPayload(
                    customer_id=4,
                    delivery_address="Retiro en tienda",
                    courier="presencial",
                    line_items=[OrderLineItem(product_id=1, quantity=1)],
                )
            ),
        ),
        (
            httpx.Response(200, json={"pedidos": []}),
            lambda client: client.list_customer_orders(4),
        ),
    ],
)
async def test_malformed_success_body_raises_backend_error(response, call):
    """Test a 2xx body of the wrong shape becomes a BackendApiError."""
    client = _client(lambda request: response)

    with pytest.raises(BackendApiError) as exc_info:
        await call(client)

    assert exc_info.value.detail == INVALID_RESPONSE_DETAIL
    assert exc_info.value.status_code == response.status_code
