from __future__ import annotations

from decimal import Decimal

import pytest
from aiohttp import web

from scanplate.core.exceptions import SubmissionFailed
from scanplate.domain.order import CustomerInfo
from scanplate.integrations.public_api import PublicApiClient, extract_error_message
from scanplate.services.order_service import OrderAssembler

MENU = [
    {"_id": "a1", "name": "Burger", "price": 8, "category": "Mains", "components": ["bun"], "isAvailable": True},
    {"_id": "a2", "name": "Old special", "price": 5, "category": "Mains", "isAvailable": False},
]


def build_public_api(received: list, *, status: int = 201, body=None) -> web.Application:
    async def post_order(request: web.Request) -> web.Response:
        received.append(await request.json())
        reply = body if body is not None else {
            "message": "Order placed successfully!",
            "orderId": "66a0f0",
            "orderNumber": 14,
        }
        return web.json_response(reply, status=status)

    async def get_menu(request: web.Request) -> web.Response:
        received.append(request.match_info["restaurant_id"])
        return web.json_response(MENU)

    app = web.Application()
    app.router.add_post("/api/public/orders", post_order)
    app.router.add_get("/api/public/menu/{restaurant_id}", get_menu)
    return app


@pytest.fixture()
def payload(cart, burger):
    cart.add_item(burger, ["bun"], [burger.find_extra("Cheese")], quantity=2)
    return OrderAssembler().assemble(
        cart.snapshot().lines, "rest-1", customer=CustomerInfo(name="Ann", phone="5551234567")
    )


@pytest.mark.asyncio
async def test_fetch_menu_filters_unavailable(api_server) -> None:
    received: list = []
    server = await api_server(build_public_api(received))

    async with PublicApiClient(str(server.make_url("/api/public"))) as client:
        items = await client.fetch_menu("rest-1")

    assert received == ["rest-1"]
    assert [item.name for item in items] == ["Burger"]
    assert items[0].price == Decimal("8")


@pytest.mark.asyncio
async def test_submit_order_posts_wire_payload(api_server, payload) -> None:
    received: list = []
    server = await api_server(build_public_api(received))

    async with PublicApiClient(str(server.make_url("/api/public"))) as client:
        confirmation = await client.submit_order(payload)

    assert confirmation.order_id == "66a0f0"
    assert confirmation.order_number == "14"
    assert received == [payload.to_wire()]
    assert received[0]["totalAmount"] == 18.0


@pytest.mark.asyncio
async def test_submit_order_surfaces_server_message(api_server, payload) -> None:
    received: list = []
    body = {"message": "Item \"Burger\" is currently unavailable or does not exist."}
    server = await api_server(build_public_api(received, status=400, body=body))

    async with PublicApiClient(str(server.make_url("/api/public"))) as client:
        with pytest.raises(SubmissionFailed) as excinfo:
            await client.submit_order(payload)

    assert excinfo.value.status_code == 400
    assert excinfo.value.message == body["message"]


@pytest.mark.asyncio
async def test_submit_order_transport_error() -> None:
    from scanplate.domain.order import OrderLine, OrderPayload

    payload = OrderPayload(
        restaurant_id="rest-1",
        items=(OrderLine(menu_item_id="a1", name="Burger", quantity=1, unit_price=Decimal("8")),),
        table_number=2,
        total_amount=Decimal("8"),
    )

    async with PublicApiClient("http://127.0.0.1:1/api/public", timeout=2) as client:
        with pytest.raises(SubmissionFailed) as excinfo:
            await client.submit_order(payload)

    assert excinfo.value.status_code is None


def test_extract_error_message_variants() -> None:
    assert extract_error_message({"errors": [{"message": "Name required."}, {"msg": "Phone required."}]}) == (
        "Name required. Phone required."
    )
    assert extract_error_message({"message": "Validation failed.", "errors": {"name": "x"}}) == "Validation failed."
    assert extract_error_message(None) == "Failed to place order. Please try again."
    assert extract_error_message({}, fallback="oops") == "oops"
