"""Tests for the httpx transport, run against httpx.MockTransport."""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from woocommerce_rest_api import HostPlatform, HttpxTransport, WooCommerceRestApi
from woocommerce_rest_api.log import log_event


def _mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_request_reaches_server_as_built():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json={"id": 7})

    transport = HttpxTransport(_mock_client(handler))
    api = WooCommerceRestApi(
        {"url": "https://shop.example.com", "jwtToken": "tok", "port": 8080},
        transport=transport,
    )
    response = await api.post("products", {"name": "Shirt"},
                               {"context": "edit", "meta": {"key": "color"}})

    assert response.status_code == 201
    assert response.json() == {"id": 7}
    request = seen[0]
    assert request.method == "POST"
    assert request.url.host == "shop.example.com"
    assert request.url.port == 8080
    assert request.url.path == "/wp-json/wc/v3/products"
    assert request.url.params["context"] == "edit"
    assert request.url.params["meta[key]"] == "color"
    assert request.headers["authorization"] == "Bearer tok"
    assert request.headers["content-type"] == "application/json;charset=utf-8"
    assert json.loads(request.content) == {"name": "Shirt"}
    await transport.aclose()


async def test_non_2xx_returned_unmodified():
    def handler(request):
        return httpx.Response(401, json={"code": "woocommerce_rest_cannot_view"})

    async with WooCommerceRestApi({"url": "https://a.test"},
                                  transport=HttpxTransport(_mock_client(handler))) as api:
        response = await api.get("orders")
    assert response.status_code == 401
    assert response.json()["code"] == "woocommerce_rest_cannot_view"


async def test_network_error_propagates():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    api = WooCommerceRestApi({"url": "https://a.test"}, transport=HttpxTransport(_mock_client(handler)))
    with pytest.raises(httpx.ConnectError):
        await api.get("orders")


async def test_encoding_applied_to_response():
    def handler(request):
        return httpx.Response(200, content="día".encode("latin-1"))

    api = WooCommerceRestApi({"url": "https://a.test", "encoding": "latin-1"},
                             transport=HttpxTransport(_mock_client(handler)))
    response = await api.get("products")
    assert response.text == "día"


async def test_owned_client_closed():
    transport = HttpxTransport()
    async with transport:
        pass
    assert transport._client.is_closed


async def test_borrowed_client_left_open():
    client = _mock_client(lambda request: httpx.Response(204))
    transport = HttpxTransport(client)
    await transport.aclose()
    assert not client.is_closed
    await client.aclose()


async def test_client_closes_default_transport():
    api = WooCommerceRestApi({"url": "https://a.test"})
    async with api:
        pass
    assert api._transport._client.is_closed


@pytest.mark.parametrize("name, expected", [
    ("linux", True), ("darwin", True), ("win32", True), ("emscripten", False), ("wasi", False),
])
def test_host_platform(name, expected):
    assert HostPlatform(name).exposes_process_identity() is expected


def test_log_event_is_json(caplog):
    with caplog.at_level(logging.INFO, logger="woocommerce_rest_api"):
        log_event("sent", status=200, endpoint="products")
    assert json.loads(caplog.records[-1].getMessage()) == {
        "event": "sent", "status": 200, "endpoint": "products"}

