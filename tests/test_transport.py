from unittest.mock import MagicMock

import aiohttp
import httpx
import pytest
import requests

from convertkit_sdk.exceptions import ConvertKitAPIError
from convertkit_sdk.exceptions import TransportError
from convertkit_sdk.transport import AVAILABLE_TRANSPORTS
from convertkit_sdk.transport import HttpxTransport
from convertkit_sdk.transport import UnifiedResponse
from convertkit_sdk.transport import get_transport
from convertkit_sdk.transport.aiohttp import AiohttpTransport
from convertkit_sdk.transport.aiohttp import _stringify_params
from convertkit_sdk.transport.requests import RequestsTransport
from convertkit_sdk.transport.requests import _lowercase_bools


def test_get_transport_by_name():
    assert AVAILABLE_TRANSPORTS == ("httpx", "aiohttp", "requests")
    assert isinstance(get_transport("httpx"), HttpxTransport)
    assert isinstance(get_transport("HTTPX"), HttpxTransport)
    assert isinstance(get_transport("aiohttp"), AiohttpTransport)
    assert isinstance(get_transport("requests"), RequestsTransport)


def test_get_transport_unknown_name():
    with pytest.raises(ValueError, match="Unknown transport"):
        get_transport("urllib")


@pytest.mark.asyncio
async def test_httpx_transport_sends_request_and_wraps_response():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["authorization"] = request.headers.get("Authorization")
        return httpx.Response(404, json={"errors": ["Not Found"]})

    transport = HttpxTransport(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    response = await transport.request(
        "GET",
        "https://api.convertkit.com/v4/tags",
        headers={"Authorization": "Bearer t"},
        params={"include_total_count": False, "per_page": 10},
    )
    await transport.close()

    assert seen["method"] == "GET"
    assert seen["url"] == (
        "https://api.convertkit.com/v4/tags?include_total_count=false&per_page=10"
    )
    assert seen["authorization"] == "Bearer t"
    # non-success statuses are returned, not raised
    assert response.status_code == 404
    assert response.is_success is False
    assert await response.json() == {"errors": ["Not Found"]}


@pytest.mark.asyncio
async def test_httpx_transport_sends_json_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = request.content
        seen["content_type"] = request.headers.get("Content-Type")
        return httpx.Response(201, text="")

    transport = HttpxTransport(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    response = await transport.request(
        "POST", "https://api.convertkit.com/v4/tags", json={"name": "vip"}
    )

    assert b'"name"' in seen["body"]
    assert seen["content_type"] == "application/json"
    assert response.status_code == 201
    assert response.text == ""


@pytest.mark.asyncio
async def test_unified_response_json_errors():
    response = UnifiedResponse(200, text="<html>")

    with pytest.raises(ValueError):
        await response.json()


@pytest.mark.parametrize(
    "status_code, expected",
    [(200, True), (204, True), (302, True), (399, True), (400, False), (500, False), (199, False)],
)
def test_unified_response_is_success(status_code, expected):
    assert UnifiedResponse(status_code).is_success is expected


def test_query_bools_are_lowercased():
    params = {"include_total_count": True, "public": False, "per_page": 5}

    assert _lowercase_bools(params) == {
        "include_total_count": "true",
        "public": "false",
        "per_page": 5,
    }
    assert _lowercase_bools(None) == {}
    assert _stringify_params(params) == {
        "include_total_count": "true",
        "public": "false",
        "per_page": "5",
    }
    assert _stringify_params(None) is None


@pytest.mark.asyncio
async def test_httpx_transport_wraps_connection_failures():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    transport = HttpxTransport(
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    with pytest.raises(TransportError, match="ConnectTimeout") as exc_info:
        await transport.request("GET", "https://api.convertkit.com/v4/tags")

    assert isinstance(exc_info.value, ConvertKitAPIError)
    assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)


@pytest.mark.asyncio
async def test_requests_transport_wraps_connection_failures():
    transport = RequestsTransport()
    transport._session.request = MagicMock(
        side_effect=requests.ConnectionError("connection refused")
    )

    with pytest.raises(TransportError, match="ConnectionError") as exc_info:
        await transport.request("GET", "https://api.convertkit.com/v3/forms")

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


@pytest.mark.asyncio
async def test_aiohttp_transport_wraps_connection_failures():
    transport = AiohttpTransport()
    transport._session = MagicMock()
    transport._session.request = MagicMock(
        side_effect=aiohttp.ClientConnectionError("connection refused")
    )

    with pytest.raises(TransportError) as exc_info:
        await transport.request("GET", "https://api.convertkit.com/v3/forms")

    assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)
