"""Tests for HTTP-based adapters."""

import asyncio

import httpx
import pytest

from smartchef.adapters.dish_source_client import HttpxDishSourceClient


def test_dish_source_client_sends_query_and_unwraps_dishes() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"dishes": [{"id": "it-1"}]})

    client = HttpxDishSourceClient(
        base_url="https://dishes.example/api/",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    dishes = asyncio.run(client.fetch_dishes("IT", 10, 2026))

    assert dishes == [{"id": "it-1"}]
    assert seen[0].url.path == "/api/dishes"
    assert seen[0].url.params["countryCode"] == "IT"
    assert seen[0].url.params["month"] == "10"
    assert seen[0].url.params["year"] == "2026"


def test_dish_source_client_accepts_bare_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"id": "mx-1"}])

    client = HttpxDishSourceClient(
        base_url="https://dishes.example",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    assert asyncio.run(client.fetch_dishes("MX", 1, 2027)) == [{"id": "mx-1"}]
    asyncio.run(client.close())


def test_dish_source_client_raises_on_error_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "busy"})

    client = HttpxDishSourceClient(
        base_url="https://dishes.example",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(httpx.HTTPStatusError) as exc_info:
        asyncio.run(client.fetch_dishes("MX", 1, 2027))

    assert exc_info.value.response.status_code == 503
