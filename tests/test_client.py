from __future__ import annotations

import json

import anyio
import httpx
import pytest

from ghl_mcp.client import GHLClient, GHLError


def _client(handler, **kwargs) -> GHLClient:
    return GHLClient("pk_test", base_url="https://ghl.test/", transport=httpx.MockTransport(handler), **kwargs)


def test_api_key_is_required():
    with pytest.raises(ValueError):
        GHLClient("")


def test_headers_and_query_serialization():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async def scenario():
        async with _client(handler, version="2099-01-01") as client:
            return await client.request(
                "GET", "/things", params={"a": None, "b": "", "flag": False, "ids": ["x", "y"], "n": 3}
            )

    assert anyio.run(scenario) == {"ok": True}

    request = seen[0]
    assert str(request.url).startswith("https://ghl.test/things?")
    assert request.headers["Authorization"] == "Bearer pk_test"
    assert request.headers["Version"] == "2099-01-01"
    assert dict(request.url.params) == {"flag": "false", "ids": "x", "n": "3"}
    assert request.url.params.get_list("ids") == ["x", "y"]


def test_error_status_raises_with_upstream_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, json={"message": "email is invalid", "statusCode": 422})

    async def scenario():
        async with _client(handler) as client:
            await client.request("POST", "/contacts/", json_body={"email": "nope"})

    with pytest.raises(GHLError) as excinfo:
        anyio.run(scenario)

    assert excinfo.value.status_code == 422
    assert excinfo.value.detail == "email is invalid"
    assert str(excinfo.value) == "GoHighLevel API error (422): email is invalid"


def test_error_with_plain_text_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    async def scenario():
        async with _client(handler) as client:
            await client.request("GET", "/contacts/abc")

    with pytest.raises(GHLError) as excinfo:
        anyio.run(scenario)

    assert excinfo.value.status_code == 502
    assert excinfo.value.detail == "Bad Gateway"


def test_empty_and_text_bodies():
    responses = iter([httpx.Response(204), httpx.Response(200, text="done")])

    def handler(request: httpx.Request) -> httpx.Response:
        return next(responses)

    async def scenario():
        async with _client(handler) as client:
            return (
                await client.request("DELETE", "/contacts/abc"),
                await client.request("GET", "/ping"),
            )

    assert anyio.run(scenario) == ({}, "done")


def test_search_contacts_body_uses_bound_location():
    bodies: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(request.content)
        return httpx.Response(200, json={"contacts": [], "total": 0})

    async def scenario():
        async with _client(handler, location_id="loc-9") as client:
            await client.search_contacts(query="ada", limit=5)

    anyio.run(scenario)

    assert json.loads(bodies[0]) == {"locationId": "loc-9", "pageLimit": 5, "query": "ada"}
