from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from ghl_mcp.client import GHLClient
from ghl_mcp.config import Settings
from ghl_mcp.credentials import Credentials
from ghl_mcp.profiles import get_profile
from ghl_mcp.server import ToolServer

BASE_URL = "https://ghl.test"


class FakeGHL:
    """In-memory stand-in for the GoHighLevel API that records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responses: dict[tuple[str, str], tuple[int, Any]] = {}
        self.contacts: dict[str, dict[str, Any]] = {}

    def respond(self, method: str, path: str, status: int, payload: Any) -> None:
        self.responses[(method, path)] = (status, payload)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.responses:
            status, payload = self.responses[key]
            return httpx.Response(status, json=payload)

        if key == ("POST", "/contacts/"):
            contact = {"id": f"contact-{len(self.contacts) + 1}", **json.loads(request.content)}
            self.contacts[contact["id"]] = contact
            return httpx.Response(201, json={"contact": contact})
        if request.method == "GET" and request.url.path.startswith("/contacts/"):
            contact = self.contacts.get(request.url.path.rsplit("/", 1)[-1])
            if contact is None:
                return httpx.Response(404, json={"message": "Contact not found"})
            return httpx.Response(200, json={"contact": contact})

        return httpx.Response(200, json={})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def fake_ghl() -> FakeGHL:
    return FakeGHL()


@pytest.fixture
def client(fake_ghl: FakeGHL) -> GHLClient:
    return GHLClient(
        "pk_test",
        location_id="loc-1",
        base_url=BASE_URL,
        transport=httpx.MockTransport(fake_ghl),
    )


@pytest.fixture
def opened_clients() -> list[Credentials]:
    return []


@pytest.fixture
def make_server(fake_ghl: FakeGHL, opened_clients: list[Credentials]):
    def factory(profile: str = "core", settings: Settings | None = None) -> ToolServer:
        def client_factory(credentials: Credentials) -> GHLClient:
            opened_clients.append(credentials)
            return GHLClient(
                credentials.api_key,
                location_id=credentials.location_id,
                base_url=BASE_URL,
                transport=httpx.MockTransport(fake_ghl),
            )

        return ToolServer(get_profile(profile), settings or Settings(), client_factory=client_factory)

    return factory
