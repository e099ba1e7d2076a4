from __future__ import annotations

import pytest
from mcp import types

from ghl_mcp.credentials import CredentialPolicy
from ghl_mcp.profiles import PROFILES, get_profile
from ghl_mcp.registry import (
    DuplicateToolError,
    ToolArgumentError,
    ToolProvider,
    ToolRegistry,
    ToolResult,
    as_bool,
    as_int,
    split_id,
    with_credentials,
)
from ghl_mcp.tools.contacts import ContactTools


class PingTools(ToolProvider):
    name = "ping"
    TOOL_DEFINITIONS = [
        types.Tool(
            name="ping",
            description="Ping",
            inputSchema={
                "type": "object",
                "properties": {"locationId": {"type": "string", "description": "Own location"}},
                "required": ["apiKey", "target"],
            },
        )
    ]

    async def execute(self, tool_name, arguments, client):
        return ToolResult(data="pong")


class OtherPingTools(ToolProvider):
    name = "other ping"
    TOOL_DEFINITIONS = [types.Tool(name="ping", description="Ping again", inputSchema={"type": "object"})]

    async def execute(self, tool_name, arguments, client):
        return ToolResult(data="pong again")


def _schemas(tools):
    return [tool.model_dump() for tool in tools]


def test_list_tools_is_idempotent():
    registry = get_profile("core").build_registry()

    assert _schemas(registry.list_tools()) == _schemas(registry.list_tools())


def test_provider_definitions_are_not_mutated():
    get_profile("core").build_registry().list_tools()

    for tool in ContactTools.TOOL_DEFINITIONS:
        assert "apiKey" not in tool.inputSchema["properties"]


def test_credential_properties_come_first():
    tools = get_profile("data").build_registry().list_tools()

    for tool in tools:
        assert list(tool.inputSchema["properties"])[:3] == ["apiKey", "locationId", "userId"]


def test_core_search_contacts_requires_api_key_and_location():
    tools = {tool.name: tool for tool in get_profile("core").build_registry().list_tools()}

    required = tools["search_contacts"].inputSchema["required"]
    assert required[:2] == ["apiKey", "locationId"]


def test_header_profiles_advertise_no_credentials():
    tools = {tool.name: tool for tool in get_profile("sales").build_registry().list_tools()}

    assert tools["create_invoice"].inputSchema["required"] == ["contactId", "title"]
    assert "apiKey" in tools["create_invoice"].inputSchema["properties"]


def test_tool_property_overrides_credential_property_and_required_is_deduplicated():
    merged = with_credentials(PingTools.TOOL_DEFINITIONS[0], CredentialPolicy())

    assert merged.inputSchema["properties"]["locationId"]["description"] == "Own location"
    assert merged.inputSchema["required"] == ["apiKey", "target"]


def test_schema_without_properties_is_completed():
    merged = with_credentials(OtherPingTools.TOOL_DEFINITIONS[0], CredentialPolicy())

    assert merged.inputSchema["type"] == "object"
    assert set(merged.inputSchema["properties"]) == {"apiKey", "locationId", "userId", "apiCredentials"}
    assert merged.inputSchema["required"] == ["apiKey"]


def test_duplicate_tool_names_fail_at_construction():
    with pytest.raises(DuplicateToolError) as excinfo:
        ToolRegistry([PingTools(), OtherPingTools()], CredentialPolicy())

    assert "ping" in str(excinfo.value)
    assert "other ping" in str(excinfo.value)


@pytest.mark.parametrize("name", sorted(PROFILES))
def test_every_profile_builds(name):
    profile = get_profile(name)
    registry = profile.build_registry()

    expected = sum(len(factory().tool_names()) for factory in profile.providers)
    assert len(registry) == expected
    assert len(registry.list_tools()) == expected


def test_all_profile_covers_every_group():
    registry = get_profile("all").build_registry()

    for tool_name in ("search_contacts", "ghl_create_association", "ghl_create_product",
                      "create_invoice", "list_coupons", "ghl_get_workflows", "verify_email",
                      "search_opportunities", "send_sms", "get_email_templates"):
        assert tool_name in registry
    assert registry.provider_for("ghl_get_workflows").name == "workflows"
    assert registry.provider_for("send_sms").name == "conversations"
    assert registry.provider_for("nope") is None


def test_unknown_profile():
    with pytest.raises(ValueError, match="Unknown server profile"):
        get_profile("marketing")


def test_provider_without_execute_cannot_be_built():
    class Incomplete(ToolProvider):
        name = "incomplete"

    with pytest.raises(TypeError):
        Incomplete()
    assert ToolProvider.TOOL_DEFINITIONS == ()


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), (False, False), ("false", False), ("TRUE", True), ("0", False), (1, True)],
)
def test_as_bool(value, expected):
    assert as_bool({"flag": value}, "flag") is expected


@pytest.mark.parametrize("value", ["maybe", 2, [True]])
def test_as_bool_rejects_other_values(value):
    with pytest.raises(ToolArgumentError, match="flag"):
        as_bool({"flag": value}, "flag")


def test_as_bool_default_and_missing():
    assert as_bool({}, "flag", False) is False
    with pytest.raises(ToolArgumentError, match="Missing required argument 'flag'"):
        as_bool({}, "flag")


def test_as_int():
    assert as_int({"skip": "5"}, "skip", 0) == 5
    assert as_int({"skip": None}, "skip", 7) == 7
    for value in ("abc", True, [1]):
        with pytest.raises(ToolArgumentError, match="skip"):
            as_int({"skip": value}, "skip", 0)


def test_split_id():
    identifier, rest = split_id({"orderId": 42, "altId": "loc-1"}, "orderId")

    assert identifier == "42"
    assert rest == {"altId": "loc-1"}
    with pytest.raises(ToolArgumentError, match="orderId"):
        split_id({}, "orderId")


def test_sales_and_communications_profiles():
    sales = get_profile("sales").build_registry()
    communications = get_profile("communications").build_registry()

    assert "search_opportunities" in sales
    assert "create_invoice" in sales
    assert "send_email" in communications
    assert "delete_email_template" in communications
    assert "send_email" not in sales
