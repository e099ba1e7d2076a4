"""Tool provider contract and the per-server tool registry."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Iterable, Mapping, Sequence

from mcp import types
from pydantic import BaseModel

from ghl_mcp.client import GHLClient
from ghl_mcp.credentials import (
    API_CREDENTIALS_ARG,
    API_KEY_ARG,
    LOCATION_ID_ARG,
    USER_ID_ARG,
    CredentialPolicy,
)


class ToolArgumentError(ValueError):
    """Raised when a tool call is missing or has a malformed argument."""


class DuplicateToolError(RuntimeError):
    """Raised when two providers of one server declare the same tool name."""


class ToolResult(BaseModel):
    success: bool = True
    data: Any = None
    message: str | None = None


def require(arguments: Mapping[str, Any], key: str) -> Any:
    value = arguments.get(key)
    if value in (None, "", [], {}):
        raise ToolArgumentError(f"Missing required argument '{key}'.")
    return value


def split_id(arguments: Mapping[str, Any], key: str) -> tuple[str, dict[str, Any]]:
    """Pop the path identifier ``key`` out of the forwarded arguments."""
    identifier = str(require(arguments, key))
    return identifier, {name: value for name, value in arguments.items() if name != key}


def as_int(arguments: Mapping[str, Any], key: str, default: int) -> int:
    value = arguments.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ToolArgumentError(f"Argument '{key}' must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ToolArgumentError(f"Argument '{key}' must be an integer, got {value!r}.") from None


_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no")


def as_bool(arguments: Mapping[str, Any], key: str, default: bool | None = None) -> bool:
    """Read a boolean argument; the strings "true"/"false" are accepted."""
    value = arguments.get(key)
    if value is None or value == "":
        if default is None:
            raise ToolArgumentError(f"Missing required argument '{key}'.")
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in _TRUE + _FALSE:
        return value.strip().lower() in _TRUE
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ToolArgumentError(f"Argument '{key}' must be a boolean, got {value!r}.")


def require_location(client: GHLClient) -> str:
    if not client.location_id:
        raise ToolArgumentError(
            "Missing required argument 'locationId' (or the X-GHL-Location-ID header)."
        )
    return client.location_id


def with_alt_id(arguments: Mapping[str, Any], client: GHLClient) -> dict[str, Any]:
    """Default ``altId`` to the call's location and ``altType`` to "location"."""
    processed = dict(arguments)
    if not processed.get("altId"):
        processed["altId"] = require_location(client)
    if not processed.get("altType"):
        processed["altType"] = "location"
    return processed


def compact(values: Mapping[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {key: value for key, value in values.items() if value is not None}


class ToolProvider(ABC):
    """A family of tools backed by one upstream resource.

    Subclasses declare their tools in ``TOOL_DEFINITIONS`` and implement
    ``execute``. Providers hold no per-tenant state; the client for the current
    call is passed in.
    """

    name: str = ""
    TOOL_DEFINITIONS: ClassVar[Sequence[types.Tool]] = ()

    def list_tools(self) -> list[types.Tool]:
        return list(self.TOOL_DEFINITIONS)

    def tool_names(self) -> list[str]:
        return [tool.name for tool in self.TOOL_DEFINITIONS]

    @abstractmethod
    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        """Run ``tool_name`` against ``client`` and return its result."""

    def _unknown(self, tool_name: str) -> ToolArgumentError:
        return ToolArgumentError(f"Unknown {self.name} tool: {tool_name}")


def _credential_properties(policy: CredentialPolicy) -> dict[str, Any]:
    header_hint = "" if LOCATION_ID_ARG in policy.advertised else " (optional if using headers)"
    return {
        API_KEY_ARG: {
            "type": "string",
            "description": "GoHighLevel Private Integration API key (pk_live_...)",
        },
        LOCATION_ID_ARG: {
            "type": "string",
            "description": f"GoHighLevel Location ID{header_hint}",
        },
        USER_ID_ARG: {
            "type": "string",
            "description": "User identifier for tracking/logging (optional)",
        },
        API_CREDENTIALS_ARG: {
            "type": "object",
            "description": "Alternative to apiKey/locationId: all credentials in one object",
            "properties": {
                "accessToken": {"type": "string", "description": "GoHighLevel API access token"},
                "locationId": {"type": "string", "description": "GoHighLevel location ID"},
                "baseUrl": {"type": "string", "description": "API base URL (optional)"},
                "version": {"type": "string", "description": "API version (optional)"},
            },
        },
    }


def with_credentials(tool: types.Tool, policy: CredentialPolicy) -> types.Tool:
    """Return a copy of ``tool`` whose schema accepts the credential arguments."""
    schema = copy.deepcopy(tool.inputSchema) if tool.inputSchema else {"type": "object"}
    properties = _credential_properties(policy)
    properties.update(schema.get("properties") or {})
    required: list[str] = []
    for key in [*policy.advertised, *(schema.get("required") or [])]:
        if key not in required:
            required.append(key)
    schema["type"] = schema.get("type", "object")
    schema["properties"] = properties
    schema["required"] = required
    return tool.model_copy(update={"inputSchema": schema})


class ToolRegistry:
    """Name -> provider lookup built once per server."""

    def __init__(self, providers: Iterable[ToolProvider], policy: CredentialPolicy) -> None:
        self.providers = list(providers)
        self.policy = policy
        self._by_name: dict[str, ToolProvider] = {}
        for provider in self.providers:
            for tool_name in provider.tool_names():
                owner = self._by_name.get(tool_name)
                if owner is not None:
                    raise DuplicateToolError(
                        f'Tool "{tool_name}" is declared by both "{owner.name}" and "{provider.name}".'
                    )
                self._by_name[tool_name] = provider

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def provider_for(self, tool_name: str) -> ToolProvider | None:
        return self._by_name.get(tool_name)

    def list_tools(self) -> list[types.Tool]:
        return [
            with_credentials(tool, self.policy)
            for provider in self.providers
            for tool in provider.list_tools()
        ]
