from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import ToolProvider, ToolResult, as_int, compact, require, require_location

_PAGING = {
    "limit": {"type": "number", "default": 10},
    "offset": {"type": "number", "default": 0},
}

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="get_email_campaigns",
        description="List scheduled email campaigns.",
        inputSchema={
            "type": "object",
            "properties": {
                "status": {
                    "type": "string",
                    "enum": ["active", "pause", "complete", "cancelled", "retry", "draft", "resend-scheduled"],
                },
                **_PAGING,
            },
            "required": [],
        },
    ),
    types.Tool(
        name="get_email_templates",
        description="List email builder templates.",
        inputSchema={"type": "object", "properties": _PAGING, "required": []},
    ),
    types.Tool(
        name="create_email_template",
        description="Create an email builder template.",
        inputSchema={
            "type": "object",
            "properties": {
                "title": {"type": "string", "description": "Template title"},
                "html": {"type": "string", "description": "Template HTML"},
                "isPlainText": {"type": "boolean", "default": False},
            },
            "required": ["title", "html"],
        },
    ),
    types.Tool(
        name="update_email_template",
        description="Replace the HTML of an email builder template.",
        inputSchema={
            "type": "object",
            "properties": {
                "templateId": {"type": "string"},
                "html": {"type": "string", "description": "New template HTML"},
                "previewText": {"type": "string"},
            },
            "required": ["templateId", "html"],
        },
    ),
    types.Tool(
        name="delete_email_template",
        description="Delete an email builder template.",
        inputSchema={
            "type": "object",
            "properties": {"templateId": {"type": "string"}},
            "required": ["templateId"],
        },
    ),
]


def _paging(arguments: dict[str, Any]) -> dict[str, Any]:
    return {"limit": as_int(arguments, "limit", 10), "offset": as_int(arguments, "offset", 0)}


class EmailTools(ToolProvider):
    name = "email"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "get_email_campaigns":
            params = {**_paging(arguments), "status": arguments.get("status")}
            payload = await client.get_email_campaigns(require_location(client), params)
            campaigns = payload.get("schedules", [])
            return ToolResult(data=payload, message=f"Retrieved {len(campaigns)} campaigns")

        if tool_name == "get_email_templates":
            payload = await client.get_email_templates(require_location(client), _paging(arguments))
            templates = payload.get("builders", [])
            return ToolResult(data=payload, message=f"Retrieved {len(templates)} templates")

        if tool_name == "create_email_template":
            body = compact(
                {
                    "locationId": require_location(client),
                    "title": require(arguments, "title"),
                    "html": require(arguments, "html"),
                    "type": "html",
                    "isPlainText": arguments.get("isPlainText"),
                }
            )
            payload = await client.create_email_template(body)
            return ToolResult(data=payload, message="Email template created")

        if tool_name == "update_email_template":
            body = compact(
                {
                    "locationId": require_location(client),
                    "templateId": require(arguments, "templateId"),
                    "html": require(arguments, "html"),
                    "previewText": arguments.get("previewText"),
                    "editorType": "html",
                }
            )
            payload = await client.update_email_template(body)
            return ToolResult(data=payload, message="Email template updated")

        if tool_name == "delete_email_template":
            template_id = str(require(arguments, "templateId"))
            payload = await client.delete_email_template(require_location(client), template_id)
            return ToolResult(data=payload, message=f"Email template {template_id} deleted")

        raise self._unknown(tool_name)
