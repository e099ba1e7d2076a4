from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import ToolProvider, ToolResult, require

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="verify_email",
        description="Verify the deliverability of an email address (charged to the location's wallet).",
        inputSchema={
            "type": "object",
            "properties": {"email": {"type": "string", "description": "Email address to verify"}},
            "required": ["email"],
        },
    ),
]


class EmailVerificationTools(ToolProvider):
    name = "email verification"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "verify_email":
            email = str(require(arguments, "email"))
            payload = await client.verify_email(email)
            result = payload.get("result") if isinstance(payload, dict) else None
            return ToolResult(
                data=payload,
                message=f"{email}: {result}" if result else f"Verification requested for {email}",
            )

        raise self._unknown(tool_name)
