from __future__ import annotations

from collections import Counter
from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import ToolProvider, ToolResult, require_location

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="ghl_get_workflows",
        description=(
            "Retrieve all workflows for a location. Workflows represent automation sequences "
            "that can be triggered by various events in the system."
        ),
        inputSchema={"type": "object", "properties": {}, "required": []},
    ),
]


class WorkflowTools(ToolProvider):
    name = "workflows"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "ghl_get_workflows":
            payload = await client.get_workflows(require_location(client))
            workflows = payload.get("workflows") or []
            statuses = Counter(str(workflow.get("status")) for workflow in workflows)
            return ToolResult(
                data={
                    "workflows": workflows,
                    "metadata": {
                        "totalWorkflows": len(workflows),
                        "workflowStatuses": dict(statuses),
                    },
                },
                message=f"Successfully retrieved {len(workflows)} workflows",
            )

        raise self._unknown(tool_name)
