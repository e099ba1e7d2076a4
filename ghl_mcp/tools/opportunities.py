"""Opportunity tools: pipelines, opportunities and their followers."""

from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import (
    ToolArgumentError,
    ToolProvider,
    ToolResult,
    as_int,
    compact,
    require,
    require_location,
)

OPPORTUNITY_STATUSES = ["open", "won", "lost", "abandoned"]

_OPPORTUNITY_ID = {"opportunityId": {"type": "string", "description": "Opportunity ID"}}
_OPPORTUNITY_FIELDS: dict[str, Any] = {
    "name": {"type": "string", "description": "Opportunity name"},
    "pipelineId": {"type": "string", "description": "Pipeline the opportunity belongs to"},
    "pipelineStageId": {"type": "string", "description": "Stage within the pipeline"},
    "status": {"type": "string", "enum": OPPORTUNITY_STATUSES},
    "contactId": {"type": "string", "description": "Contact the opportunity is for"},
    "monetaryValue": {"type": "number", "description": "Deal value"},
    "assignedTo": {"type": "string", "description": "User ID the opportunity is assigned to"},
}
_FOLLOWERS = {"followers": {"type": "array", "items": {"type": "string"}, "description": "User IDs"}}


def _tool(name: str, description: str, properties: dict[str, Any], required: list[str]) -> types.Tool:
    return types.Tool(
        name=name,
        description=description,
        inputSchema={"type": "object", "properties": properties, "required": required},
    )


TOOL_DEFINITIONS: list[types.Tool] = [
    _tool(
        "search_opportunities",
        "Search opportunities by text, pipeline, stage, status, contact or assignee",
        {
            "query": {"type": "string", "description": "Free-text search"},
            "pipelineId": {"type": "string"},
            "pipelineStageId": {"type": "string"},
            "status": {"type": "string", "enum": [*OPPORTUNITY_STATUSES, "all"]},
            "contactId": {"type": "string"},
            "assignedTo": {"type": "string"},
            "limit": {"type": "number", "description": "Maximum number of results", "default": 20},
        },
        [],
    ),
    _tool("get_pipelines", "List the sales pipelines and their stages", {}, []),
    _tool("get_opportunity", "Get an opportunity by ID", _OPPORTUNITY_ID, ["opportunityId"]),
    _tool(
        "create_opportunity",
        "Create an opportunity in a pipeline",
        _OPPORTUNITY_FIELDS,
        ["name", "pipelineId", "contactId"],
    ),
    _tool(
        "update_opportunity",
        "Update an opportunity. Fields not passed remain unchanged.",
        {**_OPPORTUNITY_ID, **_OPPORTUNITY_FIELDS},
        ["opportunityId"],
    ),
    _tool(
        "update_opportunity_status",
        "Mark an opportunity as open, won, lost or abandoned",
        {**_OPPORTUNITY_ID, "status": _OPPORTUNITY_FIELDS["status"]},
        ["opportunityId", "status"],
    ),
    _tool(
        "upsert_opportunity",
        "Create or update the opportunity of a contact in a pipeline",
        _OPPORTUNITY_FIELDS,
        ["pipelineId", "contactId"],
    ),
    _tool("delete_opportunity", "Delete an opportunity", _OPPORTUNITY_ID, ["opportunityId"]),
    _tool(
        "add_opportunity_followers",
        "Add followers to an opportunity",
        {**_OPPORTUNITY_ID, **_FOLLOWERS},
        ["opportunityId", "followers"],
    ),
    _tool(
        "remove_opportunity_followers",
        "Remove followers from an opportunity",
        {**_OPPORTUNITY_ID, **_FOLLOWERS},
        ["opportunityId", "followers"],
    ),
]

# Search takes snake_case query parameters upstream.
_SEARCH_PARAMS = {
    "query": "q",
    "pipelineId": "pipeline_id",
    "pipelineStageId": "pipeline_stage_id",
    "status": "status",
    "contactId": "contact_id",
    "assignedTo": "assigned_to",
}


def _fields(arguments: dict[str, Any]) -> dict[str, Any]:
    return compact({key: arguments.get(key) for key in _OPPORTUNITY_FIELDS})


def _status(arguments: dict[str, Any]) -> str:
    status = require(arguments, "status")
    if status not in OPPORTUNITY_STATUSES:
        raise ToolArgumentError(f"status must be one of {', '.join(OPPORTUNITY_STATUSES)}.")
    return status


class OpportunityTools(ToolProvider):
    name = "opportunities"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "search_opportunities":
            params = {upstream: arguments.get(key) for key, upstream in _SEARCH_PARAMS.items()}
            params["limit"] = as_int(arguments, "limit", 20)
            payload = await client.search_opportunities(require_location(client), params)
            opportunities = payload.get("opportunities", [])
            total = (payload.get("meta") or {}).get("total", len(opportunities))
            return ToolResult(
                data=payload, message=f"Found {len(opportunities)} opportunities (total: {total})"
            )

        if tool_name == "get_pipelines":
            payload = await client.get_pipelines(require_location(client))
            pipelines = payload.get("pipelines", [])
            return ToolResult(data=pipelines, message=f"Retrieved {len(pipelines)} pipelines")

        if tool_name == "get_opportunity":
            payload = await client.get_opportunity(str(require(arguments, "opportunityId")))
            return ToolResult(data=payload.get("opportunity", payload))

        if tool_name in ("create_opportunity", "upsert_opportunity"):
            body = _fields(arguments)
            require(body, "pipelineId")
            require(body, "contactId")
            if tool_name == "create_opportunity":
                require(body, "name")
                body.setdefault("status", "open")
            if "status" in body:
                _status(body)
            body["locationId"] = require_location(client)
            if tool_name == "create_opportunity":
                payload = await client.create_opportunity(body)
                return ToolResult(data=payload.get("opportunity", payload), message="Opportunity created")
            payload = await client.upsert_opportunity(body)
            action = "created" if payload.get("new") else "updated"
            return ToolResult(data=payload.get("opportunity", payload), message=f"Opportunity {action}")

        if tool_name == "update_opportunity":
            opportunity_id = str(require(arguments, "opportunityId"))
            body = _fields(arguments)
            if "status" in body:
                _status(body)
            payload = await client.update_opportunity(opportunity_id, body)
            return ToolResult(data=payload.get("opportunity", payload), message="Opportunity updated")

        if tool_name == "update_opportunity_status":
            opportunity_id = str(require(arguments, "opportunityId"))
            status = _status(arguments)
            payload = await client.update_opportunity_status(opportunity_id, status)
            return ToolResult(data=payload, message=f"Opportunity {opportunity_id} marked {status}")

        if tool_name == "delete_opportunity":
            opportunity_id = str(require(arguments, "opportunityId"))
            payload = await client.delete_opportunity(opportunity_id)
            return ToolResult(data=payload, message=f"Opportunity {opportunity_id} deleted")

        if tool_name in ("add_opportunity_followers", "remove_opportunity_followers"):
            opportunity_id = str(require(arguments, "opportunityId"))
            followers = require(arguments, "followers")
            if not isinstance(followers, list):
                raise ToolArgumentError("followers must be a list")
            followers = [str(follower) for follower in followers]
            if tool_name == "add_opportunity_followers":
                payload = await client.add_opportunity_followers(opportunity_id, followers)
            else:
                payload = await client.remove_opportunity_followers(opportunity_id, followers)
            return ToolResult(data=payload)

        raise self._unknown(tool_name)
