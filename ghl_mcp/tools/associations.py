"""Association tools: association definitions and the relations between records."""

from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import ToolProvider, ToolResult, as_int, require

_LOCATION = {
    "locationId": {
        "type": "string",
        "description": "GoHighLevel location ID (will use default if not provided)",
    }
}
_PAGINATION = {
    "skip": {"type": "number", "description": "Number of records to skip for pagination", "default": 0},
    "limit": {
        "type": "number",
        "description": "Maximum number of records to return (max 100)",
        "default": 20,
    },
}
_ASSOCIATION_ID = {"associationId": {"type": "string", "description": "The association ID"}}

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="ghl_get_all_associations",
        description=(
            "Get all associations for a sub-account/location with pagination. Returns "
            "system-defined and user-defined associations."
        ),
        inputSchema={"type": "object", "properties": {**_LOCATION, **_PAGINATION}},
    ),
    types.Tool(
        name="ghl_create_association",
        description=(
            "Create a user-defined association between two object types, e.g. contact and a "
            "custom object."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                "key": {"type": "string", "description": "Unique key for the association"},
                "firstObjectLabel": {"description": "Label of the first object"},
                "firstObjectKey": {"description": "Key of the first object, e.g. custom_objects.car"},
                "secondObjectLabel": {"description": "Label of the second object"},
                "secondObjectKey": {"description": "Key of the second object, e.g. contact"},
            },
            "required": [
                "key",
                "firstObjectLabel",
                "firstObjectKey",
                "secondObjectLabel",
                "secondObjectKey",
            ],
        },
    ),
    types.Tool(
        name="ghl_get_association_by_id",
        description="Get a single association by its ID.",
        inputSchema={"type": "object", "properties": _ASSOCIATION_ID, "required": ["associationId"]},
    ),
    types.Tool(
        name="ghl_update_association",
        description="Update the labels of a user-defined association.",
        inputSchema={
            "type": "object",
            "properties": {
                **_ASSOCIATION_ID,
                "firstObjectLabel": {"description": "New label for the first object"},
                "secondObjectLabel": {"description": "New label for the second object"},
            },
            "required": ["associationId", "firstObjectLabel", "secondObjectLabel"],
        },
    ),
    types.Tool(
        name="ghl_delete_association",
        description="Delete a user-defined association and all relations created with it.",
        inputSchema={"type": "object", "properties": _ASSOCIATION_ID, "required": ["associationId"]},
    ),
    types.Tool(
        name="ghl_get_association_by_key",
        description="Get an association by its key name.",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                "keyName": {"type": "string", "description": "Association key name"},
            },
            "required": ["keyName"],
        },
    ),
    types.Tool(
        name="ghl_get_association_by_object_key",
        description="Get the associations defined for an object key.",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                "objectKey": {"type": "string", "description": "Object key, e.g. custom_objects.car"},
            },
            "required": ["objectKey"],
        },
    ),
    types.Tool(
        name="ghl_create_relation",
        description="Create a relation between two records using an existing association.",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                **_ASSOCIATION_ID,
                "firstRecordId": {"type": "string", "description": "ID of the first record"},
                "secondRecordId": {"type": "string", "description": "ID of the second record"},
            },
            "required": ["associationId", "firstRecordId", "secondRecordId"],
        },
    ),
    types.Tool(
        name="ghl_get_relations_by_record",
        description="Get all relations of a record, optionally filtered by association IDs.",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                **_PAGINATION,
                "recordId": {"type": "string", "description": "The record ID"},
                "associationIds": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Only return relations of these associations",
                },
            },
            "required": ["recordId"],
        },
    ),
    types.Tool(
        name="ghl_delete_relation",
        description="Delete a specific relation between two entities.",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                "relationId": {"type": "string", "description": "The ID of the relation to delete"},
            },
            "required": ["relationId"],
        },
    ),
]


class AssociationTools(ToolProvider):
    name = "associations"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "ghl_get_all_associations":
            payload = await client.get_associations(
                skip=as_int(arguments, "skip", 0),
                limit=as_int(arguments, "limit", 20),
            )
            count = len(payload.get("associations") or [])
            return ToolResult(data=payload, message=f"Retrieved {count} associations")

        if tool_name == "ghl_create_association":
            key = require(arguments, "key")
            payload = await client.create_association(
                {
                    "key": key,
                    "firstObjectLabel": require(arguments, "firstObjectLabel"),
                    "firstObjectKey": require(arguments, "firstObjectKey"),
                    "secondObjectLabel": require(arguments, "secondObjectLabel"),
                    "secondObjectKey": require(arguments, "secondObjectKey"),
                }
            )
            return ToolResult(data=payload, message=f"Association '{key}' created successfully")

        if tool_name == "ghl_get_association_by_id":
            payload = await client.get_association_by_id(str(require(arguments, "associationId")))
            return ToolResult(data=payload, message="Association retrieved successfully")

        if tool_name == "ghl_update_association":
            payload = await client.update_association(
                str(require(arguments, "associationId")),
                {
                    "firstObjectLabel": require(arguments, "firstObjectLabel"),
                    "secondObjectLabel": require(arguments, "secondObjectLabel"),
                },
            )
            return ToolResult(data=payload, message="Association updated successfully")

        if tool_name == "ghl_delete_association":
            payload = await client.delete_association(str(require(arguments, "associationId")))
            return ToolResult(data=payload, message="Association deleted successfully")

        if tool_name == "ghl_get_association_by_key":
            key_name = str(require(arguments, "keyName"))
            payload = await client.get_association_by_key(key_name)
            return ToolResult(
                data=payload, message=f"Association with key '{key_name}' retrieved successfully"
            )

        if tool_name == "ghl_get_association_by_object_key":
            object_key = str(require(arguments, "objectKey"))
            payload = await client.get_association_by_object_key(object_key)
            return ToolResult(
                data=payload,
                message=f"Association with object key '{object_key}' retrieved successfully",
            )

        if tool_name == "ghl_create_relation":
            payload = await client.create_relation(
                {
                    "associationId": require(arguments, "associationId"),
                    "firstRecordId": require(arguments, "firstRecordId"),
                    "secondRecordId": require(arguments, "secondRecordId"),
                }
            )
            return ToolResult(data=payload, message="Relation created successfully between records")

        if tool_name == "ghl_get_relations_by_record":
            payload = await client.get_relations_by_record(
                str(require(arguments, "recordId")),
                skip=as_int(arguments, "skip", 0),
                limit=as_int(arguments, "limit", 20),
                association_ids=arguments.get("associationIds"),
            )
            count = len(payload.get("relations") or [])
            return ToolResult(data=payload, message=f"Retrieved {count} relations for record")

        if tool_name == "ghl_delete_relation":
            payload = await client.delete_relation(str(require(arguments, "relationId")))
            return ToolResult(data=payload, message="Relation deleted successfully")

        raise self._unknown(tool_name)
