"""Custom field tools: location custom fields, the v2 custom-fields API and folders."""

from __future__ import annotations

import base64
import binascii
from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import ToolArgumentError, ToolProvider, ToolResult, as_int, compact, require

FIELD_TYPES = [
    "TEXT",
    "LARGE_TEXT",
    "NUMERICAL",
    "PHONE",
    "MONETORY",
    "CHECKBOX",
    "SINGLE_OPTIONS",
    "MULTIPLE_OPTIONS",
    "DATE",
    "TEXTBOX_LIST",
    "FILE_UPLOAD",
    "RADIO",
    "EMAIL",
    types.Tool(
        name="ghl_create_custom_field_folder",
        description="Create a folder that groups the custom fields of an object.",
        inputSchema={
            "type": "object",
            "properties": {
                "objectKey": {"type": "string", "description": "e.g. custom_objects.pet or business"},
                "name": {"type": "string", "description": "Folder name"},
            },
            "required": ["objectKey", "name"],
        },
    ),
    types.Tool(
        name="ghl_update_custom_field_folder",
        description="Rename a custom field folder.",
        inputSchema={
            "type": "object",
            "properties": {
                "id": {"type": "string", "description": "Folder ID"},
                "name": {"type": "string", "description": "New folder name"},
            },
            "required": ["id", "name"],
        },
    ),
    types.Tool(
        name="ghl_delete_custom_field_folder",
        description="Delete a custom field folder.",
        inputSchema={
            "type": "object",
            "properties": {"id": {"type": "string", "description": "Folder ID"}},
            "required": ["id"],
        },
    ),
    types.Tool(
        name="list_custom_field_options",
        description="List the options of a location's option-type custom field.",
        inputSchema={
            "type": "object",
            "properties": {"customFieldId": {"type": "string", "description": "Custom field ID"}},
            "required": ["customFieldId"],
        },
    ),
    types.Tool(
        name="create_custom_field_option",
        description="Append an option to a location's option-type custom field.",
        inputSchema={
            "type": "object",
            "properties": {
                "customFieldId": {"type": "string", "description": "Custom field ID"},
                "option": {"type": "string", "description": "Option to add"},
            },
            "required": ["customFieldId", "option"],
        },
    ),
    types.Tool(
        name="upload_custom_field_file",
        description="Upload a file to a location's FILE_UPLOAD custom field.",
        inputSchema={
            "type": "object",
            "properties": {
                "customFieldId": {"type": "string", "description": "Custom field ID"},
                "fileName": {"type": "string", "description": "Name of the uploaded file"},
                "fileContent": {"type": "string", "description": "File content, base64 encoded"},
                "contentType": {"type": "string", "default": "application/octet-stream"},
                "maxFiles": {"type": "number", "default": 1},
            },
            "required": ["customFieldId", "fileName", "fileContent"],
        },
    ),
]

_FIELD_PROPERTIES: dict[str, Any] = {
    "name": {"type": "string", "description": "Field display name"},
    "description": {"type": "string"},
    "placeholder": {"type": "string"},
    "showInForms": {"type": "boolean", "description": "Whether the field is offered in forms"},
    "options": {
        "type": "array",
        "description": "Options for option-type fields",
        "items": {
            "type": "object",
            "properties": {"key": {"type": "string"}, "label": {"type": "string"}},
        },
    },
    "acceptedFormats": {"type": "string", "description": "Accepted file formats for FILE_UPLOAD"},
    "maxFileLimit": {"type": "number"},
}

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="list_custom_fields",
        description="List all custom fields of the location.",
        inputSchema={
            "type": "object",
            "properties": {
                "model": {
                    "type": "string",
                    "enum": ["contact", "opportunity", "all"],
                    "description": "Restrict to one model",
                }
            },
            "required": [],
        },
    ),
    types.Tool(
        name="ghl_get_custom_field_by_id",
        description="Get a custom field or folder by its ID.",
        inputSchema={
            "type": "object",
            "properties": {"id": {"type": "string", "description": "Custom field ID"}},
            "required": ["id"],
        },
    ),
    types.Tool(
        name="ghl_create_custom_field",
        description="Create a custom field on a custom object or company.",
        inputSchema={
            "type": "object",
            "properties": {
                "objectKey": {
                    "type": "string",
                    "description": "Object the field belongs to, e.g. custom_objects.pet or business",
                },
                "parentId": {"type": "string", "description": "Folder ID to create the field in"},
                "fieldKey": {"type": "string", "description": "Unique key, e.g. custom_object.pet.name"},
                "dataType": {"type": "string", "enum": FIELD_TYPES},
                **_FIELD_PROPERTIES,
            },
            "required": ["objectKey", "parentId", "fieldKey", "dataType", "name"],
        },
    ),
    types.Tool(
        name="ghl_update_custom_field",
        description="Update a custom field by its ID.",
        inputSchema={
            "type": "object",
            "properties": {"id": {"type": "string", "description": "Custom field ID"}, **_FIELD_PROPERTIES},
            "required": ["id"],
        },
    ),
    types.Tool(
        name="ghl_delete_custom_field",
        description="Delete a custom field by its ID.",
        inputSchema={
            "type": "object",
            "properties": {"id": {"type": "string", "description": "Custom field ID"}},
            "required": ["id"],
        },
    ),
    types.Tool(
        name="ghl_get_custom_fields_by_object_key",
        description="List the custom fields and folders of an object.",
        inputSchema={
            "type": "object",
            "properties": {
                "objectKey": {"type": "string", "description": "e.g. custom_objects.pet or business"}
            },
            "required": ["objectKey"],
        },
    ),
]


class CustomFieldTools(ToolProvider):
    name = "custom fields"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "list_custom_fields":
            model = arguments.get("model")
            payload = await client.list_custom_fields(model=model if model != "all" else None)
            fields = payload.get("customFields", [])
            return ToolResult(data=fields, message=f"Retrieved {len(fields)} custom fields")

        if tool_name == "ghl_get_custom_field_by_id":
            payload = await client.get_custom_field(str(require(arguments, "id")))
            return ToolResult(data=payload.get("field", payload))

        if tool_name == "ghl_create_custom_field":
            body = compact(
                {
                    "objectKey": require(arguments, "objectKey"),
                    "parentId": require(arguments, "parentId"),
                    "fieldKey": require(arguments, "fieldKey"),
                    "dataType": require(arguments, "dataType"),
                    "name": require(arguments, "name"),
                    **{key: arguments.get(key) for key in _FIELD_PROPERTIES if key != "name"},
                }
            )
            payload = await client.create_custom_field(body)
            return ToolResult(data=payload.get("field", payload), message="Custom field created")

        if tool_name == "ghl_update_custom_field":
            field_id = str(require(arguments, "id"))
            body = compact({key: arguments.get(key) for key in _FIELD_PROPERTIES})
            payload = await client.update_custom_field(field_id, body)
            return ToolResult(data=payload.get("field", payload), message="Custom field updated")

        if tool_name == "ghl_delete_custom_field":
            field_id = str(require(arguments, "id"))
            payload = await client.delete_custom_field(field_id)
            return ToolResult(data=payload, message=f"Custom field {field_id} deleted")

        if tool_name == "ghl_get_custom_fields_by_object_key":
            payload = await client.get_custom_fields_by_object_key(str(require(arguments, "objectKey")))
            return ToolResult(data=payload)

        if tool_name == "ghl_create_custom_field_folder":
            payload = await client.create_custom_field_folder(
                str(require(arguments, "objectKey")), str(require(arguments, "name"))
            )
            return ToolResult(data=payload, message="Custom field folder created")

        if tool_name == "ghl_update_custom_field_folder":
            payload = await client.update_custom_field_folder(
                str(require(arguments, "id")), str(require(arguments, "name"))
            )
            return ToolResult(data=payload, message="Custom field folder updated")

        if tool_name == "ghl_delete_custom_field_folder":
            folder_id = str(require(arguments, "id"))
            payload = await client.delete_custom_field_folder(folder_id)
            return ToolResult(data=payload, message=f"Custom field folder {folder_id} deleted")

        if tool_name == "list_custom_field_options":
            field = await self._location_field(client, arguments)
            options = field.get("picklistOptions") or []
            return ToolResult(data=options, message=f"{len(options)} options")

        if tool_name == "create_custom_field_option":
            field_id = str(require(arguments, "customFieldId"))
            option = str(require(arguments, "option"))
            field = await self._location_field(client, arguments)
            options = list(field.get("picklistOptions") or [])
            if option in options:
                return ToolResult(data=options, message=f"Option '{option}' already exists")
            options.append(option)
            payload = await client.update_location_custom_field(
                field_id, {"name": field.get("name"), "options": options}
            )
            return ToolResult(data=payload.get("customField", payload), message=f"Option '{option}' added")

        if tool_name == "upload_custom_field_file":
            field_id = str(require(arguments, "customFieldId"))
            try:
                content = base64.b64decode(str(require(arguments, "fileContent")), validate=True)
            except binascii.Error:
                raise ToolArgumentError("fileContent must be base64 encoded.") from None
            payload = await client.upload_custom_field_file(
                field_id,
                str(require(arguments, "fileName")),
                content,
                arguments.get("contentType") or "application/octet-stream",
                max_files=as_int(arguments, "maxFiles", 1),
            )
            return ToolResult(data=payload, message="File uploaded")

        raise self._unknown(tool_name)

    async def _location_field(self, client: GHLClient, arguments: dict[str, Any]) -> dict[str, Any]:
        payload = await client.get_location_custom_field(str(require(arguments, "customFieldId")))
        return payload.get("customField", payload)
