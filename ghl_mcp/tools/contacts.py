"""Contact tools: CRUD, bulk updates, tags, tasks, notes, appointments and followers."""

from __future__ import annotations

import logging
from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient, GHLError
from ghl_mcp.registry import (
    ToolArgumentError,
    ToolProvider,
    ToolResult,
    as_bool,
    compact,
    require,
)

logger = logging.getLogger(__name__)

CONTACT_FIELDS = (
    "firstName",
    "lastName",
    "name",
    "email",
    "phone",
    "companyName",
    "source",
    "tags",
    "address1",
    "city",
    "state",
    "postalCode",
    "country",
    "website",
    "timezone",
    "dnd",
    "assignedTo",
    "customFields",
)

_CONTACT_PROPERTIES: dict[str, Any] = {
    "firstName": {"type": "string", "description": "Contact first name"},
    "lastName": {"type": "string", "description": "Contact last name"},
    "name": {"type": "string", "description": "Full name, if first/last are not split"},
    "email": {"type": "string", "description": "Contact email address"},
    "phone": {"type": "string", "description": "Contact phone number (E.164 preferred)"},
    "companyName": {"type": "string", "description": "Company the contact works for"},
    "source": {"type": "string", "description": "Lead source label"},
    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags to set on the contact"},
    "address1": {"type": "string", "description": "Street address"},
    "city": {"type": "string"},
    "state": {"type": "string"},
    "postalCode": {"type": "string"},
    "country": {"type": "string", "description": "Two-letter country code"},
    "website": {"type": "string"},
    "timezone": {"type": "string"},
    "dnd": {"type": "boolean", "description": "Do-not-disturb flag"},
    "assignedTo": {"type": "string", "description": "User ID the contact is assigned to"},
    "customFields": {
        "type": "array",
        "description": "Custom field values",
        "items": {
            "type": "object",
            "properties": {
                "id": {"type": "string"},
                "key": {"type": "string"},
                "field_value": {},
            },
        },
    },
}

_CONTACT_ID = {"contactId": {"type": "string", "description": "The contact ID"}}

BULK_TAG_OPERATIONS = ("add", "remove")


def _schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required or []}


TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="search_contacts",
        description="Search contacts in GoHighLevel CRM by free-text query.",
        inputSchema=_schema(
            {
                "query": {"type": "string", "description": "Search query (name, email, phone, ...)"},
                "limit": {
                    "type": "number",
                    "description": "Maximum number of contacts to return",
                    "default": 25,
                },
            }
        ),
    ),
    types.Tool(
        name="get_contact",
        description="Get a specific contact by ID.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
    types.Tool(
        name="create_contact",
        description="Create a new contact.",
        inputSchema=_schema(_CONTACT_PROPERTIES),
    ),
    types.Tool(
        name="update_contact",
        description="Update an existing contact. Fields not passed remain unchanged.",
        inputSchema=_schema({**_CONTACT_ID, **_CONTACT_PROPERTIES}, ["contactId"]),
    ),
    types.Tool(
        name="delete_contact",
        description="Delete a contact.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
    types.Tool(
        name="upsert_contact",
        description=(
            "Create or update a contact, matched on email or phone according to the "
            "location's duplicate settings."
        ),
        inputSchema=_schema(_CONTACT_PROPERTIES),
    ),
    types.Tool(
        name="duplicate_contact_check",
        description="Find an existing contact with the given email or phone number.",
        inputSchema=_schema(
            {
                "email": {"type": "string", "description": "Email to check"},
                "phone": {"type": "string", "description": "Phone number to check"},
            }
        ),
    ),
    types.Tool(
        name="add_contact_tags",
        description="Add tags to a contact.",
        inputSchema=_schema(
            {**_CONTACT_ID, "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags to add"}},
            ["contactId", "tags"],
        ),
    ),
    types.Tool(
        name="remove_contact_tags",
        description="Remove tags from a contact.",
        inputSchema=_schema(
            {**_CONTACT_ID, "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags to remove"}},
            ["contactId", "tags"],
        ),
    ),
    types.Tool(
        name="get_contact_tasks",
        description="List the tasks of a contact.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
    types.Tool(
        name="create_contact_task",
        description="Create a task on a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "title": {"type": "string", "description": "Task title"},
                "body": {"type": "string", "description": "Task description"},
                "dueDate": {"type": "string", "description": "Due date (ISO 8601)"},
                "completed": {"type": "boolean", "default": False},
                "assignedTo": {"type": "string", "description": "User ID to assign the task to"},
            },
            ["contactId", "title", "dueDate"],
        ),
    ),
    types.Tool(
        name="update_contact_task",
        description="Update a task on a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "taskId": {"type": "string", "description": "Task ID"},
                "title": {"type": "string"},
                "body": {"type": "string"},
                "dueDate": {"type": "string"},
                "completed": {"type": "boolean"},
                "assignedTo": {"type": "string"},
            },
            ["contactId", "taskId"],
        ),
    ),
    types.Tool(
        name="delete_contact_task",
        description="Delete a task from a contact.",
        inputSchema=_schema(
            {**_CONTACT_ID, "taskId": {"type": "string", "description": "Task ID"}},
            ["contactId", "taskId"],
        ),
    ),
    types.Tool(
        name="update_contact_task_status",
        description="Mark a contact task as completed or not completed.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "taskId": {"type": "string", "description": "Task ID"},
                "completed": {"type": "boolean", "description": "New completion status"},
            },
            ["contactId", "taskId", "completed"],
        ),
    ),
    types.Tool(
        name="get_contact_notes",
        description="List the notes of a contact.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
    types.Tool(
        name="create_contact_note",
        description="Add a note to a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "body": {"type": "string", "description": "Note content"},
                "authorId": {"type": "string", "description": "User ID recorded as the note author"},
            },
            ["contactId", "body"],
        ),
    ),
    types.Tool(
        name="update_contact_note",
        description="Update a note on a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "noteId": {"type": "string", "description": "Note ID"},
                "body": {"type": "string", "description": "Note content"},
            },
            ["contactId", "noteId", "body"],
        ),
    ),
    types.Tool(
        name="delete_contact_note",
        description="Delete a note from a contact.",
        inputSchema=_schema(
            {**_CONTACT_ID, "noteId": {"type": "string", "description": "Note ID"}},
            ["contactId", "noteId"],
        ),
    ),
    types.Tool(
        name="get_contact_appointments",
        description="List the calendar appointments of a contact.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
    types.Tool(
        name="get_contact_followers",
        description="List the user IDs following a contact.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
    types.Tool(
        name="add_contact_follower",
        description="Add followers (user IDs) to a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "followers": {"type": "array", "items": {"type": "string"}, "description": "User IDs"},
            },
            ["contactId", "followers"],
        ),
    ),
    types.Tool(
        name="remove_contact_follower",
        description="Remove followers (user IDs) from a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "followers": {"type": "array", "items": {"type": "string"}, "description": "User IDs"},
            },
            ["contactId", "followers"],
        ),
    ),
    types.Tool(
        name="bulk_delete_contacts",
        description=(
            "Delete several contacts one by one. Contacts that fail are reported together "
            "after every deletion was attempted."
        ),
        inputSchema=_schema(
            {"contactIds": {"type": "array", "items": {"type": "string"}, "description": "Contact IDs"}},
            ["contactIds"],
        ),
    ),
    types.Tool(
        name="bulk_update_contact_tags",
        description="Add or remove tags on many contacts at once.",
        inputSchema=_schema(
            {
                "contactIds": {"type": "array", "items": {"type": "string"}, "description": "Contact IDs"},
                "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags to add or remove"},
                "operation": {"type": "string", "enum": list(BULK_TAG_OPERATIONS)},
                "removeAllTags": {
                    "type": "boolean",
                    "description": "Remove every existing tag first (remove only)",
                },
            },
            ["contactIds", "tags", "operation"],
        ),
    ),
    types.Tool(
        name="bulk_update_contact_business",
        description="Link many contacts to a business, or unlink them when businessId is omitted.",
        inputSchema=_schema(
            {
                "contactIds": {"type": "array", "items": {"type": "string"}, "description": "Contact IDs"},
                "businessId": {"type": "string", "description": "Business ID; omit to unlink"},
            },
            ["contactIds"],
        ),
    ),
    types.Tool(
        name="create_contact_appointment",
        description="Book a calendar appointment for a contact.",
        inputSchema=_schema(
            {
                **_CONTACT_ID,
                "calendarId": {"type": "string", "description": "Calendar to book on"},
                "startTime": {"type": "string", "description": "Start time (ISO 8601)"},
                "endTime": {"type": "string", "description": "End time (ISO 8601)"},
                "title": {"type": "string"},
                "appointmentStatus": {
                    "type": "string",
                    "enum": ["new", "confirmed", "cancelled", "showed", "noshow", "invalid"],
                },
                "assignedUserId": {"type": "string", "description": "User the appointment is assigned to"},
                "address": {"type": "string", "description": "Meeting location or link"},
                "ignoreDateRange": {"type": "boolean"},
                "toNotify": {"type": "boolean", "description": "Send notifications to the contact"},
            },
            ["contactId", "calendarId", "startTime"],
        ),
    ),
    types.Tool(
        name="delete_contact_appointment",
        description="Delete a calendar appointment.",
        inputSchema=_schema(
            {"appointmentId": {"type": "string", "description": "Appointment (event) ID"}},
            ["appointmentId"],
        ),
    ),
    types.Tool(
        name="get_business_by_contact_id",
        description="Get the business a contact is linked to.",
        inputSchema=_schema(_CONTACT_ID, ["contactId"]),
    ),
]

_APPOINTMENT_FIELDS = (
    "calendarId",
    "startTime",
    "endTime",
    "title",
    "appointmentStatus",
    "assignedUserId",
    "address",
    "ignoreDateRange",
    "toNotify",
)


def _contact_body(arguments: dict[str, Any]) -> dict[str, Any]:
    return compact({key: arguments.get(key) for key in CONTACT_FIELDS})


def _as_str_list(value: Any, key: str) -> list[str]:
    if not isinstance(value, list):
        raise ToolArgumentError(f"{key} must be a list")
    return [str(item) for item in value]


class ContactTools(ToolProvider):
    name = "contacts"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "search_contacts":
            payload = await client.search_contacts(
                query=arguments.get("query"),
                limit=as_int(arguments, "limit", 25),
            )
            contacts = payload.get("contacts", [])
            return ToolResult(
                data=payload,
                message=f"Found {len(contacts)} contacts (total: {payload.get('total', len(contacts))})",
            )

        if tool_name == "get_contact":
            payload = await client.get_contact(str(require(arguments, "contactId")))
            return ToolResult(data=payload.get("contact", payload))

        if tool_name == "create_contact":
            body = _contact_body(arguments)
            if not any(body.get(key) for key in ("firstName", "name", "email", "phone")):
                raise ToolArgumentError(
                    "create_contact needs at least one of firstName, name, email or phone."
                )
            payload = await client.create_contact(body)
            return ToolResult(data=payload.get("contact", payload), message="Contact created")

        if tool_name == "update_contact":
            contact_id = str(require(arguments, "contactId"))
            payload = await client.update_contact(contact_id, _contact_body(arguments))
            return ToolResult(data=payload.get("contact", payload), message="Contact updated")

        if tool_name == "delete_contact":
            contact_id = str(require(arguments, "contactId"))
            payload = await client.delete_contact(contact_id)
            return ToolResult(data=payload, message=f"Contact {contact_id} deleted")

        if tool_name == "upsert_contact":
            body = _contact_body(arguments)
            if not (body.get("email") or body.get("phone")):
                raise ToolArgumentError("upsert_contact needs an email or a phone number.")
            payload = await client.upsert_contact(body)
            action = "created" if payload.get("new") else "updated"
            return ToolResult(data=payload.get("contact", payload), message=f"Contact {action}")

        if tool_name == "duplicate_contact_check":
            email = arguments.get("email")
            phone = arguments.get("phone")
            if not (email or phone):
                raise ToolArgumentError("Provide an email or a phone number to check.")
            payload = await client.get_duplicate_contact(email=email, number=phone)
            duplicate = payload.get("contact")
            return ToolResult(
                data={"exists": duplicate is not None, "contact": duplicate},
                message="Duplicate found" if duplicate else "No duplicate found",
            )

        if tool_name in ("add_contact_tags", "remove_contact_tags"):
            contact_id = str(require(arguments, "contactId"))
            tags = _as_str_list(require(arguments, "tags"), "tags")
            if tool_name == "add_contact_tags":
                payload = await client.add_contact_tags(contact_id, tags)
            else:
                payload = await client.remove_contact_tags(contact_id, tags)
            return ToolResult(data=payload)

        if tool_name == "get_contact_tasks":
            payload = await client.get_contact_tasks(str(require(arguments, "contactId")))
            return ToolResult(data=payload.get("tasks", payload))

        if tool_name == "create_contact_task":
            contact_id = str(require(arguments, "contactId"))
            body = compact(
                {
                    "title": require(arguments, "title"),
                    "body": arguments.get("body"),
                    "dueDate": require(arguments, "dueDate"),
                    "completed": as_bool(arguments, "completed", False),
                    "assignedTo": arguments.get("assignedTo"),
                }
            )
            payload = await client.create_contact_task(contact_id, body)
            return ToolResult(data=payload.get("task", payload), message="Task created")

        if tool_name == "update_contact_task":
            contact_id = str(require(arguments, "contactId"))
            task_id = str(require(arguments, "taskId"))
            body = compact({key: arguments.get(key) for key in ("title", "body", "dueDate", "assignedTo")})
            if arguments.get("completed") is not None:
                body["completed"] = as_bool(arguments, "completed")
            payload = await client.update_contact_task(contact_id, task_id, body)
            return ToolResult(data=payload.get("task", payload), message="Task updated")

        if tool_name == "delete_contact_task":
            payload = await client.delete_contact_task(
                str(require(arguments, "contactId")), str(require(arguments, "taskId"))
            )
            return ToolResult(data=payload, message="Task deleted")

        if tool_name == "update_contact_task_status":
            payload = await client.update_contact_task_status(
                str(require(arguments, "contactId")),
                str(require(arguments, "taskId")),
                completed=as_bool(arguments, "completed"),
            )
            return ToolResult(data=payload.get("task", payload))

        if tool_name == "get_contact_notes":
            payload = await client.get_contact_notes(str(require(arguments, "contactId")))
            return ToolResult(data=payload.get("notes", payload))

        if tool_name == "create_contact_note":
            contact_id = str(require(arguments, "contactId"))
            body = compact({"body": require(arguments, "body"), "userId": arguments.get("authorId")})
            payload = await client.create_contact_note(contact_id, body)
            return ToolResult(data=payload.get("note", payload), message="Note created")

        if tool_name == "update_contact_note":
            payload = await client.update_contact_note(
                str(require(arguments, "contactId")),
                str(require(arguments, "noteId")),
                {"body": require(arguments, "body")},
            )
            return ToolResult(data=payload.get("note", payload), message="Note updated")

        if tool_name == "delete_contact_note":
            payload = await client.delete_contact_note(
                str(require(arguments, "contactId")), str(require(arguments, "noteId"))
            )
            return ToolResult(data=payload, message="Note deleted")

        if tool_name == "get_contact_appointments":
            payload = await client.get_contact_appointments(str(require(arguments, "contactId")))
            return ToolResult(data=payload.get("events", payload))

        if tool_name == "get_contact_followers":
            payload = await client.get_contact(str(require(arguments, "contactId")))
            contact = payload.get("contact", payload)
            followers = contact.get("followers", []) if isinstance(contact, dict) else []
            return ToolResult(data={"followers": followers}, message=f"{len(followers)} followers")

        if tool_name in ("add_contact_follower", "remove_contact_follower"):
            contact_id = str(require(arguments, "contactId"))
            followers = _as_str_list(require(arguments, "followers"), "followers")
            if tool_name == "add_contact_follower":
                payload = await client.add_contact_followers(contact_id, followers)
            else:
                payload = await client.remove_contact_followers(contact_id, followers)
            return ToolResult(data=payload)

        if tool_name == "bulk_delete_contacts":
            return await self._bulk_delete(
                _as_str_list(require(arguments, "contactIds"), "contactIds"), client
            )

        if tool_name == "bulk_update_contact_tags":
            contact_ids = _as_str_list(require(arguments, "contactIds"), "contactIds")
            tags = _as_str_list(require(arguments, "tags"), "tags")
            operation = require(arguments, "operation")
            if operation not in BULK_TAG_OPERATIONS:
                raise ToolArgumentError("operation must be 'add' or 'remove'.")
            payload = await client.bulk_update_contact_tags(
                operation,
                contact_ids,
                tags,
                remove_all_tags=operation == "remove" and as_bool(arguments, "removeAllTags", False),
            )
            verb = "Added" if operation == "add" else "Removed"
            return ToolResult(data=payload, message=f"{verb} {len(tags)} tags on {len(contact_ids)} contacts")

        if tool_name == "bulk_update_contact_business":
            contact_ids = _as_str_list(require(arguments, "contactIds"), "contactIds")
            business_id = arguments.get("businessId") or None
            payload = await client.bulk_update_contact_business(contact_ids, business_id)
            action = f"linked to business {business_id}" if business_id else "unlinked from their business"
            return ToolResult(data=payload, message=f"{len(contact_ids)} contacts {action}")

        if tool_name == "create_contact_appointment":
            body = compact(
                {
                    "contactId": require(arguments, "contactId"),
                    **{key: arguments.get(key) for key in _APPOINTMENT_FIELDS},
                }
            )
            require(body, "calendarId")
            require(body, "startTime")
            payload = await client.create_appointment(body)
            return ToolResult(data=payload, message="Appointment created")

        if tool_name == "delete_contact_appointment":
            appointment_id = str(require(arguments, "appointmentId"))
            payload = await client.delete_calendar_event(appointment_id)
            return ToolResult(data=payload, message=f"Appointment {appointment_id} deleted")

        if tool_name == "get_business_by_contact_id":
            contact_id = str(require(arguments, "contactId"))
            payload = await client.get_contact(contact_id)
            contact = payload.get("contact", payload)
            business_id = contact.get("businessId") if isinstance(contact, dict) else None
            if not business_id:
                return ToolResult(data=None, message=f"Contact {contact_id} is not linked to a business")
            payload = await client.get_business(business_id)
            return ToolResult(data=payload.get("business", payload))

        raise self._unknown(tool_name)

    async def _bulk_delete(self, contact_ids: list[str], client: GHLClient) -> ToolResult:
        # No bulk endpoint upstream; deletions are not rolled back on failure.
        deleted: list[str] = []
        failures: dict[str, GHLError] = {}
        for contact_id in contact_ids:
            try:
                await client.delete_contact(contact_id)
            except GHLError as exc:
                logger.warning("Could not delete contact %s: %s", contact_id, exc)
                failures[contact_id] = exc
            else:
                deleted.append(contact_id)

        if failures:
            first = next(iter(failures.values()))
            summary = ", ".join(f"{contact_id} ({exc.detail})" for contact_id, exc in failures.items())
            raise GHLError(
                first.status_code,
                f"{len(failures)} of {len(contact_ids)} contacts were not deleted: {summary}. "
                f"Deleted: {', '.join(deleted) or 'none'}",
            )
        return ToolResult(data={"deleted": deleted}, message=f"Deleted {len(deleted)} contacts")
