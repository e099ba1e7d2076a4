"""Conversation tools: threads, messages and outbound SMS/email."""

from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import (
    ToolArgumentError,
    ToolProvider,
    ToolResult,
    as_bool,
    as_int,
    compact,
    require,
    require_location,
)

MESSAGE_STATUSES = ["delivered", "failed", "pending", "read"]

_CONVERSATION_ID = {"conversationId": {"type": "string", "description": "Conversation ID"}}
_MESSAGE_ID = {"messageId": {"type": "string", "description": "Message ID"}}
_CONTACT_ID = {"contactId": {"type": "string", "description": "Contact to message"}}

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="send_sms",
        description="Send an SMS to a contact. The conversation is created if needed.",
        inputSchema={
            "type": "object",
            "properties": {
                **_CONTACT_ID,
                "message": {"type": "string", "description": "Message text (max 1600 characters)"},
                "fromNumber": {"type": "string", "description": "Sending number, if not the default"},
            },
            "required": ["contactId", "message"],
        },
    ),
    types.Tool(
        name="send_email",
        description="Send an email to a contact.",
        inputSchema={
            "type": "object",
            "properties": {
                **_CONTACT_ID,
                "subject": {"type": "string"},
                "html": {"type": "string", "description": "HTML body"},
                "message": {"type": "string", "description": "Plain-text body, used when html is absent"},
                "emailFrom": {"type": "string", "description": "Sender address"},
                "emailCc": {"type": "array", "items": {"type": "string"}},
                "emailBcc": {"type": "array", "items": {"type": "string"}},
                "attachments": {"type": "array", "items": {"type": "string"}, "description": "Attachment URLs"},
            },
            "required": ["contactId", "subject"],
        },
    ),
    types.Tool(
        name="search_conversations",
        description="Search conversations of the location.",
        inputSchema={
            "type": "object",
            "properties": {
                "contactId": {"type": "string", "description": "Only conversations with this contact"},
                "query": {"type": "string", "description": "Free-text search"},
                "status": {"type": "string", "enum": ["all", "read", "unread", "starred", "recents"]},
                "assignedTo": {"type": "string", "description": "User ID the conversation is assigned to"},
                "limit": {"type": "number", "default": 20},
            },
            "required": [],
        },
    ),
    types.Tool(
        name="get_conversation",
        description="Get a conversation and its most recent messages.",
        inputSchema={
            "type": "object",
            "properties": {**_CONVERSATION_ID, "limit": {"type": "number", "default": 20}},
            "required": ["conversationId"],
        },
    ),
    types.Tool(
        name="create_conversation",
        description="Start a conversation with a contact.",
        inputSchema={"type": "object", "properties": _CONTACT_ID, "required": ["contactId"]},
    ),
    types.Tool(
        name="update_conversation",
        description="Star, unstar or change the unread count of a conversation.",
        inputSchema={
            "type": "object",
            "properties": {
                **_CONVERSATION_ID,
                "starred": {"type": "boolean"},
                "unreadCount": {"type": "number"},
            },
            "required": ["conversationId"],
        },
    ),
    types.Tool(
        name="delete_conversation",
        description="Delete a conversation.",
        inputSchema={"type": "object", "properties": _CONVERSATION_ID, "required": ["conversationId"]},
    ),
    types.Tool(
        name="get_message",
        description="Get a single message by ID.",
        inputSchema={"type": "object", "properties": _MESSAGE_ID, "required": ["messageId"]},
    ),
    types.Tool(
        name="update_message_status",
        description="Update the delivery status of a message.",
        inputSchema={
            "type": "object",
            "properties": {**_MESSAGE_ID, "status": {"type": "string", "enum": MESSAGE_STATUSES}},
            "required": ["messageId", "status"],
        },
    ),
]


class ConversationTools(ToolProvider):
    name = "conversations"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "send_sms":
            message = str(require(arguments, "message"))
            if len(message) > 1600:
                raise ToolArgumentError("SMS message is limited to 1600 characters.")
            body = compact(
                {
                    "type": "SMS",
                    "contactId": require(arguments, "contactId"),
                    "message": message,
                    "fromNumber": arguments.get("fromNumber"),
                }
            )
            payload = await client.send_message(body)
            return ToolResult(data=payload, message="SMS sent")

        if tool_name == "send_email":
            if not (arguments.get("html") or arguments.get("message")):
                raise ToolArgumentError("send_email needs an html or message body.")
            body = compact(
                {
                    "type": "Email",
                    "contactId": require(arguments, "contactId"),
                    "subject": require(arguments, "subject"),
                    **{
                        key: arguments.get(key)
                        for key in ("html", "message", "emailFrom", "emailCc", "emailBcc", "attachments")
                    },
                }
            )
            payload = await client.send_message(body)
            return ToolResult(data=payload, message="Email sent")

        if tool_name == "search_conversations":
            params = {key: arguments.get(key) for key in ("contactId", "query", "status", "assignedTo")}
            params["limit"] = as_int(arguments, "limit", 20)
            payload = await client.search_conversations(require_location(client), params)
            conversations = payload.get("conversations", [])
            return ToolResult(
                data=payload,
                message=f"Found {len(conversations)} conversations (total: {payload.get('total', len(conversations))})",
            )

        if tool_name == "get_conversation":
            conversation_id = str(require(arguments, "conversationId"))
            conversation = await client.get_conversation(conversation_id)
            messages = await client.get_conversation_messages(
                conversation_id, {"limit": as_int(arguments, "limit", 20)}
            )
            return ToolResult(data={"conversation": conversation, "messages": messages.get("messages", messages)})

        if tool_name == "create_conversation":
            payload = await client.create_conversation(
                require_location(client), str(require(arguments, "contactId"))
            )
            return ToolResult(data=payload.get("conversation", payload), message="Conversation created")

        if tool_name == "update_conversation":
            conversation_id = str(require(arguments, "conversationId"))
            body: dict[str, Any] = {"locationId": require_location(client)}
            if arguments.get("starred") is not None:
                body["starred"] = as_bool(arguments, "starred")
            if arguments.get("unreadCount") is not None:
                body["unreadCount"] = as_int(arguments, "unreadCount", 0)
            payload = await client.update_conversation(conversation_id, body)
            return ToolResult(data=payload.get("conversation", payload), message="Conversation updated")

        if tool_name == "delete_conversation":
            conversation_id = str(require(arguments, "conversationId"))
            payload = await client.delete_conversation(conversation_id)
            return ToolResult(data=payload, message=f"Conversation {conversation_id} deleted")

        if tool_name == "get_message":
            payload = await client.get_message(str(require(arguments, "messageId")))
            return ToolResult(data=payload.get("message", payload))

        if tool_name == "update_message_status":
            message_id = str(require(arguments, "messageId"))
            status = require(arguments, "status")
            if status not in MESSAGE_STATUSES:
                raise ToolArgumentError(f"status must be one of {', '.join(MESSAGE_STATUSES)}.")
            payload = await client.update_message_status(message_id, status)
            return ToolResult(data=payload, message=f"Message {message_id} marked {status}")

        raise self._unknown(tool_name)
