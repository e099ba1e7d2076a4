"""Invoice tools: templates, schedules, invoices and estimates.

Arguments are forwarded as the request body (or query) after ``altId`` and
``altType`` default to the call's location.
"""

from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import ToolProvider, ToolResult, require, split_id, with_alt_id

_ALT_ID = {
    "altId": {
        "type": "string",
        "description": "Location ID (automatically populated from the call's location if not provided)",
    }
}
_PAGE = {
    "limit": {"type": "string", "description": "Number of results per page", "default": "10"},
    "offset": {"type": "string", "description": "Offset for pagination", "default": "0"},
}
_SEARCH = {"search": {"type": "string", "description": "Search term"}}
_SEND = {
    "emailTo": {"type": "string", "description": "Email address to send to"},
    "subject": {"type": "string", "description": "Email subject"},
    "message": {"type": "string", "description": "Email message"},
}


def _tool(name: str, description: str, properties: dict[str, Any], required: list[str]) -> types.Tool:
    return types.Tool(
        name=name,
        description=description,
        inputSchema={
            "type": "object",
            "properties": {**_ALT_ID, **properties},
            "required": required,
        },
    )


_TEMPLATE_ID = {"templateId": {"type": "string", "description": "Template ID"}}
_INVOICE_ID = {"invoiceId": {"type": "string", "description": "Invoice ID"}}
_ESTIMATE_ID = {"estimateId": {"type": "string", "description": "Estimate ID"}}

TOOL_DEFINITIONS: list[types.Tool] = [
    _tool(
        "create_invoice_template",
        "Create a new invoice template",
        {
            "name": {"type": "string", "description": "Template name"},
            "title": {"type": "string", "description": "Invoice title"},
            "currency": {"type": "string", "description": "Currency code"},
            "dueDate": {"type": "string", "description": "Due date"},
        },
        ["name"],
    ),
    _tool(
        "list_invoice_templates",
        "List all invoice templates",
        {
            **_PAGE,
            "status": {"type": "string", "description": "Filter by status"},
            **_SEARCH,
            "paymentMode": {"type": "string", "enum": ["default", "live", "test"], "description": "Payment mode"},
        },
        [],
    ),
    _tool("get_invoice_template", "Get invoice template by ID", _TEMPLATE_ID, ["templateId"]),
    _tool(
        "update_invoice_template",
        "Update an existing invoice template",
        {
            **_TEMPLATE_ID,
            "name": {"type": "string", "description": "Template name"},
            "title": {"type": "string", "description": "Invoice title"},
            "currency": {"type": "string", "description": "Currency code"},
        },
        ["templateId"],
    ),
    _tool("delete_invoice_template", "Delete an invoice template", _TEMPLATE_ID, ["templateId"]),
    _tool(
        "create_invoice_schedule",
        "Create a new invoice schedule",
        {
            "name": {"type": "string", "description": "Schedule name"},
            **_TEMPLATE_ID,
            "contactId": {"type": "string", "description": "Contact ID"},
            "frequency": {"type": "string", "description": "Schedule frequency"},
        },
        ["name", "templateId", "contactId"],
    ),
    _tool(
        "list_invoice_schedules",
        "List all invoice schedules",
        {**_PAGE, "status": {"type": "string", "description": "Filter by status"}, **_SEARCH},
        [],
    ),
    _tool(
        "get_invoice_schedule",
        "Get invoice schedule by ID",
        {"scheduleId": {"type": "string", "description": "Schedule ID"}},
        ["scheduleId"],
    ),
    _tool(
        "create_invoice",
        "Create a new invoice",
        {
            "contactId": {"type": "string", "description": "Contact ID"},
            "title": {"type": "string", "description": "Invoice title"},
            "currency": {"type": "string", "description": "Currency code"},
            "issueDate": {"type": "string", "description": "Issue date"},
            "dueDate": {"type": "string", "description": "Due date"},
            "items": {"type": "array", "description": "Invoice items"},
        },
        ["contactId", "title"],
    ),
    _tool(
        "list_invoices",
        "List all invoices",
        {
            **_PAGE,
            "status": {"type": "string", "description": "Filter by status"},
            "contactId": {"type": "string", "description": "Filter by contact ID"},
            **_SEARCH,
        },
        [],
    ),
    _tool("get_invoice", "Get invoice by ID", _INVOICE_ID, ["invoiceId"]),
    _tool("send_invoice", "Send an invoice to customer", {**_INVOICE_ID, **_SEND}, ["invoiceId"]),
    _tool(
        "create_estimate",
        "Create a new estimate",
        {
            "contactId": {"type": "string", "description": "Contact ID"},
            "title": {"type": "string", "description": "Estimate title"},
            "currency": {"type": "string", "description": "Currency code"},
            "issueDate": {"type": "string", "description": "Issue date"},
            "validUntil": {"type": "string", "description": "Valid until date"},
        },
        ["contactId", "title"],
    ),
    _tool(
        "list_estimates",
        "List all estimates",
        {
            **_PAGE,
            "status": {
                "type": "string",
                "enum": ["all", "draft", "sent", "accepted", "declined", "invoiced", "viewed"],
                "description": "Filter by status",
            },
            "contactId": {"type": "string", "description": "Filter by contact ID"},
            **_SEARCH,
        },
        [],
    ),
    _tool("send_estimate", "Send an estimate to customer", {**_ESTIMATE_ID, **_SEND}, ["estimateId"]),
    _tool(
        "create_invoice_from_estimate",
        "Create an invoice from an estimate",
        {
            **_ESTIMATE_ID,
            "issueDate": {"type": "string", "description": "Invoice issue date"},
            "dueDate": {"type": "string", "description": "Invoice due date"},
        },
        ["estimateId"],
    ),
    _tool("generate_invoice_number", "Generate a unique invoice number", {}, []),
    _tool("generate_estimate_number", "Generate a unique estimate number", {}, []),
]


def _paged(arguments: dict[str, Any]) -> dict[str, Any]:
    return {"limit": "10", "offset": "0", **arguments}


class InvoiceTools(ToolProvider):
    name = "invoices"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        args = with_alt_id(arguments, client)

        # Templates
        if tool_name == "create_invoice_template":
            require(args, "name")
            return ToolResult(data=await client.create_invoice_template(args))
        if tool_name == "list_invoice_templates":
            return ToolResult(data=await client.list_invoice_templates(_paged(args)))
        if tool_name == "get_invoice_template":
            template_id, rest = split_id(args, "templateId")
            return ToolResult(data=await client.get_invoice_template(template_id, rest))
        if tool_name == "update_invoice_template":
            template_id, rest = split_id(args, "templateId")
            return ToolResult(data=await client.update_invoice_template(template_id, rest))
        if tool_name == "delete_invoice_template":
            template_id, rest = split_id(args, "templateId")
            payload = await client.delete_invoice_template(template_id, rest)
            return ToolResult(data=payload, message=f"Invoice template {template_id} deleted")

        # Schedules
        if tool_name == "create_invoice_schedule":
            for key in ("name", "templateId", "contactId"):
                require(args, key)
            return ToolResult(data=await client.create_invoice_schedule(args))
        if tool_name == "list_invoice_schedules":
            return ToolResult(data=await client.list_invoice_schedules(_paged(args)))
        if tool_name == "get_invoice_schedule":
            schedule_id, rest = split_id(args, "scheduleId")
            return ToolResult(data=await client.get_invoice_schedule(schedule_id, rest))

        # Invoices
        if tool_name == "create_invoice":
            require(args, "contactId")
            require(args, "title")
            return ToolResult(data=await client.create_invoice(args))
        if tool_name == "list_invoices":
            return ToolResult(data=await client.list_invoices(_paged(args)))
        if tool_name == "get_invoice":
            invoice_id, rest = split_id(args, "invoiceId")
            return ToolResult(data=await client.get_invoice(invoice_id, rest))
        if tool_name == "send_invoice":
            invoice_id, rest = split_id(args, "invoiceId")
            payload = await client.send_invoice(invoice_id, rest)
            return ToolResult(data=payload, message=f"Invoice {invoice_id} sent")

        # Estimates
        if tool_name == "create_estimate":
            require(args, "contactId")
            require(args, "title")
            return ToolResult(data=await client.create_estimate(args))
        if tool_name == "list_estimates":
            return ToolResult(data=await client.list_estimates(_paged(args)))
        if tool_name == "send_estimate":
            estimate_id, rest = split_id(args, "estimateId")
            payload = await client.send_estimate(estimate_id, rest)
            return ToolResult(data=payload, message=f"Estimate {estimate_id} sent")
        if tool_name == "create_invoice_from_estimate":
            estimate_id, rest = split_id(args, "estimateId")
            return ToolResult(data=await client.create_invoice_from_estimate(estimate_id, rest))

        if tool_name == "generate_invoice_number":
            return ToolResult(data=await client.generate_invoice_number(args))
        if tool_name == "generate_estimate_number":
            return ToolResult(data=await client.generate_estimate_number(args))

        raise self._unknown(tool_name)
