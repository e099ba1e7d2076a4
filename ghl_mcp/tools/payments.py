"""Payment tools: integrations, orders, transactions, subscriptions, coupons and custom providers."""

from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import (
    ToolProvider,
    ToolResult,
    as_bool,
    require,
    require_location,
    split_id,
    with_alt_id,
)

_ALT = {
    "altId": {
        "type": "string",
        "description": "Location ID (automatically populated from the call's location if not provided)",
    },
    "altType": {
        "type": "string",
        "enum": ["location"],
        "description": 'Type of identifier (defaults to "location")',
    },
}
_PAGE = {
    "limit": {"type": "number", "description": "Maximum number of items per page"},
    "offset": {"type": "number", "description": "Starting index for pagination"},
}
_DATE_RANGE = {
    "paymentMode": {"type": "string", "description": "Mode of payment (live/test)"},
    "startAt": {"type": "string", "description": "Starting date interval (YYYY-MM-DD)"},
    "endAt": {"type": "string", "description": "Ending date interval (YYYY-MM-DD)"},
}
_COUPON_FIELDS: dict[str, Any] = {
    "name": {"type": "string", "description": "Coupon name"},
    "code": {"type": "string", "description": "Coupon code"},
    "discountType": {"type": "string", "enum": ["percentage", "amount"], "description": "Type of discount"},
    "discountValue": {"type": "number", "description": "Discount value"},
    "startDate": {"type": "string", "description": "Start date in YYYY-MM-DDTHH:mm:ssZ format"},
    "endDate": {"type": "string", "description": "End date in YYYY-MM-DDTHH:mm:ssZ format"},
    "usageLimit": {"type": "number", "description": "Maximum number of times coupon can be used"},
    "productIds": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Product IDs that the coupon applies to",
    },
    "applyToFuturePayments": {
        "type": "boolean",
        "description": "Whether coupon applies to future subscription payments",
    },
    "applyToFuturePaymentsConfig": {
        "type": "object",
        "description": "Configuration for future payments application",
        "properties": {
            "type": {"type": "string", "enum": ["forever", "fixed"]},
            "duration": {"type": "number", "description": "Duration for fixed type"},
            "durationType": {"type": "string", "enum": ["months"]},
        },
        "required": ["type"],
    },
    "limitPerCustomer": {"type": "boolean", "description": "Whether to limit coupon to once per customer"},
}
_COUPON_REQUIRED = ["name", "code", "discountType", "discountValue", "startDate"]
_COUPON_ID = {"id": {"type": "string", "description": "Coupon ID"}}
_PROVIDER_KEYS = {
    "type": "object",
    "properties": {
        "apiKey": {"type": "string", "description": "Provider API key"},
        "publishableKey": {"type": "string", "description": "Provider publishable key"},
    },
    "required": ["apiKey", "publishableKey"],
}


def _tool(name: str, description: str, properties: dict[str, Any], required: list[str]) -> types.Tool:
    return types.Tool(
        name=name,
        description=description,
        inputSchema={"type": "object", "properties": properties, "required": required},
    )


TOOL_DEFINITIONS: list[types.Tool] = [
    _tool(
        "create_whitelabel_integration_provider",
        "Create a white-label integration provider for payments",
        {
            **_ALT,
            "uniqueName": {
                "type": "string",
                "description": "A unique name for the integration provider (lowercase, hyphens only)",
            },
            "title": {"type": "string", "description": "The title of the integration provider"},
            "provider": {
                "type": "string",
                "enum": ["authorize-net", "nmi"],
                "description": "The type of payment provider",
            },
            "description": {"type": "string", "description": "A brief description of the provider"},
            "imageUrl": {"type": "string", "description": "Image representing the provider"},
        },
        ["uniqueName", "title", "provider", "description", "imageUrl"],
    ),
    _tool(
        "list_whitelabel_integration_providers",
        "List white-label integration providers with optional pagination",
        {**_ALT, **_PAGE},
        [],
    ),
    _tool(
        "list_orders",
        "List orders with optional filtering and pagination",
        {
            **_ALT,
            "status": {"type": "string", "description": "Order status filter"},
            **_DATE_RANGE,
            "search": {"type": "string", "description": "Search term for order name"},
            "contactId": {"type": "string", "description": "Contact ID for filtering orders"},
            "funnelProductIds": {"type": "string", "description": "Comma-separated funnel product IDs"},
            **_PAGE,
        },
        [],
    ),
    _tool(
        "get_order_by_id",
        "Get a specific order by its ID",
        {"orderId": {"type": "string", "description": "ID of the order to retrieve"}, **_ALT},
        ["orderId"],
    ),
    _tool(
        "create_order_fulfillment",
        "Create a fulfillment for an order",
        {
            "orderId": {"type": "string", "description": "ID of the order to fulfill"},
            **_ALT,
            "trackings": {
                "type": "array",
                "description": "Fulfillment tracking information",
                "items": {
                    "type": "object",
                    "properties": {
                        "trackingNumber": {"type": "string"},
                        "shippingCarrier": {"type": "string"},
                        "trackingUrl": {"type": "string"},
                    },
                },
            },
            "items": {
                "type": "array",
                "description": "Items being fulfilled",
                "items": {
                    "type": "object",
                    "properties": {
                        "priceId": {"type": "string", "description": "The ID of the product price"},
                        "qty": {"type": "number", "description": "Quantity of the item"},
                    },
                    "required": ["priceId", "qty"],
                },
            },
            "notifyCustomer": {"type": "boolean", "description": "Whether to notify the customer"},
        },
        ["orderId", "trackings", "items", "notifyCustomer"],
    ),
    _tool(
        "list_order_fulfillments",
        "List all fulfillments for an order",
        {"orderId": {"type": "string", "description": "ID of the order"}, **_ALT},
        ["orderId"],
    ),
    _tool(
        "list_transactions",
        "List transactions with optional filtering and pagination",
        {
            **_ALT,
            **_DATE_RANGE,
            "entitySourceType": {"type": "string", "description": "Source of the transactions"},
            "entitySourceSubType": {"type": "string", "description": "Source sub-type of the transactions"},
            "search": {"type": "string", "description": "Search term for transaction name"},
            "subscriptionId": {"type": "string", "description": "Subscription ID for filtering"},
            "entityId": {"type": "string", "description": "Entity ID for filtering"},
            "contactId": {"type": "string", "description": "Contact ID for filtering"},
            **_PAGE,
        },
        [],
    ),
    _tool(
        "get_transaction_by_id",
        "Get a specific transaction by its ID",
        {"transactionId": {"type": "string", "description": "ID of the transaction to retrieve"}, **_ALT},
        ["transactionId"],
    ),
    _tool(
        "list_subscriptions",
        "List subscriptions with optional filtering and pagination",
        {
            **_ALT,
            "entityId": {"type": "string", "description": "Entity ID for filtering subscriptions"},
            **_DATE_RANGE,
            "entitySourceType": {"type": "string", "description": "Source of the subscriptions"},
            "search": {"type": "string", "description": "Search term for subscription name"},
            "contactId": {"type": "string", "description": "Contact ID for the subscription"},
            "id": {"type": "string", "description": "Subscription ID for filtering"},
            **_PAGE,
        },
        [],
    ),
    _tool(
        "get_subscription_by_id",
        "Get a specific subscription by its ID",
        {"subscriptionId": {"type": "string", "description": "ID of the subscription to retrieve"}, **_ALT},
        ["subscriptionId"],
    ),
    _tool(
        "list_coupons",
        "List all coupons for a location with optional filtering",
        {
            **_ALT,
            **_PAGE,
            "status": {
                "type": "string",
                "enum": ["scheduled", "active", "expired"],
                "description": "Filter coupons by status",
            },
            "search": {"type": "string", "description": "Search term to filter coupons by name or code"},
        },
        [],
    ),
    _tool("create_coupon", "Create a new promotional coupon", {**_ALT, **_COUPON_FIELDS}, _COUPON_REQUIRED),
    _tool(
        "update_coupon",
        "Update an existing coupon",
        {**_COUPON_ID, **_ALT, **_COUPON_FIELDS},
        ["id", *_COUPON_REQUIRED],
    ),
    _tool("delete_coupon", "Delete a coupon permanently", {**_ALT, **_COUPON_ID}, ["id"]),
    _tool(
        "get_coupon",
        "Get coupon details by ID or code",
        {**_ALT, **_COUPON_ID, "code": {"type": "string", "description": "Coupon code"}},
        ["id", "code"],
    ),
    _tool(
        "create_custom_provider_integration",
        "Create a new custom payment provider integration",
        {
            "name": {"type": "string", "description": "Name of the custom provider"},
            "description": {"type": "string", "description": "Description of the payment gateway"},
            "paymentsUrl": {"type": "string", "description": "URL to load in iframe for payment session"},
            "queryUrl": {"type": "string", "description": "URL for querying payment events"},
            "imageUrl": {"type": "string", "description": "Public image URL for the payment gateway logo"},
        },
        ["name", "description", "paymentsUrl", "queryUrl", "imageUrl"],
    ),
    _tool(
        "delete_custom_provider_integration",
        "Delete an existing custom payment provider integration",
        {},
        [],
    ),
    _tool("get_custom_provider_config", "Fetch existing payment config for a location", {}, []),
    _tool(
        "create_custom_provider_config",
        "Create new payment config for a location",
        {
            "live": {**_PROVIDER_KEYS, "description": "Live payment configuration"},
            "test": {**_PROVIDER_KEYS, "description": "Test payment configuration"},
        },
        ["live", "test"],
    ),
    _tool(
        "disconnect_custom_provider_config",
        "Disconnect existing payment config for a location",
        {"liveMode": {"type": "boolean", "description": "Whether to disconnect live or test mode config"}},
        ["liveMode"],
    ),
]


class PaymentTools(ToolProvider):
    name = "payments"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        # Custom provider endpoints are addressed by locationId rather than altId.
        if tool_name == "create_custom_provider_integration":
            for key in ("name", "description", "paymentsUrl", "queryUrl", "imageUrl"):
                require(arguments, key)
            payload = await client.create_custom_provider_integration(
                require_location(client), arguments
            )
            return ToolResult(data=payload, message="Custom provider integration created")
        if tool_name == "delete_custom_provider_integration":
            payload = await client.delete_custom_provider_integration(require_location(client))
            return ToolResult(data=payload, message="Custom provider integration deleted")
        if tool_name == "get_custom_provider_config":
            return ToolResult(data=await client.get_custom_provider_config(require_location(client)))
        if tool_name == "create_custom_provider_config":
            require(arguments, "live")
            require(arguments, "test")
            payload = await client.create_custom_provider_config(require_location(client), arguments)
            return ToolResult(data=payload, message="Custom provider config created")
        if tool_name == "disconnect_custom_provider_config":
            payload = await client.disconnect_custom_provider_config(
                require_location(client), {"liveMode": as_bool(arguments, "liveMode")}
            )
            return ToolResult(data=payload, message="Custom provider config disconnected")

        args = with_alt_id(arguments, client)

        if tool_name == "create_whitelabel_integration_provider":
            for key in ("uniqueName", "title", "provider", "description", "imageUrl"):
                require(args, key)
            return ToolResult(data=await client.create_whitelabel_integration_provider(args))
        if tool_name == "list_whitelabel_integration_providers":
            return ToolResult(data=await client.list_whitelabel_integration_providers(args))

        if tool_name == "list_orders":
            return ToolResult(data=await client.list_orders(args))
        if tool_name == "get_order_by_id":
            order_id, rest = split_id(args, "orderId")
            return ToolResult(data=await client.get_order(order_id, rest))
        if tool_name == "create_order_fulfillment":
            order_id, rest = split_id(args, "orderId")
            require(rest, "trackings")
            require(rest, "items")
            payload = await client.create_order_fulfillment(order_id, rest)
            return ToolResult(data=payload, message=f"Fulfillment created for order {order_id}")
        if tool_name == "list_order_fulfillments":
            order_id, rest = split_id(args, "orderId")
            return ToolResult(data=await client.list_order_fulfillments(order_id, rest))

        if tool_name == "list_transactions":
            return ToolResult(data=await client.list_transactions(args))
        if tool_name == "get_transaction_by_id":
            transaction_id, rest = split_id(args, "transactionId")
            return ToolResult(data=await client.get_transaction(transaction_id, rest))

        if tool_name == "list_subscriptions":
            return ToolResult(data=await client.list_subscriptions(args))
        if tool_name == "get_subscription_by_id":
            subscription_id, rest = split_id(args, "subscriptionId")
            return ToolResult(data=await client.get_subscription(subscription_id, rest))

        if tool_name == "list_coupons":
            return ToolResult(data=await client.list_coupons(args))
        if tool_name == "create_coupon":
            for key in _COUPON_REQUIRED:
                if args.get(key) is None:
                    require(args, key)
            payload = await client.create_coupon(args)
            return ToolResult(data=payload, message=f"Coupon {args['code']} created")
        if tool_name == "update_coupon":
            require(args, "id")
            payload = await client.update_coupon(args)
            return ToolResult(data=payload, message=f"Coupon {args['id']} updated")
        if tool_name == "delete_coupon":
            require(args, "id")
            payload = await client.delete_coupon(args)
            return ToolResult(data=payload, message=f"Coupon {args['id']} deleted")
        if tool_name == "get_coupon":
            require(args, "id")
            require(args, "code")
            return ToolResult(data=await client.get_coupon(args))

        raise self._unknown(tool_name)
