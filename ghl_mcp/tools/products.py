"""Products tools: products, prices, inventory and collections."""

from __future__ import annotations

from typing import Any

from mcp import types

from ghl_mcp.client import GHLClient
from ghl_mcp.registry import (
    ToolProvider,
    ToolResult,
    compact,
    require,
    require_location,
    with_alt_id,
)

PRODUCT_TYPES = ["DIGITAL", "PHYSICAL", "SERVICE", "PHYSICAL/DIGITAL"]

_LOCATION = {
    "locationId": {"type": "string", "description": "GHL Location ID (optional, uses default if not provided)"}
}
_ALT_ID = {
    "altId": {"type": "string", "description": "Owner ID (defaults to the location ID)"},
    "altType": {"type": "string", "enum": ["location"], "description": "Owner type (defaults to location)"},
}
_ALT_KEYS = tuple(_ALT_ID)
_PRODUCT_ID = {"productId": {"type": "string", "description": "Product ID"}}
_PRODUCT_FIELDS: dict[str, Any] = {
    "name": {"type": "string", "description": "Product name"},
    "productType": {"type": "string", "enum": PRODUCT_TYPES, "description": "Type of product"},
    "description": {"type": "string", "description": "Product description"},
    "image": {"type": "string", "description": "Product image URL"},
    "availableInStore": {"type": "boolean", "description": "Whether product is available in store"},
    "slug": {"type": "string", "description": "Product URL slug"},
}
_SEO = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "SEO title"},
        "description": {"type": "string", "description": "SEO description"},
    },
}
_COLLECTION_FIELDS: dict[str, Any] = {
    "name": {"type": "string", "description": "Collection name"},
    "slug": {"type": "string", "description": "Collection URL slug"},
    "image": {"type": "string", "description": "Collection image URL"},
    "seo": _SEO,
}

TOOL_DEFINITIONS: list[types.Tool] = [
    types.Tool(
        name="ghl_create_product",
        description="Create a new product in GoHighLevel",
        inputSchema={
            "type": "object",
            "properties": {**_LOCATION, **_PRODUCT_FIELDS},
            "required": ["name", "productType"],
        },
    ),
    types.Tool(
        name="ghl_list_products",
        description="List products with optional filtering",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                "limit": {"type": "number", "description": "Maximum number of products to return"},
                "offset": {"type": "number", "description": "Number of products to skip"},
                "search": {"type": "string", "description": "Search term for product names"},
                "storeId": {"type": "string", "description": "Filter by store ID"},
                "includedInStore": {"type": "boolean", "description": "Filter by store inclusion status"},
                "availableInStore": {"type": "boolean", "description": "Filter by store availability"},
            },
            "required": [],
        },
    ),
    types.Tool(
        name="ghl_get_product",
        description="Get a specific product by ID",
        inputSchema={"type": "object", "properties": {**_PRODUCT_ID, **_LOCATION}, "required": ["productId"]},
    ),
    types.Tool(
        name="ghl_update_product",
        description="Update an existing product",
        inputSchema={
            "type": "object",
            "properties": {**_PRODUCT_ID, **_LOCATION, **_PRODUCT_FIELDS},
            "required": ["productId"],
        },
    ),
    types.Tool(
        name="ghl_delete_product",
        description="Delete a product by ID",
        inputSchema={"type": "object", "properties": {**_PRODUCT_ID, **_LOCATION}, "required": ["productId"]},
    ),
    types.Tool(
        name="ghl_create_price",
        description="Create a price for a product",
        inputSchema={
            "type": "object",
            "properties": {
                **_PRODUCT_ID,
                **_LOCATION,
                "name": {"type": "string", "description": "Price name/variant name"},
                "type": {"type": "string", "enum": ["one_time", "recurring"], "description": "Price type"},
                "currency": {"type": "string", "description": "Currency code (e.g., USD)"},
                "amount": {"type": "number", "description": "Price amount in cents"},
                "description": {"type": "string", "description": "Price description"},
                "compareAtPrice": {"type": "number", "description": "Compare at price (for discounts)"},
                "recurring": {
                    "type": "object",
                    "description": "Billing interval for recurring prices",
                    "properties": {
                        "interval": {"type": "string", "enum": ["day", "week", "month", "year"]},
                        "intervalCount": {"type": "number"},
                    },
                },
                "trackInventory": {"type": "boolean", "description": "Whether to track inventory"},
                "availableQuantity": {"type": "number", "description": "Available quantity"},
                "allowOutOfStockPurchases": {"type": "boolean"},
            },
            "required": ["productId", "name", "type", "currency", "amount"],
        },
    ),
    types.Tool(
        name="ghl_list_prices",
        description="List prices for a product",
        inputSchema={
            "type": "object",
            "properties": {
                **_PRODUCT_ID,
                **_LOCATION,
                "limit": {"type": "number", "description": "Maximum number of prices to return"},
                "offset": {"type": "number", "description": "Number of prices to skip"},
            },
            "required": ["productId"],
        },
    ),
    types.Tool(
        name="ghl_delete_price",
        description="Delete a specific price by ID",
        inputSchema={
            "type": "object",
            "properties": {
                **_PRODUCT_ID,
                **_LOCATION,
                "priceId": {"type": "string", "description": "Price ID to delete"},
            },
            "required": ["productId", "priceId"],
        },
    ),
    types.Tool(
        name="ghl_list_inventory",
        description="List inventory items with stock levels",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                **_ALT_ID,
                "limit": {"type": "number", "description": "Maximum number of items to return"},
                "offset": {"type": "number", "description": "Number of items to skip"},
                "search": {"type": "string", "description": "Search term for inventory items"},
            },
            "required": [],
        },
    ),
    types.Tool(
        name="ghl_update_inventory",
        description="Update inventory quantities for product prices",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                **_ALT_ID,
                "items": {
                    "type": "array",
                    "description": "Array of inventory items to update",
                    "items": {
                        "type": "object",
                        "properties": {
                            "priceId": {"type": "string", "description": "Price ID of the inventory item to update"},
                            "availableQuantity": {"type": "number", "description": "New available quantity"},
                            "allowOutOfStockPurchases": {
                                "type": "boolean",
                                "description": "Whether to allow purchases when out of stock",
                            },
                        },
                        "required": ["priceId"],
                    },
                },
            },
            "required": ["items"],
        },
    ),
    types.Tool(
        name="ghl_create_product_collection",
        description="Create a new product collection",
        inputSchema={
            "type": "object",
            "properties": {**_LOCATION, **_ALT_ID, **_COLLECTION_FIELDS},
            "required": ["name", "slug"],
        },
    ),
    types.Tool(
        name="ghl_update_product_collection",
        description="Update an existing product collection",
        inputSchema={
            "type": "object",
            "properties": {
                "collectionId": {"type": "string", "description": "Collection ID to update"},
                **_LOCATION,
                **_ALT_ID,
                **_COLLECTION_FIELDS,
            },
            "required": ["collectionId"],
        },
    ),
    types.Tool(
        name="ghl_delete_product_collection",
        description="Delete a product collection by ID",
        inputSchema={
            "type": "object",
            "properties": {
                "collectionId": {"type": "string", "description": "Collection ID to delete"},
                **_LOCATION,
                **_ALT_ID,
            },
            "required": ["collectionId"],
        },
    ),
    types.Tool(
        name="ghl_list_product_collections",
        description="List product collections",
        inputSchema={
            "type": "object",
            "properties": {
                **_LOCATION,
                **_ALT_ID,
                "limit": {"type": "number", "description": "Maximum number of collections to return"},
                "offset": {"type": "number", "description": "Number of collections to skip"},
                "name": {"type": "string", "description": "Search by collection name"},
            },
            "required": [],
        },
    ),
]

_PRICE_FIELDS = (
    "name",
    "type",
    "currency",
    "amount",
    "description",
    "compareAtPrice",
    "recurring",
    "trackInventory",
    "availableQuantity",
    "allowOutOfStockPurchases",
)


def _pick(arguments: dict[str, Any], keys: Any) -> dict[str, Any]:
    return compact({key: arguments.get(key) for key in keys})


class ProductsTools(ToolProvider):
    name = "products"
    TOOL_DEFINITIONS = TOOL_DEFINITIONS

    async def execute(
        self, tool_name: str, arguments: dict[str, Any], client: GHLClient
    ) -> ToolResult:
        if tool_name == "ghl_create_product":
            require(arguments, "name")
            require(arguments, "productType")
            body = {**_pick(arguments, _PRODUCT_FIELDS), "locationId": require_location(client)}
            payload = await client.create_product(body)
            return ToolResult(data=payload, message="Product created")

        if tool_name == "ghl_list_products":
            params = {
                **_pick(
                    arguments,
                    ("limit", "offset", "search", "storeId", "includedInStore", "availableInStore"),
                ),
                "locationId": require_location(client),
            }
            payload = await client.list_products(params)
            products = payload.get("products", [])
            return ToolResult(data=payload, message=f"Retrieved {len(products)} products")

        if tool_name == "ghl_get_product":
            payload = await client.get_product(
                str(require(arguments, "productId")), require_location(client)
            )
            return ToolResult(data=payload)

        if tool_name == "ghl_update_product":
            product_id = str(require(arguments, "productId"))
            body = {**_pick(arguments, _PRODUCT_FIELDS), "locationId": require_location(client)}
            payload = await client.update_product(product_id, body)
            return ToolResult(data=payload, message="Product updated")

        if tool_name == "ghl_delete_product":
            product_id = str(require(arguments, "productId"))
            payload = await client.delete_product(product_id, require_location(client))
            return ToolResult(data=payload, message=f"Product {product_id} deleted")

        if tool_name == "ghl_create_price":
            product_id = str(require(arguments, "productId"))
            for key in ("name", "type", "currency"):
                require(arguments, key)
            if arguments.get("amount") is None:
                require(arguments, "amount")
            body = {
                **_pick(arguments, _PRICE_FIELDS),
                "product": product_id,
                "locationId": require_location(client),
            }
            payload = await client.create_price(product_id, body)
            return ToolResult(data=payload, message="Price created")

        if tool_name == "ghl_list_prices":
            product_id = str(require(arguments, "productId"))
            params = {**_pick(arguments, ("limit", "offset")), "locationId": require_location(client)}
            payload = await client.list_prices(product_id, params)
            return ToolResult(data=payload)

        if tool_name == "ghl_delete_price":
            payload = await client.delete_price(
                str(require(arguments, "productId")),
                str(require(arguments, "priceId")),
                require_location(client),
            )
            return ToolResult(data=payload, message="Price deleted")

        if tool_name == "ghl_list_inventory":
            params = with_alt_id(_pick(arguments, ("limit", "offset", "search", *_ALT_KEYS)), client)
            payload = await client.list_inventory(params)
            return ToolResult(data=payload)

        if tool_name == "ghl_update_inventory":
            items = require(arguments, "items")
            body = with_alt_id({"items": items, **_pick(arguments, _ALT_KEYS)}, client)
            payload = await client.update_inventory(body)
            return ToolResult(data=payload, message=f"Updated {len(items)} inventory items")

        if tool_name == "ghl_create_product_collection":
            require(arguments, "name")
            require(arguments, "slug")
            body = with_alt_id(_pick(arguments, (*_COLLECTION_FIELDS, *_ALT_KEYS)), client)
            payload = await client.create_product_collection(body)
            return ToolResult(data=payload, message="Collection created")

        if tool_name == "ghl_update_product_collection":
            collection_id = str(require(arguments, "collectionId"))
            body = with_alt_id(_pick(arguments, (*_COLLECTION_FIELDS, *_ALT_KEYS)), client)
            payload = await client.update_product_collection(collection_id, body)
            return ToolResult(data=payload, message="Collection updated")

        if tool_name == "ghl_delete_product_collection":
            collection_id = str(require(arguments, "collectionId"))
            params = with_alt_id(_pick(arguments, _ALT_KEYS), client)
            payload = await client.delete_product_collection(collection_id, params)
            return ToolResult(data=payload, message=f"Collection {collection_id} deleted")

        if tool_name == "ghl_list_product_collections":
            params = with_alt_id(_pick(arguments, ("limit", "offset", "name", *_ALT_KEYS)), client)
            payload = await client.list_product_collections(params)
            return ToolResult(data=payload)

        raise self._unknown(tool_name)
