from __future__ import annotations

# Lightweight GoHighLevel REST client helpers.

from typing import Any, Dict, Iterable, Mapping, Optional

import httpx

from ghl_mcp.config import DEFAULT_API_VERSION, DEFAULT_BASE_URL


class GHLError(RuntimeError):
    """Raised when the GoHighLevel API returns a non-successful response."""

    def __init__(self, status_code: int, detail: Any) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"GoHighLevel API error ({status_code}): {detail}")


class GHLClient:
    """Minimal async client for the GoHighLevel v2 REST API.

    One instance is bound to a single tenant: the bearer token and the default
    location are fixed at construction.
    """

    def __init__(
        self,
        api_key: str,
        *,
        location_id: str = "",
        base_url: str = DEFAULT_BASE_URL,
        version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("GoHighLevel API key is required.")

        self.location_id = location_id or ""
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Version": version,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GHLClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _serialize_param_value(value: Any) -> Any:
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (list, tuple, set)):
            return [str(item) for item in value]
        return value

    def _prepare_query(self, params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        for key, value in (params or {}).items():
            if value is None or value == "":
                continue
            query[key] = self._serialize_param_value(value)
        return query

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Execute an HTTP request and raise GHLError on failure."""
        response = await self._client.request(
            method,
            path,
            params=self._prepare_query(params),
            json=dict(json_body) if json_body is not None else None,
            data=dict(data) if data is not None else None,
            files=files,
        )
        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {"message": response.text or "Unknown error"}
            detail = payload.get("message") if isinstance(payload, dict) else None
            raise GHLError(response.status_code, detail or payload)
        if not response.content:
            return {}
        if response.headers.get("Content-Type", "").startswith("application/json"):
            return response.json()
        return response.text

    # Contacts

    async def search_contacts(
        self,
        *,
        query: Optional[str] = None,
        limit: int = 25,
        filters: Optional[Iterable[Mapping[str, Any]]] = None,
    ) -> dict[str, Any]:
        body: Dict[str, Any] = {"locationId": self.location_id, "pageLimit": limit}
        if query:
            body["query"] = query
        if filters:
            body["filters"] = list(filters)
        return await self.request("POST", "/contacts/search", json_body=body)

    async def get_contact(self, contact_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/contacts/{contact_id}")

    async def create_contact(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", "/contacts/", json_body={"locationId": self.location_id, **body}
        )

    async def update_contact(self, contact_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/contacts/{contact_id}", json_body=body)

    async def delete_contact(self, contact_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/contacts/{contact_id}")

    async def upsert_contact(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", "/contacts/upsert", json_body={"locationId": self.location_id, **body}
        )

    async def get_duplicate_contact(
        self, *, email: Optional[str] = None, number: Optional[str] = None
    ) -> dict[str, Any]:
        return await self.request(
            "GET",
            "/contacts/search/duplicate",
            params={"locationId": self.location_id, "email": email, "number": number},
        )

    async def add_contact_tags(self, contact_id: str, tags: list[str]) -> dict[str, Any]:
        return await self.request("POST", f"/contacts/{contact_id}/tags", json_body={"tags": tags})

    async def remove_contact_tags(self, contact_id: str, tags: list[str]) -> dict[str, Any]:
        return await self.request("DELETE", f"/contacts/{contact_id}/tags", json_body={"tags": tags})

    async def get_contact_tasks(self, contact_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/contacts/{contact_id}/tasks")

    async def create_contact_task(self, contact_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/contacts/{contact_id}/tasks", json_body=body)

    async def update_contact_task(
        self, contact_id: str, task_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request("PUT", f"/contacts/{contact_id}/tasks/{task_id}", json_body=body)

    async def delete_contact_task(self, contact_id: str, task_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/contacts/{contact_id}/tasks/{task_id}")

    async def update_contact_task_status(
        self, contact_id: str, task_id: str, *, completed: bool
    ) -> dict[str, Any]:
        return await self.request(
            "PUT",
            f"/contacts/{contact_id}/tasks/{task_id}/completed",
            json_body={"completed": completed},
        )

    async def get_contact_notes(self, contact_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/contacts/{contact_id}/notes")

    async def create_contact_note(self, contact_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/contacts/{contact_id}/notes", json_body=body)

    async def update_contact_note(
        self, contact_id: str, note_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request("PUT", f"/contacts/{contact_id}/notes/{note_id}", json_body=body)

    async def delete_contact_note(self, contact_id: str, note_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/contacts/{contact_id}/notes/{note_id}")

    async def get_contact_appointments(self, contact_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/contacts/{contact_id}/appointments")

    async def add_contact_followers(self, contact_id: str, followers: list[str]) -> dict[str, Any]:
        return await self.request(
            "POST", f"/contacts/{contact_id}/followers", json_body={"followers": followers}
        )

    async def remove_contact_followers(self, contact_id: str, followers: list[str]) -> dict[str, Any]:
        return await self.request(
            "DELETE", f"/contacts/{contact_id}/followers", json_body={"followers": followers}
        )

    async def bulk_update_contact_tags(
        self, action: str, contact_ids: list[str], tags: list[str], *, remove_all_tags: bool = False
    ) -> dict[str, Any]:
        body: Dict[str, Any] = {"contacts": contact_ids, "tags": tags, "locationId": self.location_id}
        if remove_all_tags:
            body["removeAllTags"] = True
        return await self.request("POST", f"/contacts/bulk/tags/update/{action}", json_body=body)

    async def bulk_update_contact_business(
        self, contact_ids: list[str], business_id: Optional[str]
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/contacts/bulk/business",
            json_body={"locationId": self.location_id, "ids": contact_ids, "businessId": business_id},
        )

    async def get_business(self, business_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/businesses/{business_id}")

    # Calendar events

    async def create_appointment(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/calendars/events/appointments",
            json_body={"locationId": self.location_id, **body},
        )

    async def delete_calendar_event(self, event_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/calendars/events/{event_id}")

    # Custom fields

    async def list_custom_fields(self, *, model: Optional[str] = None) -> dict[str, Any]:
        return await self.request(
            "GET", f"/locations/{self.location_id}/customFields", params={"model": model}
        )

    async def get_custom_field(self, field_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/custom-fields/{field_id}")

    async def create_custom_field(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", "/custom-fields/", json_body={"locationId": self.location_id, **body}
        )

    async def update_custom_field(self, field_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "PUT", f"/custom-fields/{field_id}", json_body={"locationId": self.location_id, **body}
        )

    async def delete_custom_field(self, field_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/custom-fields/{field_id}")

    async def get_custom_fields_by_object_key(self, object_key: str) -> dict[str, Any]:
        return await self.request(
            "GET",
            f"/custom-fields/object-key/{object_key}",
            params={"locationId": self.location_id},
        )

    async def create_custom_field_folder(self, object_key: str, name: str) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/custom-fields/folder",
            json_body={"objectKey": object_key, "name": name, "locationId": self.location_id},
        )

    async def update_custom_field_folder(self, folder_id: str, name: str) -> dict[str, Any]:
        return await self.request(
            "PUT",
            f"/custom-fields/folder/{folder_id}",
            json_body={"name": name, "locationId": self.location_id},
        )

    async def delete_custom_field_folder(self, folder_id: str) -> dict[str, Any]:
        return await self.request(
            "DELETE",
            f"/custom-fields/folder/{folder_id}",
            params={"locationId": self.location_id},
        )

    async def get_location_custom_field(self, field_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/locations/{self.location_id}/customFields/{field_id}")

    async def update_location_custom_field(
        self, field_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "PUT", f"/locations/{self.location_id}/customFields/{field_id}", json_body=body
        )

    async def upload_custom_field_file(
        self, field_id: str, file_name: str, content: bytes, content_type: str, *, max_files: int = 1
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            f"/locations/{self.location_id}/customFields/upload",
            data={"id": field_id, "maxFiles": str(max_files)},
            files={"file": (file_name, content, content_type)},
        )

    # Email verification

    async def verify_email(self, email: str) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/email/verify",
            params={"locationId": self.location_id},
            json_body={"type": "email", "verify": email},
        )

    # Associations

    async def get_associations(self, *, skip: int = 0, limit: int = 20) -> dict[str, Any]:
        return await self.request(
            "GET",
            "/associations/",
            params={"locationId": self.location_id, "skip": skip, "limit": limit},
        )

    async def create_association(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", "/associations/", json_body={"locationId": self.location_id, **body}
        )

    async def get_association_by_id(self, association_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/associations/{association_id}")

    async def update_association(self, association_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/associations/{association_id}", json_body=body)

    async def delete_association(self, association_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/associations/{association_id}")

    async def get_association_by_key(self, key_name: str) -> dict[str, Any]:
        return await self.request(
            "GET", f"/associations/key/{key_name}", params={"locationId": self.location_id}
        )

    async def get_association_by_object_key(self, object_key: str) -> dict[str, Any]:
        return await self.request(
            "GET", f"/associations/objectKey/{object_key}", params={"locationId": self.location_id}
        )

    async def create_relation(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", "/associations/relations", json_body={"locationId": self.location_id, **body}
        )

    async def get_relations_by_record(
        self,
        record_id: str,
        *,
        skip: int = 0,
        limit: int = 20,
        association_ids: Optional[Iterable[str]] = None,
    ) -> dict[str, Any]:
        return await self.request(
            "GET",
            f"/associations/relations/{record_id}",
            params={
                "locationId": self.location_id,
                "skip": skip,
                "limit": limit,
                "associationIds": list(association_ids) if association_ids else None,
            },
        )

    async def delete_relation(self, relation_id: str) -> dict[str, Any]:
        return await self.request(
            "DELETE",
            f"/associations/relations/{relation_id}",
            params={"locationId": self.location_id},
        )

    # Products

    async def create_product(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/products/", json_body=body)

    async def list_products(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/products/", params=params)

    async def get_product(self, product_id: str, location_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/products/{product_id}", params={"locationId": location_id})

    async def update_product(self, product_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/products/{product_id}", json_body=body)

    async def delete_product(self, product_id: str, location_id: str) -> dict[str, Any]:
        return await self.request(
            "DELETE", f"/products/{product_id}", params={"locationId": location_id}
        )

    async def create_price(self, product_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/products/{product_id}/price", json_body=body)

    async def list_prices(self, product_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/products/{product_id}/price", params=params)

    async def delete_price(self, product_id: str, price_id: str, location_id: str) -> dict[str, Any]:
        return await self.request(
            "DELETE",
            f"/products/{product_id}/price/{price_id}",
            params={"locationId": location_id},
        )

    async def list_inventory(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/products/inventory", params=params)

    async def update_inventory(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/products/inventory", json_body=body)

    async def create_product_collection(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/products/collections", json_body=body)

    async def update_product_collection(
        self, collection_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request("PUT", f"/products/collections/{collection_id}", json_body=body)

    async def delete_product_collection(
        self, collection_id: str, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "DELETE", f"/products/collections/{collection_id}", params=params
        )

    async def list_product_collections(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/products/collections", params=params)

    # Invoices

    async def create_invoice_template(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/invoices/template", json_body=body)

    async def list_invoice_templates(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/invoices/template", params=params)

    async def get_invoice_template(self, template_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/invoices/template/{template_id}", params=params)

    async def update_invoice_template(self, template_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/invoices/template/{template_id}", json_body=body)

    async def delete_invoice_template(self, template_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("DELETE", f"/invoices/template/{template_id}", params=params)

    async def create_invoice_schedule(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/invoices/schedule", json_body=body)

    async def list_invoice_schedules(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/invoices/schedule", params=params)

    async def get_invoice_schedule(self, schedule_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/invoices/schedule/{schedule_id}", params=params)

    async def create_invoice(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/invoices/", json_body=body)

    async def list_invoices(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/invoices/", params=params)

    async def get_invoice(self, invoice_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/invoices/{invoice_id}", params=params)

    async def send_invoice(self, invoice_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/invoices/{invoice_id}/send", json_body=body)

    async def create_estimate(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/invoices/estimate", json_body=body)

    async def list_estimates(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/invoices/estimate/list", params=params)

    async def send_estimate(self, estimate_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", f"/invoices/estimate/{estimate_id}/send", json_body=body)

    async def create_invoice_from_estimate(
        self, estimate_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "POST", f"/invoices/estimate/{estimate_id}/invoice", json_body=body
        )

    async def generate_invoice_number(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/invoices/generate-invoice-number", params=params)

    async def generate_estimate_number(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/invoices/estimate/number/generate", params=params)

    # Payments

    async def create_whitelabel_integration_provider(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", "/payments/integrations/provider/whitelabel", json_body=body
        )

    async def list_whitelabel_integration_providers(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/payments/integrations/provider/whitelabel", params=params)

    async def list_orders(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/payments/orders", params=params)

    async def get_order(self, order_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/payments/orders/{order_id}", params=params)

    async def create_order_fulfillment(self, order_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "POST", f"/payments/orders/{order_id}/fulfillments", json_body=body
        )

    async def list_order_fulfillments(self, order_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/payments/orders/{order_id}/fulfillments", params=params)

    async def list_transactions(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/payments/transactions", params=params)

    async def get_transaction(self, transaction_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", f"/payments/transactions/{transaction_id}", params=params)

    async def list_subscriptions(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/payments/subscriptions", params=params)

    async def get_subscription(self, subscription_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "GET", f"/payments/subscriptions/{subscription_id}", params=params
        )

    async def list_coupons(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/payments/coupon/list", params=params)

    async def create_coupon(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/payments/coupon", json_body=body)

    async def update_coupon(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", "/payments/coupon", json_body=body)

    async def delete_coupon(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("DELETE", "/payments/coupon", json_body=body)

    async def get_coupon(self, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("GET", "/payments/coupon", params=params)

    async def create_custom_provider_integration(
        self, location_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/payments/custom-provider/provider",
            params={"locationId": location_id},
            json_body=body,
        )

    async def delete_custom_provider_integration(self, location_id: str) -> dict[str, Any]:
        return await self.request(
            "DELETE", "/payments/custom-provider/provider", params={"locationId": location_id}
        )

    async def get_custom_provider_config(self, location_id: str) -> dict[str, Any]:
        return await self.request(
            "GET", "/payments/custom-provider/connect", params={"locationId": location_id}
        )

    async def create_custom_provider_config(
        self, location_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/payments/custom-provider/connect",
            params={"locationId": location_id},
            json_body=body,
        )

    async def disconnect_custom_provider_config(
        self, location_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "POST",
            "/payments/custom-provider/disconnect",
            params={"locationId": location_id},
            json_body=body,
        )

    # Workflows

    async def get_workflows(self, location_id: str) -> dict[str, Any]:
        return await self.request("GET", "/workflows/", params={"locationId": location_id})

    # Opportunities

    async def search_opportunities(self, location_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "GET", "/opportunities/search", params={"location_id": location_id, **params}
        )

    async def get_pipelines(self, location_id: str) -> dict[str, Any]:
        return await self.request(
            "GET", "/opportunities/pipelines", params={"locationId": location_id}
        )

    async def get_opportunity(self, opportunity_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/opportunities/{opportunity_id}")

    async def create_opportunity(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/opportunities/", json_body=body)

    async def update_opportunity(self, opportunity_id: str, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("PUT", f"/opportunities/{opportunity_id}", json_body=body)

    async def update_opportunity_status(self, opportunity_id: str, status: str) -> dict[str, Any]:
        return await self.request(
            "PUT", f"/opportunities/{opportunity_id}/status", json_body={"status": status}
        )

    async def upsert_opportunity(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/opportunities/upsert", json_body=body)

    async def delete_opportunity(self, opportunity_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/opportunities/{opportunity_id}")

    async def add_opportunity_followers(
        self, opportunity_id: str, followers: list[str]
    ) -> dict[str, Any]:
        return await self.request(
            "POST", f"/opportunities/{opportunity_id}/followers", json_body={"followers": followers}
        )

    async def remove_opportunity_followers(
        self, opportunity_id: str, followers: list[str]
    ) -> dict[str, Any]:
        return await self.request(
            "DELETE", f"/opportunities/{opportunity_id}/followers", json_body={"followers": followers}
        )

    # Conversations

    async def search_conversations(self, location_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "GET", "/conversations/search", params={"locationId": location_id, **params}
        )

    async def get_conversation(self, conversation_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/conversations/{conversation_id}")

    async def create_conversation(self, location_id: str, contact_id: str) -> dict[str, Any]:
        return await self.request(
            "POST", "/conversations/", json_body={"locationId": location_id, "contactId": contact_id}
        )

    async def update_conversation(
        self, conversation_id: str, body: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request("PUT", f"/conversations/{conversation_id}", json_body=body)

    async def delete_conversation(self, conversation_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/conversations/{conversation_id}")

    async def get_conversation_messages(
        self, conversation_id: str, params: Mapping[str, Any]
    ) -> dict[str, Any]:
        return await self.request(
            "GET", f"/conversations/{conversation_id}/messages", params=params
        )

    async def send_message(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/conversations/messages", json_body=body)

    async def get_message(self, message_id: str) -> dict[str, Any]:
        return await self.request("GET", f"/conversations/messages/{message_id}")

    async def update_message_status(self, message_id: str, status: str) -> dict[str, Any]:
        return await self.request(
            "PUT", f"/conversations/messages/{message_id}/status", json_body={"status": status}
        )

    # Email campaigns and templates

    async def get_email_campaigns(self, location_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "GET", "/emails/schedule", params={"locationId": location_id, **params}
        )

    async def get_email_templates(self, location_id: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request(
            "GET", "/emails/builder", params={"locationId": location_id, **params}
        )

    async def create_email_template(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/emails/builder", json_body=body)

    async def update_email_template(self, body: Mapping[str, Any]) -> dict[str, Any]:
        return await self.request("POST", "/emails/builder/data", json_body=body)

    async def delete_email_template(self, location_id: str, template_id: str) -> dict[str, Any]:
        return await self.request("DELETE", f"/emails/builder/{location_id}/{template_id}")
