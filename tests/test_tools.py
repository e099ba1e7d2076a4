from __future__ import annotations

import anyio
import httpx
import pytest

from ghl_mcp.client import GHLClient, GHLError
from ghl_mcp.registry import ToolArgumentError
from ghl_mcp.tools.associations import AssociationTools
from ghl_mcp.tools.contacts import ContactTools
from ghl_mcp.tools.conversations import ConversationTools
from ghl_mcp.tools.custom_fields import CustomFieldTools
from ghl_mcp.tools.email import EmailTools
from ghl_mcp.tools.email_verification import EmailVerificationTools
from ghl_mcp.tools.invoices import InvoiceTools
from ghl_mcp.tools.opportunities import OpportunityTools
from ghl_mcp.tools.payments import PaymentTools
from ghl_mcp.tools.products import ProductsTools
from ghl_mcp.tools.workflows import WorkflowTools

BASE_URL = "https://ghl.test"


def run(provider, tool_name, arguments, client):
    return anyio.run(provider.execute, tool_name, arguments, client)


@pytest.fixture
def unlocated_client(fake_ghl):
    return GHLClient("pk_test", base_url=BASE_URL, transport=httpx.MockTransport(fake_ghl))


# Products


def test_create_product_defaults_location(client, fake_ghl):
    run(ProductsTools(), "ghl_create_product", {"name": "Mug", "productType": "PHYSICAL"}, client)

    assert fake_ghl.last.url.path == "/products/"
    assert fake_ghl.last_json() == {"name": "Mug", "productType": "PHYSICAL", "locationId": "loc-1"}


def test_inventory_defaults_alt_id_but_keeps_explicit_one(client, fake_ghl):
    run(ProductsTools(), "ghl_list_inventory", {"limit": 5}, client)
    params = fake_ghl.last.url.params
    assert (params["altId"], params["altType"], params["limit"]) == ("loc-1", "location", "5")

    run(ProductsTools(), "ghl_list_inventory", {"altId": "other"}, client)
    assert fake_ghl.last.url.params["altId"] == "other"


def test_products_need_a_location(unlocated_client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="locationId"):
        run(ProductsTools(), "ghl_list_products", {}, unlocated_client)

    assert fake_ghl.requests == []


def test_create_price_accepts_zero_amount(client, fake_ghl):
    arguments = {"productId": "p1", "name": "Free", "type": "one_time", "currency": "USD", "amount": 0}

    run(ProductsTools(), "ghl_create_price", arguments, client)

    assert fake_ghl.last.url.path == "/products/p1/price"
    body = fake_ghl.last_json()
    assert body["amount"] == 0
    assert body["product"] == "p1"
    assert body["locationId"] == "loc-1"


def test_create_price_requires_amount(client):
    arguments = {"productId": "p1", "name": "Free", "type": "one_time", "currency": "USD"}

    with pytest.raises(ToolArgumentError, match="amount"):
        run(ProductsTools(), "ghl_create_price", arguments, client)


def test_delete_collection(client, fake_ghl):
    result = run(ProductsTools(), "ghl_delete_product_collection", {"collectionId": "col-1"}, client)

    assert fake_ghl.last.method == "DELETE"
    assert fake_ghl.last.url.path == "/products/collections/col-1"
    assert fake_ghl.last.url.params["altId"] == "loc-1"
    assert result.message == "Collection col-1 deleted"


def test_unknown_tool_in_provider(client):
    with pytest.raises(ToolArgumentError, match="Unknown products tool: ghl_nope"):
        run(ProductsTools(), "ghl_nope", {}, client)


# Invoices


def test_get_invoice_moves_id_into_path(client, fake_ghl):
    run(InvoiceTools(), "get_invoice", {"invoiceId": "inv-1"}, client)

    request = fake_ghl.last
    assert request.url.path == "/invoices/inv-1"
    assert request.url.params["altId"] == "loc-1"
    assert request.url.params["altType"] == "location"
    assert "invoiceId" not in request.url.params


def test_send_invoice_body(client, fake_ghl):
    result = run(InvoiceTools(), "send_invoice", {"invoiceId": "inv-1", "emailTo": "a@b.c"}, client)

    assert fake_ghl.last.url.path == "/invoices/inv-1/send"
    assert fake_ghl.last_json() == {"emailTo": "a@b.c", "altId": "loc-1", "altType": "location"}
    assert result.message == "Invoice inv-1 sent"


def test_list_invoices_paging_defaults(client, fake_ghl):
    run(InvoiceTools(), "list_invoices", {"status": "paid"}, client)

    params = fake_ghl.last.url.params
    assert (params["limit"], params["offset"], params["status"]) == ("10", "0", "paid")


def test_list_estimates_path(client, fake_ghl):
    run(InvoiceTools(), "list_estimates", {"limit": "25"}, client)

    assert fake_ghl.last.url.path == "/invoices/estimate/list"
    assert fake_ghl.last.url.params["limit"] == "25"


def test_create_invoice_requires_title(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="title"):
        run(InvoiceTools(), "create_invoice", {"contactId": "c1"}, client)

    assert fake_ghl.requests == []


# Payments


def test_custom_provider_uses_location_query(client, fake_ghl):
    arguments = {
        "name": "Gateway",
        "description": "Test gateway",
        "paymentsUrl": "https://pay.example",
        "queryUrl": "https://query.example",
        "imageUrl": "https://img.example/logo.png",
    }

    run(PaymentTools(), "create_custom_provider_integration", arguments, client)

    assert fake_ghl.last.url.path == "/payments/custom-provider/provider"
    assert fake_ghl.last.url.params["locationId"] == "loc-1"
    assert fake_ghl.last_json() == arguments


def test_custom_provider_needs_location(unlocated_client, fake_ghl):
    with pytest.raises(ToolArgumentError):
        run(PaymentTools(), "get_custom_provider_config", {}, unlocated_client)

    assert fake_ghl.requests == []


def test_disconnect_test_mode(client, fake_ghl):
    run(PaymentTools(), "disconnect_custom_provider_config", {"liveMode": False}, client)

    assert fake_ghl.last.url.path == "/payments/custom-provider/disconnect"
    assert fake_ghl.last_json() == {"liveMode": False}


def test_create_coupon_fills_alt_fields(client, fake_ghl):
    arguments = {
        "name": "Spring",
        "code": "SPRING10",
        "discountType": "percentage",
        "discountValue": 10,
        "startDate": "2024-03-01T00:00:00Z",
    }

    result = run(PaymentTools(), "create_coupon", arguments, client)

    assert fake_ghl.last.method == "POST"
    assert fake_ghl.last.url.path == "/payments/coupon"
    assert fake_ghl.last_json() == {**arguments, "altId": "loc-1", "altType": "location"}
    assert result.message == "Coupon SPRING10 created"


def test_get_order_by_id(client, fake_ghl):
    fake_ghl.respond("GET", "/payments/orders/o-1", 200, {"_id": "o-1", "status": "completed"})

    result = run(PaymentTools(), "get_order_by_id", {"orderId": "o-1"}, client)

    assert result.data == {"_id": "o-1", "status": "completed"}
    assert fake_ghl.last.url.params["altId"] == "loc-1"


# Workflows


def test_workflows_metadata(client, fake_ghl):
    fake_ghl.respond(
        "GET",
        "/workflows/",
        200,
        {
            "workflows": [
                {"id": "w1", "status": "published"},
                {"id": "w2", "status": "draft"},
                {"id": "w3", "status": "published"},
            ]
        },
    )

    result = run(WorkflowTools(), "ghl_get_workflows", {}, client)

    assert fake_ghl.last.url.params["locationId"] == "loc-1"
    assert result.data["metadata"] == {
        "totalWorkflows": 3,
        "workflowStatuses": {"published": 2, "draft": 1},
    }
    assert result.message == "Successfully retrieved 3 workflows"


# Associations


def test_relations_by_record_filters(client, fake_ghl):
    fake_ghl.respond("GET", "/associations/relations/rec-1", 200, {"relations": [{"id": "r1"}]})

    result = run(
        AssociationTools(),
        "ghl_get_relations_by_record",
        {"recordId": "rec-1", "associationIds": ["a1", "a2"]},
        client,
    )

    assert fake_ghl.last.url.params.get_list("associationIds") == ["a1", "a2"]
    assert fake_ghl.last.url.params["limit"] == "20"
    assert result.message == "Retrieved 1 relations for record"


def test_create_association(client, fake_ghl):
    arguments = {
        "key": "owner_pet",
        "firstObjectLabel": "owner",
        "firstObjectKey": "custom_objects.pets",
        "secondObjectLabel": "pet",
        "secondObjectKey": "contact",
    }

    result = run(AssociationTools(), "ghl_create_association", arguments, client)

    assert fake_ghl.last_json() == {"locationId": "loc-1", **arguments}
    assert result.message == "Association 'owner_pet' created successfully"


# Custom fields and email verification


def test_list_custom_fields_all_models(client, fake_ghl):
    fake_ghl.respond("GET", "/locations/loc-1/customFields", 200, {"customFields": [{"id": "f1"}]})

    result = run(CustomFieldTools(), "list_custom_fields", {"model": "all"}, client)

    assert "model" not in fake_ghl.last.url.params
    assert result.data == [{"id": "f1"}]


def test_verify_email(client, fake_ghl):
    fake_ghl.respond("POST", "/email/verify", 200, {"result": "deliverable"})

    result = run(EmailVerificationTools(), "verify_email", {"email": "ada@example.com"}, client)

    assert fake_ghl.last.url.params["locationId"] == "loc-1"
    assert fake_ghl.last_json() == {"type": "email", "verify": "ada@example.com"}
    assert result.message == "ada@example.com: deliverable"


# Contacts


def test_create_contact_needs_identity(client, fake_ghl):
    with pytest.raises(ToolArgumentError):
        run(ContactTools(), "create_contact", {"companyName": "Acme"}, client)

    assert fake_ghl.requests == []


def test_tags_must_be_a_list(client):
    with pytest.raises(ToolArgumentError, match="tags must be a list"):
        run(ContactTools(), "add_contact_tags", {"contactId": "c1", "tags": "vip"}, client)


def test_note_author_is_sent_as_user_id(client, fake_ghl):
    run(ContactTools(), "create_contact_note", {"contactId": "c1", "body": "Hi", "authorId": "u1"}, client)

    assert fake_ghl.last.url.path == "/contacts/c1/notes"
    assert fake_ghl.last_json() == {"body": "Hi", "userId": "u1"}


def test_followers_are_read_from_the_contact(client, fake_ghl):
    fake_ghl.contacts["c1"] = {"id": "c1", "followers": ["u1", "u2"]}

    result = run(ContactTools(), "get_contact_followers", {"contactId": "c1"}, client)

    assert result.data == {"followers": ["u1", "u2"]}


def test_duplicate_check(client, fake_ghl):
    fake_ghl.respond("GET", "/contacts/search/duplicate", 200, {"contact": None})

    result = run(ContactTools(), "duplicate_contact_check", {"email": "ada@example.com"}, client)

    assert fake_ghl.last.url.params["email"] == "ada@example.com"
    assert "number" not in fake_ghl.last.url.params
    assert result.data == {"exists": False, "contact": None}


def test_collections_keep_explicit_alt_type(client, fake_ghl):
    run(ProductsTools(), "ghl_list_product_collections", {"altId": "loc-2", "altType": "location"}, client)

    assert fake_ghl.last.url.params["altId"] == "loc-2"

    run(ProductsTools(), "ghl_delete_product_collection", {"collectionId": "col-1", "altId": "loc-3"}, client)

    assert fake_ghl.last.url.params["altId"] == "loc-3"


# Argument coercion


def test_non_numeric_skip_is_an_argument_error(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="skip"):
        run(AssociationTools(), "ghl_get_all_associations", {"skip": "abc"}, client)

    assert fake_ghl.requests == []


def test_disconnect_reads_string_false(client, fake_ghl):
    run(PaymentTools(), "disconnect_custom_provider_config", {"liveMode": "false"}, client)

    assert fake_ghl.last_json() == {"liveMode": False}


def test_task_status_reads_string_false(client, fake_ghl):
    run(
        ContactTools(),
        "update_contact_task_status",
        {"contactId": "c1", "taskId": "t1", "completed": "false"},
        client,
    )

    assert fake_ghl.last.url.path == "/contacts/c1/tasks/t1/completed"
    assert fake_ghl.last_json() == {"completed": False}


def test_task_status_requires_completed(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="completed"):
        run(ContactTools(), "update_contact_task_status", {"contactId": "c1", "taskId": "t1"}, client)

    assert fake_ghl.requests == []


# Bulk contact operations


def test_bulk_tag_update(client, fake_ghl):
    result = run(
        ContactTools(),
        "bulk_update_contact_tags",
        {"contactIds": ["c1", "c2"], "tags": ["vip"], "operation": "remove", "removeAllTags": "true"},
        client,
    )

    assert fake_ghl.last.url.path == "/contacts/bulk/tags/update/remove"
    assert fake_ghl.last_json() == {
        "contacts": ["c1", "c2"],
        "tags": ["vip"],
        "locationId": "loc-1",
        "removeAllTags": True,
    }
    assert result.message == "Removed 1 tags on 2 contacts"


def test_bulk_tag_update_rejects_unknown_operation(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="operation"):
        run(
            ContactTools(),
            "bulk_update_contact_tags",
            {"contactIds": ["c1"], "tags": ["vip"], "operation": "replace"},
            client,
        )

    assert fake_ghl.requests == []


def test_bulk_business_unlink(client, fake_ghl):
    result = run(ContactTools(), "bulk_update_contact_business", {"contactIds": ["c1"]}, client)

    assert fake_ghl.last.url.path == "/contacts/bulk/business"
    assert fake_ghl.last_json() == {"locationId": "loc-1", "ids": ["c1"], "businessId": None}
    assert result.message == "1 contacts unlinked from their business"


def test_bulk_delete_attempts_every_contact(client, fake_ghl):
    fake_ghl.respond("DELETE", "/contacts/c2", 404, {"message": "Contact not found"})

    with pytest.raises(GHLError) as excinfo:
        run(ContactTools(), "bulk_delete_contacts", {"contactIds": ["c1", "c2", "c3"]}, client)

    assert [request.url.path for request in fake_ghl.requests] == [
        "/contacts/c1",
        "/contacts/c2",
        "/contacts/c3",
    ]
    assert excinfo.value.status_code == 404
    assert "1 of 3 contacts were not deleted: c2 (Contact not found)" in str(excinfo.value)
    assert "Deleted: c1, c3" in str(excinfo.value)


def test_bulk_delete(client, fake_ghl):
    result = run(ContactTools(), "bulk_delete_contacts", {"contactIds": ["c1", "c2"]}, client)

    assert result.data == {"deleted": ["c1", "c2"]}
    assert all(request.method == "DELETE" for request in fake_ghl.requests)


# Contact appointments and businesses


def test_create_contact_appointment(client, fake_ghl):
    arguments = {"contactId": "c1", "calendarId": "cal-1", "startTime": "2024-05-01T10:00:00Z"}

    run(ContactTools(), "create_contact_appointment", arguments, client)

    assert fake_ghl.last.url.path == "/calendars/events/appointments"
    assert fake_ghl.last_json() == {"locationId": "loc-1", **arguments}


def test_delete_contact_appointment(client, fake_ghl):
    result = run(ContactTools(), "delete_contact_appointment", {"appointmentId": "ev-1"}, client)

    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("DELETE", "/calendars/events/ev-1")
    assert result.message == "Appointment ev-1 deleted"


def test_business_by_contact(client, fake_ghl):
    fake_ghl.contacts["c1"] = {"id": "c1", "businessId": "b1"}
    fake_ghl.respond("GET", "/businesses/b1", 200, {"business": {"id": "b1", "name": "Acme"}})

    result = run(ContactTools(), "get_business_by_contact_id", {"contactId": "c1"}, client)

    assert result.data == {"id": "b1", "name": "Acme"}


def test_business_by_contact_without_business(client, fake_ghl):
    fake_ghl.contacts["c1"] = {"id": "c1"}

    result = run(ContactTools(), "get_business_by_contact_id", {"contactId": "c1"}, client)

    assert result.data is None
    assert len(fake_ghl.requests) == 1


# Custom field folders, options and files


def test_custom_field_folder_lifecycle(client, fake_ghl):
    tools = CustomFieldTools()

    run(tools, "ghl_create_custom_field_folder", {"objectKey": "custom_objects.pet", "name": "Health"}, client)
    assert fake_ghl.last.url.path == "/custom-fields/folder"
    assert fake_ghl.last_json() == {"objectKey": "custom_objects.pet", "name": "Health", "locationId": "loc-1"}

    run(tools, "ghl_update_custom_field_folder", {"id": "fold-1", "name": "Vitals"}, client)
    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("PUT", "/custom-fields/folder/fold-1")

    run(tools, "ghl_delete_custom_field_folder", {"id": "fold-1"}, client)
    assert fake_ghl.last.method == "DELETE"
    assert fake_ghl.last.url.params["locationId"] == "loc-1"


def test_custom_field_option_is_appended(client, fake_ghl):
    fake_ghl.respond(
        "GET",
        "/locations/loc-1/customFields/f1",
        200,
        {"customField": {"id": "f1", "name": "Size", "picklistOptions": ["S", "M"]}},
    )

    options = run(CustomFieldTools(), "list_custom_field_options", {"customFieldId": "f1"}, client)
    assert options.data == ["S", "M"]

    run(CustomFieldTools(), "create_custom_field_option", {"customFieldId": "f1", "option": "L"}, client)

    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("PUT", "/locations/loc-1/customFields/f1")
    assert fake_ghl.last_json() == {"name": "Size", "options": ["S", "M", "L"]}


def test_upload_custom_field_file(client, fake_ghl):
    arguments = {"customFieldId": "f1", "fileName": "notes.txt", "fileContent": "aGVsbG8=", "contentType": "text/plain"}

    run(CustomFieldTools(), "upload_custom_field_file", arguments, client)

    request = fake_ghl.last
    assert request.url.path == "/locations/loc-1/customFields/upload"
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    assert b"hello" in request.content
    assert b'filename="notes.txt"' in request.content


def test_upload_rejects_bad_base64(client, fake_ghl):
    arguments = {"customFieldId": "f1", "fileName": "notes.txt", "fileContent": "not base64!"}

    with pytest.raises(ToolArgumentError, match="base64"):
        run(CustomFieldTools(), "upload_custom_field_file", arguments, client)

    assert fake_ghl.requests == []


# Opportunities


def test_search_opportunities_uses_snake_case_params(client, fake_ghl):
    fake_ghl.respond(
        "GET", "/opportunities/search", 200, {"opportunities": [{"id": "o1"}], "meta": {"total": 7}}
    )

    result = run(
        OpportunityTools(),
        "search_opportunities",
        {"query": "acme", "pipelineId": "pipe-1", "limit": "5"},
        client,
    )

    params = fake_ghl.last.url.params
    assert params["location_id"] == "loc-1"
    assert params["q"] == "acme"
    assert params["pipeline_id"] == "pipe-1"
    assert params["limit"] == "5"
    assert "contact_id" not in params
    assert result.message == "Found 1 opportunities (total: 7)"


def test_create_opportunity_defaults_status_open(client, fake_ghl):
    fake_ghl.respond("POST", "/opportunities/", 201, {"opportunity": {"id": "o1"}})

    result = run(
        OpportunityTools(),
        "create_opportunity",
        {"name": "Deal", "pipelineId": "pipe-1", "contactId": "c1", "monetaryValue": 0},
        client,
    )

    assert fake_ghl.last_json() == {
        "name": "Deal",
        "pipelineId": "pipe-1",
        "contactId": "c1",
        "monetaryValue": 0,
        "status": "open",
        "locationId": "loc-1",
    }
    assert result.data == {"id": "o1"}


def test_opportunity_status_is_validated(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="status must be one of"):
        run(OpportunityTools(), "update_opportunity_status", {"opportunityId": "o1", "status": "done"}, client)
    assert fake_ghl.requests == []

    run(OpportunityTools(), "update_opportunity_status", {"opportunityId": "o1", "status": "won"}, client)
    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("PUT", "/opportunities/o1/status")
    assert fake_ghl.last_json() == {"status": "won"}


def test_upsert_opportunity_reports_update(client, fake_ghl):
    fake_ghl.respond("POST", "/opportunities/upsert", 200, {"opportunity": {"id": "o1"}, "new": False})

    result = run(OpportunityTools(), "upsert_opportunity", {"pipelineId": "pipe-1", "contactId": "c1"}, client)

    assert result.message == "Opportunity updated"
    assert "status" not in fake_ghl.last_json()


def test_opportunity_followers_must_be_a_list(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="followers"):
        run(OpportunityTools(), "add_opportunity_followers", {"opportunityId": "o1", "followers": "u1"}, client)

    run(OpportunityTools(), "remove_opportunity_followers", {"opportunityId": "o1", "followers": ["u1"]}, client)
    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("DELETE", "/opportunities/o1/followers")


# Conversations


def test_send_sms(client, fake_ghl):
    run(ConversationTools(), "send_sms", {"contactId": "c1", "message": "Hi"}, client)

    assert fake_ghl.last.url.path == "/conversations/messages"
    assert fake_ghl.last_json() == {"type": "SMS", "contactId": "c1", "message": "Hi"}


def test_send_sms_rejects_long_messages(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="1600"):
        run(ConversationTools(), "send_sms", {"contactId": "c1", "message": "x" * 1601}, client)

    assert fake_ghl.requests == []


def test_send_email_needs_a_body(client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="html or message"):
        run(ConversationTools(), "send_email", {"contactId": "c1", "subject": "Hello"}, client)

    run(ConversationTools(), "send_email", {"contactId": "c1", "subject": "Hello", "html": "<p>Hi</p>"}, client)
    body = fake_ghl.last_json()
    assert (body["type"], body["html"]) == ("Email", "<p>Hi</p>")
    assert "message" not in body


def test_get_conversation_includes_messages(client, fake_ghl):
    fake_ghl.respond("GET", "/conversations/conv-1", 200, {"id": "conv-1"})
    fake_ghl.respond(
        "GET", "/conversations/conv-1/messages", 200, {"messages": {"messages": [{"id": "m1"}]}}
    )

    result = run(ConversationTools(), "get_conversation", {"conversationId": "conv-1", "limit": 5}, client)

    assert result.data["conversation"] == {"id": "conv-1"}
    assert fake_ghl.last.url.params["limit"] == "5"


def test_update_conversation_coerces_starred(client, fake_ghl):
    run(ConversationTools(), "update_conversation", {"conversationId": "conv-1", "starred": "false"}, client)

    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("PUT", "/conversations/conv-1")
    assert fake_ghl.last_json() == {"locationId": "loc-1", "starred": False}


def test_search_conversations_needs_a_location(unlocated_client, fake_ghl):
    with pytest.raises(ToolArgumentError, match="locationId"):
        run(ConversationTools(), "search_conversations", {}, unlocated_client)

    assert fake_ghl.requests == []


# Email templates and campaigns


def test_email_templates_page_with_location(client, fake_ghl):
    fake_ghl.respond("GET", "/emails/builder", 200, {"builders": [{"id": "t1"}, {"id": "t2"}]})

    result = run(EmailTools(), "get_email_templates", {"limit": "2"}, client)

    params = fake_ghl.last.url.params
    assert (params["locationId"], params["limit"], params["offset"]) == ("loc-1", "2", "0")
    assert result.message == "Retrieved 2 templates"


def test_update_and_delete_email_template(client, fake_ghl):
    run(EmailTools(), "update_email_template", {"templateId": "t1", "html": "<p>New</p>"}, client)
    assert fake_ghl.last.url.path == "/emails/builder/data"
    assert fake_ghl.last_json() == {
        "locationId": "loc-1",
        "templateId": "t1",
        "html": "<p>New</p>",
        "editorType": "html",
    }

    run(EmailTools(), "delete_email_template", {"templateId": "t1"}, client)
    assert (fake_ghl.last.method, fake_ghl.last.url.path) == ("DELETE", "/emails/builder/loc-1/t1")
