"""Server profiles: which providers a server exposes and how it treats credentials."""

from __future__ import annotations

from typing import Callable

from pydantic import BaseModel, ConfigDict

from ghl_mcp.credentials import API_KEY_ARG, LOCATION_ID_ARG, CredentialPolicy
from ghl_mcp.registry import ToolProvider, ToolRegistry
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

VERSION = "1.0.0"


class ServerProfile(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    title: str
    description: str
    providers: tuple[Callable[[], ToolProvider], ...]
    policy: CredentialPolicy
    version: str = VERSION

    @property
    def service(self) -> str:
        return f"ghl-{self.name}-mcp"

    def build_registry(self) -> ToolRegistry:
        return ToolRegistry([factory() for factory in self.providers], self.policy)


_HEADER_POLICY = CredentialPolicy(required=(API_KEY_ARG,), advertised=())

PROFILES: dict[str, ServerProfile] = {
    profile.name: profile
    for profile in (
        ServerProfile(
            name="core",
            title="GoHighLevel Core MCP Server",
            description="Contacts, custom fields and email verification",
            providers=(ContactTools, CustomFieldTools, EmailVerificationTools),
            policy=CredentialPolicy(
                required=(API_KEY_ARG, LOCATION_ID_ARG),
                advertised=(API_KEY_ARG, LOCATION_ID_ARG),
            ),
        ),
        ServerProfile(
            name="data",
            title="GoHighLevel Data MCP Server",
            description="Associations and relations between records",
            providers=(AssociationTools,),
            policy=CredentialPolicy(),
        ),
        ServerProfile(
            name="ecommerce",
            title="GoHighLevel Ecommerce MCP Server",
            description="Products, prices, inventory and collections",
            providers=(ProductsTools,),
            policy=CredentialPolicy(),
        ),
        ServerProfile(
            name="sales",
            title="GoHighLevel Sales MCP Server",
            description="Opportunities, invoices, estimates and payments",
            providers=(OpportunityTools, InvoiceTools, PaymentTools),
            policy=_HEADER_POLICY,
        ),
        ServerProfile(
            name="communications",
            title="GoHighLevel Communications MCP Server",
            description="Conversations, messages and email templates",
            providers=(ConversationTools, EmailTools),
            policy=_HEADER_POLICY,
        ),
        ServerProfile(
            name="operations",
            title="GoHighLevel Operations MCP Server",
            description="Workflows",
            providers=(WorkflowTools,),
            policy=_HEADER_POLICY,
        ),
        ServerProfile(
            name="all",
            title="GoHighLevel MCP Server",
            description="Every GoHighLevel tool group in one server",
            providers=(
                ContactTools,
                CustomFieldTools,
                EmailVerificationTools,
                AssociationTools,
                ProductsTools,
                OpportunityTools,
                InvoiceTools,
                PaymentTools,
                ConversationTools,
                EmailTools,
                WorkflowTools,
            ),
            policy=CredentialPolicy(),
        ),
    )
}


def get_profile(name: str) -> ServerProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ValueError(
            f"Unknown server profile '{name}'. Choose one of: {', '.join(PROFILES)}"
        ) from None
