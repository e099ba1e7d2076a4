"""Per-call credential resolution for multi-tenant GoHighLevel servers."""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Mapping

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_PARAMS, ErrorData
from pydantic import BaseModel

API_KEY_ARG = "apiKey"
LOCATION_ID_ARG = "locationId"
USER_ID_ARG = "userId"
# Nested form: {"accessToken", "locationId", "baseUrl", "version"}.
API_CREDENTIALS_ARG = "apiCredentials"
CREDENTIAL_ARGS = (API_KEY_ARG, LOCATION_ID_ARG, USER_ID_ARG, API_CREDENTIALS_ARG)

ANONYMOUS_USER = "anonymous"


class Credentials(BaseModel):
    """Effective credentials for a single tool call."""

    api_key: str
    location_id: str = ""
    user_id: str = ANONYMOUS_USER
    base_url: str | None = None
    version: str | None = None


class HeaderCredentials(BaseModel):
    """Credentials supplied out-of-band by the transport (HTTP headers)."""

    api_key: str | None = None
    location_id: str | None = None
    user_id: str | None = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "HeaderCredentials":
        return cls(
            api_key=headers.get("x-ghl-api-key") or None,
            location_id=headers.get("x-ghl-location-id") or None,
            user_id=headers.get("x-ghl-user-id") or None,
        )


class CredentialPolicy(BaseModel):
    """Which credential fields a server requires, and which it advertises.

    ``required`` is enforced at call time. ``advertised`` is what ends up in the
    ``required`` list of every tool schema; servers that expect credentials to
    arrive through headers advertise nothing.
    """

    required: tuple[str, ...] = (API_KEY_ARG,)
    advertised: tuple[str, ...] = (API_KEY_ARG,)


# Set by the HTTP transport for the duration of one request.
request_credentials: ContextVar[HeaderCredentials | None] = ContextVar(
    "request_credentials", default=None
)


@contextmanager
def use_request_credentials(credentials: HeaderCredentials) -> Iterator[None]:
    token = request_credentials.set(credentials)
    try:
        yield
    finally:
        request_credentials.reset(token)


def _first(*values: Any) -> str:
    for value in values:
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def resolve_credentials(
    arguments: Mapping[str, Any],
    policy: CredentialPolicy,
    *,
    default_api_key: str | None = None,
    default_location_id: str | None = None,
) -> Credentials:
    """Pick credentials from call arguments, then request headers, then defaults.

    Flat ``apiKey``/``locationId`` arguments win over the nested
    ``apiCredentials`` object. Only the nested form can override the API base
    URL and version for one call.

    Raises:
        McpError: INVALID_PARAMS when a field the policy requires is missing.
    """
    headers = request_credentials.get() or HeaderCredentials()
    nested = arguments.get(API_CREDENTIALS_ARG) or {}
    if not isinstance(nested, Mapping):
        raise McpError(
            ErrorData(code=INVALID_PARAMS, message=f"{API_CREDENTIALS_ARG} must be an object.")
        )

    api_key = _first(
        arguments.get(API_KEY_ARG), nested.get("accessToken"), headers.api_key, default_api_key
    )
    location_id = _first(
        arguments.get(LOCATION_ID_ARG),
        nested.get("locationId"),
        headers.location_id,
        default_location_id,
    )
    user_id = _first(arguments.get(USER_ID_ARG), headers.user_id) or ANONYMOUS_USER

    if API_KEY_ARG in policy.required and not api_key:
        raise McpError(
            ErrorData(
                code=INVALID_PARAMS,
                message=(
                    "API key is required. Provide your GoHighLevel Private Integration API key "
                    "in the apiKey argument or the X-GHL-API-Key header."
                ),
            )
        )
    if LOCATION_ID_ARG in policy.required and not location_id:
        raise McpError(
            ErrorData(
                code=INVALID_PARAMS,
                message=(
                    "locationId is required. Provide your GoHighLevel Location ID "
                    "in the locationId argument or the X-GHL-Location-ID header."
                ),
            )
        )

    return Credentials(
        api_key=api_key,
        location_id=location_id,
        user_id=user_id,
        base_url=_first(nested.get("baseUrl")) or None,
        version=_first(nested.get("version")) or None,
    )


def strip_credentials(arguments: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of the arguments without the credential fields."""
    return {key: value for key, value in arguments.items() if key not in CREDENTIAL_ARGS}
