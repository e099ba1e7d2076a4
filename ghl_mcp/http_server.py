"""HTTP transport: JSON-RPC over ``POST /sse`` plus health and discovery routes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import click
import uvicorn
from mcp import types
from mcp.shared.exceptions import McpError
from mcp.shared.version import SUPPORTED_PROTOCOL_VERSIONS
from pydantic import BaseModel, ValidationError
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from ghl_mcp.config import load_settings
from ghl_mcp.credentials import HeaderCredentials, use_request_credentials
from ghl_mcp.profiles import PROFILES, ServerProfile, get_profile
from ghl_mcp.server import ToolServer, configure_logging

logger = logging.getLogger(__name__)

CREDENTIAL_HEADERS = ["X-GHL-API-Key", "X-GHL-Location-ID", "X-GHL-User-ID"]


def _dump(model: BaseModel) -> Any:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _rpc_result(request_id: types.RequestId, result: BaseModel) -> JSONResponse:
    response = types.JSONRPCResponse(jsonrpc="2.0", id=request_id, result=_dump(result))
    return JSONResponse(_dump(response))


def _rpc_error(
    request_id: types.RequestId | None, code: int, message: str, status_code: int = 200
) -> JSONResponse:
    error = types.ErrorData(code=code, message=message)
    if request_id is None:
        # The request could not be read, so there is no id to echo.
        return JSONResponse(
            {"jsonrpc": "2.0", "error": _dump(error), "id": None}, status_code=status_code
        )
    response = types.JSONRPCError(jsonrpc="2.0", id=request_id, error=error)
    return JSONResponse(_dump(response), status_code=status_code)


def _rejected(exc: ValidationError) -> JSONResponse:
    """Map a message that does not validate as JSON-RPC to the matching error."""
    errors = exc.errors()
    if any(error["type"] == "json_invalid" for error in errors):
        return _rpc_error(None, types.PARSE_ERROR, "Parse error", status_code=400)
    if any("params" in error["loc"] for error in errors):
        return _rpc_error(None, types.INVALID_PARAMS, "params must be an object", status_code=400)
    return _rpc_error(None, types.INVALID_REQUEST, "Invalid Request", status_code=400)


def _initialize_result(profile: ServerProfile, params: dict[str, Any]) -> types.InitializeResult:
    requested = params.get("protocolVersion")
    version = (
        requested if requested in SUPPORTED_PROTOCOL_VERSIONS else types.LATEST_PROTOCOL_VERSION
    )
    return types.InitializeResult(
        protocolVersion=version,
        capabilities=types.ServerCapabilities(tools=types.ToolsCapability()),
        serverInfo=types.Implementation(name=profile.service, version=profile.version),
    )


def create_app(tool_server: ToolServer) -> Starlette:
    profile = tool_server.profile

    async def health(_request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "service": profile.service,
                "version": profile.version,
            }
        )

    async def list_tools(_request: Request) -> JSONResponse:
        tools = tool_server.list_tools()
        return JSONResponse(
            {
                "service": profile.service,
                "toolCount": len(tools),
                "tools": [{"name": tool.name, "description": tool.description} for tool in tools],
            }
        )

    async def index(_request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "name": profile.service,
                "title": profile.title,
                "version": profile.version,
                "mode": "dynamic-credentials",
                "description": profile.description,
                "endpoints": {"health": "/health", "sse": "/sse", "tools": "/tools"},
                "credentialHeaders": CREDENTIAL_HEADERS,
            }
        )

    async def _call_tool(
        request: Request, request_id: types.RequestId, params: dict[str, Any]
    ) -> JSONResponse:
        try:
            call = types.CallToolRequestParams.model_validate(params)
        except ValidationError:
            return _rpc_error(
                request_id, types.INVALID_PARAMS, "tools/call needs a name and object arguments"
            )
        if not call.name:
            return _rpc_error(request_id, types.INVALID_PARAMS, "Tool name is required")
        with use_request_credentials(HeaderCredentials.from_headers(request.headers)):
            try:
                result = await tool_server.call_tool(call.name, call.arguments or {})
            except McpError as exc:
                return _rpc_error(request_id, exc.error.code, exc.error.message)
        return _rpc_result(request_id, result)

    async def rpc(request: Request) -> Response:
        logger.info(
            "%s %s (api key header: %s, location header: %s)",
            request.method,
            request.url.path,
            "x-ghl-api-key" in request.headers,
            "x-ghl-location-id" in request.headers,
        )
        try:
            message = types.JSONRPCMessage.model_validate_json(await request.body()).root
        except ValidationError as exc:
            return _rejected(exc)

        if isinstance(message, types.JSONRPCNotification):
            logger.debug("Received %s", message.method)
            return Response(status_code=200)
        if not isinstance(message, types.JSONRPCRequest):
            return _rpc_error(None, types.INVALID_REQUEST, "Invalid Request", status_code=400)

        method = message.method
        request_id = message.id
        params = message.params or {}

        try:
            if method == "initialize":
                return _rpc_result(request_id, _initialize_result(profile, params))
            if method == "ping":
                return _rpc_result(request_id, types.EmptyResult())
            if method == "tools/list":
                return _rpc_result(request_id, types.ListToolsResult(tools=tool_server.list_tools()))
            if method == "tools/call":
                return await _call_tool(request, request_id, params)
            if method == "resources/list":
                return _rpc_result(request_id, types.ListResourcesResult(resources=[]))
        except Exception:  # noqa: BLE001
            logger.exception("Failed to process %s", method)
            return _rpc_error(request_id, types.INTERNAL_ERROR, "Internal error", status_code=500)

        return _rpc_error(request_id, types.METHOD_NOT_FOUND, "Method not found", status_code=404)

    return Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Route("/sse", rpc, methods=["POST"]),
            Route("/tools", list_tools, methods=["GET"]),
            Route("/", index, methods=["GET"]),
        ],
        middleware=[
            Middleware(
                CORSMiddleware,
                allow_origins=["*"],
                allow_methods=["GET", "POST", "OPTIONS"],
                allow_headers=["Content-Type", "Authorization", *CREDENTIAL_HEADERS],
            )
        ],
    )


@click.command()
@click.option(
    "--server",
    "profile_name",
    type=click.Choice(sorted(PROFILES)),
    default=None,
    help="Tool profile to serve (defaults to GHL_MCP_SERVER or core).",
)
@click.option("--host", default=None, help="Interface to bind (defaults to HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port to listen on (defaults to PORT or 8080)")
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
def main(
    profile_name: str | None, host: str | None, port: int | None, log_level: str | None
) -> None:
    settings = load_settings()
    level = log_level or settings.log_level
    configure_logging(level)

    profile = get_profile(profile_name or settings.server)
    app = create_app(ToolServer(profile, settings))
    host = host or settings.host
    port = port or settings.port
    logger.info("Starting %s on http://%s:%d (POST /sse)", profile.service, host, port)
    uvicorn.run(app, host=host, port=port, log_level=level.lower())


if __name__ == "__main__":
    main()
