"""Model Context Protocol server exposing GoHighLevel tools over stdio."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable, Mapping

import anyio
import click
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from ghl_mcp.client import GHLClient, GHLError
from ghl_mcp.config import Settings, load_settings
from ghl_mcp.credentials import Credentials, resolve_credentials, strip_credentials
from ghl_mcp.profiles import PROFILES, ServerProfile, get_profile
from ghl_mcp.registry import ToolArgumentError

logger = logging.getLogger(__name__)

UNAUTHORIZED_MESSAGE = (
    "Invalid API key or insufficient permissions. Please check your GoHighLevel API key."
)

ClientFactory = Callable[[Credentials], GHLClient]


def _json(data: Any) -> str:
    return json.dumps(data, indent=2, sort_keys=True)


def _error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


class ToolServer:
    """Dispatches tool calls of one profile to its providers.

    Transport independent: the stdio server and the HTTP app both delegate
    here. Every failure is raised as an ``McpError``.
    """

    def __init__(
        self,
        profile: ServerProfile,
        settings: Settings | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.profile = profile
        self.settings = settings or Settings()
        self.registry = profile.build_registry()
        self._client_factory = client_factory or self._default_client

    def _default_client(self, credentials: Credentials) -> GHLClient:
        return GHLClient(
            credentials.api_key,
            location_id=credentials.location_id,
            base_url=credentials.base_url or self.settings.base_url,
            version=credentials.version or self.settings.api_version,
            timeout=self.settings.timeout,
        )

    def list_tools(self) -> list[types.Tool]:
        return self.registry.list_tools()

    async def call_tool(
        self, name: str, arguments: Mapping[str, Any] | None = None
    ) -> types.CallToolResult:
        if arguments is not None and not isinstance(arguments, Mapping):
            raise _error(types.INVALID_PARAMS, "Tool arguments must be an object.")
        arguments = dict(arguments or {})

        provider = self.registry.provider_for(name)
        if provider is None:
            raise _error(types.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        credentials = resolve_credentials(
            arguments,
            self.profile.policy,
            default_api_key=self.settings.api_key,
            default_location_id=self.settings.location_id,
        )
        logger.info("User: %s | Tool: %s", credentials.user_id, name)

        try:
            async with self._client_factory(credentials) as client:
                result = await provider.execute(name, strip_credentials(arguments), client)
        except McpError:
            raise
        except ToolArgumentError as exc:
            logger.warning("Rejected %s for user %s: %s", name, credentials.user_id, exc)
            raise _error(types.INVALID_PARAMS, str(exc)) from exc
        except GHLError as exc:
            if exc.status_code == 401:
                logger.warning("Upstream rejected credentials of user %s on %s", credentials.user_id, name)
                raise _error(types.INVALID_PARAMS, UNAUTHORIZED_MESSAGE) from exc
            logger.error("Tool %s failed for user %s: %s", name, credentials.user_id, exc)
            raise _error(types.INTERNAL_ERROR, f"Failed to execute tool: {exc}") from exc
        except Exception as exc:  # noqa: BLE001
            logger.exception("Tool %s failed for user %s", name, credentials.user_id)
            raise _error(types.INTERNAL_ERROR, f"Failed to execute tool: {exc}") from exc

        return types.CallToolResult(
            content=[types.TextContent(type="text", text=_json(result.model_dump(exclude_none=True)))],
            isError=False,
        )


def build_stdio_server(tool_server: ToolServer) -> Server:
    """Wire a ``ToolServer`` into the SDK's low-level server.

    Handlers are registered directly so that an ``McpError`` raised by the
    dispatcher reaches the client as a JSON-RPC error instead of being folded
    into an ``isError`` result.
    """
    profile = tool_server.profile
    server = Server(
        name=profile.service,
        version=profile.version,
        instructions=(
            f"{profile.title}: {profile.description}. Every tool accepts apiKey, locationId "
            "and userId arguments, or one apiCredentials object; when omitted, the configured "
            "defaults are used."
        ),
    )

    async def handle_list_tools(_req: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=tool_server.list_tools()))

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        result = await tool_server.call_tool(req.params.name, req.params.arguments or {})
        return types.ServerResult(result)

    server.request_handlers[types.ListToolsRequest] = handle_list_tools
    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


def configure_logging(level: str) -> None:
    # stdout carries the protocol
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def _run(server: Server) -> None:
    initialization_options = server.create_initialization_options()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, initialization_options)


@click.command()
@click.option(
    "--server",
    "profile_name",
    type=click.Choice(sorted(PROFILES)),
    default=None,
    help="Tool profile to serve (defaults to GHL_MCP_SERVER or core).",
)
@click.option("--log-level", default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR)")
def main(profile_name: str | None, log_level: str | None) -> None:
    settings = load_settings()
    configure_logging(log_level or settings.log_level)

    profile = get_profile(profile_name or settings.server)
    tool_server = ToolServer(profile, settings)
    logger.info("Starting %s over stdio with %d tools", profile.service, len(tool_server.registry))
    anyio.run(_run, build_stdio_server(tool_server))


if __name__ == "__main__":
    main()
