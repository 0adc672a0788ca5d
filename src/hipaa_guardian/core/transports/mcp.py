"""MCP server scaffold.

Builds a low-level MCP ``Server`` whose tool list and tool calls are served
by a caller-supplied pair of coroutines, and runs it over stdio or
streamable HTTP.

The low-level server is used instead of ``FastMCP`` because tool input
schemas come from the operation registry at startup rather than from Python
function signatures.

Usage::

    from hipaa_guardian.core.transports.mcp import create_guardian_mcp, run_guardian_mcp

    server = create_guardian_mcp(
        name="HIPAA Compliance Guardian",
        version="2.3.0",
        instructions="...",
        list_tools=adapter.list_tools,
        call_tool=adapter.call_tool,
    )
    run_guardian_mcp(server, transport="stdio")
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import mcp.types as types
import uvicorn
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from hipaa_guardian.core.logging import get_logger

logger = get_logger(__name__)

ListTools = Callable[[], Awaitable[list[types.Tool]]]
CallTool = Callable[[str, dict[str, Any]], Awaitable[list[types.TextContent]]]

HTTP_MOUNT_PATH = "/mcp"


def create_guardian_mcp(
    name: str,
    *,
    version: str,
    instructions: str,
    list_tools: ListTools,
    call_tool: CallTool,
) -> Server:
    """Create a low-level MCP server with the given tool handlers.

    Parameters
    ----------
    name : str
        MCP server name reported during initialization.
    version : str
        Server version reported during initialization.
    instructions : str
        Natural language description of the server's capabilities.
    list_tools, call_tool : coroutine functions
        Serve ``tools/list`` and ``tools/call``. Arguments are validated by
        ``call_tool`` itself, so SDK-side input validation is disabled.
    """
    server: Server = Server(name, version=version, instructions=instructions)
    server.list_tools()(list_tools)
    server.call_tool(validate_input=False)(call_tool)
    return server


class StreamableHTTPEndpoint:
    """ASGI endpoint handing every request to the session manager.

    An instance rather than a function, so Starlette routes it as a raw ASGI
    app and ``/mcp`` is answered without a trailing-slash redirect.
    """

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_http_app(server: Server, *, stateless: bool = True) -> Starlette:
    """Starlette app exposing ``server`` over streamable HTTP at ``/mcp``."""
    session_manager = StreamableHTTPSessionManager(app=server, stateless=stateless)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    return Starlette(
        routes=[Route(HTTP_MOUNT_PATH, endpoint=StreamableHTTPEndpoint(session_manager))],
        lifespan=lifespan,
    )


async def _serve_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_guardian_mcp(
    server: Server,
    *,
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 8100,
) -> None:
    """Run ``server`` until the transport session ends.

    Parameters
    ----------
    transport : str
        ``stdio`` (default) or ``streamable-http`` (``http`` is accepted).
    host, port
        Bind address for the HTTP transport.
    """
    if transport in ("http", "streamable-http"):
        logger.info("server_running", transport="streamable-http", host=host, port=port, path=HTTP_MOUNT_PATH)
        uvicorn.run(create_http_app(server), host=host, port=port, log_level="warning")
    elif transport == "stdio":
        logger.info("server_running", transport="stdio")
        asyncio.run(_serve_stdio(server))
    else:
        raise ValueError(f"Unsupported transport: {transport!r}")
