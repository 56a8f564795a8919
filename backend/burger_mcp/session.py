"""Per-request MCP sessions.

Each POST to ``/mcp`` gets its own server and transport. Both are created
inside :func:`open_session` and closed when the response is done, whether it
completed, failed or the client went away.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Callable

import httpx
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import Message, Receive, Scope, Send

from burger_mcp.api_client import BurgerApiClient
from burger_mcp.config import Settings
from burger_mcp.server import CONNECTION_CLOSED, INTERNAL_ERROR, McpServer, error_response
from burger_mcp.tools import register_burger_tools
from burger_mcp.transport import StatelessHttpTransport

logger = logging.getLogger(__name__)

SERVER_NAME = "burger-mcp"
SERVER_VERSION = "1.0.0"


def create_burger_server(
    settings: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> McpServer:
    """Build a server with every burger tool registered and its own API client."""
    api = BurgerApiClient(
        settings.BURGER_API_URL,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
        transport=transport,
    )
    server = McpServer(name=SERVER_NAME, version=SERVER_VERSION)
    register_burger_tools(server, api)
    server.on_close(api.aclose)
    return server


@dataclass
class McpSession:
    server: McpServer
    transport: StatelessHttpTransport


@asynccontextmanager
async def open_session(server_factory: Callable[[], McpServer]) -> AsyncIterator[McpSession]:
    transport: StatelessHttpTransport | None = None
    server: McpServer | None = None
    try:
        transport = StatelessHttpTransport(session_id_generator=None)
        server = server_factory()
        await server.connect(transport)
        yield McpSession(server=server, transport=transport)
    finally:
        if transport is not None:
            await transport.close()
        if server is not None:
            await server.close()


class _TrackingSend:
    """Wraps an ASGI send callable and remembers whether headers went out."""

    def __init__(self, send: Send):
        self._send = send
        self.headers_sent = False

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.headers_sent = True
        await self._send(message)


class McpEndpoint:
    """ASGI endpoint serving the tool protocol, one session per request."""

    def __init__(self, server_factory: Callable[[], McpServer]):
        self.server_factory = server_factory

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        logger.info("Received %s request to /mcp", request.method)

        # Only stateful sessions need GET (server stream) and DELETE (termination)
        if request.method in ("GET", "DELETE"):
            response = JSONResponse(
                error_response(CONNECTION_CLOSED, "Method not allowed."), status_code=405
            )
            await response(scope, receive, send)
            return

        tracked_send = _TrackingSend(send)
        try:
            async with open_session(self.server_factory) as session:
                body = await request.body()
                await session.transport.handle_request(request, tracked_send, body)
        except Exception:
            logger.exception("Error handling MCP request")
            if not tracked_send.headers_sent:
                response = JSONResponse(
                    error_response(INTERNAL_ERROR, "Internal server error"), status_code=500
                )
                await response(scope, receive, tracked_send)
