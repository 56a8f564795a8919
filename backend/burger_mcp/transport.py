"""Streamable HTTP transport for one-shot MCP sessions.

The transport answers every POST with a plain JSON body (no SSE stream) and
never issues a session id, so each HTTP request is a complete session on its
own.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import Send

from burger_mcp.server import (
    CONNECTION_CLOSED,
    INVALID_REQUEST,
    JSONRPC_VERSION,
    PARSE_ERROR,
    error_response,
)

if TYPE_CHECKING:
    from burger_mcp.server import McpServer

logger = logging.getLogger(__name__)


def _is_valid_message(message: Any) -> bool:
    if not isinstance(message, dict) or message.get("jsonrpc") != JSONRPC_VERSION:
        return False
    if "method" in message:
        return isinstance(message["method"], str)
    # Responses sent back by the client
    return "id" in message and ("result" in message or "error" in message)


class StatelessHttpTransport:
    def __init__(self, session_id_generator: Callable[[], str] | None = None):
        if session_id_generator is not None:
            raise ValueError("Stateless transport does not issue session ids")
        self.session_id: str | None = None
        self.server: McpServer | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def handle_request(self, request: Request, send: Send, body: bytes) -> None:
        """Process one HTTP request and write the response through ``send``."""
        if self._closed:
            raise RuntimeError("Transport is closed")
        if self.server is None:
            raise RuntimeError("Transport is not connected to a server")

        response = await self._process(request, body)
        await response(request.scope, request.receive, send)

    async def _process(self, request: Request, body: bytes) -> Response:
        if request.method != "POST":
            return JSONResponse(
                error_response(CONNECTION_CLOSED, "Method not allowed."),
                status_code=405,
                headers={"Allow": "POST"},
            )

        content_type = request.headers.get("content-type", "")
        if not content_type.startswith("application/json"):
            return JSONResponse(
                error_response(
                    CONNECTION_CLOSED,
                    "Unsupported Media Type: Content-Type must be application/json",
                ),
                status_code=415,
            )

        try:
            payload = json.loads(body)
        except ValueError:
            return JSONResponse(error_response(PARSE_ERROR, "Parse error"), status_code=400)

        is_batch = isinstance(payload, list)
        messages = payload if is_batch else [payload]
        if not messages or not all(_is_valid_message(m) for m in messages):
            return JSONResponse(
                error_response(INVALID_REQUEST, "Invalid Request"), status_code=400
            )

        responses = []
        for message in messages:
            if "method" not in message:
                continue
            reply = await self.server.handle_message(message)
            if reply is not None:
                responses.append(reply)

        if not responses:
            return Response(status_code=202)
        return JSONResponse(responses if is_batch else responses[0])

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.server = None
