"""Minimal MCP server: tool registry plus JSON-RPC method dispatch.

Only the tools capability is implemented. The server keeps no per-client
state, so every message can be handled by a freshly built instance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from burger_mcp.bridge import ToolResult

if TYPE_CHECKING:
    from burger_mcp.transport import StatelessHttpTransport

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

# JSON-RPC / MCP error codes
CONNECTION_CLOSED = -32000
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

LATEST_PROTOCOL_VERSION = "2025-06-18"
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")

EMPTY_INPUT_SCHEMA = {"type": "object", "properties": {}}


class JsonRpcError(Exception):
    """Protocol-level failure reported to the client as a JSON-RPC error object."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


def error_response(code: int, message: str, request_id: Any = None) -> dict:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "error": {"code": code, "message": message},
        "id": request_id,
    }


@dataclass
class ToolDefinition:
    name: str
    description: str
    handler: Callable[..., Awaitable[ToolResult]]
    input_model: type[BaseModel] | None = None

    def to_schema(self) -> dict:
        input_schema = (
            self.input_model.model_json_schema() if self.input_model else EMPTY_INPUT_SCHEMA
        )
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": input_schema,
        }


class McpServer:
    def __init__(self, name: str, version: str):
        self.name = name
        self.version = version
        self.transport: StatelessHttpTransport | None = None
        self._tools: dict[str, ToolDefinition] = {}
        self._close_callbacks: list[Callable[[], Awaitable[None]]] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def register_tool(
        self,
        name: str,
        description: str,
        handler: Callable[..., Awaitable[ToolResult]],
        input_model: type[BaseModel] | None = None,
    ) -> None:
        """Register a tool. Handlers take the validated arguments model, or nothing."""
        if name in self._tools:
            raise ValueError(f"Tool {name} is already registered")
        self._tools[name] = ToolDefinition(
            name=name,
            description=description,
            handler=handler,
            input_model=input_model,
        )

    def list_tools(self) -> list[dict]:
        return [t.to_schema() for t in self._tools.values()]

    def on_close(self, callback: Callable[[], Awaitable[None]]) -> None:
        self._close_callbacks.append(callback)

    async def connect(self, transport: StatelessHttpTransport) -> None:
        if self._closed:
            raise RuntimeError("Cannot connect a closed server")
        self.transport = transport
        transport.server = self

    async def call_tool(self, name: str, arguments: dict | None) -> ToolResult:
        tool = self._tools.get(name)
        if tool is None:
            raise JsonRpcError(INVALID_PARAMS, f"Tool {name} not found")

        if tool.input_model is None:
            return await tool.handler()

        try:
            args = tool.input_model.model_validate(arguments or {})
        except ValidationError as e:
            # Reported as a tool error so the agent can correct its call and retry
            logger.info("Rejected arguments for tool %s: %s", name, e)
            return ToolResult.failure(f"Invalid arguments for tool {name}: {e}")
        return await tool.handler(args)

    async def handle_message(self, message: dict) -> dict | None:
        """Handle one JSON-RPC request or notification.

        Returns the response object, or None for notifications. Errors other
        than JsonRpcError propagate to the caller.
        """
        if self._closed:
            raise RuntimeError("Server is closed")

        method = message["method"]
        if "id" not in message:
            logger.debug("Received notification %s", method)
            return None

        request_id = message["id"]
        params = message.get("params") or {}
        try:
            result = await self._dispatch(method, params)
        except JsonRpcError as e:
            return error_response(e.code, e.message, request_id)
        return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}

    async def _dispatch(self, method: str, params: dict) -> dict:
        if not isinstance(params, dict):
            raise JsonRpcError(INVALID_PARAMS, "Params must be an object")

        if method == "initialize":
            requested = params.get("protocolVersion")
            version = (
                requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
            )
            return {
                "protocolVersion": version,
                "capabilities": {"tools": {"listChanged": False}},
                "serverInfo": {"name": self.name, "version": self.version},
            }

        if method == "ping":
            return {}

        if method == "tools/list":
            return {"tools": self.list_tools()}

        if method == "tools/call":
            name = params.get("name")
            if not isinstance(name, str):
                raise JsonRpcError(INVALID_PARAMS, "Missing tool name")
            arguments = params.get("arguments")
            if arguments is not None and not isinstance(arguments, dict):
                raise JsonRpcError(INVALID_PARAMS, "Tool arguments must be an object")
            logger.info("Calling tool %s", name)
            result = await self.call_tool(name, arguments)
            return result.to_dict()

        raise JsonRpcError(METHOD_NOT_FOUND, f"Method not found: {method}")

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._tools.clear()
        self.transport = None
        for callback in self._close_callbacks:
            await callback()
        self._close_callbacks.clear()
