"""Conversion of backend calls into tool results.

A tool handler never lets an error reach the protocol layer: whatever the
backend call raises is logged and reported back to the agent as an
``Error: ...`` text item flagged with ``isError``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    content: list[dict] = field(default_factory=list)
    structured_content: dict | None = None
    is_error: bool = False

    @classmethod
    def success(cls, result: Any) -> ToolResult:
        return cls(
            content=[{"type": "text", "text": json.dumps(result)}],
            structured_content={"result": result},
        )

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        return cls(
            content=[{"type": "text", "text": f"Error: {message}"}],
            is_error=True,
        )

    def to_dict(self) -> dict:
        data: dict[str, Any] = {}
        if self.structured_content is not None:
            data["structuredContent"] = self.structured_content
        data["content"] = self.content
        if self.is_error:
            data["isError"] = True
        return data


async def create_tool_response(handler: Callable[[], Awaitable[Any]]) -> ToolResult:
    """Run a backend call and wrap its outcome as a tool result."""
    try:
        result = await handler()
        return ToolResult.success(result)
    except Exception as e:
        message = str(e) or type(e).__name__
        logger.error("Error executing MCP tool: %s", message)
        return ToolResult.failure(message)
