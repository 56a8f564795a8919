"""AgentEvent — the events the chat stream is built from.

The agent runtime reports many kinds of execution events; only three of them
matter to the client. Everything else is folded into ``OTHER`` so the
translator can drop it explicitly.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping


class AgentEventKind(str, enum.Enum):
    MODEL_START = "model-start"
    MODEL_TOKEN = "model-token"
    TOOL_START = "tool-start"
    OTHER = "other"


# LangChain astream_events (v2) names
_STREAM_EVENT_KINDS = {
    "on_chat_model_start": AgentEventKind.MODEL_START,
    "on_chat_model_stream": AgentEventKind.MODEL_TOKEN,
    "on_tool_start": AgentEventKind.TOOL_START,
}


@dataclass(frozen=True)
class AgentEvent:
    """
    kind     — which step of the run produced the event
    name     — model or tool name
    payload  — model/tool input for *-start events, token content for model-token
    """

    kind: AgentEventKind
    name: str = ""
    payload: Any = None

    @classmethod
    def from_stream_event(cls, event: Mapping[str, Any]) -> AgentEvent:
        kind = _STREAM_EVENT_KINDS.get(event.get("event", ""), AgentEventKind.OTHER)
        name = event.get("name") or ""
        data = event.get("data") or {}

        if kind is AgentEventKind.MODEL_TOKEN:
            chunk = data.get("chunk")
            return cls(kind, name, getattr(chunk, "content", None))
        if kind in (AgentEventKind.MODEL_START, AgentEventKind.TOOL_START):
            return cls(kind, name, data.get("input"))
        return cls(AgentEventKind.OTHER, name)
