"""Agent event handling for the chat stream."""

from agent_api.agent.events import AgentEvent, AgentEventKind
from agent_api.agent.streaming import NDJSONStreamingResponse, ndjson_lines
from agent_api.agent.translator import agent_events, to_delta, translate_events

__all__ = [
    "AgentEvent",
    "AgentEventKind",
    "NDJSONStreamingResponse",
    "agent_events",
    "ndjson_lines",
    "to_delta",
    "translate_events",
]
