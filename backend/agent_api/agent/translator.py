"""Turn agent execution events into chat completion deltas.

Both functions here are lazy: one event is pulled from the source for each
delta the consumer asks for, and nothing is buffered in between.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterable, AsyncIterator, Mapping

from pydantic_core import to_jsonable_python

from agent_api.agent.events import AgentEvent, AgentEventKind
from agent_api.models import ChatCompletionDelta, CurrentStep, Delta, DeltaContext


@asynccontextmanager
async def closing_source(source: AsyncIterable[Any]) -> AsyncIterator[AsyncIterable[Any]]:
    """Like ``contextlib.aclosing``, for sources that may not define ``aclose``."""
    try:
        yield source
    finally:
        aclose = getattr(source, "aclose", None)
        if aclose is not None:
            await aclose()


async def agent_events(
    stream_events: AsyncIterable[Mapping[str, Any]],
) -> AsyncIterator[AgentEvent]:
    """Adapt raw LangChain ``astream_events`` records to AgentEvents."""
    async with closing_source(stream_events) as source:
        async for event in source:
            yield AgentEvent.from_stream_event(event)


async def translate_events(
    events: AsyncIterable[AgentEvent],
) -> AsyncIterator[ChatCompletionDelta]:
    async with closing_source(events) as source:
        async for event in source:
            delta = to_delta(event)
            if delta is not None:
                yield delta


def to_delta(event: AgentEvent) -> ChatCompletionDelta | None:
    """Map one event to a delta, or None when the client has nothing to see."""
    if event.kind is AgentEventKind.MODEL_TOKEN:
        text = first_text_fragment(event.payload)
        if not text:
            return None
        return ChatCompletionDelta(delta=Delta(content=text, role="assistant"))

    if event.kind is AgentEventKind.MODEL_START:
        step_input = _jsonable(event.payload) if event.payload is not None else None
        return _step_delta("llm", event.name, step_input)

    if event.kind is AgentEventKind.TOOL_START:
        step_input = json.dumps(_jsonable(event.payload)) if event.payload else None
        return _step_delta("tool", event.name, step_input)

    if event.kind is AgentEventKind.OTHER:
        return None

    raise ValueError(f"Unhandled agent event kind: {event.kind}")


def first_text_fragment(content: Any) -> str:
    """Text of a streamed token: the string itself or the first content block's text."""
    if isinstance(content, str):
        return content
    if isinstance(content, list) and content:
        block = content[0]
        if isinstance(block, str):
            return block
        if isinstance(block, Mapping):
            text = block.get("text")
            return text if isinstance(text, str) else ""
    return ""


def _step_delta(step_type: str, name: str, step_input: Any) -> ChatCompletionDelta:
    step = CurrentStep(type=step_type, name=name, input=step_input)
    return ChatCompletionDelta(delta=Delta(context=DeltaContext(current_step=step)))


def _jsonable(value: Any) -> Any:
    # Model inputs carry LangChain message objects
    return to_jsonable_python(value, fallback=str)
