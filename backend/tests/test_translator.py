"""Tests for the agent event translator.

Events are fed as async generators, the same shape LangChain's
``astream_events`` produces, and the translated deltas are collected with
``asyncio.run``.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from langchain_core.messages import AIMessageChunk, HumanMessage

from agent_api.agent.events import AgentEvent, AgentEventKind
from agent_api.agent.translator import (
    agent_events,
    first_text_fragment,
    to_delta,
    translate_events,
)


async def _aiter(items):
    for item in items:
        yield item


def _collect(events) -> list[dict]:
    async def run():
        return [
            json.loads(d.to_json())
            async for d in translate_events(_aiter(events))
        ]

    return asyncio.run(run())


def token(text, name="ChatOpenAI") -> AgentEvent:
    return AgentEvent(AgentEventKind.MODEL_TOKEN, name, text)


# ── 1. Mapping rules ────────────────────────────────────────────


def test_model_token_becomes_assistant_content():
    delta = to_delta(token("Hello"))
    assert json.loads(delta.to_json()) == {"delta": {"content": "Hello", "role": "assistant"}}


def test_model_token_uses_first_content_block():
    payload = [{"type": "text", "text": "Hi", "index": 0}, {"type": "text", "text": "ignored"}]
    delta = to_delta(token(payload))
    assert delta.delta.content == "Hi"


def test_model_start_becomes_llm_step():
    event = AgentEvent(AgentEventKind.MODEL_START, "ChatOpenAI", {"messages": [["hi"]]})
    assert json.loads(to_delta(event).to_json()) == {
        "delta": {
            "context": {
                "currentStep": {"type": "llm", "name": "ChatOpenAI", "input": {"messages": [["hi"]]}}
            }
        }
    }


def test_model_start_without_input_omits_it():
    event = AgentEvent(AgentEventKind.MODEL_START, "ChatOpenAI")
    step = json.loads(to_delta(event).to_json())["delta"]["context"]["currentStep"]
    assert step == {"type": "llm", "name": "ChatOpenAI"}


def test_model_start_input_with_messages_is_serializable():
    event = AgentEvent(
        AgentEventKind.MODEL_START, "ChatOpenAI", {"messages": [[HumanMessage("hello")]]}
    )
    step = json.loads(to_delta(event).to_json())["delta"]["context"]["currentStep"]
    assert step["input"]["messages"][0][0]["content"] == "hello"


def test_tool_start_serializes_arguments():
    event = AgentEvent(AgentEventKind.TOOL_START, "get_burger_by_id", {"id": "42"})
    step = json.loads(to_delta(event).to_json())["delta"]["context"]["currentStep"]
    assert step["type"] == "tool"
    assert step["name"] == "get_burger_by_id"
    assert json.loads(step["input"]) == {"id": "42"}


def test_tool_start_without_arguments_omits_input():
    event = AgentEvent(AgentEventKind.TOOL_START, "get_burgers", None)
    step = json.loads(to_delta(event).to_json())["delta"]["context"]["currentStep"]
    assert "input" not in step


def test_exactly_one_of_content_or_step():
    events = [
        AgentEvent(AgentEventKind.MODEL_START, "ChatOpenAI"),
        token("a"),
        AgentEvent(AgentEventKind.TOOL_START, "get_burgers", {}),
    ]
    for line in _collect(events):
        delta = line["delta"]
        assert ("content" in delta) != ("context" in delta)


# ── 2. Dropped events ───────────────────────────────────────────


def test_other_events_produce_nothing():
    assert to_delta(AgentEvent(AgentEventKind.OTHER, "tool_end")) is None
    assert _collect([AgentEvent(AgentEventKind.OTHER, "x")] * 3) == []


@pytest.mark.parametrize("payload", ["", [], None, [{"type": "reasoning"}]])
def test_empty_token_produces_nothing(payload):
    assert to_delta(token(payload)) is None


def test_first_text_fragment():
    assert first_text_fragment("abc") == "abc"
    assert first_text_fragment(["abc", "def"]) == "abc"
    assert first_text_fragment([{"text": "x"}]) == "x"
    assert first_text_fragment(42) == ""


# ── 3. Ordering ─────────────────────────────────────────────────


def test_content_concatenation_preserves_order():
    fragments = ["The ", "", "Classic ", "Cheeseburger", " is ", "", "great."]
    events = []
    for i, text in enumerate(fragments):
        events.append(token(text))
        if i % 2:
            events.append(AgentEvent(AgentEventKind.OTHER, "on_chain_stream"))

    lines = _collect(events)
    assert "".join(line["delta"].get("content", "") for line in lines) == "".join(fragments)
    assert len(lines) == len([f for f in fragments if f])


# ── 4. Laziness and failures ────────────────────────────────────


def test_translation_is_lazy():
    pulled = []

    async def source():
        for i in range(1000):
            pulled.append(i)
            yield token(str(i))

    async def run():
        stream = translate_events(source())
        first = await stream.__anext__()
        await stream.aclose()
        return first

    first = asyncio.run(run())
    assert first.delta.content == "0"
    assert pulled == [0]


def test_consumer_close_stops_the_source():
    closed = []

    async def source():
        try:
            while True:
                yield token("x")
        finally:
            closed.append(True)

    async def run():
        stream = translate_events(source())
        await stream.__anext__()
        await stream.aclose()

    asyncio.run(run())
    assert closed == [True]


def test_upstream_error_propagates():
    async def source():
        yield token("partial")
        raise RuntimeError("model went away")

    async def run():
        seen = []
        async for delta in translate_events(source()):
            seen.append(delta.delta.content)
        return seen

    with pytest.raises(RuntimeError, match="model went away"):
        asyncio.run(run())



class EventList:
    """Async iterable without an ``aclose`` method."""

    def __init__(self, items):
        self.items = items

    def __aiter__(self):
        return _aiter(self.items)


def test_plain_async_iterables_are_accepted():
    async def run():
        return [d.delta.content async for d in translate_events(EventList([token("a"), token("b")]))]

    assert asyncio.run(run()) == ["a", "b"]


def test_plain_async_iterables_of_stream_events_are_accepted():
    raw = [{"event": "on_tool_start", "name": "get_burgers", "data": {}}]

    async def run():
        return [e.kind async for e in agent_events(EventList(raw))]

    assert asyncio.run(run()) == [AgentEventKind.TOOL_START]

# ── 5. LangChain event adapter ──────────────────────────────────


def test_stream_events_are_adapted():
    raw = [
        {"event": "on_chat_model_start", "name": "ChatOpenAI", "data": {"input": {"messages": []}}},
        {"event": "on_chat_model_stream", "name": "ChatOpenAI", "data": {"chunk": AIMessageChunk(content="Hey")}},
        {"event": "on_chat_model_end", "name": "ChatOpenAI", "data": {}},
        {"event": "on_tool_start", "name": "get_burgers", "data": {"input": {}}},
        {"event": "on_tool_end", "name": "get_burgers", "data": {"output": "[]"}},
    ]

    async def run():
        return [e async for e in agent_events(_aiter(raw))]

    events = asyncio.run(run())
    assert [e.kind for e in events] == [
        AgentEventKind.MODEL_START,
        AgentEventKind.MODEL_TOKEN,
        AgentEventKind.OTHER,
        AgentEventKind.TOOL_START,
        AgentEventKind.OTHER,
    ]
    assert events[1].payload == "Hey"
    assert events[3].name == "get_burgers"
