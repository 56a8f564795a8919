"""LangChain agent wiring for the chat endpoint.

The agent talks to the model through an OpenAI-compatible endpoint and loads
its tools from the burger MCP server on every request.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Callable, Coroutine, Protocol

from langchain.agents import create_agent
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from langchain_mcp_adapters.client import MultiServerMCPClient
from langchain_openai import ChatOpenAI

from agent_api.agent.prompts import AGENT_SYSTEM_PROMPT
from agent_api.config import Settings
from agent_api.models import ChatMessage

logger = logging.getLogger(__name__)


class ChatAgent(Protocol):
    def astream_events(
        self, input: Any, config: Any = None, *, version: str = "v2", **kwargs: Any
    ) -> AsyncIterator[dict]: ...


AgentFactory = Callable[[Settings], Coroutine[Any, Any, ChatAgent]]


async def create_chat_agent(settings: Settings) -> ChatAgent:
    model = ChatOpenAI(
        base_url=settings.AZURE_OPENAI_API_ENDPOINT,
        model=settings.AZURE_OPENAI_MODEL,
        api_key=settings.AZURE_OPENAI_API_KEY,
        streaming=True,
        use_responses_api=True,
    )

    logger.info("Connecting to Burger MCP server at %s", settings.BURGER_MCP_URL)
    client = MultiServerMCPClient(
        {
            "burger": {
                "transport": "streamable_http",
                "url": settings.BURGER_MCP_URL,
            }
        }
    )
    tools = await client.get_tools()
    logger.info("Loaded %d tools from Burger MCP server", len(tools))

    return create_agent(model, tools=tools, system_prompt=AGENT_SYSTEM_PROMPT)


def build_agent_input(messages: list[ChatMessage], user_id: str) -> dict:
    """The agent reads the userId from a leading user message."""
    history: list[BaseMessage] = [
        HumanMessage(m.content) if m.role == "user" else AIMessage(m.content)
        for m in messages
    ]
    return {"messages": [HumanMessage(f"userId: {user_id}"), *history]}


def get_agent_factory() -> AgentFactory:
    return create_chat_agent
