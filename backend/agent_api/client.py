"""Async client for the chat streaming endpoint."""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator

import httpx

logger = logging.getLogger(__name__)

CHAT_STREAM_PATH = "/chats/stream"


class ChatApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ChatApiClient:
    """Reads the NDJSON chat stream one delta at a time.

    Usage:
        async with ChatApiClient("http://localhost:7072") as client:
            async for chunk in client.stream_completion(messages):
                print(chunk["delta"].get("content", ""), end="")
    """

    def __init__(
        self,
        base_url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> ChatApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def stream_completion(
        self,
        messages: list[dict[str, str]],
        context: dict[str, Any] | None = None,
    ) -> AsyncIterator[dict]:
        payload: dict[str, Any] = {"messages": messages}
        if context:
            payload["context"] = context

        async with self._client.stream("POST", CHAT_STREAM_PATH, json=payload) as response:
            if response.status_code != 200:
                await response.aread()
                raise ChatApiError(response.status_code, _error_message(response))

            async for line in response.aiter_lines():
                if line.strip():
                    yield json.loads(line)

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        return response.json().get("error") or response.text
    except (ValueError, AttributeError):
        return response.text or response.reason_phrase
