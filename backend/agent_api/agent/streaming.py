"""Newline-delimited JSON framing for the chat stream.

See https://github.com/ndjson/ndjson-spec
"""

from __future__ import annotations

import logging
from typing import AsyncIterable, AsyncIterator

from starlette.responses import StreamingResponse

from agent_api.agent.translator import closing_source
from agent_api.models import ChatCompletionDelta

logger = logging.getLogger(__name__)

# Azure Static Web Apps only streams linked backend responses with this content type
STREAM_MEDIA_TYPE = "text/event-stream"


async def ndjson_lines(chunks: AsyncIterable[ChatCompletionDelta]) -> AsyncIterator[str]:
    """Yield one complete JSON document plus newline per delta."""
    async with closing_source(chunks) as source:
        try:
            async for chunk in source:
                yield chunk.to_json() + "\n"
        except Exception:
            logger.exception("Chat stream failed, aborting response")
            raise


class NDJSONStreamingResponse(StreamingResponse):
    def __init__(self, chunks: AsyncIterable[ChatCompletionDelta], status_code: int = 200):
        super().__init__(
            ndjson_lines(chunks),
            status_code=status_code,
            media_type=STREAM_MEDIA_TYPE,
            headers={"Transfer-Encoding": "chunked"},
        )
