from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from agent_api.agent.runtime import AgentFactory, build_agent_input, get_agent_factory
from agent_api.agent.streaming import NDJSONStreamingResponse
from agent_api.agent.translator import agent_events, translate_events
from agent_api.config import Settings, get_settings
from agent_api.models import ChatRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/chats/stream")
async def post_chats(
    request: Request,
    settings: Settings = Depends(get_settings),
    agent_factory: AgentFactory = Depends(get_agent_factory),
):
    try:
        body = ChatRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        logger.info("Rejected chat request body: %s", e)
        return _error(400, "Invalid or missing messages in the request body")

    messages = body.messages
    if not messages or not messages[-1].content:
        return _error(400, "Invalid or missing messages in the request body")

    # The environment override wins over the client-provided context
    user_id = settings.USER_ID or (body.context.user_id if body.context else None)
    if not user_id:
        return _error(400, "Invalid or missing userId in the environment variables")

    if not settings.AZURE_OPENAI_API_ENDPOINT or not settings.BURGER_MCP_URL:
        message = (
            "Missing required environment variables: AZURE_OPENAI_API_ENDPOINT or BURGER_MCP_URL"
        )
        logger.error(message)
        return _error(500, message)

    try:
        agent = await agent_factory(settings)
        stream_events = agent.astream_events(
            build_agent_input(messages, user_id), version="v2"
        )
    except Exception as e:
        logger.exception("Error when processing chat-post request: %s", e)
        return _error(500, "Internal server error while processing the request")

    return NDJSONStreamingResponse(translate_events(agent_events(stream_events)))
