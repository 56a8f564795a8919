from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user_id: str | None = Field(default=None, alias="userId")


class ChatRequest(BaseModel):
    messages: list[ChatMessage] = Field(default_factory=list)
    context: ChatContext | None = None


# ── Streamed response ──────────────────────────────────────────


class CurrentStep(BaseModel):
    type: Literal["llm", "tool"]
    name: str
    input: Any = None


class DeltaContext(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_step: CurrentStep = Field(alias="currentStep")


class Delta(BaseModel):
    content: str | None = None
    role: Literal["assistant"] | None = None
    context: DeltaContext | None = None


class ChatCompletionDelta(BaseModel):
    """One NDJSON line of the chat stream."""

    delta: Delta

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)
