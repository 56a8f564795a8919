from pathlib import Path

from fastapi import Request
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    AZURE_OPENAI_API_ENDPOINT: str | None = None
    AZURE_OPENAI_MODEL: str = "gpt-5-mini"
    # Ollama and OpenAI-compatible proxies accept any key
    AZURE_OPENAI_API_KEY: str = "__dummy"

    BURGER_MCP_URL: str | None = "http://localhost:3000/mcp"

    # Overrides the userId sent by the client when set
    USER_ID: str | None = None

    HOST: str = "0.0.0.0"
    PORT: int = 7072
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
