from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Scheme and host only; any path part is ignored
    BURGER_API_URL: str = "http://localhost:7071"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    HOST: str = "0.0.0.0"
    # Azure Functions custom handlers receive their port through FUNCTIONS_CUSTOMHANDLER_PORT
    PORT: int = Field(
        default=3000,
        validation_alias=AliasChoices("FUNCTIONS_CUSTOMHANDLER_PORT", "PORT"),
    )
    LOG_LEVEL: str = "INFO"

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
