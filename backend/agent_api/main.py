from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agent_api.config import Settings
from agent_api.routers import chat

SERVICE_NAME = "Burger agent API"


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title=SERVICE_NAME, version="1.0.0")
    app.state.settings = settings or Settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat.router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "service": SERVICE_NAME}

    return app


app = create_app()
