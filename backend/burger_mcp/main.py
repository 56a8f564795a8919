from __future__ import annotations

import logging
from functools import partial

from fastapi import FastAPI, Request

from burger_mcp.config import Settings
from burger_mcp.session import McpEndpoint, create_burger_server

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, server_factory=None) -> FastAPI:
    settings = settings or Settings()
    server_factory = server_factory or partial(create_burger_server, settings)

    app = FastAPI(title="Burger MCP server", version="1.0.0")
    app.state.settings = settings

    @app.get("/")
    async def status(request: Request):
        burger_api_url = request.app.state.settings.BURGER_API_URL
        return {
            "status": "up",
            "message": f"Burger MCP server running (Using burger API URL: {burger_api_url})",
        }

    # All methods land on the endpoint; it rejects the ones a stateless server can't serve
    app.add_route("/mcp", McpEndpoint(server_factory), include_in_schema=False)
    return app


app = create_app()
