import logging

import uvicorn

from burger_mcp.config import Settings
from burger_mcp.main import create_app


def main() -> None:
    settings = Settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).info(
        "Burger MCP server listening on port %s (Using burger API URL: %s)",
        settings.PORT,
        settings.BURGER_API_URL,
    )
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
