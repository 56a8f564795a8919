"""HTTP client for the burger REST API.

Every call goes through :meth:`BurgerApiClient.fetch`, which pins the base URL,
attaches JSON headers and normalises the two special responses: non-2xx
statuses raise :class:`BurgerApiError`, and ``204 No Content`` is replaced with
a canned success value since there is no body to parse.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

NO_CONTENT_RESULT = {"result": "Operation completed successfully. No content returned."}


class BurgerApiError(Exception):
    """Raised when the burger API answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def _error_detail(response: httpx.Response) -> str | None:
    """Pull a human-readable error out of a backend error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return None


class BurgerApiClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        # Request paths are absolute, so only the scheme and host of the URL are used
        url = httpx.URL(base_url)
        self.base_url = f"{url.scheme}://{url.netloc.decode()}"
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=JSON_HEADERS,
            timeout=timeout,
            transport=transport,
        )

    async def fetch(
        self,
        path: str,
        method: str = "GET",
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        request = self._client.build_request(method, path, params=params, json=json)
        logger.info("Fetching %s", request.url)
        try:
            response = await self._client.send(request)
        except httpx.HTTPError as e:
            logger.error("Error fetching %s: %s", request.url, e)
            raise

        if not response.is_success:
            message = f"Error fetching {request.url}: {response.reason_phrase}"
            detail = _error_detail(response)
            if detail:
                message = f"{message} ({detail})"
            logger.error("%s", message)
            raise BurgerApiError(message, status_code=response.status_code)

        if response.status_code == 204:
            return dict(NO_CONTENT_RESULT)

        return response.json()

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()
