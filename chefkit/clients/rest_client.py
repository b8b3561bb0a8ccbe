from __future__ import annotations

import logging
from typing import Any

import httpx

from chefkit.errors import CollaboratorError

logger = logging.getLogger(__name__)


def make_http_client(api_url: str, timeout: float = 10.0) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=api_url.rstrip("/"),
        timeout=httpx.Timeout(timeout, connect=5.0),
        headers={"Content-Type": "application/json"},
    )


class RestClient:
    """Single-attempt JSON calls against the ChefKit backend."""

    def __init__(self, http: httpx.AsyncClient) -> None:
        self.http = http

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "%s %s failed with %s: %s",
                method,
                path,
                e.response.status_code,
                e.response.text[:200],
            )
            raise CollaboratorError(
                f"{method} {path} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error("%s %s network error: %s", method, path, e)
            raise CollaboratorError(f"{method} {path} failed: {e}") from e
        return response

    async def _json(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._request(method, path, **kwargs)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise CollaboratorError(f"{method} {path} returned invalid JSON") from e
