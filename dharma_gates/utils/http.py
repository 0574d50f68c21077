"""HTTP utilities for making network requests."""
from __future__ import annotations

from typing import Any, Mapping

import httpx


class AsyncHttpClient:
    """Simple wrapper around ``httpx.AsyncClient`` for reusable configuration.

    Requests are made once; timeouts come from the constructor and retry
    policy is left to whoever calls the client.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"User-Agent": user_agent or "DharmaGates/1.0"}
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            timeout=timeout, headers=headers, follow_redirects=True, transport=transport
        )

    async def __aenter__(self) -> "AsyncHttpClient":
        """Enter context manager and return self."""

        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # type: ignore[override]
        """Close the client when exiting context manager."""

        await self.aclose()

    async def get(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GET request, raising ``httpx.HTTPStatusError`` on non-2xx replies."""

        response = await self._client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response

    async def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Perform a GET request and return the JSON payload."""

        response = await self.get(url, params=params, headers=headers)
        return response.json()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()
