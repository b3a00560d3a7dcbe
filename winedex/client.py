"""Async HTTP client for the wine search service.

The service exposes two GET operations returning the same JSON shape:
``<base>/search?q=<text>`` and ``<base>/similar?wine=<code>``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from .config import Settings, settings as default_settings
from .errors import TransportError
from .models import SearchResponse, parse_search_response

logger = logging.getLogger(__name__)


class SearchServiceClient:
    """Issues one request per call; no retries, no caching."""

    def __init__(
        self,
        config: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or default_settings
        self._transport = transport

    async def search(self, query_text: str) -> SearchResponse:
        return await self._get(self.config.search_url, {"q": query_text})

    async def find_similar(self, wine_code: str) -> SearchResponse:
        return await self._get(self.config.similar_url, {"wine": wine_code})

    async def _get(self, url: str, params: Dict[str, Any]) -> SearchResponse:
        logger.debug("GET %s params=%s", url, params)
        async with httpx.AsyncClient(
            timeout=self.config.request_timeout, transport=self._transport
        ) as client:
            try:
                response = await client.get(url, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise TransportError(
                    f"{url} returned {exc.response.status_code}"
                ) from exc
            except httpx.RequestError as exc:
                raise TransportError(f"request to {url} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise TransportError(f"{url} returned a body that is not JSON") from exc
        return parse_search_response(payload)
