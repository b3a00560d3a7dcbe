"""Query dispatch: one ``WineSearch`` per browser session.

Each operation shows the loading state, awaits the service, then hands the
parsed response to the renderer or shows the error state. A newer call does not
cancel an older one still in flight; whichever finishes last owns the display.
"""
from __future__ import annotations

import logging
from typing import Awaitable
from urllib.parse import unquote

from .client import SearchServiceClient
from .config import Settings, settings as default_settings
from .display import DisplayState, QueryField, ResultsContainer
from .errors import MalformedResponse, SearchServiceError
from .models import SearchResponse
from .render import ResultRenderer

logger = logging.getLogger(__name__)


class WineSearch:
    def __init__(
        self,
        config: Settings | None = None,
        *,
        client: SearchServiceClient | None = None,
        container: ResultsContainer | None = None,
        query_field: QueryField | None = None,
    ) -> None:
        self.config = config or default_settings
        self.client = client or SearchServiceClient(self.config)
        self.container = container or ResultsContainer()
        self.query_field = query_field or QueryField()
        self.renderer = ResultRenderer(self.container, self.config)

    @property
    def state(self) -> DisplayState:
        return self.container.state

    async def run_text_search(self, query_text: str | None = None) -> None:
        """Search for ``query_text``, or for the current query field when omitted."""
        if query_text is None:
            query_text = self.query_field.value
        else:
            self.query_field.value = query_text
        logger.info("search q=%r", query_text)
        self.renderer.render_loading()
        await self._complete(self.client.search(query_text))

    async def run_similarity_search(self, wine_code: str) -> None:
        logger.info("find similar wine=%r", wine_code)
        self.renderer.render_loading()
        await self._complete(self.client.find_similar(wine_code))

    async def run_suggested_query(self, encoded_query_text: str) -> None:
        """Re-run a text search from a suggestion link's URL-encoded text."""
        self.query_field.value = unquote(encoded_query_text)
        await self.run_text_search()

    async def _complete(self, pending: Awaitable[SearchResponse]) -> None:
        try:
            response = await pending
        except MalformedResponse as exc:
            logger.warning("Malformed search response: %s", exc)
            self.renderer.render_error()
            return
        except SearchServiceError as exc:
            logger.warning("Search service unavailable: %s", exc)
            self.renderer.render_error()
            return

        self.container.clear()
        self.renderer.render_summary(response)
        if response.is_empty:
            self.renderer.render_empty(response)
        else:
            self.renderer.render_result_list(response.results)
        logger.info(
            "rendered state=%s items=%s total=%s time=%sms",
            self.state.value,
            len(response.results),
            response.total_results,
            response.total_time,
        )
