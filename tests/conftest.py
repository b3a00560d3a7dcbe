"""Shared fixtures: a fake search service behind ``httpx.MockTransport``."""
from __future__ import annotations

import json
from typing import Any, Callable, List

import httpx
import pytest

from winedex.client import SearchServiceClient
from winedex.config import Settings
from winedex.search import WineSearch

TEST_SETTINGS = Settings(
    server_endpoint="http://wine.test/",
    api_search="search",
    api_find_similar="similar",
    no_img="/static/images/empty_glass.svg",
    suggest_path="/suggest",
    similar_path="/similar",
    request_timeout=None,
    log_level="DEBUG",
)


def make_item(**overrides: Any) -> dict:
    item = {
        "code": "chateau-x-2010",
        "name": "Chateau X",
        "link": "http://example.com/wines/chateau-x",
        "image": "http://example.com/img/x.jpg",
        "region": "Bordeaux",
        "winery": "Chateau X Estate",
        "vintage": "2010",
        "type": "Red Wine",
        "price": "24.99",
        "snoothrank": "4.5",
        "critic_scores": [{"name": "WS", "raw_score": "92"}],
        "_index_taste_profile": {"positive": "True", "tannin": "high"},
        "_index_taste_similar_count": 7,
    }
    item.update(overrides)
    return item


class FakeService:
    """Records requests and answers with a canned body or status."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.body: str = json.dumps({"results": []})
        self.status_code = 200
        self.error: Exception | None = None

    def respond_json(self, payload: Any) -> None:
        self.body = json.dumps(payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def fake_service() -> FakeService:
    return FakeService()


@pytest.fixture
def make_session(fake_service: FakeService) -> Callable[[], WineSearch]:
    def factory() -> WineSearch:
        transport = httpx.MockTransport(fake_service.handler)
        client = SearchServiceClient(TEST_SETTINGS, transport=transport)
        return WineSearch(TEST_SETTINGS, client=client)

    return factory
