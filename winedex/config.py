"""Client configuration and constants."""
from __future__ import annotations

import os
from dataclasses import dataclass


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_timeout(name: str) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    """Simple settings container with environment variable overrides."""

    server_endpoint: str = _get_env("WINEDEX_SERVER_ENDPOINT", "http://localhost:5555/")
    api_search: str = _get_env("WINEDEX_API_SEARCH", "search")
    api_find_similar: str = _get_env("WINEDEX_API_FIND_SIMILAR", "similar")
    no_img: str = _get_env("WINEDEX_NO_IMG", "/static/images/empty_glass.svg")
    suggest_path: str = _get_env("WINEDEX_SUGGEST_PATH", "/suggest")
    similar_path: str = _get_env("WINEDEX_SIMILAR_PATH", "/similar")
    # None disables the timeout; a hung request keeps the loading state.
    request_timeout: float | None = _get_timeout("WINEDEX_REQUEST_TIMEOUT")
    log_level: str = _get_env("LOG_LEVEL", "INFO")

    @property
    def search_url(self) -> str:
        return self.server_endpoint + self.api_search

    @property
    def similar_url(self) -> str:
        return self.server_endpoint + self.api_find_similar


settings = Settings()
