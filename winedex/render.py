"""Turns a parsed search response into markup for the results container.

Markup is assembled through ``_element``/``_text`` only, so every value coming
from the service is escaped before it reaches the page.
"""
from __future__ import annotations

import html
import logging
from typing import Iterable, List
from urllib.parse import quote, urlencode, urlsplit

from .config import Settings, settings as default_settings
from .display import DisplayState, ResultsContainer
from .models import ResultItem, SearchResponse

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "loading..."
ERROR_MESSAGE = "An error occurred, server seems unavailable"
NO_RESULTS_MESSAGE = "No results found"
SAFE_URL_SCHEMES = {"", "http", "https"}


def _text(value: object) -> str:
    return html.escape(str(value), quote=False)


def _attributes(attrs: dict) -> str:
    """``class_`` becomes ``class`` and ``data_code`` becomes ``data-code``."""
    return "".join(
        f' {name.rstrip("_").replace("_", "-")}="{html.escape(value, quote=True)}"'
        for name, value in attrs.items()
        if value is not None
    )


def _element(tag: str, *children: str, **attrs: str | None) -> str:
    """Build ``<tag attrs>children</tag>``; children must already be markup."""
    return f"<{tag}{_attributes(attrs)}>{''.join(children)}</{tag}>"


def _void(tag: str, **attrs: str | None) -> str:
    return f"<{tag}{_attributes(attrs)}/>"


def _safe_url(url: str | None) -> str | None:
    if not url:
        return None
    try:
        scheme = urlsplit(url.strip()).scheme.lower()
    except ValueError:
        return None
    return url if scheme in SAFE_URL_SCHEMES else None


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


class ResultRenderer:
    """Writes each display state into one ``ResultsContainer``."""

    def __init__(self, container: ResultsContainer, config: Settings | None = None) -> None:
        self.container = container
        self.config = config or default_settings

    def suggestion_href(self, suggestion: str) -> str:
        # The link carries the URL-encoded text; the host hands it to run_suggested_query.
        encoded = quote(suggestion, safe="")
        return f"{self.config.suggest_path}?{urlencode({'s': encoded})}"

    def similar_href(self, wine_code: str) -> str:
        return f"{self.config.similar_path}?{urlencode({'wine': wine_code})}"

    def _suggestion_links(self, suggestions: Iterable[str]) -> str:
        return ", ".join(
            _element("a", _text(item), href=self.suggestion_href(item), class_="suggestion")
            for item in suggestions
        )

    def render_loading(self) -> None:
        self.container.replace(
            _element("center", _text(LOADING_MESSAGE), class_="loading"),
            DisplayState.LOADING,
        )

    def render_error(self) -> None:
        self.container.replace(
            _element("center", _text(ERROR_MESSAGE), class_="error"),
            DisplayState.ERROR,
        )

    def render_summary(self, response: SearchResponse) -> None:
        parts: List[str] = []
        if response.total_results:
            parts.append(_element("span", _text(f"{response.total_results} results")))
        if response.total_time:
            parts.append(
                _element("span", _text(f"completed in {_format_number(response.total_time)}ms"))
            )
        if response.query_suggestions:
            parts.append(
                _element(
                    "span",
                    _text("Did you mean: "),
                    self._suggestion_links(response.query_suggestions),
                    class_="suggestions",
                )
            )
        self.container.append(_element("center", _element("div", *parts, class_="stats")))

    def render_empty(self, response: SearchResponse) -> None:
        if response.query_suggestions:
            body = [
                _text(f"{NO_RESULTS_MESSAGE}, try:"),
                "<br/>",
                _element(
                    "span",
                    self._suggestion_links(response.query_suggestions),
                    class_="try_suggestions",
                ),
            ]
        else:
            body = [_text(f"{NO_RESULTS_MESSAGE}.")]
        self.container.replace(_element("center", *body, class_="no-results"), DisplayState.EMPTY)

    def render_result_list(self, items: Iterable[ResultItem]) -> None:
        count = 0
        for item in items:
            self.container.append(self.render_item(item))
            count += 1
        logger.debug("Rendered %s result items", count)
        self.container.set_state(DisplayState.RESULTS)

    def render_item(self, item: ResultItem) -> str:
        image = _safe_url(item.image) or self.config.no_img

        details: List[str] = [
            _element(
                "span",
                _element(
                    "a",
                    _text(item.name),
                    href=_safe_url(item.link) or "#",
                    target="_blank",
                    rel="noopener",
                ),
                class_="name",
            )
        ]
        if item.winery_label is not None:
            details.append(_element("span", _text(item.winery_label), class_="winery"))
        details.append(
            _element(
                "div",
                *(
                    _element("span", _text(text), class_=f"label {kind}")
                    for kind, text in item.badges()
                ),
                class_="label_block",
            )
        )

        actions: List[str] = []
        if item.price_label is not None:
            actions.append(_element("span", _text(item.price_label), class_="label price"))
        actions.append("<br/>")
        if item.taste_positive:
            actions.append(
                _element(
                    "details",
                    _element("summary", _text("Review taste"), class_="button side"),
                    _element("span", _text(item.taste_summary), class_="taste"),
                    class_="taste_review",
                )
            )
        if item.can_find_similar:
            actions.append(
                _element(
                    "a",
                    _text(f"Find similar ({item.taste_similar_count})"),
                    href=self.similar_href(item.code),
                    class_="button side",
                )
            )

        row = _element(
            "tr",
            _element("td", _void("img", src=image, alt=item.name), class_="img"),
            _element("td", *details),
            _element("td", *actions, style="text-align:right"),
        )
        return _element(
            "div",
            _element("table", row, cellpadding="0", cellspacing="0"),
            class_="wine",
            data_code=item.code,
        )
