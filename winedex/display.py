"""Host-side state: the query text field and the results container."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DisplayState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"
    ERROR = "error"


@dataclass
class QueryField:
    value: str = ""


class ResultsContainer:
    """The single replaceable output region every display state is written to."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self.state = DisplayState.IDLE

    @property
    def html(self) -> str:
        return "".join(self._parts)

    def replace(self, markup: str, state: DisplayState) -> None:
        self._parts = [markup]
        self.state = state

    def append(self, markup: str) -> None:
        self._parts.append(markup)

    def clear(self) -> None:
        self._parts = []

    def set_state(self, state: DisplayState) -> None:
        self.state = state
