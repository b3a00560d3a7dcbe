"""Pydantic models for the search service payloads."""
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedResponse

TASTE_POSITIVE_KEY = "positive"
TASTE_POSITIVE_VALUE = "True"
NO_PRICE = "0"


def _blank_to_none(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    text = str(value)
    return text if text.strip() else None


class CriticScore(BaseModel):
    name: str = ""
    raw_score: str = ""

    @field_validator("name", "raw_score", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> str:
        return "" if value is None else str(value)


class ResultItem(BaseModel):
    """One catalog entry as returned by the service."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = ""
    name: str = ""
    link: str = ""
    image: str | None = None
    region: str | None = None
    winery: str | None = None
    vintage: str | None = None
    type: str | None = None
    price: str | None = None
    snooth_rank: str | None = Field(default=None, alias="snoothrank")
    critic_scores: List[CriticScore] = Field(default_factory=list)
    taste_profile: Dict[str, Any] = Field(default_factory=dict, alias="_index_taste_profile")
    taste_similar_count: int | None = Field(default=None, alias="_index_taste_similar_count")

    @field_validator("code", "name", "link", mode="before")
    @classmethod
    def _identity(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("image", "region", "winery", "vintage", "type", "snooth_rank", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> str | None:
        return _blank_to_none(value)

    @field_validator("price", mode="before")
    @classmethod
    def _price(cls, value: Any) -> str | None:
        # "0" means free or unknown and is never displayed
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
            return None
        text = _blank_to_none(value)
        return None if text == NO_PRICE else text

    @field_validator("critic_scores", mode="before")
    @classmethod
    def _critic_scores(cls, value: Any) -> List[Any]:
        if not isinstance(value, list):
            return []
        return [score for score in value if isinstance(score, dict)]

    @field_validator("taste_profile", mode="before")
    @classmethod
    def _taste_profile(cls, value: Any) -> Dict[str, Any]:
        return value if isinstance(value, dict) else {}

    @field_validator("taste_similar_count", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int | None:
        # anything that is not a whole number hides "Find similar" for this item only
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            return int(value) if value.is_integer() else None
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                return None
        return None

    @property
    def taste_positive(self) -> bool:
        """Only the exact string ``"True"`` counts, not any truthy value."""
        return self.taste_profile.get(TASTE_POSITIVE_KEY) == TASTE_POSITIVE_VALUE

    @property
    def can_find_similar(self) -> bool:
        return (
            self.taste_positive
            and self.taste_similar_count is not None
            and self.taste_similar_count > 1
        )

    @property
    def taste_summary(self) -> str:
        return "".join(f"{key}:{value}, " for key, value in self.taste_profile.items())

    @property
    def price_label(self) -> str | None:
        return f"${self.price}" if self.price is not None else None

    @property
    def snooth_label(self) -> str | None:
        return f"Snooth {self.snooth_rank}/5" if self.snooth_rank is not None else None

    @property
    def winery_label(self) -> str | None:
        if self.winery is None:
            return None
        if self.region is None:
            return self.winery
        return f"{self.winery}, {self.region}"

    def badges(self) -> List[tuple[str, str]]:
        """(css class, text) pairs in display order."""
        labels: List[tuple[str, str]] = []
        if self.vintage is not None:
            labels.append(("vintage", self.vintage))
        if self.type is not None:
            labels.append(("type", self.type))
        if self.snooth_label is not None:
            labels.append(("critics", self.snooth_label))
        for score in self.critic_scores:
            labels.append(("critics", f"{score.name} {score.raw_score}"))
        return labels


class SearchResponse(BaseModel):
    total_results: int | None = None
    total_time: float | None = None
    query_suggestions: List[str] = Field(default_factory=list)
    results: List[ResultItem]

    @field_validator("query_suggestions", mode="before")
    @classmethod
    def _suggestions(cls, value: Any) -> Any:
        if value is None:
            return []
        return [str(item) for item in value] if isinstance(value, list) else value

    @property
    def is_empty(self) -> bool:
        return not self.results


def parse_search_response(payload: Any) -> SearchResponse:
    """Validate a decoded JSON body, raising MalformedResponse when unusable."""

    if not isinstance(payload, dict):
        raise MalformedResponse(f"expected a JSON object, got {type(payload).__name__}")
    if payload.get("results") is None:
        raise MalformedResponse("response has no results field")
    try:
        return SearchResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponse(str(exc)) from exc
