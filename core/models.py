"""
Pydantic models shared across the Story Search core.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Query(BaseModel):
    """One issued search request: a trimmed term and a zero-based page."""

    model_config = ConfigDict(frozen=True)

    search_term: str
    page: int = Field(default=0, ge=0)

    @field_validator("search_term")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class ResultItem(BaseModel):
    """A single story returned by the search API.

    Accepts either the field names below or the raw API hit keys
    (``objectID``, ``num_comments``, ``points``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(alias="objectID")
    title: str = ""
    url: str = ""
    author: str = ""
    comment_count: int = Field(default=0, ge=0, alias="num_comments")
    score: int = Field(default=0, ge=0, alias="points")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> str:
        return str(value)

    @field_validator("title", "url", "author", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> str:
        return "" if value is None else value

    @field_validator("comment_count", "score", mode="before")
    @classmethod
    def _none_as_zero(cls, value: Any) -> int:
        return 0 if value is None else value


class FetchPage(BaseModel):
    """One decoded page of results from a transport."""

    items: list[ResultItem] = Field(default_factory=list)
    page: int = Field(default=0, ge=0)
    page_count: int = Field(default=0, ge=0)


class ResultState(BaseModel):
    """Accumulated results plus the fetch lifecycle flags."""

    model_config = ConfigDict(frozen=True)

    items: tuple[ResultItem, ...] = ()
    current_page: int = 0
    page_count: int = 0
    is_loading: bool = False
    is_error: bool = False


class SortKey(str, Enum):
    """Fields the result list can be sorted by."""

    NONE = "none"
    TITLE = "title"
    AUTHOR = "author"
    COMMENT_COUNT = "comment_count"
    SCORE = "score"


class SortSpec(BaseModel):
    """Active sort key and direction."""

    model_config = ConfigDict(frozen=True)

    key: SortKey = SortKey.NONE
    reversed: bool = False


class SessionView(BaseModel):
    """Everything a view renderer needs to draw one frame of the session."""

    search_term: str
    items: list[ResultItem]
    search_history: list[str]
    is_loading: bool
    is_error: bool
    current_page: int
    has_more: bool
    sort: SortSpec
