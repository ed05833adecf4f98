"""Pydantic models shared across the search components."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from subsearch.utils.formatting import escape_quotes

FilterSet = frozenset[str]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class SearchQuery(_Frozen):
    q: str = Field(..., min_length=1)
    sort: str = "relevance"
    time_range: str = ""
    after_cursor: str = ""
    restrict_to_community: bool = False
    restrict_sr: str = ""
    result_type: str = ""


class Community(_Frozen):
    name: str
    url: str
    icon: str = ""
    description: str = ""
    subscribers: tuple[str, str] = ("0", "0")


class PostFlags(_Frozen):
    nsfw: bool = False
    spoiler: bool = False
    stickied: bool = False


class Post(_Frozen):
    id: str = ""
    title: str = ""
    community: str
    author: str = ""
    permalink: str = ""
    url: str = ""
    score: int = 0
    comments: int = 0
    created_utc: float = 0.0
    flags: PostFlags = Field(default_factory=PostFlags)


class PostListing(_Frozen):
    posts: tuple[Post, ...] = ()
    after: str = ""


class EmptinessReason(str, Enum):
    FILTERED_SUBJECT = "filtered_subject"
    ALL_FILTERED = "all_filtered"
    ALL_HIDDEN_NSFW = "all_hidden_nsfw"
    NO_POSTS = "no_posts"
    VISIBLE = "visible"


class SearchResult(_Frozen):
    posts: tuple[Post, ...] = ()
    communities: tuple[Community, ...] = ()
    after_cursor: str = ""
    # The subject itself is filtered, so posts were never fetched.
    is_filtered_subject: bool = False
    # Posts were fetched but every one of them was filtered away.
    all_posts_filtered: bool = False
    # Every surviving post is NSFW and the viewer hides NSFW content.
    all_posts_hidden_nsfw: bool = False
    no_posts: bool = False

    @property
    def emptiness(self) -> EmptinessReason:
        """Collapse the flags into the single reason presentation should show."""

        if self.is_filtered_subject:
            return EmptinessReason.FILTERED_SUBJECT
        if self.all_posts_filtered:
            return EmptinessReason.ALL_FILTERED
        if self.no_posts:
            return EmptinessReason.NO_POSTS
        if self.all_posts_hidden_nsfw:
            return EmptinessReason.ALL_HIDDEN_NSFW
        return EmptinessReason.VISIBLE


class SearchParams(_Frozen):
    """Form state echoed back to the rendering layer."""

    q: str
    sort: str
    t: str = ""
    before: str = ""
    after: str = ""
    restrict_sr: str = ""
    typed: str = ""

    @classmethod
    def from_query(cls, query: SearchQuery, after: str = "") -> "SearchParams":
        # A fresh search always starts a forward page, so the prior cursor
        # becomes the "before" marker.
        return cls(
            q=escape_quotes(query.q),
            sort=query.sort,
            t=query.time_range,
            before=query.after_cursor,
            after=after,
            restrict_sr=query.restrict_sr,
            typed=query.result_type,
        )


class SearchRequest(_Frozen):
    path: str
    query_string: str = ""
    sub: str = ""
    show_nsfw: bool = False
    filters: FilterSet = frozenset()
    quarantine_allowed: bool = False

    @property
    def url(self) -> str:
        return f"{self.path}?{self.query_string}" if self.query_string else self.path


class Redirect(_Frozen):
    kind: Literal["redirect"] = "redirect"
    location: str


class QuarantineNotice(_Frozen):
    kind: Literal["quarantine"] = "quarantine"
    sub: str
    reason: str


class ErrorPage(_Frozen):
    kind: Literal["error"] = "error"
    message: str


class SearchPage(_Frozen):
    kind: Literal["search"] = "search"
    result: SearchResult
    params: SearchParams
    sub: str = ""
    url: str = ""
    show_nsfw: bool = False


SearchOutcome = Union[Redirect, QuarantineNotice, ErrorPage, SearchPage]


__all__ = [
    "Community",
    "EmptinessReason",
    "ErrorPage",
    "FilterSet",
    "Post",
    "PostFlags",
    "PostListing",
    "QuarantineNotice",
    "Redirect",
    "SearchOutcome",
    "SearchPage",
    "SearchParams",
    "SearchQuery",
    "SearchRequest",
    "SearchResult",
]
