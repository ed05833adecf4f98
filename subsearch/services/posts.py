"""Post search against the upstream listing endpoint."""

from __future__ import annotations

import math
from typing import Any

from subsearch.domain.models import Post, PostFlags, PostListing
from subsearch.logging import logger
from subsearch.services.exceptions import FetchError, UpstreamFailure
from subsearch.services.upstream import UpstreamClient


def build_search_path(path: str, query_string: str, *, include_nsfw: bool) -> str:
    """Assemble the upstream listing path for a search request.

    ``+`` in the path joins several communities, so it is escaped before it
    is forwarded. NSFW results are only requested when ``include_nsfw`` is set.
    """

    nsfw = "&include_over_18=on" if include_nsfw else ""
    return f"{path.replace('+', '%2B')}.json?{query_string}{nsfw}&raw_json=1"


def _int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


def parse_post(record: dict[str, Any]) -> Post:
    created = record.get("created_utc")
    return Post(
        id=str(record.get("id") or ""),
        title=str(record.get("title") or ""),
        community=str(record.get("subreddit") or ""),
        author=str(record.get("author") or ""),
        permalink=str(record.get("permalink") or ""),
        url=str(record.get("url") or ""),
        score=_int(record.get("score")),
        comments=_int(record.get("num_comments")),
        created_utc=float(created) if isinstance(created, (int, float)) else 0.0,
        flags=PostFlags(
            nsfw=bool(record.get("over_18")),
            spoiler=bool(record.get("spoiler")),
            stickied=bool(record.get("stickied")),
        ),
    )


def parse_listing(payload: dict[str, Any]) -> PostListing:
    data = payload.get("data")
    children = data.get("children") if isinstance(data, dict) else None
    if not isinstance(children, list):
        raise UpstreamFailure("Failed to parse page JSON data")

    posts = tuple(
        parse_post(child["data"])
        for child in children
        if isinstance(child, dict) and isinstance(child.get("data"), dict)
    )
    after = data.get("after")
    return PostListing(posts=posts, after=after if isinstance(after, str) else "")


class FetchCoordinator:
    def __init__(self, upstream: UpstreamClient) -> None:
        self._upstream = upstream

    async def fetch_posts(self, path: str, quarantine_allowed: bool = False) -> PostListing:
        try:
            payload = await self._upstream.fetch_json(path, quarantine=quarantine_allowed)
            return parse_listing(payload)
        except FetchError as exc:
            logger.warning("post_fetch_failed", path=path, kind=exc.kind.value, error=exc.message)
            raise


__all__ = ["FetchCoordinator", "build_search_path", "parse_listing", "parse_post"]
