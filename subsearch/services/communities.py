"""Community (subreddit) lookup shown alongside post results."""

from __future__ import annotations

import math
from typing import Any
from urllib.parse import quote_plus

from subsearch.domain.models import Community
from subsearch.logging import logger
from subsearch.services.exceptions import FetchError
from subsearch.services.upstream import UpstreamClient
from subsearch.utils.formatting import format_num, format_url

FULL_RESULT_LIMIT = 50
PREVIEW_RESULT_LIMIT = 3


def result_limit(result_type: str) -> int:
    return FULL_RESULT_LIMIT if result_type == "sr_user" else PREVIEW_RESULT_LIMIT


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return value if isinstance(value, str) else ""


def _subscriber_count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return int(value)


class CommunitySearchClient:
    """Search communities by name; failures degrade to an empty list."""

    def __init__(self, upstream: UpstreamClient) -> None:
        self._upstream = upstream

    async def search(self, query: str, result_type: str = "") -> list[Community]:
        limit = result_limit(result_type)
        path = f"/subreddits/search.json?q={quote_plus(query)}&limit={limit}"

        try:
            payload = await self._upstream.fetch_json(path)
        except FetchError as exc:
            logger.warning("community_search_failed", query=query, error=str(exc))
            return []

        data = payload.get("data")
        children = data.get("children") if isinstance(data, dict) else None
        if not isinstance(children, list):
            logger.warning("community_search_malformed", query=query)
            return []

        return [
            self._to_community(child["data"])
            for child in children
            if isinstance(child, dict) and isinstance(child.get("data"), dict)
        ]

    def _to_community(self, record: dict[str, Any]) -> Community:
        icon = record.get("community_icon")
        if not isinstance(icon, str) or not icon:
            icon = _text(record, "icon_img")
        return Community(
            name=_text(record, "display_name"),
            url=_text(record, "url"),
            icon=format_url(icon, self._upstream.base_url),
            description=_text(record, "public_description"),
            subscribers=format_num(_subscriber_count(record.get("subscribers"))),
        )


__all__ = ["CommunitySearchClient", "FULL_RESULT_LIMIT", "PREVIEW_RESULT_LIMIT", "result_limit"]
