"""Classify an incoming search as a navigation shortcut or a real search."""

from __future__ import annotations

import re
from urllib.parse import parse_qs

from subsearch.domain.models import Redirect, SearchQuery

# Pasted platform URLs are searched by whatever follows the domain.
REDDIT_URL_MATCH = re.compile(r"^https?://([^\./]+\.)*reddit.com/")


def parse_params(query_string: str) -> dict[str, str]:
    """Decode a query string keeping the last value of each key, blanks included."""

    parsed = parse_qs(query_string or "", keep_blank_values=True)
    return {key: values[-1] for key, values in parsed.items() if values}


def strip_platform_url(query: str) -> str:
    return REDDIT_URL_MATCH.sub("", query, count=1)


def shortcut_location(query: str) -> str | None:
    """Return the redirect target for a navigation shortcut, if ``query`` is one."""

    if not query:
        return "/"
    if query.startswith(("r/", "user/")):
        return f"/{query}"
    if query.startswith("R/"):
        return f"/r{query[1:]}"
    if query.startswith(("u/", "U/")):
        return f"/user{query[1:]}"
    return None


def normalize(query_string: str) -> Redirect | SearchQuery:
    params = parse_params(query_string)
    query = strip_platform_url(params.get("q", ""))

    location = shortcut_location(query)
    if location is not None:
        return Redirect(location=location)

    return SearchQuery(
        q=query,
        sort=params.get("sort", "relevance"),
        time_range=params.get("t", ""),
        after_cursor=params.get("after", ""),
        restrict_to_community="restrict_sr" in params,
        restrict_sr=params.get("restrict_sr", ""),
        result_type=params.get("type", ""),
    )


__all__ = ["REDDIT_URL_MATCH", "normalize", "parse_params", "shortcut_location", "strip_platform_url"]
