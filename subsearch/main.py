"""Run a single search from the command line against the configured upstream."""

from __future__ import annotations

import asyncio
import re
import sys
from urllib.parse import urlsplit

import httpx

from subsearch.config import get_settings
from subsearch.domain.models import SearchOutcome, SearchRequest
from subsearch.logging import configure_logging, logger
from subsearch.services.search import SearchService
from subsearch.services.upstream import UpstreamClient

COMMUNITY_PATH = re.compile(r"^/r/([^/]+)/")


def build_request(target: str, filters: list[str], *, show_nsfw: bool = False) -> SearchRequest:
    parts = urlsplit(target)
    path = parts.path or "/search"
    match = COMMUNITY_PATH.match(path)
    return SearchRequest(
        path=path,
        query_string=parts.query,
        sub=match.group(1) if match else "",
        show_nsfw=show_nsfw,
        filters=frozenset(filters),
    )


async def main(argv: list[str] | None = None) -> SearchOutcome:
    settings = get_settings()
    configure_logging(settings.log_level)

    args = sys.argv[1:] if argv is None else argv
    if not args:
        raise SystemExit("usage: python -m subsearch.main PATH_AND_QUERY [FILTERED_COMMUNITY ...]")
    request = build_request(args[0], args[1:])

    async with httpx.AsyncClient() as client:
        service = SearchService(UpstreamClient(client, settings.upstream), settings=settings)
        outcome = await service.find(request)

    logger.info("search_outcome", environment=settings.environment, outcome=outcome.model_dump(mode="json"))
    return outcome


if __name__ == "__main__":
    asyncio.run(main())
