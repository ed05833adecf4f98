"""Search request handling: redirects, concurrent upstream fetches, aggregation."""

from __future__ import annotations

import asyncio

from subsearch.config import SearchSettings, get_settings
from subsearch.domain.models import (
    Community,
    ErrorPage,
    QuarantineNotice,
    Redirect,
    SearchOutcome,
    SearchPage,
    SearchParams,
    SearchQuery,
    SearchRequest,
    SearchResult,
)
from subsearch.logging import logger
from subsearch.services.communities import CommunitySearchClient
from subsearch.services.exceptions import FetchError, QuarantineRequired
from subsearch.services.filtering import aggregate, filtered_subject_result, is_filtered_subject
from subsearch.services.normalizer import normalize
from subsearch.services.posts import FetchCoordinator, build_search_path
from subsearch.services.upstream import UpstreamClient


class SearchService:
    """Resolve a search request into a single outcome for the rendering layer."""

    def __init__(
        self,
        upstream: UpstreamClient,
        settings: SearchSettings | None = None,
        *,
        communities: CommunitySearchClient | None = None,
        posts: FetchCoordinator | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._communities = communities or CommunitySearchClient(upstream)
        self._posts = posts or FetchCoordinator(upstream)

    def include_nsfw(self, request: SearchRequest) -> bool:
        return request.show_nsfw and not self._settings.sfw_only

    async def search(self, request: SearchRequest, query: SearchQuery) -> SearchResult:
        """Fetch and aggregate results, raising ``FetchError`` if posts can't be listed."""

        community_task: asyncio.Task[list[Community]] | None = None
        if not query.restrict_to_community:
            community_task = asyncio.create_task(
                self._communities.search(query.q, query.result_type)
            )

        try:
            if is_filtered_subject(request.sub, request.filters):
                communities = await community_task if community_task else []
                return filtered_subject_result(communities, request.filters)

            path = build_search_path(
                request.path, request.query_string, include_nsfw=self.include_nsfw(request)
            )
            listing = await self._posts.fetch_posts(path, request.quarantine_allowed)
            communities = await community_task if community_task else []
        finally:
            if community_task is not None and not community_task.done():
                community_task.cancel()

        return aggregate(
            listing.posts,
            communities,
            request.filters,
            show_nsfw=request.show_nsfw,
            after_cursor=listing.after,
        )

    async def find(self, request: SearchRequest) -> SearchOutcome:
        classified = normalize(request.query_string)
        if isinstance(classified, Redirect):
            logger.info("search_redirect", location=classified.location)
            return classified

        query = classified
        try:
            result = await self.search(request, query)
        except QuarantineRequired as exc:
            logger.info("search_quarantined", sub=request.sub, reason=exc.kind.value)
            return QuarantineNotice(sub=request.sub, reason=exc.kind.value)
        except FetchError as exc:
            return ErrorPage(message=exc.message)

        logger.info(
            "search_completed",
            sub=request.sub,
            posts=len(result.posts),
            communities=len(result.communities),
            emptiness=result.emptiness.value,
        )
        return SearchPage(
            result=result,
            params=SearchParams.from_query(query, after=result.after_cursor),
            sub=request.sub,
            url=request.url,
            show_nsfw=request.show_nsfw,
        )


__all__ = ["SearchService"]
