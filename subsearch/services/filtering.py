"""Apply the viewer's community filters and derive the empty-result flags."""

from __future__ import annotations

from typing import Iterable

from subsearch.domain.models import Community, FilterSet, Post, SearchResult


def is_filtered_subject(sub: str, filters: FilterSet) -> bool:
    """True when every ``+``-joined community of ``sub`` is filtered.

    An empty ``sub`` is a single empty segment, so it only counts as
    filtered when the empty name itself is in ``filters``.
    """

    return all(segment in filters for segment in sub.split("+"))


def filter_posts(posts: Iterable[Post], filters: FilterSet) -> tuple[tuple[Post, ...], bool]:
    """Drop posts from filtered communities.

    Returns the survivors and whether a non-empty input was emptied.
    """

    posts = tuple(posts)
    if not posts:
        return posts, False
    kept = tuple(post for post in posts if post.community not in filters)
    return kept, not kept


def filter_communities(
    communities: Iterable[Community], filters: FilterSet
) -> tuple[Community, ...]:
    return tuple(community for community in communities if community.name not in filters)


def filtered_subject_result(
    communities: Iterable[Community], filters: FilterSet
) -> SearchResult:
    return SearchResult(
        communities=filter_communities(communities, filters),
        is_filtered_subject=True,
    )


def aggregate(
    posts: Iterable[Post],
    communities: Iterable[Community],
    filters: FilterSet,
    *,
    show_nsfw: bool,
    after_cursor: str = "",
) -> SearchResult:
    kept, all_posts_filtered = filter_posts(posts, filters)
    no_posts = not kept
    all_posts_hidden_nsfw = (
        not no_posts and not show_nsfw and all(post.flags.nsfw for post in kept)
    )
    return SearchResult(
        posts=kept,
        communities=filter_communities(communities, filters),
        after_cursor=after_cursor,
        all_posts_filtered=all_posts_filtered,
        all_posts_hidden_nsfw=all_posts_hidden_nsfw,
        no_posts=no_posts,
    )


__all__ = [
    "aggregate",
    "filter_communities",
    "filter_posts",
    "filtered_subject_result",
    "is_filtered_subject",
]
