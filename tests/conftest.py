"""Shared pytest fixtures for upstream-backed service tests."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio

from subsearch.config import SearchSettings, UpstreamSettings
from subsearch.services.upstream import UpstreamClient


@dataclass
class RecordingUpstream:
    """Routes upstream requests by path prefix and keeps every request seen."""

    routes: dict[str, Callable[[httpx.Request], httpx.Response]] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def route(self, prefix: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[prefix] = handler

    def route_json(self, prefix: str, payload: Any, status_code: int = 200) -> None:
        self.route(prefix, lambda request: httpx.Response(status_code, json=payload))

    def calls_to(self, prefix: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path.startswith(prefix)]

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for prefix, handler in self.routes.items():
            if request.url.path.startswith(prefix):
                return handler(request)
        return httpx.Response(404, text=json.dumps({"message": "Not Found", "error": 404}))


def listing(*children: dict[str, Any], after: str | None = None) -> dict[str, Any]:
    return {
        "kind": "Listing",
        "data": {"after": after, "children": [{"kind": "t3", "data": child} for child in children]},
    }


@pytest.fixture
def upstream_settings() -> UpstreamSettings:
    return UpstreamSettings(base_url="https://reddit.test", max_attempts=2, retry_base_delay=0)


@pytest.fixture
def settings(upstream_settings) -> SearchSettings:
    return SearchSettings(upstream=upstream_settings)


@pytest.fixture
def recorder() -> RecordingUpstream:
    return RecordingUpstream()


@pytest_asyncio.fixture
async def upstream(recorder, upstream_settings):
    async with httpx.AsyncClient(transport=httpx.MockTransport(recorder)) as client:
        yield UpstreamClient(client, settings=upstream_settings)


@pytest.fixture
def make_listing() -> Callable[..., dict[str, Any]]:
    return listing
