"""Tests for logging configuration and the command-line entrypoint."""

from __future__ import annotations

from types import SimpleNamespace

import httpx
import pytest
import structlog

from subsearch import main as main_module
from subsearch.config import SearchSettings, UpstreamSettings
from subsearch.domain.models import Redirect, SearchPage
from subsearch.logging import configure_logging


def test_configure_logging_outputs_json(capsys):
    configure_logging("DEBUG")
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    out = capsys.readouterr().out
    assert "unit-test" in out
    assert "foo" in out


def test_settings_read_nested_environment(monkeypatch):
    monkeypatch.setenv("SUBSEARCH_SFW_ONLY", "true")
    monkeypatch.setenv("SUBSEARCH_UPSTREAM__BASE_URL", "https://old.reddit.test/")
    monkeypatch.setenv("SUBSEARCH_UPSTREAM__MAX_ATTEMPTS", "5")

    settings = SearchSettings()

    assert settings.sfw_only is True
    assert settings.upstream.root == "https://old.reddit.test"
    assert settings.upstream.max_attempts == 5


def test_build_request_extracts_community():
    request = main_module.build_request("/r/aww+cats/search?q=cats&restrict_sr=on", ["cats"])

    assert request.sub == "aww+cats"
    assert request.query_string == "q=cats&restrict_sr=on"
    assert request.filters == frozenset({"cats"})
    assert main_module.build_request("/search?q=cats", []).sub == ""


@pytest.mark.asyncio
async def test_main_redirect_skips_network(monkeypatch):
    settings = SearchSettings(upstream=UpstreamSettings(base_url="https://reddit.test"))
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)

    outcome = await main_module.main(["/search?q=r/aww"])

    assert outcome == Redirect(location="/r/aww")


@pytest.mark.asyncio
async def test_main_runs_search(monkeypatch):
    calls: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"data": {"after": None, "children": []}})

    real_client = httpx.AsyncClient
    monkeypatch.setattr(
        main_module.httpx,
        "AsyncClient",
        lambda: real_client(transport=httpx.MockTransport(handler)),
    )
    settings = SearchSettings(upstream=UpstreamSettings(base_url="https://reddit.test"))
    monkeypatch.setattr(main_module, "get_settings", lambda: settings)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)

    outcome = await main_module.main(["/search?q=cats"])

    assert isinstance(outcome, SearchPage)
    assert outcome.result.no_posts is True
    assert sorted(calls) == ["/search.json", "/subreddits/search.json"]


@pytest.mark.asyncio
async def test_main_requires_target(monkeypatch):
    monkeypatch.setattr(main_module, "get_settings", lambda: SimpleNamespace(log_level="INFO"))
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)

    with pytest.raises(SystemExit):
        await main_module.main([])
