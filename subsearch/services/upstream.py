"""Async JSON transport for the upstream content API."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from subsearch.config import UpstreamSettings
from subsearch.logging import logger
from subsearch.services.exceptions import QuarantineRequired, UpstreamFailure
from subsearch.utils.retry import retry_async

QUARANTINE_OPTIN_COOKIE = "_options=" + quote(
    json.dumps({"pref_quarantine_optin": True, "pref_gated_sr_optin": True})
)


class UpstreamClient:
    """Fetch JSON documents from the upstream API by path.

    Connection-level failures are retried with linear backoff; HTTP error
    statuses are not. Every failure surfaces as a ``FetchError`` subclass.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: UpstreamSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or UpstreamSettings()

    @property
    def base_url(self) -> str:
        return self._settings.root

    def _headers(self, quarantine: bool) -> dict[str, str]:
        headers = {"User-Agent": self._settings.user_agent, "Accept": "application/json"}
        if quarantine:
            headers["Cookie"] = QUARANTINE_OPTIN_COOKIE
        return headers

    async def fetch_json(self, path: str, *, quarantine: bool = False) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = self._headers(quarantine)
        timeout = httpx.Timeout(
            self._settings.request_timeout_seconds,
            connect=self._settings.connect_timeout_seconds,
        )

        async def _request() -> httpx.Response:
            return await self._client.get(url, headers=headers, timeout=timeout)

        try:
            response = await retry_async(
                _request,
                max_attempts=self._settings.max_attempts,
                base_delay=self._settings.retry_base_delay,
                retry_on=(httpx.RequestError,),
                logger=logger,
                operation_name="upstream_fetch",
            )
        except httpx.RequestError as exc:
            raise UpstreamFailure(f"Couldn't send request to Reddit: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise UpstreamFailure(f"Invalid Reddit URL: {exc}") from exc

        return self._decode(response)

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError as exc:
            if response.is_error:
                raise UpstreamFailure(
                    f"Reddit error {response.status_code}: {response.reason_phrase}"
                ) from exc
            raise UpstreamFailure("Failed to parse page JSON data") from exc

        if isinstance(payload, dict):
            quarantine = QuarantineRequired.from_reason(payload.get("reason"))
            if quarantine is not None:
                raise quarantine

        if response.is_error:
            message = payload.get("message") if isinstance(payload, dict) else None
            raise UpstreamFailure(
                f"Reddit error {response.status_code}: {message or response.reason_phrase}"
            )

        if not isinstance(payload, dict):
            raise UpstreamFailure("Failed to parse page JSON data")
        return payload


__all__ = ["QUARANTINE_OPTIN_COOKIE", "UpstreamClient"]
