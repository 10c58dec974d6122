"""HTTP client for WordReference pages.

One ``httpx.AsyncClient`` is shared by every lookup so connections are
reused. The site serves bot-blocked content to unknown agents, so the
client always sends a browser ``User-Agent``. Failures are reported as
``Err`` and never retried.
"""
from __future__ import annotations

import time
from typing import Protocol

import httpx

from wordref.core.config import settings
from wordref.core.errors import AppError, Ok, Result, network_failure, site_unavailable
from wordref.core.logging import http_logger

log = http_logger()


class Fetcher(Protocol):
    """Anything that can turn a URL into page markup."""
    async def fetch(self, url: str) -> Result[str, AppError]: ...


class FetchClient:
    """Shared async HTTP client for page fetches."""

    __slots__ = ("_client",)

    def __init__(
        self,
        user_agent: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            headers={"User-Agent": user_agent or settings.USER_AGENT},
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            follow_redirects=True,
            transport=transport,
        )

    async def fetch(self, url: str) -> Result[str, AppError]:
        """GET ``url`` and return the response body."""
        started = time.perf_counter()
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            log.warning("fetch_failed", url=url, error=str(e), error_type=type(e).__name__)
            return network_failure(url, cause=e, origin="http.fetch")

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        if response.status_code >= 500:
            log.warning("fetch_server_error", url=url, status_code=response.status_code, elapsed_ms=elapsed_ms)
            return site_unavailable(url, response.status_code, origin="http.fetch")

        log.info(
            "fetch_completed",
            url=url,
            status_code=response.status_code,
            bytes=len(response.content),
            elapsed_ms=elapsed_ms,
        )
        return Ok(response.text)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> FetchClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
