# site_harvest/crawler/fetcher.py
"""
Fetcher module: handles HTTP requests with timeout and a fixed number of attempts.

Requests never carry credentials: the session uses a dummy cookie jar, sends no
auth and ignores proxy/netrc settings from the environment.
"""
from __future__ import annotations

import asyncio
import gzip
import logging
import zlib
from types import TracebackType
from typing import Optional, Type

from aiohttp import ClientError, ClientSession, ClientTimeout, DummyCookieJar

from site_harvest.config import HarvestConfig
from site_harvest.crawler.models import FetchResponse
from site_harvest.errors import FetchError
from site_harvest.parser.html_parser import is_binary_content_type

_GZIP_MAGIC = b"\x1f\x8b"

logger = logging.getLogger("SiteHarvest")


class Fetcher:
    """Handles HTTP fetching with per-attempt timeout and retries on transport errors."""

    def __init__(self, config: HarvestConfig | None = None, session: ClientSession | None = None) -> None:
        self.config = config or HarvestConfig()
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                cookie_jar=DummyCookieJar(),
                raise_for_status=False,
                trust_env=False,
            )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str, *, skip_binary: bool = False) -> FetchResponse:
        """
        Fetch *url*, retrying transport failures up to ``max_attempts`` in total.

        HTTP error statuses are not retried. With *skip_binary* the body of a
        binary content type is never read and ``text`` stays empty.

        Raises:
            FetchError: on non-success status or once all attempts failed.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")

        attempts = 0
        while True:
            attempts += 1
            try:
                return await self._fetch_once(url, skip_binary)
            except (ClientError, asyncio.TimeoutError) as exc:
                reason = str(exc) or type(exc).__name__
                if attempts >= self.config.max_attempts:
                    logger.warning("Failed %s after %d attempt(s): %s", url, attempts, reason)
                    raise FetchError(url, reason) from exc
                logger.debug("Retry %d/%d for %s: %s", attempts, self.config.max_attempts - 1, url, reason)
                if self.config.retry_backoff:
                    await asyncio.sleep(self.config.retry_backoff)

    async def _fetch_once(self, url: str, skip_binary: bool) -> FetchResponse:
        assert self.session is not None
        async with self.session.get(url) as resp:
            if resp.status >= 400:
                raise FetchError(url, f"HTTP {resp.status}")
            ctype = resp.headers.get("Content-Type", "").lower()
            text = ""
            if not (skip_binary and is_binary_content_type(ctype)):
                body = await resp.read()
                if body[:2] == _GZIP_MAGIC:
                    text = _gunzip(body)
                else:
                    text = await resp.text(errors="replace")
            return FetchResponse(
                url=url,
                final_url=str(resp.url),
                status=resp.status,
                content_type=ctype,
                text=text,
            )


def _gunzip(body: bytes) -> str:
    """Raw ``.xml.gz`` bodies; ``Content-Encoding: gzip`` is already handled by aiohttp."""
    try:
        return gzip.decompress(body).decode("utf-8", errors="replace")
    except (OSError, EOFError, zlib.error):
        return body.decode("utf-8", errors="replace")


__all__ = ["Fetcher"]
