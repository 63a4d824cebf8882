# === FILE: site_harvest/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
import math
import time
from collections import Counter
from typing import AsyncIterator, Awaitable, Callable, Iterable, List, Optional, Union

from site_harvest.config import HarvestConfig
from site_harvest.crawler.fetcher import Fetcher
from site_harvest.crawler.models import CrawlJob, ScrapedDocument, ScrapeResult, ScrapeStatus
from site_harvest.errors import FetchError
from site_harvest.parser.html_parser import extract_document, is_binary_content_type
from site_harvest.utils import same_host

__all__ = ("Scraper", "compute_concurrency", "scrape_all", "ProgressCallback", "ItemCallback")

ProgressCallback = Callable[[str, int, int], Union[None, Awaitable[None]]]
ItemCallback = Callable[[ScrapedDocument], Union[None, Awaitable[None]]]

logger = logging.getLogger("SiteHarvest")


def compute_concurrency(total: int, config: Optional[HarvestConfig] = None) -> int:
    """Worker count: ``min(max_workers, max(min_workers, ceil(total / urls_per_worker)))``."""
    cfg = config or HarvestConfig()
    return min(cfg.max_workers, max(cfg.min_workers, math.ceil(total / cfg.urls_per_worker)))


async def _notify(callback: Optional[Callable[..., object]], *args: object) -> None:
    if callback is None:
        return
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Scraper:
    """Bounded worker pool that fetches pages and extracts their text.

    Workers drain one shared queue of URLs; each URL is claimed exactly once.
    Failures stay scoped to their URL and are recorded in :attr:`outcomes`.
    """

    def __init__(self, fetcher: Fetcher, config: Optional[HarvestConfig] = None) -> None:
        self.fetcher = fetcher
        self.config = config or fetcher.config
        self.outcomes: List[ScrapeResult] = []

    async def scrape_all(
        self,
        urls: Iterable[str],
        hostname: str,
        on_progress: Optional[ProgressCallback] = None,
        on_item: Optional[ItemCallback] = None,
    ) -> List[ScrapedDocument]:
        """Scrape every URL and return retained documents in completion order.

        ``on_progress(url, completed, total)`` fires once up front with
        ``("", 0, total)``, then when a URL is claimed and again when it is
        finished. ``on_item(document)`` fires for each retained document.
        """
        self.outcomes = []
        job = CrawlJob.from_urls(urls)
        if job.total == 0:
            return []

        results: List[ScrapedDocument] = []
        workers_count = min(compute_concurrency(job.total, self.config), job.total)
        logger.info("Scraping %d URL(s) with %d worker(s)", job.total, workers_count)
        start = time.monotonic()

        await _notify(on_progress, "", 0, job.total)
        workers = [
            asyncio.create_task(self._worker(job, hostname.lower(), results, on_progress, on_item))
            for _ in range(workers_count)
        ]
        try:
            await asyncio.gather(*workers)
        finally:
            for w in workers:
                w.cancel()

        duration = time.monotonic() - start
        stats = Counter(o.status.value for o in self.outcomes)
        logger.info(
            "Finished: %d document(s) in %.2fs (%s)",
            len(results), duration, ", ".join(f"{k}={v}" for k, v in sorted(stats.items())),
        )
        return results

    async def stream(
        self,
        urls: Iterable[str],
        hostname: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AsyncIterator[ScrapedDocument]:
        """Yield retained documents as they complete; errors of the run are re-raised."""
        channel: asyncio.Queue[Optional[ScrapedDocument]] = asyncio.Queue()

        async def run() -> None:
            try:
                await self.scrape_all(urls, hostname, on_progress, channel.put_nowait)
            finally:
                channel.put_nowait(None)

        task = asyncio.create_task(run())
        try:
            while True:
                doc = await channel.get()
                if doc is None:
                    break
                yield doc
            await task
        finally:
            if not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

    async def scrape_url(self, url: str, hostname: str) -> ScrapeResult:
        """Fetch and extract one page; never raises for fetch or content problems."""
        try:
            response = await self.fetcher.fetch(url, skip_binary=True)
        except FetchError as exc:
            return ScrapeResult(url, ScrapeStatus.FAILED, ScrapedDocument.empty(url), exc.reason)

        if not same_host(response.final_url, hostname):
            logger.debug("Discarding %s: resolved to %s", url, response.final_url)
            return ScrapeResult(url, ScrapeStatus.OFF_HOST, None, f"redirected to {response.final_url}")

        if is_binary_content_type(response.content_type):
            return ScrapeResult(
                url, ScrapeStatus.SKIPPED, ScrapedDocument.empty(url), f"binary content: {response.content_type}"
            )

        document = extract_document(
            response.text,
            url,
            min_length=self.config.min_block_length,
            min_blocks=self.config.min_block_count,
            prefix_length=self.config.dedup_prefix_length,
        )
        return ScrapeResult(url, ScrapeStatus.OK, document)

    async def _worker(
        self,
        job: CrawlJob,
        hostname: str,
        results: List[ScrapedDocument],
        on_progress: Optional[ProgressCallback],
        on_item: Optional[ItemCallback],
    ) -> None:
        while True:
            url = job.claim()
            if url is None:
                return
            await _notify(on_progress, url, job.completed, job.total)
            outcome = await self.scrape_url(url, hostname)
            self.outcomes.append(outcome)
            if outcome.retained:
                results.append(outcome.document)
                await _notify(on_item, outcome.document)
            done = job.finish()
            await _notify(on_progress, url, done, job.total)


async def scrape_all(
    urls: Iterable[str],
    hostname: str,
    on_progress: Optional[ProgressCallback] = None,
    on_item: Optional[ItemCallback] = None,
    config: Optional[HarvestConfig] = None,
) -> List[ScrapedDocument]:
    """Convenience wrapper that opens its own :class:`Fetcher`."""
    pending = list(urls)
    if not pending:
        return []
    async with Fetcher(config) as fetcher:
        return await Scraper(fetcher, config).scrape_all(pending, hostname, on_progress, on_item)
