# site_harvest/crawler/sitemap.py
"""
Recursive sitemap resolution.

Sitemap indices are walked level by level from an explicit worklist instead of
recursing: every level is fetched in parallel (bounded by
``sitemap_concurrency``), URLs already visited are skipped and nesting deeper
than ``sitemap_max_depth`` is not followed.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set

from site_harvest.config import HarvestConfig
from site_harvest.crawler.fetcher import Fetcher
from site_harvest.errors import FetchError, SitemapError
from site_harvest.parser.sitemap_parser import SitemapDocument, parse_sitemap
from site_harvest.utils import normalize_url

logger = logging.getLogger("SiteHarvest")


class SitemapResolver:
    """Turns a sitemap URL (index or urlset) into a flat list of page URLs."""

    def __init__(self, fetcher: Fetcher, config: Optional[HarvestConfig] = None) -> None:
        self.fetcher = fetcher
        self.config = config or fetcher.config

    async def resolve(self, sitemap_url: str) -> List[str]:
        """Return every page URL reachable from *sitemap_url*.

        Raises:
            SitemapError: if *sitemap_url* itself cannot be fetched. Failures of
                nested sitemaps only drop that branch.
        """
        try:
            root = await self._load(sitemap_url)
        except FetchError as exc:
            raise SitemapError(f"Failed to fetch sitemap: {sitemap_url} ({exc.reason})") from exc

        visited: Set[str] = set()
        root_key = _visit_key(sitemap_url)
        if root_key is not None:
            visited.add(root_key)
        pages: List[str] = []
        level: List[SitemapDocument] = [root]
        depth = 0
        semaphore = asyncio.Semaphore(self.config.sitemap_concurrency)

        while level:
            children: List[str] = []
            for doc in level:
                if not doc.is_index:
                    pages.extend(doc.locs)
                    continue
                for loc in doc.locs:
                    key = _visit_key(loc)
                    if key is None:
                        logger.debug("Malformed sitemap <loc> skipped: %s", loc)
                        continue
                    if key in visited:
                        logger.debug("Sitemap already visited, skipping: %s", loc)
                        continue
                    visited.add(key)
                    children.append(loc)

            if not children:
                break
            if depth >= self.config.sitemap_max_depth:
                logger.warning(
                    "Sitemap nesting deeper than %d under %s, %d child sitemap(s) ignored",
                    self.config.sitemap_max_depth, sitemap_url, len(children),
                )
                break
            depth += 1
            level = await self._load_level(children, semaphore)

        return pages

    async def _load_level(self, urls: List[str], semaphore: asyncio.Semaphore) -> List[SitemapDocument]:
        async def load(url: str) -> Optional[SitemapDocument]:
            async with semaphore:
                try:
                    return await self._load(url)
                except FetchError as exc:
                    logger.warning("Nested sitemap skipped %s: %s", url, exc.reason)
                    return None

        docs = await asyncio.gather(*(load(u) for u in urls))
        return [d for d in docs if d is not None]

    async def _load(self, url: str) -> SitemapDocument:
        response = await self.fetcher.fetch(url)
        doc = parse_sitemap(response.text)
        logger.debug("Sitemap %s: %s with %d <loc>", url, doc.kind.value, len(doc.locs))
        return doc


def _visit_key(url: str) -> Optional[str]:
    try:
        return normalize_url(url)
    except ValueError:
        return None


__all__ = ["SitemapResolver"]
