# site_harvest/crawler/discovery.py
"""
Crawl-target discovery: which pages of a site should be scraped.

Order of sources: ``Sitemap:`` directives in robots.txt, the conventional
``/sitemap.xml`` and ``/sitemap_index.xml``, and, when no sitemap yields a
same-host URL, the links found on the homepage.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from site_harvest.config import HarvestConfig
from site_harvest.crawler.fetcher import Fetcher
from site_harvest.crawler.link_extractor import extract_links
from site_harvest.crawler.sitemap import SitemapResolver
from site_harvest.errors import HarvestError
from site_harvest.parser.robots_parser import extract_sitemap_directives
from site_harvest.utils import remove_duplicates, same_host, split_seed_url

logger = logging.getLogger("SiteHarvest")

DEFAULT_SITEMAP_PATHS = ("/sitemap.xml", "/sitemap_index.xml")


class CrawlTargetDiscoverer:
    """Collects the same-host page URLs of the site a seed page belongs to."""

    def __init__(self, fetcher: Fetcher, config: Optional[HarvestConfig] = None) -> None:
        self.fetcher = fetcher
        self.config = config or fetcher.config
        self.resolver = SitemapResolver(fetcher, self.config)

    async def discover(self, seed_url: str) -> List[str]:
        """
        Return discovered URLs on the seed's hostname, without duplicates.

        Raises:
            InvalidSeedURLError: the only error that escapes; every fetch or
                parse problem just contributes nothing.
        """
        origin, hostname = split_seed_url(seed_url)
        logger.info("Discovering crawl targets for %s", origin)

        candidates = dict.fromkeys(await self._robots_sitemaps(origin))
        for path in DEFAULT_SITEMAP_PATHS:
            candidates.setdefault(origin + path, None)

        results = await asyncio.gather(
            *(self.resolver.resolve(url) for url in candidates), return_exceptions=True
        )
        discovered: List[str] = []
        for url, result in zip(candidates, results):
            if isinstance(result, HarvestError):
                logger.debug("Sitemap candidate %s contributed nothing: %s", url, result)
            elif isinstance(result, Exception):
                logger.warning("Sitemap candidate %s failed unexpectedly: %r", url, result)
            elif isinstance(result, BaseException):
                raise result
            else:
                discovered.extend(result)

        unique = remove_duplicates([u for u in discovered if same_host(u, hostname)])
        if unique:
            logger.info("Sitemaps yielded %d URL(s) on %s", len(unique), hostname)
            return unique

        logger.info("No sitemap URLs on %s, falling back to homepage links", hostname)
        fallback = await self._homepage_links(origin, hostname)
        if fallback:
            logger.info("Homepage yielded %d URL(s)", len(fallback))
            return fallback
        return unique

    async def _robots_sitemaps(self, origin: str) -> List[str]:
        try:
            response = await self.fetcher.fetch(f"{origin}/robots.txt")
        except HarvestError as exc:
            logger.debug("robots.txt unavailable for %s: %s", origin, exc)
            return []
        sitemaps = extract_sitemap_directives(response.text)
        logger.debug("robots.txt declares %d sitemap(s)", len(sitemaps))
        return sitemaps

    async def _homepage_links(self, origin: str, hostname: str) -> List[str]:
        try:
            response = await self.fetcher.fetch(f"{origin}/")
        except HarvestError as exc:
            logger.warning("Homepage fallback failed for %s: %s", origin, exc)
            return []
        return extract_links(
            response.text, response.final_url, hostname, limit=self.config.homepage_link_limit
        )


async def discover_crawl_urls(
    seed_url: str,
    fetcher: Optional[Fetcher] = None,
    config: Optional[HarvestConfig] = None,
) -> List[str]:
    """Discover crawl targets for *seed_url*, opening a fetcher if none is given."""
    if fetcher is not None:
        return await CrawlTargetDiscoverer(fetcher, config).discover(seed_url)
    split_seed_url(seed_url)
    async with Fetcher(config) as own:
        return await CrawlTargetDiscoverer(own, config).discover(seed_url)


__all__ = ["CrawlTargetDiscoverer", "discover_crawl_urls", "DEFAULT_SITEMAP_PATHS"]
