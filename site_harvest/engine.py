# File: site_harvest/engine.py
"""site_harvest.engine: Оркестрация полного сбора: обнаружение страниц, затем извлечение контента."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from site_harvest.config import HarvestConfig
from site_harvest.crawler.crawler import ItemCallback, ProgressCallback, Scraper
from site_harvest.crawler.discovery import CrawlTargetDiscoverer
from site_harvest.crawler.fetcher import Fetcher
from site_harvest.crawler.models import ScrapedDocument, ScrapeResult
from site_harvest.utils import collection_name_for, split_seed_url

__all__ = ["HarvestReport", "start_harvest"]

logger = logging.getLogger("SiteHarvest")


@dataclass(slots=True)
class HarvestReport:
    """Итог сбора по одному сайту."""

    seed_url: str
    hostname: str
    discovered: List[str] = field(default_factory=list)
    documents: List[ScrapedDocument] = field(default_factory=list)
    outcomes: List[ScrapeResult] = field(default_factory=list)

    @property
    def collection_name(self) -> str:
        return collection_name_for(self.hostname)

    def status_counts(self) -> Dict[str, int]:
        """Сколько URL завершилось каждым статусом (ok, failed, skipped, off_host)."""
        return dict(Counter(o.status.value for o in self.outcomes))


async def start_harvest(
    seed_url: str,
    config: Optional[HarvestConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
    on_item: Optional[ItemCallback] = None,
) -> HarvestReport:
    """Обнаруживает страницы сайта и собирает с них текст одним HTTP-клиентом.

    Raises:
        InvalidSeedURLError: если seed URL невалиден; прочие ошибки поглощаются.
    """
    cfg = config or HarvestConfig()
    _, hostname = split_seed_url(seed_url)
    report = HarvestReport(seed_url=seed_url, hostname=hostname)

    async with Fetcher(cfg) as fetcher:
        report.discovered = await CrawlTargetDiscoverer(fetcher, cfg).discover(seed_url)
        if not report.discovered:
            logger.warning("No URLs discovered for %s", seed_url)
            return report
        scraper = Scraper(fetcher, cfg)
        report.documents = await scraper.scrape_all(report.discovered, hostname, on_progress, on_item)
        report.outcomes = scraper.outcomes

    logger.info("Harvest of %s finished: %s", hostname, report.status_counts())
    return report
