# site_harvest/__init__.py
"""
SiteHarvest package initializer.

Discovers the crawlable pages of a site (robots.txt, sitemaps, homepage links)
and extracts clean text from them under a bounded number of concurrent fetches.
"""
__version__ = "0.1.0"

from site_harvest.config import HarvestConfig, load_config
from site_harvest.crawler.crawler import Scraper, scrape_all
from site_harvest.crawler.discovery import discover_crawl_urls
from site_harvest.crawler.models import ScrapedDocument
from site_harvest.engine import HarvestReport, start_harvest

__all__ = [
    "__version__",
    "HarvestConfig",
    "load_config",
    "Scraper",
    "scrape_all",
    "discover_crawl_urls",
    "ScrapedDocument",
    "HarvestReport",
    "start_harvest",
]
