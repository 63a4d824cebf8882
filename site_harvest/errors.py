"""
Exception hierarchy for SiteHarvest.

Only :class:`InvalidSeedURLError` ever reaches the caller of a discovery or
scrape call; the others are raised inside components and absorbed at their
boundary.
"""
from __future__ import annotations


class HarvestError(Exception):
    """Base class for all SiteHarvest errors."""


class InvalidSeedURLError(HarvestError, ValueError):
    """The seed page URL is not an absolute http(s) URL with a hostname."""

    def __init__(self, url: str) -> None:
        super().__init__(f"invalid seed URL: {url!r}")
        self.url = url


class FetchError(HarvestError):
    """A request failed after all attempts or returned a non-success status."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class SitemapError(HarvestError):
    """The root document of a sitemap resolution could not be fetched."""


__all__ = ["HarvestError", "InvalidSeedURLError", "FetchError", "SitemapError"]
