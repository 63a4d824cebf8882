# site_harvest/crawler/models.py
"""
Data models for the SiteHarvest crawler.
"""
from __future__ import annotations

import asyncio
import enum
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, Optional


@dataclass(slots=True)
class ScrapedDocument:
    """Normalized text record of one page. Empty strings mean "nothing found"."""

    url: str
    title: str = ""
    description: str = ""
    content: str = ""

    @classmethod
    def empty(cls, url: str) -> ScrapedDocument:
        return cls(url=url)

    def is_empty(self) -> bool:
        return not (self.title or self.description or self.content)

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class ScrapeStatus(str, enum.Enum):
    """Outcome of handling a single URL."""

    OK = "ok"
    FAILED = "failed"
    SKIPPED = "skipped"
    OFF_HOST = "off_host"


@dataclass(slots=True)
class ScrapeResult:
    """Typed per-URL outcome; ``document`` is None only for discarded pages."""

    url: str
    status: ScrapeStatus
    document: Optional[ScrapedDocument] = None
    reason: str = ""

    @property
    def retained(self) -> bool:
        return self.document is not None


@dataclass(slots=True)
class FetchResponse:
    """What the fetcher hands back: requested and resolved URL plus decoded body."""

    url: str
    final_url: str
    status: int
    content_type: str
    text: str


@dataclass
class CrawlJob:
    """Pending queue and counters of one scrape run.

    The queue is filled once on creation and only drained afterwards;
    ``completed`` only grows and never exceeds ``total``.
    """

    pending: asyncio.Queue[str] = field(default_factory=asyncio.Queue)
    total: int = 0
    completed: int = 0

    @classmethod
    def from_urls(cls, urls: Iterable[str]) -> CrawlJob:
        job = cls()
        for url in urls:
            job.pending.put_nowait(url)
        job.total = job.pending.qsize()
        return job

    def claim(self) -> Optional[str]:
        """Pop the next URL or return None when the queue is drained."""
        try:
            return self.pending.get_nowait()
        except asyncio.QueueEmpty:
            return None

    def finish(self) -> int:
        self.completed += 1
        self.pending.task_done()
        return self.completed
