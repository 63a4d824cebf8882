"""HTML content extraction for SiteHarvest.

:func:`extract_document` turns raw HTML into a :class:`ScrapedDocument` with
a normalized title, description and main text. The main text comes from
readability (``readability-lxml``) when it finds something; otherwise a
manual pass strips boilerplate and aggregates paragraph-like blocks from the
main content region.

The function never raises: anything it cannot find degrades to ``""``.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag
from lxml.etree import LxmlError
from readability import Document
from readability.readability import Unparseable

from site_harvest.crawler.models import ScrapedDocument
from site_harvest.utils import normalize_text

__all__: Sequence[str] = (
    "extract_document",
    "is_binary_content_type",
    "strip_boilerplate",
    "aggregate_text",
)

logger = logging.getLogger("SiteHarvest")

BOILERPLATE_SELECTORS: tuple[str, ...] = (
    "script", "style", "noscript", "svg", "canvas", "iframe",
    "header", "footer", "nav", "form", "aside",
    '[aria-hidden="true"]', "[hidden]",
    '[role="navigation"]', '[role="banner"]', '[role="contentinfo"]',
)
BLOCK_SELECTOR = "p, li, blockquote, h1, h2, h3, h4"
DESCRIPTION_SELECTORS: tuple[str, ...] = (
    'meta[name="description"]',
    'meta[property="og:description"]',
    'meta[name="twitter:description"]',
)

# readability-lxml reports this when a page has no <title>
_NO_TITLE = "[no-title]"


def is_binary_content_type(content_type: str | None) -> bool:
    """True for images, PDFs, archives and generic byte streams."""
    ct = (content_type or "").lower()
    return (
        ct.startswith("image/")
        or "pdf" in ct
        or "zip" in ct
        or "octet-stream" in ct
        or "x-tar" in ct
        or "x-rar" in ct
        or "x-7z" in ct
    )


def _inject_base(soup: BeautifulSoup, source_url: str) -> None:
    if soup.find("base") is not None:
        return
    head = soup.head
    if head is None:
        head = soup.new_tag("head")
        html = soup.html
        if html is not None:
            html.insert(0, head)
        else:
            soup.insert(0, head)
    head.insert(0, soup.new_tag("base", href=source_url))


def _readability(markup: str, source_url: str) -> tuple[str, str]:
    """Return (title, text) reported by readability, or empty strings."""
    try:
        doc = Document(markup, url=source_url)
        title = doc.title() or ""
        summary = doc.summary(html_partial=True)
    except (Unparseable, LxmlError, ValueError) as exc:
        logger.debug("readability failed for %s: %s", source_url, exc)
        return "", ""
    if title.strip() == _NO_TITLE:
        title = ""
    text = BeautifulSoup(summary, "html.parser").get_text(" ")
    return title, text


def _description(soup: BeautifulSoup) -> str:
    for selector in DESCRIPTION_SELECTORS:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        value = normalize_text(tag.get("content"))  # type: ignore[arg-type]
        if value:
            return value
    return ""


def strip_boilerplate(soup: BeautifulSoup) -> None:
    """Remove navigation, scripts, forms and hidden elements in place."""
    for element in soup.select(", ".join(BOILERPLATE_SELECTORS)):
        if not element.decomposed:
            element.decompose()


def aggregate_text(
    root: Optional[Tag],
    *,
    min_length: int = 30,
    min_blocks: int = 3,
    prefix_length: int = 120,
) -> str:
    """Collect paragraph-like blocks of *root*.

    Blocks shorter than *min_length* are ignored. With fewer than *min_blocks*
    survivors the whole region text is used as well. Blocks sharing the same
    first *prefix_length* characters are kept once, in document order.
    """
    if root is None:
        return ""
    parts: list[str] = []
    for element in root.select(BLOCK_SELECTOR):
        text = normalize_text(element.get_text(" "))
        if len(text) >= min_length:
            parts.append(text)
    if len(parts) < min_blocks:
        whole = normalize_text(root.get_text(" "))
        if whole:
            parts.append(whole)

    seen: set[str] = set()
    unique: list[str] = []
    for part in parts:
        key = part[:prefix_length]
        if key in seen:
            continue
        seen.add(key)
        unique.append(part)
    return "\n\n".join(unique)


def extract_document(
    html: str,
    source_url: str,
    *,
    min_length: int = 30,
    min_blocks: int = 3,
    prefix_length: int = 120,
) -> ScrapedDocument:
    """Extract a normalized :class:`ScrapedDocument` from *html*."""
    soup = BeautifulSoup(html or "", "html.parser")
    _inject_base(soup, source_url)

    # readability mutates its tree, so it works on its own parse of the markup
    rd_title, rd_text = _readability(str(soup), source_url)

    own_title = soup.title.get_text() if soup.title else ""
    title = normalize_text(rd_title or own_title)
    description = _description(soup)

    content = normalize_text(rd_text)
    if not content:
        strip_boilerplate(soup)
        region = soup.select_one("main, article") or soup.body or soup
        content = normalize_text(
            aggregate_text(region, min_length=min_length, min_blocks=min_blocks, prefix_length=prefix_length)
        )

    return ScrapedDocument(url=source_url, title=title, description=description, content=content)
