# site_harvest/crawler/link_extractor.py
"""
Link extraction for the homepage fallback of crawl-target discovery.
"""
from __future__ import annotations

import re
from typing import List, Optional
from urllib.parse import urldefrag, urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

_SKIP_PREFIXES = ("#", "mailto:", "tel:", "javascript:")
_STATIC_EXT_RE = re.compile(
    r"\.(png|jpe?g|gif|webp|svg|ico|bmp|tiff?|avif|css|js|mjs|map|json|xml|pdf|zip|gz|tgz|bz2|xz|rar|7z|tar"
    r"|mp4|webm|mov|mp3|ogg|wav|avi|woff2?|ttf|otf|eot|wasm|exe|dmg|apk)$",
    re.IGNORECASE,
)


def is_probably_html_path(path: str) -> bool:
    """False for paths ending in a known binary or static-asset extension."""
    return _STATIC_EXT_RE.search(path) is None


def extract_links(html: str, base_url: str, hostname: str, limit: Optional[int] = None) -> List[str]:
    """
    Extract same-host page links from *html*, resolved against *base_url*.

    Ignores fragment-only, mailto:, tel: and javascript: links, other hosts and
    static assets. Fragments are dropped; order of first appearance is kept.
    """
    soup = BeautifulSoup(html, "html.parser")
    host = hostname.lower()
    links: dict[str, None] = {}
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw or raw.lower().startswith(_SKIP_PREFIXES):
            continue
        try:
            absolute, _ = urldefrag(urljoin(base_url, raw))
            parsed = urlsplit(absolute)
            link_host = parsed.hostname
        except ValueError:
            continue
        if parsed.scheme not in ("http", "https") or link_host != host:
            continue
        if not is_probably_html_path(parsed.path):
            continue
        links.setdefault(absolute, None)
        if limit is not None and len(links) >= limit:
            break
    return list(links)
