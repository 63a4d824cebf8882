# File: site_harvest/parser/robots_parser.py
"""site_harvest.parser.robots_parser: Извлечение директив Sitemap из robots.txt."""

from __future__ import annotations

import re
from typing import List

from site_harvest.utils import remove_duplicates

_SITEMAP_RE = re.compile(r"^\s*sitemap:\s*(\S+)", re.IGNORECASE)


def extract_sitemap_directives(text: str) -> List[str]:
    """Возвращает URL из строк ``Sitemap: <url>`` (регистр не важен).

    Args:
        text: содержимое robots.txt.

    Returns:
        Список URL без повторов в порядке появления.
    """
    found: List[str] = []
    for raw in text.splitlines():
        match = _SITEMAP_RE.match(raw)
        if match:
            found.append(match.group(1).strip())
    return remove_duplicates(found)
