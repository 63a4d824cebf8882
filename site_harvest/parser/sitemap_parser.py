# File: site_harvest/parser/sitemap_parser.py
"""site_harvest.parser.sitemap_parser: Разбор sitemap.xml (index или urlset) и извлечение <loc>."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import List

from lxml import etree

logger = logging.getLogger("SiteHarvest")


class SitemapKind(str, enum.Enum):
    INDEX = "index"
    URLSET = "urlset"


@dataclass(slots=True)
class SitemapDocument:
    """Разобранный sitemap: тип документа и значения всех <loc>."""

    kind: SitemapKind
    locs: List[str] = field(default_factory=list)

    @property
    def is_index(self) -> bool:
        return self.kind is SitemapKind.INDEX


def _parser() -> etree.XMLParser:
    # без внешних сущностей и сети: sitemap приходит с чужого сайта
    return etree.XMLParser(ns_clean=True, recover=False, resolve_entities=False, no_network=True)


def parse_sitemap(xml_content: str | bytes) -> SitemapDocument:
    """Разбирает XML sitemap и возвращает SitemapDocument.

    Args:
        xml_content: строка или байты с содержимым sitemap.

    Returns:
        SitemapDocument типа ``index``, если в документе есть элемент
        <sitemapindex>, иначе ``urlset``. Пустые <loc> отбрасываются.
        Невалидный XML даёт пустой urlset, а не исключение.

    Пример:
    ```python
    from site_harvest.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        doc = parse_sitemap(f.read())
    print(doc.kind, doc.locs)
    ```
    """
    data = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    try:
        root = etree.fromstring(data.strip(), parser=_parser())
    except (etree.XMLSyntaxError, ValueError) as exc:
        logger.debug("Sitemap is not valid XML: %s", exc)
        return SitemapDocument(SitemapKind.URLSET)
    if root is None:
        return SitemapDocument(SitemapKind.URLSET)

    locs = [loc.text.strip() for loc in root.iter("{*}loc") if loc.text and loc.text.strip()]
    is_index = next(root.iter("{*}sitemapindex"), None) is not None
    return SitemapDocument(SitemapKind.INDEX if is_index else SitemapKind.URLSET, locs)
