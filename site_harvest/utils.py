"""site_harvest.utils: Утилитарные функции для обработки URL и текста."""

from __future__ import annotations

import logging
import re
from typing import Collection, List, Sequence
from urllib.parse import urlsplit, urlunsplit

from site_harvest.errors import InvalidSeedURLError
from site_harvest.logger import LOGGER_NAME

__all__: Sequence[str] = (
    "normalize_text",
    "normalize_url",
    "hostname_of",
    "same_host",
    "split_seed_url",
    "remove_duplicates",
    "collection_name_for",
)

logger = logging.getLogger(LOGGER_NAME)

_WS_RE = re.compile(r"\s+")


def normalize_text(value: str | None) -> str:
    """Схлопывает любые последовательности пробелов в один пробел и обрезает края."""
    if not value:
        return ""
    return _WS_RE.sub(" ", value).strip()


def normalize_url(url: str) -> str:
    """Ключ для множества посещённых URL: схема и хост в нижнем регистре, без фрагмента."""
    parts = urlsplit(url.strip())
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), parts.path or "/", parts.query, ""))


def hostname_of(url: str) -> str | None:
    """Возвращает hostname из URL или None, если URL не разбирается."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def same_host(url: str, hostname: str) -> bool:
    """Проверяет, что URL принадлежит ровно тому же hostname (поддомены не считаются)."""
    host = hostname_of(url)
    return host is not None and host == hostname.lower()


def split_seed_url(seed_url: str) -> tuple[str, str]:
    """Разбирает seed URL и возвращает пару (origin, hostname).

    Raises:
        InvalidSeedURLError: если URL не абсолютный http(s) или без hostname.
    """
    try:
        parts = urlsplit(seed_url.strip())
        hostname = parts.hostname
    except (AttributeError, ValueError) as exc:
        raise InvalidSeedURLError(str(seed_url)) from exc
    if parts.scheme.lower() not in ("http", "https") or not hostname:
        raise InvalidSeedURLError(seed_url)
    # userinfo is never forwarded
    netloc = parts.netloc.rsplit("@", 1)[-1].lower()
    origin = f"{parts.scheme.lower()}://{netloc}"
    return origin, hostname


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


def collection_name_for(hostname: str) -> str:
    """Имя коллекции для сервиса индексации: ``site_`` + hostname с ``.``/``:`` → ``_``."""
    return "site_" + re.sub(r"[:.]", "_", hostname)
