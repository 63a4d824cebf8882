# site_harvest/report/payload.py

"""
JSON-тело для сервиса индексации: ``{"data": [...], "collection_name": "..."}``.

Отправка payload остаётся задачей внешнего сервиса, здесь он только строится и сохраняется.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Union

from site_harvest.crawler.models import ScrapedDocument


def build_payload(documents: Iterable[ScrapedDocument], collection_name: str) -> Dict[str, Any]:
    """Собирает тело запроса из документов в порядке их завершения."""
    return {
        "data": [doc.to_dict() for doc in documents],
        "collection_name": collection_name,
    }


def render_json(payload: Dict[str, Any], output_path: Union[Path, str], *, pretty: bool = True) -> Path:
    """
    Сохраняет payload в формате JSON по указанному пути.

    :param payload: результат :func:`build_payload`
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2 if pretty else None)
    return output
