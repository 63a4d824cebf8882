# === FILE: site_harvest/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteHarvest.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class HarvestConfig(BaseModel):
    """Настройки обнаружения страниц и сбора контента."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field("SiteHarvestBot/1.0", min_length=1, description="Заголовок User-Agent.")
    timeout: float = Field(15.0, gt=0, description="Таймаут одной попытки запроса (секунд).")
    max_attempts: int = Field(2, ge=1, description="Число попыток загрузки страницы при сетевых ошибках.")
    retry_backoff: float = Field(0.0, ge=0, description="Пауза между попытками (секунд).")

    min_workers: int = Field(4, ge=1, description="Минимальное число параллельных воркеров.")
    max_workers: int = Field(8, ge=1, description="Жесткий лимит параллельных воркеров.")
    urls_per_worker: int = Field(50, ge=1, description="Сколько URL приходится на один воркер при масштабировании.")

    sitemap_max_depth: int = Field(5, ge=0, description="Максимальная вложенность sitemap index.")
    sitemap_concurrency: int = Field(8, ge=1, description="Параллельные загрузки sitemap на одном уровне.")
    homepage_link_limit: int = Field(500, ge=1, description="Лимит ссылок, собранных с главной страницы.")

    min_block_length: int = Field(30, ge=0, description="Минимальная длина текстового блока.")
    min_block_count: int = Field(3, ge=0, description="Минимум блоков, иначе берется весь текст региона.")
    dedup_prefix_length: int = Field(120, ge=1, description="Длина префикса для поиска дублей блоков.")

    @model_validator(mode="after")
    def _check_worker_bounds(self) -> HarvestConfig:
        if self.min_workers > self.max_workers:
            raise ValueError("min_workers must not exceed max_workers")
        return self


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> HarvestConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект HarvestConfig.
    Без пути использует configs/default.yaml, а если его нет, значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return HarvestConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return HarvestConfig(**data)


__all__ = ["HarvestConfig", "ValidationError", "load_config"]
