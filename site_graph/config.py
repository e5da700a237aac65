"""
Модуль для загрузки и валидации конфигурации краулера SiteGraph.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class CrawlerConfig(BaseModel):
    """Конфигурация для одного обхода сайта."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(..., description="Корневой URL обхода.")
    timeout: float = Field(30.0, gt=0, description="Таймаут загрузки одной страницы (секунд).")
    concurrency: int = Field(8, ge=1, description="Максимум одновременных загрузок.")
    user_agent: str = Field("SiteGraphBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(0, ge=0, description="Повторы при сетевых ошибках (не таймаутах).")
    page_source: Literal["http", "browser"] = Field(
        "http", description="Источник страниц: http (сырой HTML) или browser (Playwright)."
    )


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


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Читает YAML или JSON, накладывает overrides и возвращает проверенный CrawlerConfig.

    Без явного пути берётся configs/default.yaml, если он есть. Явно указанный,
    но отсутствующий файл даёт FileNotFoundError. Overrides со значением None
    игнорируются.
    """
    if path is None:
        data = _read_file(_DEFAULT_CFG) if _DEFAULT_CFG.is_file() else {}
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)
