"""
Исключения краулера SiteGraph.
"""
from __future__ import annotations


class SiteGraphError(Exception):
    """Базовое исключение проекта."""


class FetchError(SiteGraphError):
    """Страницу не удалось загрузить: таймаут, сетевая ошибка или сбой рендеринга."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class ExtractionError(SiteGraphError):
    """Разметку страницы не удалось разобрать."""


class CrawlError(SiteGraphError):
    """Обход невозможен целиком: корневой URL недоступен или источник страниц не запустился."""
