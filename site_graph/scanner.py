"""
Точка входа в обход: запуск краулера по конфигу или по одному URL.
"""
from typing import Any, List, Optional

from site_graph.config import CrawlerConfig
from site_graph.crawler.crawler import AsyncCrawler
from site_graph.crawler.fetcher import PageSource
from site_graph.crawler.models import PageResult
from site_graph.logger import logger


async def start_crawl(cfg: CrawlerConfig, source: Optional[PageSource] = None) -> List[PageResult]:
    """
    Запускает асинхронный краулер в контексте и возвращает список PageResult.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    source : PageSource, optional
        Готовый источник страниц; по умолчанию выбирается по ``cfg.page_source``.

    Raises
    ------
    CrawlError
        Корневой URL недоступен или источник страниц не запустился.
    """
    logger.debug("Page source: %s, concurrency: %d", cfg.page_source, cfg.concurrency)
    async with AsyncCrawler(cfg, source) as crawler:
        return await crawler.crawl()


async def crawl(root_url: str, **settings: Any) -> List[PageResult]:
    """Обходит сайт с корня *root_url*; остальные поля CrawlerConfig передаются как kwargs."""
    return await start_crawl(CrawlerConfig(base_url=root_url, **settings))


__all__ = ["start_crawl", "crawl"]
