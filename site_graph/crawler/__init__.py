"""site_graph.crawler: обход сайта, источники страниц и граф ссылок."""

from site_graph.crawler.crawler import AsyncCrawler
from site_graph.crawler.errors import CrawlError, ExtractionError, FetchError, SiteGraphError
from site_graph.crawler.models import FAILURE_STATUS, PageResult

__all__ = [
    "AsyncCrawler",
    "CrawlError",
    "ExtractionError",
    "FetchError",
    "SiteGraphError",
    "FAILURE_STATUS",
    "PageResult",
]
