from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from site_graph.config import CrawlerConfig
from site_graph.crawler.errors import CrawlError
from site_graph.crawler.fetcher import PageSource, build_page_source
from site_graph.crawler.frontier import CrawlContext
from site_graph.crawler.link_graph import build_incoming_links
from site_graph.crawler.models import PageResult
from site_graph.crawler.urls import in_scope, is_fetchable_href, normalize_url
from site_graph.parser.html_parser import extract_page_data

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """Асинхронный краулер одного сайта с ограниченным пулом воркеров."""

    def __init__(self, config: CrawlerConfig, source: Optional[PageSource] = None) -> None:
        self.config = config
        self.source = source if source is not None else build_page_source(config)
        self.logger = logging.getLogger("SiteGraph")
        self._entered = False

    async def __aenter__(self) -> AsyncCrawler:
        try:
            await self.source.__aenter__()
        except Exception as exc:
            raise CrawlError(f"page source unavailable: {exc}") from exc
        self._entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._entered:
            self._entered = False
            await self.source.__aexit__(exc_type, exc, tb)

    async def crawl(self, root_url: Optional[str] = None) -> List[PageResult]:
        """
        Обходит сайт от корня до исчерпания фронтира и возвращает записи
        с заполненными входящими ссылками.

        Падение отдельной страницы превращается в запись со статусом 500.
        Если не удалось загрузить сам корень, бросает CrawlError.
        """
        if not self._entered:
            raise RuntimeError("Crawler used outside of 'async with'")
        raw_root = root_url if root_url is not None else str(self.config.base_url)
        root = normalize_url(raw_root, raw_root)
        if root is None:
            raise CrawlError(f"invalid root URL: {raw_root!r}")

        self.logger.info("Старт обхода: %s", root)
        start = time.monotonic()
        ctx = CrawlContext(root)
        await ctx.claim_and_schedule(root)
        workers = [asyncio.create_task(self._worker(ctx)) for _ in range(self.config.concurrency)]
        try:
            await ctx.queue.join()
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        root_result = next(r for r in ctx.results if r.url == root)
        if root_result.is_failure:
            raise CrawlError(f"root URL unreachable: {root} ({root_result.error})")

        results = build_incoming_links(ctx.results)
        duration = time.monotonic() - start
        failures = sum(1 for r in results if r.is_failure)
        self.logger.info(
            "Завершено: %d страниц (%d с ошибкой) за %.2f с (%.2f стр/с)",
            len(results), failures, duration, len(results) / duration if duration else 0,
        )
        return results

    async def _worker(self, ctx: CrawlContext) -> None:
        while True:
            url = await ctx.queue.get()
            try:
                result = await self._process(url, ctx.root_url)
                await ctx.add_result(result)
                for link in result.outgoing_links:
                    await ctx.claim_and_schedule(link)
            finally:
                ctx.queue.task_done()

    async def _process(self, url: str, root: str) -> PageResult:
        try:
            response = await self.source.fetch(url, self.config.timeout)
            page = extract_page_data(response.content)
        except Exception as exc:
            self.logger.warning("Failed %s: %s", url, exc)
            return PageResult.failed(url, str(exc) or type(exc).__name__)

        outgoing: List[str] = []
        for href in page.links:
            if not is_fetchable_href(href):
                continue
            link = normalize_url(href, url)
            if link is not None and in_scope(link, root):
                outgoing.append(link)

        self.logger.debug("%s -> %d, %d links", url, response.status_code, len(outgoing))
        return PageResult(
            url=url,
            status_code=response.status_code,
            title=page.title,
            description=page.description,
            server=response.headers.get("server") or None,
            headings=page.headings,
            outgoing_links=outgoing,
        )
