"""
Состояние одного обхода: индекс посещённых URL, очередь фронтира и собранные результаты.
"""
from __future__ import annotations

import asyncio
from typing import List, Set

from site_graph.crawler.models import PageResult


class CrawlContext:
    """
    Создаётся на каждый вызов ``crawl()`` и живёт ровно один обход.

    ``try_claim`` является единственной точкой дедупликации: URL попадает в очередь
    только если был захвачен впервые.
    """

    def __init__(self, root_url: str) -> None:
        self.root_url = root_url
        self.visited: Set[str] = set()
        self.results: List[PageResult] = []
        self.queue: asyncio.Queue[str] = asyncio.Queue()
        self._lock = asyncio.Lock()
        self._recorded: Set[str] = set()

    async def try_claim(self, url: str) -> bool:
        """Атомарно помечает URL как занятый; True только при первом вызове."""
        async with self._lock:
            if url in self.visited:
                return False
            self.visited.add(url)
            return True

    async def claim_and_schedule(self, url: str) -> bool:
        if not await self.try_claim(url):
            return False
        await self.queue.put(url)
        return True

    async def add_result(self, result: PageResult) -> None:
        async with self._lock:
            if result.url not in self.visited:
                raise RuntimeError(f"result for unclaimed URL {result.url}")
            if result.url in self._recorded:
                raise RuntimeError(f"duplicate result for {result.url}")
            self._recorded.add(result.url)
            self.results.append(result)

    @property
    def pending(self) -> int:
        """Число захваченных URL, для которых ещё нет результата."""
        return len(self.visited) - len(self.results)
