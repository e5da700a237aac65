"""
Обратный индекс ссылок: вычисляет входящие ссылки по исходящим после завершения обхода.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import replace
from typing import Dict, List, Sequence

from site_graph.crawler.models import PageResult


def build_incoming_links(results: Sequence[PageResult]) -> List[PageResult]:
    """
    Возвращает копии записей с заполненным ``incoming_links``.

    Страница-источник попадает в список цели один раз, даже если ссылается
    на неё несколько раз. Порядок записей сохраняется.
    """
    incoming: Dict[str, List[str]] = defaultdict(list)
    for page in results:
        for target in dict.fromkeys(page.outgoing_links):
            incoming[target].append(page.url)
    return [replace(page, incoming_links=list(incoming.get(page.url, ()))) for page in results]
