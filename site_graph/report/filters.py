"""site_graph.report.filters: фильтрация результатов обхода и подробный просмотр одной страницы."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from site_graph.crawler.models import HEADING_LEVELS, PageResult

#: значения фильтра статуса, которые предлагает интерфейс
STATUS_CHOICES: Sequence[str] = ("All", "200", "3xx", "404", "500")


def status_class(code: int) -> str:
    """Класс статуса для раскраски таблицы: ok, redirect, error или other."""
    if code == 200:
        return "ok"
    if 300 <= code < 400:
        return "redirect"
    if code >= 400:
        return "error"
    return "other"


def matches_status(code: int, status: str) -> bool:
    """
    Проверяет код против фильтра: ``All``/пусто, точный код (``404``)
    или класс вида ``3xx``.
    """
    status = status.strip().lower()
    if not status or status == "all":
        return True
    if len(status) == 3 and status.endswith("xx") and status[0].isdigit():
        return code // 100 == int(status[0])
    try:
        return code == int(status)
    except ValueError as exc:
        raise ValueError(f"Неизвестный фильтр статуса: {status!r}") from exc


def _contains(value: Optional[str], needle: str) -> bool:
    return needle.lower() in (value or "").lower()


def filter_results(
    results: Iterable[PageResult],
    *,
    url: str = "",
    title: str = "",
    description: str = "",
    heading: str = "",
    status: str = "All",
) -> List[PageResult]:
    """Оставляет записи, подходящие под все заданные фильтры (подстроки без учёта регистра)."""
    selected: List[PageResult] = []
    for page in results:
        if url and not _contains(page.url, url):
            continue
        if title and not _contains(page.title, title):
            continue
        if description and not _contains(page.description, description):
            continue
        if heading and not any(
            _contains(text, heading) for level in HEADING_LEVELS for text in page.headings.get(level, [])
        ):
            continue
        if not matches_status(page.status_code, status):
            continue
        selected.append(page)
    return selected


def find_page(results: Iterable[PageResult], url: str) -> Optional[PageResult]:
    """Выбирает запись по точному URL."""
    return next((page for page in results if page.url == url), None)


def format_page_details(page: PageResult) -> str:
    """Текстовое представление одной страницы: мета-данные, заголовки и ссылки."""
    lines = [
        f"URL:         {page.url}",
        f"Status:      {page.status_code}",
        f"Title:       {page.title}",
        f"Description: {page.description}",
        f"Server:      {page.server or 'Unknown'}",
        "",
        "Headings:",
    ]
    for level in HEADING_LEVELS:
        texts = page.headings.get(level, [])
        lines.append(f"  {level.upper()}: {len(texts)}")
        lines.extend(f"    - {text}" for text in texts)
    lines.append("")
    lines.append(f"Outgoing links ({len(page.outgoing_links)}):")
    lines.extend(f"  {link}" for link in page.outgoing_links)
    lines.append(f"Incoming links ({len(page.incoming_links)}):")
    lines.extend(f"  {link}" for link in page.incoming_links)
    return "\n".join(lines)
