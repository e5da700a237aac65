"""HTML parsing utilities for SiteGraph.

:func:`extract_page_data` turns fetched markup (raw response body or a
rendered DOM snapshot) into an :class:`~site_graph.crawler.models.ExtractedPage`:

* title: document ``<title>``, falling back to ``og:title``.
* description: ``<meta name="description">``, falling back to ``og:description``.
* headings: text of every ``h1`` … ``h6`` element in document order.
* links: every ``<a href>`` value exactly as written in the markup.

Links are returned raw; resolving and scoping them is the crawler's job.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_graph.crawler.errors import ExtractionError
from site_graph.crawler.models import HEADING_LEVELS, ExtractedPage

__all__: Sequence[str] = ("extract_page_data",)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if not isinstance(tag, Tag):
        return ""
    content = tag.get("content")
    return content.strip() if isinstance(content, str) else ""


def extract_page_data(content: str) -> ExtractedPage:
    """Parse *content* and return its metadata and raw anchor targets."""
    try:
        soup = BeautifulSoup(content, "html.parser")
    except Exception as exc:  # html.parser raises assorted errors on broken input
        raise ExtractionError(str(exc)) from exc

    title_tag = soup.find("title")
    title = _collapse(title_tag.get_text()) if title_tag else ""
    if not title:
        title = _meta_content(soup, property="og:title")

    description = _meta_content(soup, name="description") or _meta_content(
        soup, property="og:description"
    )

    headings = {level: [] for level in HEADING_LEVELS}
    for tag in soup.find_all(list(HEADING_LEVELS)):
        headings[tag.name].append(_collapse(tag.get_text()))

    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        href = tag.get("href")
        if isinstance(href, str):
            links.append(href)

    return ExtractedPage(title=title, description=description, headings=headings, links=links)
