# File: tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Dict, List, Union

import pytest

from site_graph.config import CrawlerConfig
from site_graph.crawler.errors import FetchError
from site_graph.crawler.fetcher import PageSource
from site_graph.crawler.models import FetchResponse

Page = Union[str, FetchResponse, Exception]


class StaticPageSource(PageSource):
    """
    In-memory page source for crawler tests.

    Maps URL -> HTML string, ready FetchResponse, or an exception to raise.
    Unknown URLs raise FetchError like an unreachable host would.
    """

    def __init__(self, pages: Dict[str, Page], delay: float = 0.0) -> None:
        self.pages = pages
        self.delay = delay
        self.fetched: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.entered = False
        self.exited = False

    async def __aenter__(self) -> StaticPageSource:
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited = True

    async def fetch(self, url: str, timeout: float) -> FetchResponse:
        self.fetched.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            page = self.pages.get(url)
            if page is None:
                raise FetchError(url, "connection refused")
            if isinstance(page, Exception):
                raise page
            if isinstance(page, FetchResponse):
                return page
            return FetchResponse(200, {"server": "test"}, page)
        finally:
            self.in_flight -= 1


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return CrawlerConfig(
        base_url="http://example.com",
        timeout=2.0,
        concurrency=4,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def article_html() -> str:
    """
    Provide a page with metadata, headings and a mix of anchors.
    """
    return """
    <html>
      <head>
        <title> Example   Article </title>
        <meta name="description" content="An article about things">
        <meta property="og:title" content="OG title">
      </head>
      <body>
        <h1>Main <b>heading</b></h1>
        <h2>First</h2>
        <h2></h2>
        <h3>Deep</h3>
        <a href="/about">About</a>
        <a href="https://external.org/x">External</a>
        <a href="javascript:void(0)">JS</a>
        <a href="mailto:me@example.com">Mail</a>
        <a>No href</a>
      </body>
    </html>
    """
