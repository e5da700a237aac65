"""
Fetcher module: page sources that turn a URL into status, headers and document content.

Two variants share one contract:

* :class:`HttpPageSource`: aiohttp request plus raw markup, no scripts executed.
* :class:`~site_graph.crawler.browser.BrowserPageSource`: headless Chromium
  via Playwright, returns the rendered DOM.

Both raise :class:`FetchError` on timeout or transport failure.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Sequence

from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from site_graph.config import CrawlerConfig
from site_graph.crawler.errors import FetchError
from site_graph.crawler.models import FetchResponse

logger = logging.getLogger("SiteGraph")

#: response headers passed on to the crawler
KEPT_HEADERS: Sequence[str] = ("server", "content-type")
_HTML_TYPES = ("text/html", "application/xhtml+xml")


def select_headers(headers) -> Dict[str, str]:
    """Lower-cased subset of *headers* limited to :data:`KEPT_HEADERS`."""
    selected: Dict[str, str] = {}
    for name, value in headers.items():
        key = name.lower()
        if key in KEPT_HEADERS and key not in selected:
            selected[key] = value
    return selected


class PageSource:
    """Base class for page sources. Use as an async context manager."""

    async def __aenter__(self) -> PageSource:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def fetch(self, url: str, timeout: float) -> FetchResponse:
        raise NotImplementedError


class HttpPageSource(PageSource):
    """Plain HTTP page source with retries/backoff on transport errors."""

    def __init__(self, user_agent: str, retry_times: int = 0) -> None:
        self.user_agent = user_agent
        self.retry_times = retry_times
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> HttpPageSource:
        self.session = ClientSession(
            headers={"User-Agent": self.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str, timeout: float) -> FetchResponse:
        """
        GET the URL following redirects.

        Status and headers belong to the response for *url* itself (first hop
        of a redirect chain), the content to the final document.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        attempts = 0
        while True:
            try:
                async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                    first: ClientResponse = resp.history[0] if resp.history else resp
                    content = ""
                    ctype = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if ctype in _HTML_TYPES or not ctype:
                        content = await resp.text(errors="replace")
                    return FetchResponse(first.status, select_headers(first.headers), content)
            except asyncio.TimeoutError as exc:
                # no retry on timeout
                raise FetchError(url, f"timed out after {timeout}s") from exc
            except ClientError as exc:
                attempts += 1
                if attempts > self.retry_times:
                    raise FetchError(url, str(exc) or type(exc).__name__) from exc
                backoff = min(2**attempts, 60)
                logger.debug("Retry %d/%d for %s after %d s", attempts, self.retry_times, url, backoff)
                await asyncio.sleep(backoff)


def build_page_source(config: CrawlerConfig) -> PageSource:
    """Pick the page source variant named by ``config.page_source``."""
    if config.page_source == "browser":
        # playwright is an optional extra, only needed for this variant
        from site_graph.crawler.browser import BrowserPageSource

        return BrowserPageSource(user_agent=config.user_agent)
    return HttpPageSource(user_agent=config.user_agent, retry_times=config.retry_times)
