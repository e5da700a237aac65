"""
Browser page source: headless Chromium through Playwright.

Scripts run, so links injected on the client side are discovered too.
"""
from __future__ import annotations

from typing import Optional

from playwright.async_api import Browser, Error as PlaywrightError, Playwright, Response
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from site_graph.crawler.errors import FetchError
from site_graph.crawler.fetcher import PageSource, select_headers
from site_graph.crawler.models import FetchResponse

_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]
_VIEWPORT = {"width": 1920, "height": 1080}


class BrowserPageSource(PageSource):
    """One browser per crawl, a fresh tab per fetched URL."""

    def __init__(self, user_agent: Optional[str] = None) -> None:
        self.user_agent = user_agent
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    async def __aenter__(self) -> BrowserPageSource:
        self.playwright = await async_playwright().start()
        try:
            self.browser = await self.playwright.chromium.launch(headless=True, args=_LAUNCH_ARGS)
        except PlaywrightError:
            await self.playwright.stop()
            self.playwright = None
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.browser:
            await self.browser.close()
        if self.playwright:
            await self.playwright.stop()

    async def fetch(self, url: str, timeout: float) -> FetchResponse:
        if not self.browser:
            raise RuntimeError("Browser not started")
        page = await self.browser.new_page(viewport=_VIEWPORT, user_agent=self.user_agent)
        try:
            response = await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
            if response is None:
                raise FetchError(url, "navigation produced no response")
            first = await self._first_response(response)
            content = await page.content()
            headers = select_headers(await first.all_headers())
            return FetchResponse(first.status, headers, content)
        except PlaywrightTimeoutError as exc:
            raise FetchError(url, f"timed out after {timeout}s") from exc
        except PlaywrightError as exc:
            raise FetchError(url, exc.message) from exc
        finally:
            await page.close()

    @staticmethod
    async def _first_response(response: Response) -> Response:
        """Walk back the redirect chain to the response for the requested URL."""
        request = response.request
        while request.redirected_from is not None:
            request = request.redirected_from
        first = await request.response()
        return first or response
