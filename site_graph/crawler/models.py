"""
Data models for the SiteGraph crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

HEADING_LEVELS = ("h1", "h2", "h3", "h4", "h5", "h6")

#: status code recorded for pages that could not be fetched or processed
FAILURE_STATUS = 500


def empty_headings() -> Dict[str, List[str]]:
    return {level: [] for level in HEADING_LEVELS}


@dataclass(slots=True)
class FetchResponse:
    """What a page source returns for one URL."""

    status_code: int
    headers: Dict[str, str]
    content: str


@dataclass(slots=True)
class ExtractedPage:
    """Metadata pulled out of a page's markup, links still raw."""

    title: str = ""
    description: str = ""
    headings: Dict[str, List[str]] = field(default_factory=empty_headings)
    links: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class PageResult:
    """One crawled URL with its metadata and link graph edges."""

    url: str
    status_code: int
    title: str = ""
    description: str = ""
    server: Optional[str] = None
    headings: Dict[str, List[str]] = field(default_factory=empty_headings)
    outgoing_links: List[str] = field(default_factory=list)
    incoming_links: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, url: str, error: str) -> PageResult:
        """Запись-заглушка для страницы, которую не удалось загрузить или разобрать."""
        return cls(url=url, status_code=FAILURE_STATUS, error=error)

    @property
    def is_failure(self) -> bool:
        # a real 500 response from the server has no error attached
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
