"""
URL normalization and origin scoping utilities for SiteGraph.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

# anchors with these schemes never point at a fetchable document
_NON_FETCHABLE = ("javascript:", "mailto:", "tel:", "data:")
_DEFAULT_PORTS = {"http": 80, "https": 443}
# reserved characters and existing %XX escapes stay as written
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


def is_fetchable_href(href: str) -> bool:
    """Return False for empty hrefs and script/mail/phone/data pseudo-links."""
    raw = href.strip().lower()
    return bool(raw) and not raw.startswith(_NON_FETCHABLE)


def normalize_url(href: str, base: str) -> Optional[str]:
    """
    Resolve *href* against *base* into a canonical absolute URL.

    Scheme and host are lower-cased, default ports dropped and an empty
    http(s) path becomes ``/``. Spaces and non-ASCII characters in path,
    query and fragment are percent-encoded as UTF-8, so ``/a b`` and ``/a%20b``
    give the same key.
    Returns None if the result cannot be parsed.
    """
    try:
        parts = urlsplit(urljoin(base, href.strip()))
        hostname = parts.hostname
        port = parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if not scheme:
        return None
    if scheme not in _DEFAULT_PORTS:
        return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))
    if not hostname:
        return None

    netloc = hostname
    if ":" in hostname:
        netloc = f"[{hostname}]"
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    if parts.username or parts.password:
        userinfo = parts.username or ""
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"
    path = quote(parts.path or "/", safe=_PATH_SAFE)
    query = quote(parts.query, safe=_QUERY_SAFE)
    fragment = quote(parts.fragment, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, fragment))


def hostname_of(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def in_scope(url: str, root_url: str) -> bool:
    """True if *url* is http(s) on exactly the same hostname as *root_url*."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return False
    if parts.scheme.lower() not in _DEFAULT_PORTS:
        return False
    return host is not None and host == hostname_of(root_url)
