# link_scout/crawler/resolver.py
"""
URL resolution against a base host and host-restriction checks.

Resolution is deliberately simple segment popping, not RFC 3986:

* an href with ``scheme://`` is returned unchanged;
* ``//host/path`` borrows the scheme of the base;
* ``/path`` is appended to the origin of the base;
* anything else is appended to the base directory after ``./`` segments
  are dropped and each leading ``../`` pops one base segment (never past
  the origin root).
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

__all__ = ("resolve", "HostRestriction")

SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+\-.]*://")

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _split_base(base: str) -> Tuple[str, str, List[str]]:
    parts = urlsplit(base)
    origin = f"{parts.scheme}://{parts.netloc}"
    segments = [s for s in parts.path.split("/") if s]
    return parts.scheme, origin, segments


def _drop_dot_segments(href: str) -> str:
    while "/./" in href:
        href = href.replace("/./", "/")
    while href.startswith("./"):
        href = href[2:]
    if href == ".":
        return ""
    return href


def resolve(href: str, base: str) -> str:
    """Turn *href* into an absolute URL using *base* (``scheme://host[/path]``)."""
    if SCHEME_RE.match(href):
        return href

    scheme, origin, segments = _split_base(base)

    if href.startswith("//"):
        return f"{scheme}:{href}"
    if href.startswith("/"):
        return origin + href

    relative = _drop_dot_segments(href)
    while relative.startswith("../") or relative == "..":
        if segments:
            segments.pop()
        relative = relative[3:]
        relative = _drop_dot_segments(relative)

    directory = "/".join(segments)
    prefix = f"{origin}/{directory}/" if directory else f"{origin}/"
    return prefix + relative.lstrip("/")


class HostRestriction:
    """
    Scope check for crawl candidates.

    A URL is in scope when scheme, host and effective port match the
    restriction exactly and its path equals the restriction path or
    continues it past a ``/``. ``https://example.com/docs`` therefore
    admits ``/docs`` and ``/docs/a`` but neither ``/docsearch`` nor
    ``sub.example.com``.
    """

    def __init__(self, base: str) -> None:
        self.base = base
        parts = urlsplit(base)
        self._scheme = parts.scheme.lower()
        self._host = (parts.hostname or "").lower()
        self._port = self._effective_port(self._scheme, parts)
        self._path = parts.path.rstrip("/")

    @staticmethod
    def _effective_port(scheme: str, parts) -> Optional[int]:
        try:
            port = parts.port
        except ValueError:
            return None
        return port if port is not None else _DEFAULT_PORTS.get(scheme)

    def allows(self, url: str) -> bool:
        if not self._host:
            return False
        parts = urlsplit(url)
        scheme = parts.scheme.lower()
        if scheme != self._scheme or (parts.hostname or "").lower() != self._host:
            return False
        if self._effective_port(scheme, parts) != self._port:
            return False
        path = parts.path.rstrip("/")
        return not self._path or path == self._path or path.startswith(self._path + "/")

    def __repr__(self) -> str:
        return f"HostRestriction({self.base!r})"
