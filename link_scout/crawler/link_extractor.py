# link_scout/crawler/link_extractor.py
"""
Link extraction and acceptability filtering for LinkScout.
"""
from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

from link_scout.crawler.resolver import SCHEME_RE

__all__ = ("extract_links", "is_acceptable")

# "mailto:", "javascript:", "tel:" ... a scheme without an authority part
_OPAQUE_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+\-.]*:(?!//)")


def extract_links(html: str) -> List[str]:
    """
    Return the href of every <a> element that has one, in document order.

    The stdlib-backed ``html.parser`` tree builder tolerates broken markup,
    so malformed documents still yield whatever anchors can be recovered.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        links.append(href_val.strip())
    return links


def is_acceptable(href: str) -> bool:
    """
    Decide whether *href* is worth resolving.

    Rejects empty values, pure fragments and scheme-only links without ``//``
    (``mailto:``, ``javascript:``). Absolute ``scheme://`` links pass, and so
    do relative paths: those still have to survive URL validation once resolved.
    """
    if not href or href.startswith("#"):
        return False
    if SCHEME_RE.match(href):
        return True
    return not _OPAQUE_SCHEME_RE.match(href)
