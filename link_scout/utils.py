# File: link_scout/utils.py
"""link_scout.utils: helpers for URL checks, memory-size strings and process memory sampling."""

from __future__ import annotations

import re
from typing import Optional, Sequence, Union
from urllib.parse import urlparse

import psutil

from link_scout.logger import logger

__all__: Sequence[str] = (
    "parse_size",
    "is_valid_url",
    "strip_trailing_slash",
    "current_memory_usage",
)

_SIZE_RE = re.compile(r"^\s*(-?\d+)\s*([BKMG]?)\s*$", re.IGNORECASE)
_MULTIPLIERS = {"": 1, "B": 1, "K": 1024, "M": 1024**2, "G": 1024**3}


def parse_size(value: Union[str, int, None]) -> Optional[int]:
    """Convert a memory size (``"128M"``, ``"1G"``, ``4096``) to bytes.

    ``None`` and any negative value mean "unbounded" and yield ``None``.
    Raises ``ValueError`` for strings that are not sizes.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid memory size: {value!r}")
    if isinstance(value, int):
        return None if value < 0 else value
    match = _SIZE_RE.match(value)
    if not match:
        raise ValueError(f"Invalid memory size: {value!r}")
    number, unit = int(match.group(1)), match.group(2).upper()
    if number < 0:
        return None
    return number * _MULTIPLIERS[unit]


def is_valid_url(url: str) -> bool:
    """Checks that *url* is an absolute http(s) URL with a host and no whitespace."""
    if not url or any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
        # .port raises ValueError for garbage like "host:abc"
        parsed.port
    except ValueError:
        logger.debug("Malformed URL: %s", url)
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.hostname)


def strip_trailing_slash(url: str) -> str:
    return url.rstrip("/")


def current_memory_usage() -> int:
    """Resident set size of the current process, in bytes."""
    return psutil.Process().memory_info().rss
