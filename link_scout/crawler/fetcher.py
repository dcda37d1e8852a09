# link_scout/crawler/fetcher.py
"""
Fetcher module: a single GET per URL, redirects followed, bounded by a timeout.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from link_scout.config import ScannerConfig
from link_scout.crawler.models import FetchResult
from link_scout.logger import logger

__all__ = ("Fetcher", "HTML_TYPES")

HTML_TYPES = ("text/html", "application/xhtml+xml")


class Fetcher:
    """Issues GET requests through a shared session and reports FetchResult."""

    def __init__(self, session: ClientSession, config: ScannerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> FetchResult:
        """
        Fetch *url* following redirects.

        A 404 is a normal result (the caller decides it is broken). Only HTML
        bodies are read; any other content type comes back with its status and
        an empty body. Transport errors, timeouts and empty HTML bodies come
        back as failures.
        """
        try:
            async with self.session.get(url, allow_redirects=True) as resp:
                status = resp.status
                mime = resp.content_type
                is_html = mime in HTML_TYPES
                body = await resp.text(errors="replace") if is_html else ""
        except asyncio.TimeoutError:
            logger.warning("Timed out after %.1f s: %s", self.config.timeout, url)
            return FetchResult.failure(url, f"[Error] Request timed out after {self.config.timeout} s.")
        except ClientError as exc:
            logger.warning("Failed %s: %s", url, exc)
            return FetchResult.failure(url, f"[Error] {str(exc) or type(exc).__name__}")

        if not is_html:
            logger.debug("Not parsing %s response from %s", mime, url)
            return FetchResult(url=url, status=status)
        if status == 404:
            return FetchResult(url=url, body=body, status=status)
        if not body:
            logger.warning("Empty response from %s (HTTP %s)", url, status)
            return FetchResult.failure(url, "[Error] Empty response.")
        return FetchResult(url=url, body=body, status=status)
