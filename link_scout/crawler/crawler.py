# === FILE: link_scout/crawler/crawler.py ===
from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, List, Optional

from aiohttp import ClientSession, ClientTimeout, TCPConnector

from link_scout.config import ScannerConfig, restriction_base
from link_scout.crawler.fetcher import Fetcher
from link_scout.crawler.link_extractor import extract_links, is_acceptable
from link_scout.crawler.models import ErrorContext, ScanState
from link_scout.crawler.resolver import HostRestriction, resolve
from link_scout.logger import logger
from link_scout.utils import current_memory_usage, is_valid_url, strip_trailing_slash

__all__ = ("LinkCrawler",)

MemoryProbe = Callable[[], int]


class LinkCrawler:
    """
    Single-threaded link crawler driven by an explicit worklist.

    One fetch is in flight at a time. With ``order="dfs"`` the worklist is a
    stack (links of a page are explored in document order before their
    siblings' subtrees), with ``order="bfs"`` it is a FIFO queue. All mutable
    results live in the ``ScanState`` passed in, never on the class.
    """

    def __init__(
        self,
        config: ScannerConfig,
        state: ScanState,
        memory_ceiling: int,
        memory_probe: Optional[MemoryProbe] = None,
    ) -> None:
        self.config = config
        self.state = state
        self.memory_ceiling = memory_ceiling
        self.memory_probe = memory_probe or current_memory_usage
        self.restriction = HostRestriction(restriction_base(config.url, config.host))
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None

    async def __aenter__(self) -> LinkCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            connector=TCPConnector(ssl=self.config.verify_ssl),
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    # ------------------------------------------------------------------ #
    # stopping conditions
    # ------------------------------------------------------------------ #

    def _should_stop(self) -> bool:
        state = self.state
        if state.halted is not None:
            return True
        if state.cancelled:
            return True
        if self.config.max_scan and state.count >= self.config.max_scan:
            logger.warning("Maximum scan limit (%d) reached", self.config.max_scan)
            state.halt("Maximum scan limit exceeded.", ErrorContext.SCAN_LIMIT)
            return True
        usage = self.memory_probe()
        if usage >= self.memory_ceiling:
            logger.warning("Memory usage %d B exceeds ceiling %d B", usage, self.memory_ceiling)
            state.halt("Memory usage exceeded limit. Stopping extraction.", ErrorContext.MEMORY_LIMIT)
            return True
        return False

    # ------------------------------------------------------------------ #
    # traversal
    # ------------------------------------------------------------------ #

    async def crawl(self) -> ScanState:
        """Traverse from the seed until the worklist drains or a ceiling fires."""
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        state = self.state
        seed = strip_trailing_slash(self.config.url)
        logger.info("Starting scan for broken links on: %s", seed)
        start = time.monotonic()

        worklist: Deque[str] = deque([seed])
        while worklist:
            if self._should_stop():
                break
            url = worklist.pop() if self.config.order == "dfs" else worklist.popleft()
            if state.is_visited(url):
                continue
            if not self.restriction.allows(url):
                logger.info("Skipping url: %s", url)
                continue

            frontier = await self._visit(url)
            if self.config.order == "dfs":
                worklist.extend(reversed(frontier))
            else:
                worklist.extend(frontier)

        duration = time.monotonic() - start
        logger.info(
            "Finished: %d visited, %d discovered, %d broken in %.2f s",
            len(state.visited), len(state.discovered), len(state.broken), duration,
        )
        return state

    async def _visit(self, url: str) -> List[str]:
        """Fetch one page and return its newly discovered links."""
        state = self.state
        try:
            result = await self.fetcher.fetch(url)
        finally:
            state.mark_visited(url)

        if not result.ok:
            state.add_error(result.error or "[Error] Empty response.", url)
            return []
        if result.not_found:
            logger.info("[Broken] url: %s", url)
            state.add_broken(url)
            return []

        frontier: List[str] = []
        for href in extract_links(result.body):
            if self._should_stop():
                break
            if not is_acceptable(href):
                continue
            absolute = strip_trailing_slash(resolve(href, self.restriction.base))
            if not is_valid_url(absolute) or not self.restriction.allows(absolute):
                logger.debug("Skipping URL: %s", absolute)
                continue
            if state.add_discovered(absolute):
                logger.debug("Extracted URL: %s", absolute)
                frontier.append(absolute)
        return [link for link in frontier if not state.is_visited(link)]
