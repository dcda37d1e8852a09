# File: link_scout/engine.py
"""link_scout.engine: facade that validates a scan, runs it and exposes its results."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, List, Optional, Type, Union

from link_scout.config import ScannerConfig
from link_scout.crawler.crawler import MemoryProbe
from link_scout.crawler.models import ErrorContext, ErrorRecord, ScanState
from link_scout.logger import logger
from link_scout.report import write_results
from link_scout.scanner import start_scan

__all__ = ["Engine", "ScannerError", "ScanStartupError", "ScanTimeoutError"]


class ScannerError(Exception):
    """Base class for scanner failures surfaced to the caller."""


class ScanStartupError(ScannerError, RuntimeError):
    """The scan cannot start: empty seed, unbounded memory or a scan already running."""


class ScanTimeoutError(ScannerError, TimeoutError):
    """wait() gave up before the scan completed."""


class Engine:
    """
    Broken-link scanner for one seed URL.

    Every start owns a fresh ScanState, so separate Engine instances can
    scan concurrently in the same process. With ``interactive=True`` fatal
    conditions are logged instead of raised (start() then returns False).
    """

    def __init__(
        self,
        url: str,
        host: str = "",
        max_scan: int = 0,
        *,
        config: Optional[ScannerConfig] = None,
        interactive: bool = False,
        memory_probe: Optional[MemoryProbe] = None,
    ) -> None:
        base = config or ScannerConfig()
        self.config = ScannerConfig(
            **{**base.model_dump(), "url": url, "host": host, "max_scan": max_scan}
        )
        self.interactive = interactive
        self.memory_probe = memory_probe
        self._state = ScanState()

    @classmethod
    def from_config(cls, config: ScannerConfig, **kwargs) -> Engine:
        return cls(config.url, config.host, config.max_scan, config=config, **kwargs)

    # ------------------------------------------------------------------ #
    # accessors
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> ScanState:
        return self._state

    def is_completed(self) -> bool:
        return self._state.completed

    @property
    def broken_links(self) -> List[str]:
        return list(self._state.broken)

    @property
    def visited_urls(self) -> List[str]:
        return self._state.visited_urls

    @property
    def errors(self) -> List[ErrorRecord]:
        return list(self._state.errors)

    @property
    def urls(self) -> List[str]:
        return self._state.urls

    @property
    def count(self) -> int:
        return self._state.count

    def set_path(self, path: Union[str, Path]) -> Engine:
        """Directory where a successful scan persists its results."""
        self.config = self.config.model_copy(update={"output_dir": Path(path)})
        return self

    # ------------------------------------------------------------------ #
    # running
    # ------------------------------------------------------------------ #

    def _fatal(self, message: str, exc_type: Type[ScannerError] = ScanStartupError) -> None:
        logger.error(message)
        if not self.interactive:
            raise exc_type(message)

    def start(self) -> bool:
        """Run the scan to completion (or halt) and report success."""
        return asyncio.run(self.start_async())

    async def start_async(self) -> bool:
        if not self.config.url:
            self._fatal("Invalid start url, the start url cannot be empty.")
            return False
        if self.config.memory_budget is None:
            self._state = ScanState()
            self._state.add_error("No memory limit is enforced", ErrorContext.NO_MEMORY_ASSIGNED.value)
            self._fatal("No memory limit is enforced")
            return False

        state = self._state = ScanState(started=True)
        try:
            await start_scan(self.config, state, self.memory_probe)
        except asyncio.CancelledError:
            state.cancelled = True
            raise
        finally:
            state.started = False

        if state.cancelled:
            logger.warning("Scan of %s was cancelled", self.config.url)
            return False
        state.completed = True

        if state.count == 0:
            logger.warning("Failed unable to scan url: %s or no link was found.", self.config.url)
            return False

        if self.config.output_dir is not None:
            for path in write_results(state, self.config.output_dir):
                logger.info("Saved %s", path)

        logger.info("Scan completed successfully! Total number of scans (%d)", state.count)
        return True

    def wait(self, timeout: float = 0, on_complete: Optional[Callable[[Engine], None]] = None) -> None:
        """Blocking variant of :meth:`wait_async`."""
        asyncio.run(self.wait_async(timeout, on_complete))

    async def wait_async(
        self, timeout: float = 0, on_complete: Optional[Callable[[Engine], None]] = None
    ) -> None:
        """
        Run the scan as a task and wait up to *timeout* seconds (0 = no limit).

        On timeout the task is cancelled inside its worklist loop and
        ScanTimeoutError is raised; *on_complete(engine)* runs only after a
        completed scan.
        """
        if self._state.started:
            self._fatal("Scan has started already, you cannot call this method while scan is running.")
            return

        task = asyncio.create_task(self.start_async())
        try:
            await asyncio.wait_for(task, timeout if timeout > 0 else None)
        except asyncio.TimeoutError:
            state = self._state
            state.completed = False
            state.started = False
            state.add_error("Maximum wait timeout reached.", ErrorContext.CANCELLED.value)
            self._fatal("Maximum wait timeout reached.", ScanTimeoutError)
            return

        if self._state.completed and on_complete is not None:
            on_complete(self)

    def cancel(self) -> None:
        """Ask a running scan to stop before its next work item."""
        if self._state.started and not self._state.cancelled:
            self._state.cancelled = True
            self._state.add_error("Scan cancelled.", ErrorContext.CANCELLED.value)
            logger.info("Cancellation requested for %s", self.config.url)
