# === FILE: link_scout/scanner.py ===
"""
Wrapper coroutine that runs one crawl for a configuration.
"""
from typing import Optional

from link_scout.config import ScannerConfig
from link_scout.crawler.crawler import LinkCrawler, MemoryProbe
from link_scout.crawler.models import ScanState

MEMORY_CEILING_RATIO = 0.7


def memory_ceiling(budget: int) -> int:
    """Byte threshold above which a scan halts: 70% of the budget."""
    return round(budget * MEMORY_CEILING_RATIO)


async def start_scan(
    cfg: ScannerConfig,
    state: Optional[ScanState] = None,
    memory_probe: Optional[MemoryProbe] = None,
) -> ScanState:
    """
    Run the crawler for *cfg* and return the filled ScanState.

    Parameters
    ----------
    cfg : ScannerConfig
        Scan configuration; ``cfg.memory_budget`` must be bounded.
    state : ScanState, optional
        State to fill; a fresh one is created when omitted.
    memory_probe : callable, optional
        Returns current memory usage in bytes (psutil RSS by default).
    """
    budget = cfg.memory_budget
    if budget is None:
        raise ValueError("No memory limit is enforced")
    state = state if state is not None else ScanState()
    async with LinkCrawler(cfg, state, memory_ceiling(budget), memory_probe) as crawler:
        return await crawler.crawl()


__all__ = ["start_scan", "memory_ceiling", "MEMORY_CEILING_RATIO"]
