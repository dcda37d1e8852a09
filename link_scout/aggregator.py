# File: link_scout/aggregator.py
"""link_scout.aggregator: summary report built from a finished ScanState."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, TypedDict

from link_scout.crawler.models import ScanState


class ErrorInfo(TypedDict):
    """One entry of the error log."""

    message: str
    context: Optional[str]


@dataclass(slots=True)
class ScanReport:
    """Scan results: discovered, visited and broken URLs plus the error log."""

    seed: str = ""
    completed: bool = False
    count: int = 0
    discovered: List[str] = field(default_factory=list)
    visited: List[str] = field(default_factory=list)
    broken: List[str] = field(default_factory=list)
    errors: List[ErrorInfo] = field(default_factory=list)
    halted: Optional[str] = None

    def json(self, *, pretty: bool = False) -> str:
        """JSON representation of the report."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)

    def totals(self) -> Dict[str, int]:
        return {
            "discovered": len(self.discovered),
            "visited": len(self.visited),
            "broken": len(self.broken),
            "errors": len(self.errors),
        }


def aggregate_results(state: ScanState, seed: str = "") -> ScanReport:
    """Collect a ScanState into a ScanReport."""
    return ScanReport(
        seed=seed,
        completed=state.completed,
        count=state.count,
        discovered=state.urls,
        visited=state.visited_urls,
        broken=list(state.broken),
        errors=[ErrorInfo(message=e.message, context=e.context) for e in state.errors],
        halted=state.halted,
    )
