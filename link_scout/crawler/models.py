# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ErrorContext(str, Enum):
    """Contexts for error records that are not tied to a single URL."""

    SCAN_LIMIT = "scan_limit"
    MEMORY_LIMIT = "memory_limit"
    NO_MEMORY_ASSIGNED = "no_memory_assigned"
    CANCELLED = "cancelled"


@dataclass(slots=True)
class FetchResult:
    """Outcome of one GET: a body and status code, or a failure reason."""

    url: str
    body: str = ""
    status: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def not_found(self) -> bool:
        return self.ok and self.status == 404

    @classmethod
    def failure(cls, url: str, reason: str) -> FetchResult:
        return cls(url=url, error=reason)


@dataclass(slots=True)
class ErrorRecord:
    """A recoverable failure or halt noted during a scan."""

    message: str
    context: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


@dataclass(slots=True)
class ScanState:
    """
    Everything one scan accumulates.

    ``visited`` and ``discovered`` are insertion-ordered sets (dict keys).
    ``count`` is the number of links ever accepted; a link that later turns
    out broken leaves ``discovered`` but keeps counting toward ``max_scan``.
    """

    visited: Dict[str, bool] = field(default_factory=dict)
    discovered: Dict[str, None] = field(default_factory=dict)
    broken: List[str] = field(default_factory=list)
    errors: List[ErrorRecord] = field(default_factory=list)
    count: int = 0
    started: bool = False
    completed: bool = False
    cancelled: bool = False
    halted: Optional[str] = None

    def mark_visited(self, url: str) -> None:
        self.visited[url] = True

    def is_visited(self, url: str) -> bool:
        return url in self.visited

    def add_discovered(self, url: str) -> bool:
        """Record *url*; returns False if it was already known."""
        if url in self.discovered or url in self.broken:
            return False
        self.discovered[url] = None
        self.count += 1
        return True

    def add_broken(self, url: str) -> None:
        self.discovered.pop(url, None)
        if url not in self.broken:
            self.broken.append(url)

    def add_error(self, message: str, context: Optional[str] = None) -> ErrorRecord:
        record = ErrorRecord(message, context)
        self.errors.append(record)
        return record

    def halt(self, message: str, context: ErrorContext) -> None:
        """Stop the scan for good; only the first halt is recorded."""
        if self.halted is None:
            self.halted = context.value
            self.add_error(message, context.value)

    @property
    def urls(self) -> List[str]:
        return list(self.discovered)

    @property
    def visited_urls(self) -> List[str]:
        return list(self.visited)
