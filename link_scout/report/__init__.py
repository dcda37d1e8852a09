# File: link_scout/report/__init__.py
"""link_scout.report: persisting scan results as plain text files and a JSON error list."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Union

from link_scout.crawler.models import ScanState

BROKEN_FILE = "broken-links.txt"
SCANNED_FILE = "scanned-links.txt"
VISITED_FILE = "visited-links.txt"
ERRORS_FILE = "scan-errors.txt"


def write_results(state: ScanState, directory: Union[str, Path]) -> List[Path]:
    """
    Write the non-empty parts of *state* into *directory* (created if needed).

    broken/scanned/visited URLs go one per line; errors as a JSON list of
    ``{"message", "context"}`` objects. Returns the written paths.
    """
    out = Path(directory)
    out.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []

    def _lines(name: str, urls: List[str]) -> None:
        if urls:
            path = out / name
            path.write_text("\n".join(urls), encoding="utf-8")
            written.append(path)

    _lines(BROKEN_FILE, state.broken)
    _lines(SCANNED_FILE, state.urls)
    _lines(VISITED_FILE, state.visited_urls)
    if state.errors:
        path = out / ERRORS_FILE
        path.write_text(
            json.dumps([e.to_dict() for e in state.errors], ensure_ascii=False),
            encoding="utf-8",
        )
        written.append(path)
    return written


__all__ = ["write_results", "BROKEN_FILE", "SCANNED_FILE", "VISITED_FILE", "ERRORS_FILE"]
