"""Failure collection and result aggregation."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, Iterator

from ..core.models import RunResult


class FailureSet:
    """Thread-safe set of output paths that failed to render."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._paths: set[Path] = set()

    def add(self, path: Path) -> None:
        with self._lock:
            self._paths.add(path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def __iter__(self) -> Iterator[Path]:
        with self._lock:
            snapshot = sorted(self._paths)
        return iter(snapshot)


def aggregate(rendered: Iterable[Path], failures: Iterable[Path]) -> RunResult:
    """Merge per-template outcomes into a single run result.

    Args:
        rendered: Output paths that were written
        failures: Output paths that failed

    Returns:
        Run result with both lists sorted
    """
    return RunResult(rendered=sorted(rendered), failed=sorted(failures))
