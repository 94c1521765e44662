"""Stopwatch helpers for the benchmark harness."""
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable

__all__ = ["time_operation", "Stopwatch"]

logger = logging.getLogger(__name__)


async def time_operation(message: str, action: Callable[[], Awaitable[Any]]) -> float:
    """Await *action* once and return the elapsed wall-clock time in seconds."""
    start = time.perf_counter()
    await action()
    elapsed = time.perf_counter() - start
    logger.info("Testing %s - Elapsed = %.6fs", message, elapsed)
    return elapsed


class Stopwatch:
    """Collects per-call latencies (milliseconds) across ``with`` blocks.

    >>> sw = Stopwatch()
    >>> with sw:
    ...     pass
    >>> len(sw.samples)
    1
    """

    def __init__(self):
        self.samples: list[float] = []
        self._start = 0.0

    def __enter__(self) -> "Stopwatch":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc) -> None:
        self.samples.append((time.perf_counter() - self._start) * 1000)

    @property
    def total(self) -> float:
        return sum(self.samples)
