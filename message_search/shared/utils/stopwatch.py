"""Elapsed-time splits for query timing logs."""

import logging
import threading
import time


class Stopwatch:
    """Record named splits measured from a common start and log them once.

    Splits are elapsed times since start, not since the previous split, so
    branches that finish on different threads report comparable numbers.
    split() is safe to call from several threads.
    """

    def __init__(self, title: str) -> None:
        self.title = title
        self._start = time.perf_counter()
        self._splits: list[tuple[str, float]] = []
        self._lock = threading.Lock()

    def split(self, label: str) -> float:
        """Record a split and return its elapsed milliseconds."""
        elapsed_ms = (time.perf_counter() - self._start) * 1000
        with self._lock:
            self._splits.append((label, elapsed_ms))
        return elapsed_ms

    @property
    def splits(self) -> list[tuple[str, float]]:
        with self._lock:
            return list(self._splits)

    def summary(self) -> str:
        """Format as "[title] a: 1 ms, b: 3 ms, total: 4 ms"."""
        total_ms = (time.perf_counter() - self._start) * 1000
        parts = [f"{label}: {ms:.0f} ms" for label, ms in self.splits]
        parts.append(f"total: {total_ms:.0f} ms")
        return f"[{self.title}] " + ", ".join(parts)

    def stop(self, logger: logging.Logger, level: int = logging.DEBUG) -> None:
        """Log the summary on the given logger."""
        if logger.isEnabledFor(level):
            logger.log(level, self.summary())
