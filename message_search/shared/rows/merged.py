"""Concatenation of same-shaped row sources into one virtual source."""

from __future__ import annotations

import bisect
import itertools
import logging
from collections.abc import Sequence

from message_search.domain.exceptions import RowSourceError
from message_search.shared.rows.base import Row, RowSource

logger = logging.getLogger(__name__)


def _close_all(sources: Sequence[RowSource]) -> None:
    for source in sources:
        try:
            source.close()
        except Exception:
            logger.exception("Failed to close row source %r", source)


class MergedRowSource:
    """Present several row sources as one, in source order.

    Source 1's rows occupy positions [0, n1), source 2's rows [n1, n1 + n2),
    and so on. Rows are neither reordered nor deduplicated: the same logical
    entity returned by two sources appears twice. Column shapes are not
    checked; mixing shapes makes named access on the merged rows undefined.

    Sizes are read once here; the inputs are treated as fixed.
    """

    def __init__(self, sources: Sequence[RowSource]) -> None:
        if not sources:
            raise ValueError("MergedRowSource needs at least one source")
        self._sources = tuple(sources)
        try:
            sizes = [len(source) for source in self._sources]
        except Exception as exc:
            _close_all(self._sources)
            raise RowSourceError(
                f"Could not count rows of a merged source: {exc}", source="merged"
            ) from exc
        # _ends[k] is the first position past source k.
        self._ends = list(itertools.accumulate(sizes))
        self._closed = False

    def __len__(self) -> int:
        return self._ends[-1]

    def locate(self, position: int) -> tuple[int, int]:
        """Map a merged position to (source index, local position)."""
        if not 0 <= position < len(self):
            raise IndexError(f"Row position {position} out of range [0, {len(self)})")
        k = bisect.bisect_right(self._ends, position)
        start = self._ends[k - 1] if k else 0
        return k, position - start

    def row_at(self, position: int) -> Row:
        k, local = self.locate(position)
        return self._sources[k].row_at(local)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        _close_all(self._sources)

    @property
    def closed(self) -> bool:
        return self._closed


def merge(sources: Sequence[RowSource]) -> MergedRowSource:
    """Concatenate sources; see MergedRowSource."""
    return MergedRowSource(sources)
