"""Index-addressable result list that builds objects from rows on access.

Query engines can return thousands of rows, and building a domain object
per row may trigger further lookups (recipient resolution). A caller that
renders a visible window only pays for the rows it reads.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Sequence
from typing import Any, Generic, TypeVar, overload

from message_search.domain.exceptions import ResultListClosedError, RowSourceError
from message_search.shared.rows.base import Row, RowSource, SequenceRowSource

logger = logging.getLogger(__name__)

T = TypeVar("T")

ResultBuilder = Callable[[Row], T]


def _never_called(row: Row) -> Any:
    raise AssertionError("builder of an empty result list was called")


class LazyResultList(Sequence, Generic[T]):
    """Owns a row source and a builder; builds one T per get().

    The size is read from the source once at construction. get(i) is valid
    for 0 <= i < size(); negative indexes are not wrapped. Each get(i) reads
    row i afresh and calls the builder, so repeated reads of the same index
    give value-equal results and do not disturb other reads.

    close() releases the row source exactly once. A list whose source
    cannot be counted is never returned: the source is closed and
    RowSourceError raised.
    """

    def __init__(self, source: RowSource, builder: ResultBuilder[T]) -> None:
        try:
            size = len(source)
        except Exception as exc:
            try:
                source.close()
            except Exception:
                logger.exception("Failed to close row source after count failure")
            raise RowSourceError(f"Could not count result rows: {exc}") from exc
        self._source = source
        self._builder = builder
        self._size = size
        self._closed = False
        self._close_lock = threading.Lock()

    @classmethod
    def empty(cls) -> "LazyResultList[Any]":
        """A zero-length list over an empty in-memory source."""
        return cls(SequenceRowSource.empty(), _never_called)

    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def get(self, index: int) -> T:
        """Build and return the element at index.

        Raises:
            IndexError: If index is outside [0, size()).
            ResultListClosedError: If the list was closed.
        """
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Result list indices must be integers, not {type(index).__name__}")
        if not 0 <= index < self._size:
            raise IndexError(f"Result index {index} out of range [0, {self._size})")
        if self._closed:
            raise ResultListClosedError()
        return self._builder(self._source.row_at(index))

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index: int | slice) -> T | list[T]:
        if isinstance(index, slice):
            return [self.get(i) for i in range(*index.indices(self._size))]
        return self.get(index)

    def __iter__(self) -> Iterator[T]:
        for i in range(self._size):
            yield self.get(i)

    def window(self, start: int, count: int) -> list[T]:
        """Build up to count elements starting at start (for paged rendering)."""
        if start < 0 or count < 0:
            raise ValueError("start and count must be non-negative")
        return self[start : start + count]

    def close(self) -> None:
        """Release the row source. Safe to call more than once."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._source.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "LazyResultList[T]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<LazyResultList size={self._size} {state}>"
