"""Rows and row sources: the opaque result shape returned by query engines.

A row source is an ordered, finite, random-access sequence of rows owned by
whoever receives it; it must be closed when no longer needed.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Protocol, runtime_checkable

from message_search.domain.exceptions import MissingColumnError

_MISSING = object()


class Row:
    """One result row: ordered column names plus values.

    Supports positional access (row[1]), named access (row["snippet"]) and
    strict named access via require(). Immutable.
    """

    __slots__ = ("_columns", "_values", "_index")

    def __init__(self, columns: Sequence[str], values: Sequence[Any]) -> None:
        if len(columns) != len(values):
            raise ValueError(
                f"Row has {len(values)} values for {len(columns)} columns"
            )
        self._columns = tuple(columns)
        self._values = tuple(values)
        self._index = {name: i for i, name in enumerate(self._columns)}

    @property
    def columns(self) -> tuple[str, ...]:
        return self._columns

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, key: int | str) -> Any:
        if isinstance(key, str):
            return self.require(key)
        return self._values[key]

    def require(self, name: str) -> Any:
        """Return the value of a column that must be present.

        Raises:
            MissingColumnError: If the row has no column with this name.
        """
        pos = self._index.get(name)
        if pos is None:
            raise MissingColumnError(name, self._columns)
        return self._values[pos]

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of a column, or default when it is absent."""
        pos = self._index.get(name)
        return default if pos is None else self._values[pos]

    def as_dict(self) -> dict[str, Any]:
        return dict(zip(self._columns, self._values))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Row):
            return NotImplemented
        return self._columns == other._columns and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._columns, self._values))

    def __repr__(self) -> str:
        return f"Row({self.as_dict()!r})"


@runtime_checkable
class RowSource(Protocol):
    """Protocol for row sources produced by data-source collaborators."""

    def __len__(self) -> int:
        """Number of rows."""
        ...

    def row_at(self, position: int) -> Row:
        """Return the row at position; IndexError outside [0, len)."""
        ...

    def close(self) -> None:
        """Release the source. Idempotent."""
        ...

    @property
    def closed(self) -> bool:
        """True once close() has run."""
        ...


class SequenceRowSource:
    """Row source over rows already held in memory (e.g. a fetched result)."""

    def __init__(
        self,
        columns: Sequence[str],
        rows: Iterable[Sequence[Any]],
    ) -> None:
        self.columns = tuple(columns)
        self._rows: list[Row] | None = [Row(self.columns, values) for values in rows]
        self._count = len(self._rows)

    @classmethod
    def empty(cls, columns: Sequence[str] = ()) -> "SequenceRowSource":
        return cls(columns, ())

    @classmethod
    def from_dicts(cls, records: Sequence[dict[str, Any]]) -> "SequenceRowSource":
        """Build from dicts sharing the key order of the first record."""
        if not records:
            return cls.empty()
        columns = tuple(records[0])
        return cls(columns, [tuple(r[c] for c in columns) for r in records])

    def __len__(self) -> int:
        return self._count

    def row_at(self, position: int) -> Row:
        if self._rows is None:
            raise ValueError("Row source is closed")
        if not 0 <= position < self._count:
            raise IndexError(
                f"Row position {position} out of range [0, {self._count})"
            )
        return self._rows[position]

    def close(self) -> None:
        self._rows = None

    @property
    def closed(self) -> bool:
        return self._rows is None
