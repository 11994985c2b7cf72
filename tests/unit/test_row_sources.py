"""Tests for Row, SequenceRowSource and MergedRowSource."""

import pytest

from message_search.domain.exceptions import MissingColumnError, RowSourceError
from message_search.shared.rows import MergedRowSource, Row, RowSource, SequenceRowSource, merge

from tests.helpers import TrackingRowSource, UncountableRowSource


class TestRow:
    def test_positional_and_named_access(self) -> None:
        row = Row(("id", "address"), (7, "+1555"))
        assert row[0] == 7
        assert row[1] == "+1555"
        assert row["address"] == "+1555"
        assert len(row) == 2

    def test_require_missing_column_raises(self) -> None:
        row = Row(("id",), (7,))
        with pytest.raises(MissingColumnError) as exc_info:
            row.require("snippet")
        assert exc_info.value.column == "snippet"
        assert exc_info.value.details["available"] == ["id"]

    def test_named_index_is_strict(self) -> None:
        with pytest.raises(MissingColumnError):
            Row(("id",), (7,))["thread_id"]

    def test_get_returns_default(self) -> None:
        row = Row(("id",), (7,))
        assert row.get("snippet") is None
        assert row.get("snippet", "") == ""
        assert row.get("id") == 7

    def test_mismatched_lengths_rejected(self) -> None:
        with pytest.raises(ValueError):
            Row(("a", "b"), (1,))

    def test_equality_and_dict(self) -> None:
        a = Row(("x", "y"), (1, 2))
        assert a == Row(("x", "y"), (1, 2))
        assert a != Row(("x", "y"), (1, 3))
        assert a.as_dict() == {"x": 1, "y": 2}
        assert hash(a) == hash(Row(("x", "y"), (1, 2)))


class TestSequenceRowSource:
    def test_satisfies_protocol(self) -> None:
        assert isinstance(SequenceRowSource.empty(), RowSource)

    def test_row_at(self) -> None:
        src = SequenceRowSource(("n",), [(1,), (2,)])
        assert len(src) == 2
        assert src.row_at(1)["n"] == 2

    def test_out_of_range(self) -> None:
        src = SequenceRowSource(("n",), [(1,)])
        with pytest.raises(IndexError):
            src.row_at(1)
        with pytest.raises(IndexError):
            src.row_at(-1)

    def test_closed_source_refuses_reads(self) -> None:
        src = SequenceRowSource(("n",), [(1,)])
        src.close()
        assert src.closed
        with pytest.raises(ValueError):
            src.row_at(0)

    def test_from_dicts(self) -> None:
        src = SequenceRowSource.from_dicts([{"a": 1, "b": 2}, {"b": 4, "a": 3}])
        assert src.columns == ("a", "b")
        assert src.row_at(1).as_dict() == {"a": 3, "b": 4}
        assert len(SequenceRowSource.from_dicts([])) == 0


class TestMergedRowSource:
    def _sources(self):
        first = TrackingRowSource(("name",), [("a",), ("b",)])
        second = TrackingRowSource(("name",), [("c",)])
        return first, second

    def test_concatenates_in_source_order(self) -> None:
        first, second = self._sources()
        merged = MergedRowSource([first, second])
        assert len(merged) == 3
        assert [merged.row_at(i)["name"] for i in range(3)] == ["a", "b", "c"]

    def test_positions_map_to_second_source(self) -> None:
        first, second = self._sources()
        merged = MergedRowSource([first, second])
        assert merged.locate(2) == (1, 0)
        merged.row_at(2)
        assert second.reads == [0]
        assert first.reads == []

    def test_skips_empty_sources(self) -> None:
        empty = SequenceRowSource(("name",), [])
        only = SequenceRowSource(("name",), [("x",)])
        merged = merge([empty, only, SequenceRowSource(("name",), [])])
        assert len(merged) == 1
        assert merged.row_at(0)["name"] == "x"

    def test_duplicates_are_kept(self) -> None:
        known = SequenceRowSource(("id", "address"), [(1, "+1555")])
        unknown = SequenceRowSource(("id", "address"), [(9, "+1555")])
        merged = MergedRowSource([known, unknown])
        assert len(merged) == 2
        assert merged.row_at(0)["address"] == merged.row_at(1)["address"]

    def test_out_of_range(self) -> None:
        first, second = self._sources()
        merged = MergedRowSource([first, second])
        with pytest.raises(IndexError):
            merged.row_at(3)
        with pytest.raises(IndexError):
            merged.row_at(-1)

    def test_close_closes_every_source_once(self) -> None:
        first, second = self._sources()
        merged = MergedRowSource([first, second])
        merged.close()
        merged.close()
        assert merged.closed
        assert first.close_calls == 1
        assert second.close_calls == 1

    def test_needs_a_source(self) -> None:
        with pytest.raises(ValueError):
            MergedRowSource([])

    def test_uncountable_input_closes_all(self) -> None:
        good = TrackingRowSource(("name",), [("a",)])
        bad = UncountableRowSource()
        with pytest.raises(RowSourceError):
            MergedRowSource([good, bad])
        assert good.close_calls == 1
        assert bad.close_calls == 1
