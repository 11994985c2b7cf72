"""Row sources and lazily built result lists."""

from message_search.shared.rows.base import Row, RowSource, SequenceRowSource
from message_search.shared.rows.lazy_list import LazyResultList, ResultBuilder
from message_search.shared.rows.merged import MergedRowSource, merge

__all__ = [
    "LazyResultList",
    "MergedRowSource",
    "ResultBuilder",
    "Row",
    "RowSource",
    "SequenceRowSource",
    "merge",
]
