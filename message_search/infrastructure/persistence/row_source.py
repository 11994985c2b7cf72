"""Adapt SQLAlchemy query results to row sources."""

from collections.abc import Mapping
from typing import Any

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.expression import Executable

from message_search.domain.exceptions import RowSourceError
from message_search.infrastructure.persistence.database import connection
from message_search.shared.rows import SequenceRowSource


def fetch_row_source(
    db: Engine,
    stmt: Executable,
    params: Mapping[str, Any] | None = None,
    source: str = "query",
) -> SequenceRowSource:
    """Execute stmt and return its rows as a row source.

    Column names come from the result. The connection is returned to the
    pool before this returns; the caller owns (and closes) the row source.

    Raises:
        RowSourceError: If the statement fails.
    """
    try:
        with connection(db) as conn:
            result = conn.execute(stmt, dict(params or {}))
            columns = tuple(result.keys())
            rows = result.all()
    except SQLAlchemyError as exc:
        raise RowSourceError(f"{source} query failed: {exc}", source=source) from exc
    return SequenceRowSource(columns, rows)


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with %, _ and backslash escaped (use ESCAPE '\\')."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
