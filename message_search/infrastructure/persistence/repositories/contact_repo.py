"""Contact lookups over registered recipients and the device address book.

Both queries return rows shaped (id, address, display_name) so they can be
merged; the address sits at position 1.
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine

from message_search.infrastructure.persistence.row_source import (
    fetch_row_source,
    like_pattern,
)
from message_search.shared.rows import RowSource, SequenceRowSource

CONTACT_COLUMNS = ("id", "address", "display_name")


class SqlContactRepository:
    """Implements IContactSource on the local SQLite store."""

    def __init__(self, db: Engine) -> None:
        self.db = db

    def query_known(self, term: str) -> RowSource:
        """Registered recipients whose name or address contains term."""
        if not term.strip():
            return SequenceRowSource.empty(CONTACT_COLUMNS)
        stmt = text("""
            SELECT r.id, r.address, r.display_name
            FROM recipient r
            WHERE r.registered = 1
              AND r.address IS NOT NULL
              AND (r.display_name LIKE :pattern ESCAPE '\\' OR r.address LIKE :pattern ESCAPE '\\')
            ORDER BY r.display_name COLLATE NOCASE, r.id
        """)
        return fetch_row_source(
            self.db, stmt, {"pattern": like_pattern(term.strip())}, source="contacts.known"
        )

    def query_unknown(self, term: str) -> RowSource:
        """Address book entries matching term whose address is not registered."""
        if not term.strip():
            return SequenceRowSource.empty(CONTACT_COLUMNS)
        stmt = text("""
            SELECT c.id, c.address, c.display_name
            FROM system_contact c
            WHERE (c.display_name LIKE :pattern ESCAPE '\\' OR c.address LIKE :pattern ESCAPE '\\')
              AND NOT EXISTS (
                  SELECT 1 FROM recipient r
                  WHERE r.address = c.address AND r.registered = 1
              )
            ORDER BY c.display_name COLLATE NOCASE, c.id
        """)
        return fetch_row_source(
            self.db, stmt, {"pattern": like_pattern(term.strip())}, source="contacts.unknown"
        )
