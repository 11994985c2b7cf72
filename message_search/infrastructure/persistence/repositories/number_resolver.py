"""Resolve a search term to the recipients whose conversations may match."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from message_search.domain.exceptions import RowSourceError
from message_search.domain.value_objects import RecipientId
from message_search.infrastructure.persistence.database import connection
from message_search.infrastructure.persistence.row_source import like_pattern


class SqlNumberResolver:
    """Implements INumberResolver.

    Matches recipients directly by name or address, then recipients whose
    address belongs to an address book entry whose name matches. Ids keep
    first-match order and appear once.
    """

    def __init__(self, db: Engine) -> None:
        self.db = db

    def candidate_recipients(self, term: str) -> list[RecipientId]:
        if not term.strip():
            return []
        params = {"pattern": like_pattern(term.strip())}
        direct = text("""
            SELECT r.id FROM recipient r
            WHERE r.display_name LIKE :pattern ESCAPE '\\' OR r.address LIKE :pattern ESCAPE '\\'
            ORDER BY r.id
        """)
        via_address_book = text("""
            SELECT r.id FROM recipient r
            JOIN system_contact c ON c.address = r.address
            WHERE c.display_name LIKE :pattern ESCAPE '\\'
            ORDER BY r.id
        """)
        try:
            with connection(self.db) as conn:
                ids = [row[0] for row in conn.execute(direct, params)]
                ids.extend(row[0] for row in conn.execute(via_address_book, params))
        except SQLAlchemyError as exc:
            raise RowSourceError(f"recipient match failed: {exc}", source="numbers") from exc
        return [RecipientId(i) for i in dict.fromkeys(ids)]
