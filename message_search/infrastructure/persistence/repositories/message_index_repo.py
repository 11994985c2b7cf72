"""Full-text message search over the FTS5 index."""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine

from message_search.application.interfaces.sources import (
    CONVERSATION_RECIPIENT,
    MESSAGE_RECIPIENT,
    NORMALIZED_RECEIVED_TIMESTAMP,
    SNIPPET,
    THREAD_ID,
)
from message_search.infrastructure.persistence.row_source import fetch_row_source
from message_search.shared.rows import RowSource

SNIPPET_ELLIPSIS = "…"


def build_match_expression(term: str) -> str | None:
    """Turn a sanitized term into an FTS5 prefix query.

    Each whitespace-separated token becomes a quoted prefix phrase
    ("tok"*), so keywords like AND/OR/NEAR are matched as text. Returns
    None when the term has no tokens. The term must already be sanitized:
    double quotes are not escaped here.
    """
    tokens = term.split()
    if not tokens:
        return None
    return " ".join(f'"{token}"*' for token in tokens)


class SqlMessageIndex:
    """Implements IMessageIndex on the local SQLite store."""

    def __init__(self, db: Engine, limit: int = 500, snippet_tokens: int = 7) -> None:
        self.db = db
        self.limit = limit
        self.snippet_tokens = int(snippet_tokens)

    def search(self, term: str, thread_id: int | None = None) -> RowSource | None:
        """Messages matching term, newest first; None when term has no tokens."""
        match = build_match_expression(term)
        if match is None:
            return None

        thread_filter = "AND m.thread_id = :thread_id" if thread_id is not None else ""
        stmt = text(f"""
            SELECT t.recipient_id AS {CONVERSATION_RECIPIENT},
                   m.recipient_id AS {MESSAGE_RECIPIENT},
                   snippet(message_fts, 0, '', '', '{SNIPPET_ELLIPSIS}', {self.snippet_tokens}) AS {SNIPPET},
                   m.date_received AS {NORMALIZED_RECEIVED_TIMESTAMP},
                   m.thread_id AS {THREAD_ID}
            FROM message_fts
            JOIN message m ON m.id = message_fts.rowid
            JOIN thread t ON t.id = m.thread_id
            WHERE message_fts MATCH :match
              {thread_filter}
            ORDER BY m.date_received DESC, m.id DESC
            LIMIT :limit
        """)
        params: dict = {"match": match, "limit": self.limit}
        if thread_id is not None:
            params["thread_id"] = thread_id
        return fetch_row_source(self.db, stmt, params, source="messages")
