"""Conversation (thread) lookups filtered by recipient."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Engine

from message_search.application.dtos.search import ConversationEntry
from message_search.domain.value_objects import RecipientId
from message_search.infrastructure.persistence.row_source import fetch_row_source
from message_search.shared.rows import Row, RowSource

if TYPE_CHECKING:
    from message_search.application.interfaces.sources import IRecipientResolver


class SqlThreadRepository:
    """Implements IThreadStore on the local SQLite store."""

    def __init__(self, db: Engine, recipient_resolver: IRecipientResolver) -> None:
        self.db = db
        self.recipient_resolver = recipient_resolver

    def filtered_conversations(self, ids: set[RecipientId]) -> RowSource | None:
        """Threads with any of the recipients, newest first. None for an empty id set."""
        if not ids:
            return None
        stmt = text("""
            SELECT t.id AS thread_id, t.recipient_id, t.snippet, t.date, t.message_count
            FROM thread t
            WHERE t.recipient_id IN :ids
            ORDER BY t.date DESC, t.id DESC
        """).bindparams(bindparam("ids", expanding=True))
        return fetch_row_source(
            self.db, stmt, {"ids": sorted(int(i) for i in ids)}, source="conversations"
        )

    def row_to_conversation(self, row: Row) -> ConversationEntry:
        """Build a ConversationEntry from a filtered_conversations row."""
        recipient_id = RecipientId.from_raw(row.require("recipient_id"))
        return ConversationEntry(
            thread_id=int(row.require("thread_id")),
            recipient=self.recipient_resolver.resolve(recipient_id),
            snippet=row.get("snippet"),
            date=int(row.require("date")),
            message_count=int(row.get("message_count") or 0),
        )
