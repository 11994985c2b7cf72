"""Write side of the local store: recipients, address book, threads, messages.

Adding a message also indexes its body in message_fts and updates the
thread's snippet, date and count, keeping the FTS index in step with the
message table.
"""

from __future__ import annotations

from sqlalchemy import func, insert, select, text, update
from sqlalchemy.engine import Engine

from message_search.infrastructure.persistence.schema import (
    message,
    recipient,
    system_contact,
    thread,
)


class LocalStoreWriter:
    """Insert helpers used by seeding scripts and tests."""

    def __init__(self, db: Engine) -> None:
        self.db = db

    def add_recipient(
        self,
        address: str | None,
        display_name: str | None = None,
        registered: bool = False,
    ) -> int:
        """Insert a recipient and return its id."""
        with self.db.begin() as conn:
            result = conn.execute(
                insert(recipient).values(
                    address=address, display_name=display_name, registered=registered
                )
            )
            return result.inserted_primary_key[0]

    def add_system_contact(self, address: str, display_name: str | None = None) -> int:
        """Insert an address book entry and return its id."""
        with self.db.begin() as conn:
            result = conn.execute(
                insert(system_contact).values(address=address, display_name=display_name)
            )
            return result.inserted_primary_key[0]

    def add_thread(self, recipient_id: int) -> int:
        """Insert an empty conversation with recipient and return its id."""
        with self.db.begin() as conn:
            result = conn.execute(
                insert(thread).values(recipient_id=recipient_id, date=0, message_count=0)
            )
            return result.inserted_primary_key[0]

    def add_message(
        self,
        thread_id: int,
        sender_id: int,
        body: str,
        date_received: int,
    ) -> int:
        """Insert a message, index its body, and refresh the thread summary."""
        with self.db.begin() as conn:
            result = conn.execute(
                insert(message).values(
                    thread_id=thread_id,
                    recipient_id=sender_id,
                    body=body,
                    date_received=date_received,
                )
            )
            message_id = result.inserted_primary_key[0]
            conn.execute(
                text("INSERT INTO message_fts (rowid, body) VALUES (:id, :body)"),
                {"id": message_id, "body": body},
            )
            count = conn.execute(
                select(func.count()).select_from(message).where(message.c.thread_id == thread_id)
            ).scalar_one()
            latest = conn.execute(
                select(message.c.body, message.c.date_received)
                .where(message.c.thread_id == thread_id)
                .order_by(message.c.date_received.desc(), message.c.id.desc())
                .limit(1)
            ).one()
            conn.execute(
                update(thread)
                .where(thread.c.id == thread_id)
                .values(snippet=latest.body, date=latest.date_received, message_count=count)
            )
            return message_id
