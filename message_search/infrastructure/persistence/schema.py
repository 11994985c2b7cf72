"""Local store schema: recipients, address book, threads, messages, FTS index."""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.engine import Engine

metadata = MetaData()

# Identities known to the messaging app (registered or external).
recipient = Table(
    "recipient",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("address", String(255), unique=True, nullable=True),
    Column("display_name", String(255), nullable=True),
    Column("registered", Boolean, nullable=False, default=False),
)

# Device address book entries.
system_contact = Table(
    "system_contact",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("address", String(255), nullable=False),
    Column("display_name", String(255), nullable=True),
)

thread = Table(
    "thread",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("recipient_id", Integer, ForeignKey("recipient.id"), nullable=False),
    Column("snippet", Text, nullable=True),
    Column("date", Integer, nullable=False, default=0),
    Column("message_count", Integer, nullable=False, default=0),
    Index("ix_thread_recipient_id", "recipient_id"),
)

message = Table(
    "message",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("thread_id", Integer, ForeignKey("thread.id"), nullable=False),
    Column("recipient_id", Integer, ForeignKey("recipient.id"), nullable=False),
    Column("body", Text, nullable=True),
    Column("date_received", Integer, nullable=False),
    Index("ix_message_thread_id", "thread_id"),
)

# rowid of message_fts equals message.id.
MESSAGE_FTS_DDL = (
    "CREATE VIRTUAL TABLE IF NOT EXISTS message_fts "
    "USING fts5(body, tokenize = 'unicode61')"
)


def init_schema(db: Engine) -> None:
    """Create tables and the FTS5 index if they do not exist."""
    metadata.create_all(db)
    with db.begin() as conn:
        conn.execute(text(MESSAGE_FTS_DDL))
