"""Persistence: synchronous SQLAlchemy engine for the local SQLite store.

Search branches run on worker threads, so connections are shared across
threads (check_same_thread off). In-memory databases use a StaticPool so
every connection sees the same database. That pool hands the single
sqlite3 connection to every caller, so code on the search path opens
connections through connection(), which lets one thread at a time use an
in-memory store. File-backed stores get a connection per checkout and are
not serialized.

The engine is created lazily on first use so import does not trigger
Settings validation.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from weakref import WeakKeyDictionary

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from message_search.core.config import get_settings

logger = logging.getLogger(__name__)

_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")

# One lock per StaticPool; dropped with the pool.
_static_pool_locks: WeakKeyDictionary = WeakKeyDictionary()

# Set by get_engine() on first use; avoids get_settings() at import time.
engine: Engine | None = None


def create_db_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for an SQLite URL (file or in-memory)."""
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if url in _MEMORY_URLS:
        kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=echo, **kwargs)


def connection_lock(db: Engine):
    """Lock guarding db's shared connection, or a null context if it has none."""
    if not isinstance(db.pool, StaticPool):
        return nullcontext()
    return _static_pool_locks.setdefault(db.pool, threading.RLock())


@contextmanager
def connection(db: Engine, begin: bool = False) -> Iterator[Connection]:
    """Open a connection (a transaction when begin is set) on db."""
    with connection_lock(db):
        with (db.begin() if begin else db.connect()) as conn:
            yield conn


def get_engine() -> Engine:
    """Return the process-wide engine, creating it from settings on first call."""
    global engine
    if engine is None:
        settings = get_settings()
        engine = create_db_engine(settings.database_url, echo=settings.database_echo)
        logger.info("Database engine created for %s", engine.url.render_as_string(hide_password=True))
    return engine


def dispose_engine() -> None:
    """Dispose the process-wide engine (shutdown)."""
    global engine
    if engine is not None:
        engine.dispose()
        engine = None


def has_fts5(db: Engine) -> bool:
    """Return True if the SQLite build behind db supports FTS5."""
    try:
        with db.connect() as conn:
            conn.execute(text("CREATE VIRTUAL TABLE temp._fts5_check USING fts5(x)"))
            conn.execute(text("DROP TABLE temp._fts5_check"))
    except OperationalError:
        return False
    return True
