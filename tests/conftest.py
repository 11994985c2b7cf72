"""Pytest configuration and fixtures for message search.

Unit tests use stub collaborators (MagicMock over in-memory row sources).
Integration tests use a temporary SQLite file and skip when the SQLite
build lacks FTS5. API tests run the FastAPI app over ASGI with the search
aggregator dependency overridden.
"""

import os
from types import SimpleNamespace
from unittest.mock import MagicMock

# Settings are read lazily; make sure tests never touch a file database.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TELEMETRY_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient

from message_search.api.v1.dependencies import build_search_aggregator, get_search_aggregator
from message_search.application.use_cases.search import SearchAggregator
from message_search.core.config import get_settings
from message_search.infrastructure.persistence.database import create_db_engine, has_fts5
from message_search.infrastructure.persistence.schema import init_schema
from message_search.infrastructure.persistence.writer import LocalStoreWriter

from tests.helpers import FakeRecipients, contact_rows


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so env overrides in a test take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sources() -> SimpleNamespace:
    """Stub collaborators; every source returns empty rows unless a test sets otherwise."""
    recipients = FakeRecipients()

    contacts = MagicMock(name="contacts")
    contacts.query_known.return_value = contact_rows()
    contacts.query_unknown.return_value = contact_rows()

    permission = MagicMock(name="contact_permission")
    permission.has_read_access.return_value = True

    numbers = MagicMock(name="number_resolver")
    numbers.candidate_recipients.return_value = []

    threads = MagicMock(name="thread_store")
    threads.filtered_conversations.return_value = None
    threads.row_to_conversation.side_effect = lambda row: ("conversation", row["thread_id"])

    messages = MagicMock(name="message_index")
    messages.search.return_value = None

    return SimpleNamespace(
        contacts=contacts,
        permission=permission,
        numbers=numbers,
        threads=threads,
        messages=messages,
        recipients=recipients,
    )


@pytest.fixture
def aggregator(sources: SimpleNamespace) -> SearchAggregator:
    """SearchAggregator over the stub collaborators."""
    agg = SearchAggregator(
        contacts=sources.contacts,
        contact_permission=sources.permission,
        number_resolver=sources.numbers,
        thread_store=sources.threads,
        message_index=sources.messages,
        recipient_resolver=sources.recipients,
    )
    yield agg
    agg.shutdown(wait=True)


@pytest.fixture
def store_engine(tmp_path):
    """File-backed SQLite store with schema (one connection per thread); skips without FTS5."""
    engine = create_db_engine(f"sqlite:///{tmp_path / 'messages.db'}")
    if not has_fts5(engine):
        engine.dispose()
        pytest.skip("SQLite build has no FTS5 support")
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def writer(store_engine) -> LocalStoreWriter:
    return LocalStoreWriter(store_engine)


@pytest.fixture
def sql_aggregator(store_engine) -> SearchAggregator:
    """SearchAggregator wired to the SQLite collaborators."""
    agg = build_search_aggregator(store_engine, get_settings())
    yield agg
    agg.shutdown(wait=True)


@pytest.fixture
async def client(aggregator: SearchAggregator) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), using the stub aggregator."""
    from message_search.main import create_app

    app = create_app()
    app.dependency_overrides[get_search_aggregator] = lambda: aggregator
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
