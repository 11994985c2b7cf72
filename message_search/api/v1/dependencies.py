"""Presentation-layer dependency injection (composition root).

The search aggregator is built once at startup (see core.lifespan) from
the SQLite collaborators and stored on app.state; routes reach it through
get_search_aggregator, which tests override.
"""

from __future__ import annotations

from fastapi import HTTPException, Request
from sqlalchemy.engine import Engine

from message_search.application.use_cases.search import SearchAggregator
from message_search.core.config import Settings
from message_search.infrastructure.cache import CachedRecipientResolver
from message_search.infrastructure.persistence.repositories import (
    SqlContactRepository,
    SqlMessageIndex,
    SqlNumberResolver,
    SqlRecipientRepository,
    SqlThreadRepository,
)
from message_search.infrastructure.security import GrantedPermissions


def build_search_aggregator(db: Engine, settings: Settings) -> SearchAggregator:
    """Wire a SearchAggregator over the local SQLite store."""
    recipients = CachedRecipientResolver(SqlRecipientRepository(db))
    return SearchAggregator(
        contacts=SqlContactRepository(db),
        contact_permission=GrantedPermissions.from_settings(settings),
        number_resolver=SqlNumberResolver(db),
        thread_store=SqlThreadRepository(db, recipients),
        message_index=SqlMessageIndex(
            db,
            limit=settings.message_search_limit,
            snippet_tokens=settings.snippet_max_tokens,
        ),
        recipient_resolver=recipients,
        max_workers=settings.search_worker_threads,
        dispatch_workers=settings.search_dispatch_threads,
    )


def get_search_aggregator(request: Request) -> SearchAggregator:
    """Search aggregator created at startup."""
    aggregator = getattr(request.app.state, "search_aggregator", None)
    if aggregator is None:
        raise HTTPException(status_code=503, detail="Search is not initialized")
    return aggregator
