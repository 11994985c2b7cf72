"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring: logging, database engine and
schema, search aggregator, telemetry. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from message_search.core.config import get_settings
from message_search.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, engine + schema, search aggregator, telemetry
    (if enabled). Shutdown order: aggregator executors, telemetry, engine.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    from message_search.api.v1.dependencies import build_search_aggregator
    from message_search.infrastructure.persistence import database
    from message_search.infrastructure.persistence.schema import init_schema

    engine = database.get_engine()
    init_schema(engine)
    app.state.search_aggregator = build_search_aggregator(engine, settings)
    logger.info("Search aggregator ready (%s)", engine.url.render_as_string(hide_password=True))

    telemetry = None
    if settings.telemetry_enabled:
        from message_search.shared.telemetry.telemetry import SearchTelemetry

        telemetry = SearchTelemetry(settings)
        telemetry.start(app, engine)
        app.state.telemetry = telemetry

    yield

    # ---- Shutdown ----
    aggregator = getattr(app.state, "search_aggregator", None)
    if aggregator is not None:
        aggregator.shutdown(wait=True)
        app.state.search_aggregator = None
        logger.info("Search aggregator stopped")

    if telemetry is not None:
        telemetry.shutdown()
        app.state.telemetry = None

    database.dispose_engine()
    logger.info("Database engine disposed")
