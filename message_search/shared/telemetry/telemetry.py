"""OpenTelemetry wiring for the search service.

Imported only when telemetry is enabled; the rest of the package depends on
the opentelemetry API alone, which is a no-op without a provider. The
service has exactly one FastAPI app and one SQLite engine, so SearchTelemetry
instruments both in start() and undoes both in shutdown().
"""

import logging
import sys

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import SERVICE_NAME, SERVICE_VERSION, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased
from sqlalchemy.engine import Engine

from message_search.core.config import Settings

logger = logging.getLogger(__name__)

EXCLUDED_URLS = "/api/v1/health"


def search_resource(settings: Settings) -> Resource:
    """Resource describing this deployment and its search configuration."""
    return Resource.create({
        SERVICE_NAME: settings.app_name,
        SERVICE_VERSION: settings.app_version,
        "deployment.environment": settings.telemetry_environment,
        "db.system": "sqlite",
        "search.worker_threads": settings.search_worker_threads,
        "search.dispatch_threads": settings.search_dispatch_threads,
        "search.message_limit": settings.message_search_limit,
    })


def span_processor(settings: Settings) -> SpanProcessor | None:
    """Processor for the configured exporter; None when exporting is off.

    Console spans are written as they end so they interleave with the log
    output. OTLP spans are batched.
    """
    if settings.telemetry_exporter == "none":
        return None
    if settings.telemetry_exporter == "otlp":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        endpoint = settings.telemetry_otlp_endpoint
        exporter = OTLPSpanExporter(
            endpoint=endpoint,
            insecure=bool(endpoint and endpoint.startswith("http://")),
        )
        return BatchSpanProcessor(exporter)
    return SimpleSpanProcessor(ConsoleSpanExporter(out=sys.stdout))


class SearchTelemetry:
    """Tracer provider plus FastAPI, SQLAlchemy and logging instrumentation."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.provider = TracerProvider(
            resource=search_resource(settings),
            sampler=TraceIdRatioBased(settings.telemetry_sample_rate),
        )
        processor = span_processor(settings)
        if processor is not None:
            self.provider.add_span_processor(processor)
        self._app: FastAPI | None = None

    def start(self, app: FastAPI, engine: Engine) -> None:
        """Install the provider globally and instrument app and engine."""
        trace.set_tracer_provider(self.provider)
        try:
            FastAPIInstrumentor.instrument_app(
                app, tracer_provider=self.provider, excluded_urls=EXCLUDED_URLS
            )
            self._app = app
        except RuntimeError:
            # Starlette refuses new middleware once the app has started serving.
            logger.warning("FastAPI already started; HTTP spans disabled", exc_info=True)
        SQLAlchemyInstrumentor().instrument(engine=engine, tracer_provider=self.provider)
        LoggingInstrumentor().instrument(tracer_provider=self.provider, set_logging_format=False)
        logger.info(
            "Telemetry started (exporter=%s, sample_rate=%s)",
            self.settings.telemetry_exporter,
            self.settings.telemetry_sample_rate,
        )

    def shutdown(self) -> None:
        """Remove instrumentation and flush pending spans."""
        if self._app is not None:
            FastAPIInstrumentor.uninstrument_app(self._app)
            self._app = None
        SQLAlchemyInstrumentor().uninstrument()
        LoggingInstrumentor().uninstrument()
        self.provider.shutdown()
        logger.info("Telemetry shut down")
