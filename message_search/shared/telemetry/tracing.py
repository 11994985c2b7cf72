"""Span helpers for the search path.

Spans go to whichever tracer provider is installed globally; until
SearchTelemetry starts that is the API's no-op provider. Query text is
user-typed message content and never becomes a span attribute. Only the
keyword arguments named in SPAN_ARG_KEYS are recorded, as search.<name>.
"""

import inspect
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from functools import wraps
from typing import Any

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

AttributeValue = str | int | float | bool

SPAN_ARG_KEYS = frozenset({"thread_id", "limit", "offset", "branch", "source"})


@contextmanager
def _search_span(
    tracer: trace.Tracer,
    name: str,
    static: Mapping[str, AttributeValue] | None,
    call_kwargs: Mapping[str, Any],
) -> Iterator[trace.Span]:
    with tracer.start_as_current_span(
        name, record_exception=False, set_status_on_exception=False
    ) as span:
        span.set_attributes(dict(static or {}))
        for key in SPAN_ARG_KEYS.intersection(call_kwargs):
            value = call_kwargs[key]
            if isinstance(value, (str, int, float, bool)):
                span.set_attribute(f"search.{key}", value)
        try:
            yield span
        except Exception as exc:
            span.record_exception(exc)
            span.set_status(Status(StatusCode.ERROR, type(exc).__name__))
            raise
        span.set_status(Status(StatusCode.OK))


def traced(
    name: str | None = None,
    attributes: Mapping[str, AttributeValue] | None = None,
) -> Callable:
    """Run the decorated function (sync or async) inside its own span.

    The span is named name, or module.qualname when omitted. A raised
    exception is recorded on the span, which is marked ERROR, and then
    propagates unchanged.
    """

    def decorator(func: Callable) -> Callable:
        tracer = trace.get_tracer(func.__module__)
        span_name = name or f"{func.__module__}.{func.__qualname__}"

        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def run_async(*args: Any, **kwargs: Any) -> Any:
                with _search_span(tracer, span_name, attributes, kwargs):
                    return await func(*args, **kwargs)

            return run_async

        @wraps(func)
        def run(*args: Any, **kwargs: Any) -> Any:
            with _search_span(tracer, span_name, attributes, kwargs):
                return func(*args, **kwargs)

        return run

    return decorator


def add_span_attributes(**attributes: AttributeValue) -> None:
    """Set attributes on the current span, if one is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        span.set_attributes(attributes)
