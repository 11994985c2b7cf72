"""Shared telemetry: logging setup and tracing helpers.

SearchTelemetry lives in message_search.shared.telemetry.telemetry and is
imported on demand (it pulls in the OpenTelemetry SDK and instrumentations).
"""

from message_search.shared.telemetry.logging import setup_logging
from message_search.shared.telemetry.tracing import (
    add_span_attributes,
    traced,
)

__all__ = [
    "setup_logging",
    "traced",
    "add_span_attributes",
]
