"""Application services (stateless helpers used by use cases)."""

from message_search.application.services.result_builders import (
    ContactEntryBuilder,
    MessageMatchBuilder,
)

__all__ = ["ContactEntryBuilder", "MessageMatchBuilder"]
