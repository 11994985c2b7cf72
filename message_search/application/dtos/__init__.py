"""Application DTOs (read-models returned by use cases)."""

from message_search.application.dtos.search import (
    ConversationEntry,
    MessageMatch,
    Recipient,
    SearchResult,
)

__all__ = ["ConversationEntry", "MessageMatch", "Recipient", "SearchResult"]
