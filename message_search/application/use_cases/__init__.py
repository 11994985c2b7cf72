"""Use cases (application logic orchestrating collaborators)."""

from message_search.application.use_cases.search import SearchAggregator

__all__ = ["SearchAggregator"]
