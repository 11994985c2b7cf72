"""Domain value objects and shared value types."""

from message_search.domain.value_objects.core import RecipientId

__all__ = ["RecipientId"]
