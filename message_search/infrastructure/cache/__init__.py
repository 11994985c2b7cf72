"""Cache: in-process recipient resolution cache."""

from message_search.infrastructure.cache.recipient_cache import (
    CachedRecipientResolver,
    RecipientLookup,
)

__all__ = ["CachedRecipientResolver", "RecipientLookup"]
