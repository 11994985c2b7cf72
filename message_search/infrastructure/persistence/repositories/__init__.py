"""SQLite implementations of the search collaborator interfaces."""

from message_search.infrastructure.persistence.repositories.contact_repo import (
    SqlContactRepository,
)
from message_search.infrastructure.persistence.repositories.message_index_repo import (
    SqlMessageIndex,
    build_match_expression,
)
from message_search.infrastructure.persistence.repositories.number_resolver import (
    SqlNumberResolver,
)
from message_search.infrastructure.persistence.repositories.recipient_repo import (
    SqlRecipientRepository,
)
from message_search.infrastructure.persistence.repositories.thread_repo import (
    SqlThreadRepository,
)

__all__ = [
    "SqlContactRepository",
    "SqlMessageIndex",
    "SqlNumberResolver",
    "SqlRecipientRepository",
    "SqlThreadRepository",
    "build_match_expression",
]
