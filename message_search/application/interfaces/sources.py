"""Data-source interfaces (ports) consumed by the search use case.

Protocols define contracts that infrastructure implementations must fulfill
(DIP). Collaborators that return RowSource hand ownership to the caller.
Caches behind these interfaces must be safe to call from several threads;
the search use case adds no locking around them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from message_search.shared.rows import Row, RowSource

if TYPE_CHECKING:
    from message_search.application.dtos.search import ConversationEntry, Recipient
    from message_search.domain.value_objects import RecipientId

# Column names of message search rows.
CONVERSATION_RECIPIENT = "conversation_recipient_id"
MESSAGE_RECIPIENT = "message_recipient_id"
SNIPPET = "snippet"
NORMALIZED_RECEIVED_TIMESTAMP = "normalized_received_timestamp"
THREAD_ID = "thread_id"

# Contact rows carry the display identifier (address) at this position.
CONTACT_ADDRESS_POSITION = 1


class IContactSource(Protocol):
    """Protocol for contact lookups over two stores (in-app directory, address book)."""

    def query_known(self, term: str) -> RowSource:
        """Contacts registered with the messaging service that match term."""

    def query_unknown(self, term: str) -> RowSource:
        """Device address book entries that match term and are not registered."""


class IContactPermission(Protocol):
    """Protocol for the contact access gate."""

    def has_read_access(self) -> bool:
        """Return True if contact stores may be read."""


class INumberResolver(Protocol):
    """Protocol for name/number matching used to filter conversations."""

    def candidate_recipients(self, term: str) -> Sequence[RecipientId]:
        """Return recipient ids whose name or number matches term, in match order."""


class IThreadStore(Protocol):
    """Protocol for conversation storage."""

    def filtered_conversations(self, ids: set[RecipientId]) -> RowSource | None:
        """Conversations with any of the recipients; None when there are no rows."""

    def row_to_conversation(self, row: Row) -> ConversationEntry:
        """Interpret one of this store's own rows."""


class IMessageIndex(Protocol):
    """Protocol for the full-text message index.

    Rows expose CONVERSATION_RECIPIENT, MESSAGE_RECIPIENT, SNIPPET,
    NORMALIZED_RECEIVED_TIMESTAMP and THREAD_ID by name.
    """

    def search(self, term: str, thread_id: int | None = None) -> RowSource | None:
        """Messages matching term, optionally within one thread; None when there are no rows."""


class IRecipientResolver(Protocol):
    """Protocol for recipient resolution (may block on first lookup, cached after)."""

    def resolve(self, recipient_id: RecipientId) -> Recipient:
        """Return the recipient for an id."""

    def resolve_address(self, address: str) -> Recipient:
        """Return the recipient for an external address (phone number, email)."""
