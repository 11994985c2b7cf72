"""Row-to-object builders for search result lists.

Each builder is a callable taking one Row and returning one result object.
They capture only the recipient resolver; all other state comes from the
row, so building the same row twice gives equal objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from message_search.application.interfaces.sources import (
    CONTACT_ADDRESS_POSITION,
    CONVERSATION_RECIPIENT,
    MESSAGE_RECIPIENT,
    NORMALIZED_RECEIVED_TIMESTAMP,
    SNIPPET,
    THREAD_ID,
)
from message_search.application.dtos.search import MessageMatch, Recipient
from message_search.domain.value_objects import RecipientId
from message_search.shared.rows import Row

if TYPE_CHECKING:
    from message_search.application.interfaces.sources import IRecipientResolver


class ContactEntryBuilder:
    """Resolve a contact row to a recipient through its display address."""

    def __init__(self, resolver: IRecipientResolver) -> None:
        self.resolver = resolver

    def __call__(self, row: Row) -> Recipient:
        return self.resolver.resolve_address(row[CONTACT_ADDRESS_POSITION])


class MessageMatchBuilder:
    """Build a MessageMatch from a message index row.

    Every column is read with a strict lookup: a row missing any of them
    raises MissingColumnError instead of producing a partial match.
    """

    def __init__(self, resolver: IRecipientResolver) -> None:
        self.resolver = resolver

    def __call__(self, row: Row) -> MessageMatch:
        conversation_recipient_id = RecipientId.from_raw(row.require(CONVERSATION_RECIPIENT))
        message_recipient_id = RecipientId.from_raw(row.require(MESSAGE_RECIPIENT))
        snippet = row.require(SNIPPET)
        received_at = row.require(NORMALIZED_RECEIVED_TIMESTAMP)
        thread_id = row.require(THREAD_ID)

        return MessageMatch(
            conversation_recipient=self.resolver.resolve(conversation_recipient_id),
            message_recipient=self.resolver.resolve(message_recipient_id),
            snippet=snippet,
            thread_id=int(thread_id),
            received_at=int(received_at),
        )
