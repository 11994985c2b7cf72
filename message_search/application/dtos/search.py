"""DTOs for search results (no dependency on storage)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from message_search.domain.value_objects import RecipientId
from message_search.shared.rows import LazyResultList


@dataclass(frozen=True)
class Recipient:
    """Resolved identity behind a contact or conversation participant."""

    id: RecipientId
    address: str | None
    display_name: str | None = None
    registered: bool = False

    @property
    def display_title(self) -> str:
        return self.display_name or self.address or str(self.id)


@dataclass(frozen=True)
class ConversationEntry:
    """Conversation (thread) hit; built by the thread store from its own rows."""

    thread_id: int
    recipient: Recipient
    snippet: str | None
    date: int  # ms since epoch of the latest message
    message_count: int = 0


@dataclass(frozen=True)
class MessageMatch:
    """Message whose content matched the query."""

    conversation_recipient: Recipient
    message_recipient: Recipient
    snippet: str
    thread_id: int
    received_at: int  # normalized received timestamp, ms since epoch


@dataclass(frozen=True)
class SearchResult:
    """Aggregate answer to one query: the sanitized term plus one list per source.

    SearchResult.EMPTY stands for "no query issued".
    """

    query: str
    contacts: LazyResultList[Recipient]
    conversations: LazyResultList[ConversationEntry]
    messages: LazyResultList[MessageMatch]

    EMPTY: ClassVar[SearchResult]

    @property
    def is_empty(self) -> bool:
        return not (self.contacts or self.conversations or self.messages)

    @property
    def size(self) -> int:
        return len(self.contacts) + len(self.conversations) + len(self.messages)

    def close(self) -> None:
        """Release the row sources of all three lists.

        A no-op on EMPTY, whose lists are shared by every blank query.
        """
        if self is SearchResult.EMPTY:
            return
        for lst in (self.contacts, self.conversations, self.messages):
            lst.close()


SearchResult.EMPTY = SearchResult(
    query="",
    contacts=LazyResultList.empty(),
    conversations=LazyResultList.empty(),
    messages=LazyResultList.empty(),
)

