"""Search API schemas."""

from pydantic import BaseModel, Field

from message_search.application.dtos.search import (
    ConversationEntry,
    MessageMatch,
    Recipient,
)


class RecipientResponse(BaseModel):
    """Resolved contact or conversation participant."""

    id: int
    address: str | None = None
    display_name: str | None = None
    registered: bool = False
    display_title: str

    @classmethod
    def from_recipient(cls, recipient: Recipient) -> "RecipientResponse":
        return cls(
            id=int(recipient.id),
            address=recipient.address,
            display_name=recipient.display_name,
            registered=recipient.registered,
            display_title=recipient.display_title,
        )


class ConversationResponse(BaseModel):
    """Conversation hit."""

    thread_id: int
    recipient: RecipientResponse
    snippet: str | None = None
    date: int
    message_count: int = 0

    @classmethod
    def from_entry(cls, entry: ConversationEntry) -> "ConversationResponse":
        return cls(
            thread_id=entry.thread_id,
            recipient=RecipientResponse.from_recipient(entry.recipient),
            snippet=entry.snippet,
            date=entry.date,
            message_count=entry.message_count,
        )


class MessageMatchResponse(BaseModel):
    """Message content hit."""

    thread_id: int
    snippet: str
    received_at: int = Field(..., description="Normalized received timestamp (ms)")
    conversation_recipient: RecipientResponse
    message_recipient: RecipientResponse

    @classmethod
    def from_match(cls, match: MessageMatch) -> "MessageMatchResponse":
        return cls(
            thread_id=match.thread_id,
            snippet=match.snippet,
            received_at=match.received_at,
            conversation_recipient=RecipientResponse.from_recipient(match.conversation_recipient),
            message_recipient=RecipientResponse.from_recipient(match.message_recipient),
        )


class SearchResponse(BaseModel):
    """Aggregate search response: totals plus the first `limit` items of each list."""

    query: str = Field(..., description="Sanitized query that was issued")
    contacts_total: int
    conversations_total: int
    messages_total: int
    contacts: list[RecipientResponse]
    conversations: list[ConversationResponse]
    messages: list[MessageMatchResponse]


class ThreadSearchResponse(BaseModel):
    """Message hits inside one conversation."""

    thread_id: int
    total: int
    messages: list[MessageMatchResponse]
