"""Application interfaces (ports). Infrastructure implements these."""

from message_search.application.interfaces.sources import (
    CONTACT_ADDRESS_POSITION,
    CONVERSATION_RECIPIENT,
    MESSAGE_RECIPIENT,
    NORMALIZED_RECEIVED_TIMESTAMP,
    SNIPPET,
    THREAD_ID,
    IContactPermission,
    IContactSource,
    IMessageIndex,
    INumberResolver,
    IRecipientResolver,
    IThreadStore,
)

__all__ = [
    "CONTACT_ADDRESS_POSITION",
    "CONVERSATION_RECIPIENT",
    "MESSAGE_RECIPIENT",
    "NORMALIZED_RECEIVED_TIMESTAMP",
    "SNIPPET",
    "THREAD_ID",
    "IContactPermission",
    "IContactSource",
    "IMessageIndex",
    "INumberResolver",
    "IRecipientResolver",
    "IThreadStore",
]
