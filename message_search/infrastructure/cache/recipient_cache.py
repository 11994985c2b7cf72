"""In-process recipient cache (implements IRecipientResolver).

Result builders resolve recipients on whichever worker thread reads a row,
so the cache is guarded by a lock. The lookup itself runs outside the lock:
two threads missing the same key may both query the store, and the first
value stored wins.
"""

from __future__ import annotations

import logging
import threading
from typing import Protocol

from cachetools import LRUCache

from message_search.application.dtos.search import Recipient
from message_search.domain.value_objects import RecipientId

logger = logging.getLogger(__name__)


class RecipientLookup(Protocol):
    """Backing store for CachedRecipientResolver."""

    def get_by_id(self, recipient_id: RecipientId) -> Recipient | None:
        """Return recipient by id, or None."""

    def get_or_create_by_address(self, address: str) -> Recipient:
        """Return the recipient for address, creating it if new."""


class _RecipientLRU(LRUCache):
    """Recipients by id; evicting one also drops its address entry."""

    def __init__(self, maxsize: int, id_by_address: dict[str, RecipientId]) -> None:
        super().__init__(maxsize=maxsize)
        self._id_by_address = id_by_address

    def popitem(self):
        recipient_id, recipient = super().popitem()
        if recipient.address is not None:
            self._id_by_address.pop(recipient.address, None)
        logger.debug("Evicted recipient %s", recipient_id)
        return recipient_id, recipient


class CachedRecipientResolver:
    """Resolve recipients by id or address; cached after first resolution.

    Entries are evicted least recently used first once max_entries is
    reached. An id unknown to the store resolves to a placeholder recipient
    with no address, so a stale id in a message row still yields a result.
    """

    def __init__(self, lookup: RecipientLookup, max_entries: int = 10_000) -> None:
        self.lookup = lookup
        self.max_entries = max_entries
        self._id_by_address: dict[str, RecipientId] = {}
        self._by_id = _RecipientLRU(max_entries, self._id_by_address)
        self._lock = threading.Lock()

    def resolve(self, recipient_id: RecipientId) -> Recipient:
        with self._lock:
            cached = self._by_id.get(recipient_id)
        if cached is not None:
            return cached

        found = self.lookup.get_by_id(recipient_id)
        if found is None:
            logger.debug("Recipient %s not found; using placeholder", recipient_id)
            found = Recipient(id=recipient_id, address=None)
        return self._store(found)

    def resolve_address(self, address: str) -> Recipient:
        with self._lock:
            recipient_id = self._id_by_address.get(address)
            cached = self._by_id.get(recipient_id) if recipient_id is not None else None
        if cached is not None:
            return cached
        return self._store(self.lookup.get_or_create_by_address(address))

    def invalidate(self, recipient_id: RecipientId | None = None) -> None:
        """Drop one recipient (or everything) from the cache."""
        with self._lock:
            if recipient_id is None:
                self._by_id.clear()
                self._id_by_address.clear()
                return
            dropped = self._by_id.pop(recipient_id, None)
            if dropped is not None and dropped.address is not None:
                self._id_by_address.pop(dropped.address, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_id)

    def _store(self, recipient: Recipient) -> Recipient:
        with self._lock:
            existing = self._by_id.get(recipient.id)
            if existing is not None:
                return existing
            self._by_id[recipient.id] = recipient
            if recipient.address is not None:
                self._id_by_address[recipient.address] = recipient.id
            return recipient
