"""Tests for CachedRecipientResolver (mocked recipient lookup)."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from message_search.application.dtos.search import Recipient
from message_search.domain.value_objects import RecipientId
from message_search.infrastructure.cache import CachedRecipientResolver


def _recipient(rid: int, address: str | None = None) -> Recipient:
    return Recipient(id=RecipientId(rid), address=address or f"+1555000{rid}")


@pytest.fixture
def lookup() -> MagicMock:
    m = MagicMock(name="recipient_lookup")
    m.get_by_id.side_effect = lambda rid: _recipient(rid.value)
    m.get_or_create_by_address.side_effect = lambda address: _recipient(
        int(address[-1]), address
    )
    return m


class TestResolve:
    def test_cached_after_first_lookup(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup)
        first = cache.resolve(RecipientId(1))
        second = cache.resolve(RecipientId(1))
        assert first is second
        lookup.get_by_id.assert_called_once_with(RecipientId(1))

    def test_unknown_id_gives_placeholder(self, lookup) -> None:
        lookup.get_by_id.side_effect = None
        lookup.get_by_id.return_value = None
        r = CachedRecipientResolver(lookup).resolve(RecipientId(99))
        assert r.id == RecipientId(99)
        assert r.address is None

    def test_resolve_address_shares_cache_with_ids(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup)
        by_address = cache.resolve_address("+15550003")
        assert cache.resolve(RecipientId(3)) is by_address
        assert cache.resolve_address("+15550003") is by_address
        lookup.get_by_id.assert_not_called()
        lookup.get_or_create_by_address.assert_called_once_with("+15550003")


class TestInvalidateAndEviction:
    def test_invalidate_one(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup)
        cache.resolve(RecipientId(1))
        cache.resolve(RecipientId(2))
        cache.invalidate(RecipientId(1))
        assert len(cache) == 1
        cache.resolve(RecipientId(1))
        assert lookup.get_by_id.call_count == 3

    def test_invalidate_all(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup)
        cache.resolve_address("+15550004")
        cache.invalidate()
        assert len(cache) == 0
        cache.resolve_address("+15550004")
        assert lookup.get_or_create_by_address.call_count == 2

    def test_least_recent_entry_evicted_at_capacity(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup, max_entries=2)
        for rid in (1, 2, 3):
            cache.resolve(RecipientId(rid))
        assert len(cache) == 2
        cache.resolve(RecipientId(1))
        assert lookup.get_by_id.call_count == 4

    def test_recently_read_entry_survives_eviction(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup, max_entries=2)
        for rid in (1, 2, 1, 3, 1):
            cache.resolve(RecipientId(rid))
        looked_up = [c.args[0].value for c in lookup.get_by_id.call_args_list]
        assert looked_up == [1, 2, 3]

    def test_evicted_address_is_looked_up_again(self, lookup) -> None:
        cache = CachedRecipientResolver(lookup, max_entries=1)
        first = cache.resolve_address("+15550001")
        cache.resolve(RecipientId(2))
        again = cache.resolve_address("+15550001")
        assert again is not first
        assert lookup.get_or_create_by_address.call_count == 2
        assert len(cache) == 1


def test_concurrent_resolution_returns_one_instance(lookup) -> None:
    cache = CachedRecipientResolver(lookup)
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.resolve(RecipientId(5)), range(50)))
    assert all(r is results[0] for r in results)
    assert len(cache) == 1
