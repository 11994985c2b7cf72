"""Tests for domain value objects (RecipientId) and recipient DTOs."""

import pytest

from message_search.application.dtos.search import Recipient
from message_search.domain.value_objects import RecipientId


class TestRecipientId:
    """RecipientId: positive integer, built from int or digit string."""

    def test_valid(self) -> None:
        rid = RecipientId(42)
        assert rid.value == 42
        assert int(rid) == 42
        assert str(rid) == "42"

    @pytest.mark.parametrize("value", [0, -3])
    def test_non_positive_rejected(self, value: int) -> None:
        with pytest.raises(ValueError, match="positive"):
            RecipientId(value)

    @pytest.mark.parametrize("value", [True, 1.5, "7"])
    def test_non_integer_rejected(self, value) -> None:
        with pytest.raises(ValueError, match="integer"):
            RecipientId(value)

    def test_from_raw(self) -> None:
        assert RecipientId.from_raw(5) == RecipientId(5)
        assert RecipientId.from_raw("12") == RecipientId(12)
        assert RecipientId.from_raw(" 12 ") == RecipientId(12)

    @pytest.mark.parametrize("raw", [None, "", "abc", "-1", False])
    def test_from_raw_rejects_garbage(self, raw) -> None:
        with pytest.raises(ValueError):
            RecipientId.from_raw(raw)

    def test_equality_hash_and_order(self) -> None:
        assert RecipientId(3) == RecipientId(3)
        assert len({RecipientId(3), RecipientId(3), RecipientId(4)}) == 2
        assert RecipientId(3) < RecipientId(4)


class TestRecipient:
    def test_display_title_prefers_name(self) -> None:
        r = Recipient(id=RecipientId(1), address="+1555", display_name="Ann")
        assert r.display_title == "Ann"

    def test_display_title_falls_back_to_address_then_id(self) -> None:
        assert Recipient(id=RecipientId(1), address="+1555").display_title == "+1555"
        assert Recipient(id=RecipientId(9), address=None).display_title == "9"
