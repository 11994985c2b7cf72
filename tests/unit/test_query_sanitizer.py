"""Tests for FTS query sanitization."""

import pytest

from message_search.shared.utils.sanitization import (
    BANNED_CHARACTERS,
    is_blank_query,
    sanitize_query,
)

BANNED_CODE_POINTS = (
    set(range(33, 48)) | set(range(58, 65)) | set(range(91, 97)) | set(range(123, 127))
)


class TestBannedCharacters:
    """The banned set is exactly the four ASCII punctuation bands."""

    def test_matches_code_point_ranges(self) -> None:
        assert {ord(c) for c in BANNED_CHARACTERS} == BANNED_CODE_POINTS

    def test_alphanumerics_and_space_allowed(self) -> None:
        for ch in "abcXYZ019 ":
            assert ch not in BANNED_CHARACTERS


class TestSanitizeQuery:
    """Drop operator characters, turn apostrophes into spaces, keep the rest."""

    def test_empty(self) -> None:
        assert sanitize_query("") == ""

    def test_apostrophe_becomes_space(self) -> None:
        assert sanitize_query("I'm") == "I m"

    def test_possessive(self) -> None:
        assert sanitize_query("John's") == "John s"

    def test_drops_punctuation(self) -> None:
        assert sanitize_query("hello!@#world") == "helloworld"

    def test_fts_operators_removed(self) -> None:
        assert sanitize_query('"exact" -minus +plus col:val (a OR b)*') == "exact minus plus colval a OR b"

    def test_no_case_folding_or_whitespace_collapse(self) -> None:
        assert sanitize_query("  Hello   WORLD  ") == "  Hello   WORLD  "

    def test_non_ascii_kept(self) -> None:
        assert sanitize_query("café 日本語 ¡hola! emoji🙂") == "café 日本語 ¡hola emoji🙂"

    def test_only_banned_characters(self) -> None:
        assert sanitize_query("!@#$%^&*()") == ""

    @pytest.mark.parametrize(
        "raw",
        ["", "I'm here", "a-b_c.d", "~`{}|[]\\", "plain text", "mixed 'quotes' and \"more\""],
    )
    def test_output_never_longer_than_input(self, raw: str) -> None:
        assert len(sanitize_query(raw)) <= len(raw)

    def test_no_banned_code_point_survives(self) -> None:
        every_ascii = "".join(chr(c) for c in range(128))
        out = sanitize_query(every_ascii)
        assert not {ord(c) for c in out} & BANNED_CODE_POINTS
        # Apostrophe contributed one extra space.
        assert out.count(" ") == 2

    @pytest.mark.parametrize("raw", ["hello!@#world", "a+b=c", "x:y;z", "über-cool"])
    def test_idempotent_without_apostrophes(self, raw: str) -> None:
        once = sanitize_query(raw)
        assert sanitize_query(once) == once


class TestIsBlankQuery:
    @pytest.mark.parametrize("raw", [None, "", " ", "   ", "\t\n"])
    def test_blank(self, raw) -> None:
        assert is_blank_query(raw) is True

    @pytest.mark.parametrize("raw", ["a", " a ", "!!!", "'"])
    def test_not_blank(self, raw) -> None:
        assert is_blank_query(raw) is False
