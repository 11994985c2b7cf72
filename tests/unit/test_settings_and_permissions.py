"""Tests for Settings validation, contact permissions and Stopwatch."""

import logging

import pytest
from pydantic import ValidationError

from message_search.core.config import Settings, get_settings
from message_search.infrastructure.security import CONTACTS_READ, CONTACTS_WRITE, GrantedPermissions
from message_search.shared.utils import Stopwatch


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings(_env_file=None)
        assert s.search_worker_threads == 3
        assert s.snippet_max_tokens == 7
        assert s.granted_permissions == frozenset({CONTACTS_READ})

    def test_env_override(self, monkeypatch) -> None:
        monkeypatch.setenv("MESSAGE_SEARCH_LIMIT", "25")
        monkeypatch.setenv("CONTACT_PERMISSIONS", " contacts.write , ")
        s = get_settings()
        assert s.message_search_limit == 25
        assert s.granted_permissions == frozenset({CONTACTS_WRITE})

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"database_url": "postgresql://localhost/db"},
            {"search_worker_threads": 0},
            {"search_dispatch_threads": 0},
            {"message_search_limit": 0},
            {"api_default_window": 600, "api_max_window": 500},
            {"telemetry_exporter": "zipkin"},
        ],
    )
    def test_invalid_values_rejected(self, overrides) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **overrides)


class TestGrantedPermissions:
    def test_read_or_write_grants_access(self) -> None:
        assert GrantedPermissions([CONTACTS_READ]).has_read_access()
        assert GrantedPermissions([CONTACTS_WRITE]).has_read_access()

    def test_no_grant_denies(self) -> None:
        assert not GrantedPermissions([]).has_read_access()
        assert not GrantedPermissions(["calendar.read"]).has_read_access()

    def test_from_settings(self) -> None:
        s = Settings(_env_file=None, contact_permissions="")
        assert not GrantedPermissions.from_settings(s).has_read_access()


class TestStopwatch:
    def test_splits_recorded_in_order(self) -> None:
        sw = Stopwatch("FtsQuery")
        sw.split("clean")
        sw.split("contacts")
        assert [label for label, _ in sw.splits] == ["clean", "contacts"]
        assert sw.splits[0][1] <= sw.splits[1][1]

    def test_summary_format(self) -> None:
        sw = Stopwatch("FtsQuery")
        sw.split("messages")
        summary = sw.summary()
        assert summary.startswith("[FtsQuery] messages: ")
        assert summary.endswith(" ms")
        assert "total: " in summary

    def test_stop_logs_at_debug(self, caplog) -> None:
        log = logging.getLogger("tests.stopwatch")
        sw = Stopwatch("ConversationQuery")
        with caplog.at_level(logging.DEBUG, logger="tests.stopwatch"):
            sw.stop(log)
        assert "[ConversationQuery]" in caplog.text
