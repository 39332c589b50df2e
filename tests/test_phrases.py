"""Unit tests for display phrases.

Tests the phrase functions for:
- Title composition from event type and notification type
- Host status words
- Status description vocabulary for host and service events
- Datetime reformatting and its fallback
- Monitor hostname lookup and its fallback
"""

import pytest

from nagios_notify.domain.models import EventType, NotificationType, Status
from nagios_notify.notifications.phrases import (
    DEFAULT_MONITOR,
    HOST_STATUS_WORDS,
    STATUS_DESCRIPTIONS,
    TITLE_NOUNS,
    TITLE_TENSES,
    UNKNOWN_DATETIME,
    format_datetime,
    host_status_word,
    monitor_name,
    status_description,
    title,
)
from tests.helpers import make_event


class TestVocabularyTables:
    """Every table must cover its whole enum."""

    def test_title_tables_cover_enums(self):
        assert set(TITLE_NOUNS) == set(EventType)
        assert set(TITLE_TENSES) == set(NotificationType)

    def test_host_status_words_cover_notification_types(self):
        assert set(HOST_STATUS_WORDS) == set(NotificationType)

    def test_status_descriptions_cover_every_pair(self):
        assert set(STATUS_DESCRIPTIONS) == set(EventType)
        for table in STATUS_DESCRIPTIONS.values():
            assert set(table) == set(Status)


class TestTitle:
    @pytest.mark.parametrize(
        "event_type,notification_type,expected",
        [
            ("host", "problem", "ホストに問題が発生"),
            ("host", "recovery", "ホストが正常状態に復帰"),
            ("service", "problem", "サービスに問題が発生"),
            ("service", "recovery", "サービスが正常状態に復帰"),
        ],
    )
    def test_title(self, event_type, notification_type, expected):
        event = make_event(event_type=event_type, notification_type=notification_type)
        assert title(event) == expected

    def test_title_ignores_status_host_and_service(self):
        plain = make_event(event_type="service")
        decorated = make_event(
            event_type="service",
            host="db01",
            service="postgres",
            status="WARNING",
            output="slow queries",
        )
        assert title(plain) == title(decorated)


class TestHostStatusWord:
    def test_problem_is_down(self):
        assert host_status_word(NotificationType.PROBLEM) == "DOWN"

    def test_recovery_is_up(self):
        assert host_status_word(NotificationType.RECOVERY) == "UP"


class TestStatusDescription:
    def test_critical_host_reads_down(self):
        event = make_event(event_type="host", status="critical")
        assert status_description(event) == "ダウン"

    def test_critical_service_reads_fatal(self):
        event = make_event(event_type="service", status="critical")
        assert status_description(event) == "致命的"

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("ok", "回復"),
            ("warning", "警告"),
            ("unknown", "不明"),
            ("unreachable", "到達不能（経路障害の可能性）"),
        ],
    )
    def test_other_statuses_match_for_hosts_and_services(self, status, expected):
        host_event = make_event(event_type="host", status=status)
        service_event = make_event(event_type="service", status=status)

        assert status_description(host_event) == expected
        assert status_description(service_event) == expected

    @pytest.mark.parametrize("event_type", ["host", "service"])
    def test_absent_status_yields_none(self, event_type):
        assert status_description(make_event(event_type=event_type)) is None


class TestFormatDatetime:
    def test_reformats_nagios_long_datetime(self):
        assert format_datetime("Mon Jan 02 15:04:05 JST 2006") == "01月02日 15時04分"

    def test_timezone_abbreviation_is_ignored(self):
        assert format_datetime("Wed Sep 20 10:43:55 UTC 2023") == "09月20日 10時43分"
        assert format_datetime("Wed Sep 20 10:43:55 CEST 2023") == "09月20日 10時43分"

    def test_single_digit_day(self):
        assert format_datetime("Sat Sep 2 08:05:00 JST 2023") == "09月02日 08時05分"

    @pytest.mark.parametrize(
        "text",
        [
            "",
            None,
            "garbage",
            "2023-09-20T10:43:55",
            "Wed Sep 20 10:43:55 2023",
            "Wed Foo 20 10:43:55 JST 2023",
            "Wed Sep 31 10:43:55 JST 2023",
        ],
    )
    def test_unparsable_input_yields_placeholder(self, text):
        assert format_datetime(text) == UNKNOWN_DATETIME


class TestMonitorName:
    def test_returns_hostname(self):
        assert monitor_name(lambda: "mon1") == "mon1"

    def test_falls_back_when_lookup_fails(self):
        def broken():
            raise OSError("no hostname")

        assert monitor_name(broken) == DEFAULT_MONITOR == "localhost"

    def test_falls_back_on_empty_hostname(self):
        assert monitor_name(lambda: "") == "localhost"

    def test_falls_back_on_undecodable_hostname(self):
        assert monitor_name(lambda: b"\xff\xfe") == "localhost"

    def test_default_lookup_uses_socket(self, monkeypatch):
        monkeypatch.setattr(
            "nagios_notify.notifications.phrases.socket.gethostname", lambda: "mon2"
        )

        assert monitor_name() == "mon2"
