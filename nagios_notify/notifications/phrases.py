"""Display phrases for notification subjects and bodies.

Pure functions mapping Event fields to the text shown to operators. Each
vocabulary table is keyed by every member of its enum; adding a member
without a phrase is caught by the test suite instead of falling back to a
default at runtime.

Two functions degrade instead of failing: ``format_datetime`` and
``monitor_name``. A late or mislabeled alert is still delivered.
"""

import re
import socket
from datetime import datetime
from typing import Callable, Optional

from nagios_notify.domain.models import Event, EventType, NotificationType, Status

UNSPECIFIED_TITLE = "何らかの問題が発生（詳細不明）"
UNKNOWN_DATETIME = "不明"
DEFAULT_MONITOR = "localhost"

TITLE_NOUNS = {
    EventType.HOST: "ホスト",
    EventType.SERVICE: "サービス",
}

TITLE_TENSES = {
    NotificationType.PROBLEM: "に問題が発生",
    NotificationType.RECOVERY: "が正常状態に復帰",
}

HOST_STATUS_WORDS = {
    NotificationType.PROBLEM: "DOWN",
    NotificationType.RECOVERY: "UP",
}

_COMMON_STATUS_DESCRIPTIONS = {
    Status.OK: "回復",
    Status.WARNING: "警告",
    Status.UNKNOWN: "不明",
    Status.UNREACHABLE: "到達不能（経路障害の可能性）",
}

STATUS_DESCRIPTIONS = {
    EventType.HOST: {**_COMMON_STATUS_DESCRIPTIONS, Status.CRITICAL: "ダウン"},
    EventType.SERVICE: {**_COMMON_STATUS_DESCRIPTIONS, Status.CRITICAL: "致命的"},
}

# Nagios $LONGDATETIME$, e.g. "Wed Sep 20 10:43:55 JST 2023". The zone
# abbreviation is dropped and the wall clock time is kept as-is.
_SOURCE_DATETIME = re.compile(
    r"^\s*(?P<clock>\S+\s+\S+\s+\d{1,2}\s+\d{1,2}:\d{2}:\d{2})"
    r"\s+[A-Za-z][A-Za-z0-9+\-]*\s+(?P<year>\d{4})\s*$"
)
_SOURCE_FORMAT = "%a %b %d %H:%M:%S %Y"
_DISPLAY_FORMAT = "%m月%d日 %H時%M分"


def title(event: Event) -> str:
    """Headline of the body, e.g. "ホストに問題が発生"."""
    tense = TITLE_TENSES.get(event.notification_type)
    if tense is None:
        return UNSPECIFIED_TITLE
    return f"{TITLE_NOUNS[event.event_type]}{tense}"


def host_status_word(notification_type: NotificationType) -> str:
    """DOWN for problems, UP for recoveries."""
    return HOST_STATUS_WORDS[notification_type]


def status_description(event: Event) -> Optional[str]:
    """Localized status word, or None when the event carries no status.

    CRITICAL reads as "down" for hosts and "fatal" for services; every other
    status has one word for both.
    """
    if event.status is None:
        return None
    return STATUS_DESCRIPTIONS[event.event_type][event.status]


def format_datetime(text: Optional[str]) -> str:
    """Reformat a Nagios timestamp as "MM月DD日 HH時MM分".

    Returns UNKNOWN_DATETIME for anything that does not parse.
    """
    if not text:
        return UNKNOWN_DATETIME

    match = _SOURCE_DATETIME.match(text)
    if match is None:
        return UNKNOWN_DATETIME

    try:
        parsed = datetime.strptime(
            f"{match.group('clock')} {match.group('year')}", _SOURCE_FORMAT
        )
    except ValueError:
        return UNKNOWN_DATETIME

    return parsed.strftime(_DISPLAY_FORMAT)


def monitor_name(hostname_getter: Optional[Callable[[], str]] = None) -> str:
    """Name of the machine running the notifier, or "localhost"."""
    getter = hostname_getter or socket.gethostname
    try:
        name = getter()
    except (OSError, UnicodeError):
        return DEFAULT_MONITOR

    if isinstance(name, bytes):
        try:
            name = name.decode("utf-8")
        except UnicodeDecodeError:
            return DEFAULT_MONITOR

    return name.strip() if name and name.strip() else DEFAULT_MONITOR
