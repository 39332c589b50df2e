"""Domain model for monitoring events."""

from .exceptions import InvalidEvent
from .models import Event, EventType, NotificationType, Status, decode_symbol, parse_event

__all__ = [
    "Event",
    "EventType",
    "NotificationType",
    "Status",
    "decode_symbol",
    "parse_event",
    "InvalidEvent",
]
