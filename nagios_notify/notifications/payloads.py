"""Template context for the notification body."""

from typing import Any, Dict

from nagios_notify.domain.models import Event

from .phrases import format_datetime, status_description, title

UNKNOWN_PLACEHOLDER = "?"


def build_render_context(event: Event, monitor: str) -> Dict[str, Any]:
    """Build the variables exposed to template.txt.

    Args:
        event: Decoded monitoring event
        monitor: Name of the notifying machine, shared with the subject line

    Returns:
        Dictionary with keys:
        - event: The raw Event (event.host, event.service, event.output, ...)
        - title: Localized headline
        - datetime: Localized event time, or a placeholder
        - monitor: Notifying machine
        - host_address: Host address, "?" when absent
        - status_description: Localized status word, None when no status
    """
    return {
        "event": event,
        "title": title(event),
        "datetime": format_datetime(event.datetime),
        "monitor": monitor,
        "host_address": event.host_address or UNKNOWN_PLACEHOLDER,
        "status_description": status_description(event),
    }
