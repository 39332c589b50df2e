"""Test helper utilities for Nagios Notify tests."""

from .builders import (
    DEFAULT_TEMPLATE,
    make_event,
    make_smtp_config,
    write_config,
    write_template,
)

__all__ = [
    "DEFAULT_TEMPLATE",
    "make_event",
    "make_smtp_config",
    "write_config",
    "write_template",
]
