"""Shared fixtures for Nagios Notify tests."""

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest


@pytest.fixture
def restore_root_logger():
    """Remove the file handler installed by configure_logging after a test."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, TimedRotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
