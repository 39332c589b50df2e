"""Nagios Notify - renders monitoring events into localized email notifications."""

__version__ = "0.3.0"

PRODUCT_NAME = "Nagios Notify"
