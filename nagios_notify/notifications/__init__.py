"""Notification pipeline for monitoring events.

This package turns a decoded Event into a delivered email:
- phrases: Localized titles, status words and fallbacks
- payloads: Template context builder
- TemplateRenderer: Jinja2 body rendering
- assembler: Subject line, mailbox validation and EmailMessage assembly
- SMTPClient: SMTP wrapper with TLS/SSL support
- NotificationService: Orchestrates the steps above
"""

from .assembler import assemble, build_subject, parse_recipients, parse_sender
from .models import (
    DeliveryError,
    InvalidRecipients,
    InvalidSender,
    NotificationError,
    NotificationTemplateError,
    PreparedNotification,
    TemplateLoadError,
    TemplateRenderError,
)
from .payloads import build_render_context
from .service import NotificationService
from .smtp_client import SMTPClient
from .templates import TemplateRenderer

__all__ = [
    # Main service
    "NotificationService",
    "PreparedNotification",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "TemplateLoadError",
    "TemplateRenderError",
    "InvalidRecipients",
    "InvalidSender",
    "DeliveryError",
    # Components
    "TemplateRenderer",
    "SMTPClient",
    # Utilities
    "assemble",
    "build_render_context",
    "build_subject",
    "parse_recipients",
    "parse_sender",
]
