"""Data models and exceptions for the notification pipeline.

Every exception here is terminal for the run: the caller logs it and exits
with a non-zero status. Nothing is retried.
"""

from dataclasses import dataclass
from email.message import EmailMessage


class NotificationError(Exception):
    """Base exception for notification-related errors."""

    pass


class NotificationTemplateError(NotificationError):
    """Base class for body template failures."""

    pass


class TemplateLoadError(NotificationTemplateError):
    """Raised when the template file is missing or has invalid syntax."""

    pass


class TemplateRenderError(NotificationTemplateError):
    """Raised when rendering fails, e.g. on an undefined variable."""

    pass


class InvalidRecipients(NotificationError):
    """Raised when the recipient field cannot be parsed as a mailbox list."""

    pass


class InvalidSender(NotificationError):
    """Raised when the configured sender is not a well-formed mailbox."""

    pass


class DeliveryError(NotificationError):
    """Raised when the SMTP relay rejects or fails to take the message."""

    pass


@dataclass(frozen=True)
class PreparedNotification:
    """A fully assembled notification, ready for delivery.

    Attributes:
        subject: One-line subject
        body: Rendered plain text body
        recipients: Validated recipient addresses
        message: Send-ready EmailMessage carrying subject and body
    """

    subject: str
    body: str
    recipients: tuple
    message: EmailMessage
