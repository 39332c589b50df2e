"""Subject line and send-ready message assembly.

This module turns a rendered body into a complete EmailMessage: it builds the
subject from the event, validates recipient and sender mailboxes with
email-validator, and sets the fixed headers. Any failure here aborts the run
before a connection to the relay is opened.
"""

import logging
from email.headerregistry import Address
from email.message import EmailMessage
from email.utils import formatdate, getaddresses
from typing import List, Sequence

from email_validator import EmailNotValidError, validate_email

from nagios_notify import PRODUCT_NAME, __version__
from nagios_notify.domain.models import Event, Status

from .models import InvalidRecipients, InvalidSender, PreparedNotification
from .payloads import UNKNOWN_PLACEHOLDER
from .phrases import host_status_word

logger = logging.getLogger(__name__)


def build_subject(event: Event, monitor: str) -> str:
    """Build the one-line subject.

    Host events:    "[PROBLEM] DOWN: web01    by mon1"
    Service events: "[RECOVERY] OK: web01/nginx    by mon1"

    A service event without status shows UNKNOWN; without service name, "?".
    """
    if event.is_host:
        return (
            f"[{event.notification_type}] {host_status_word(event.notification_type)}: "
            f"{event.host}    by {monitor}"
        )

    status = event.status or Status.UNKNOWN
    service = event.service or UNKNOWN_PLACEHOLDER
    return f"[{event.notification_type}] {status}: {event.host}/{service}    by {monitor}"


def _parse_mailbox(display_name: str, addr: str) -> str:
    """Validate one mailbox and return it in header form."""
    validated = validate_email(addr, check_deliverability=False)
    return str(Address(display_name=display_name, addr_spec=validated.normalized))


def parse_recipients(recipient_string: str) -> List[str]:
    """Parse and validate a comma-separated mailbox list.

    Accepts bare addresses and "Name <addr>" forms. No element is dropped:
    one invalid mailbox fails the whole list.

    Args:
        recipient_string: Raw value of the addresses field

    Returns:
        List of mailboxes in header form

    Raises:
        InvalidRecipients: If the list is empty or any mailbox is invalid
    """
    recipients = []

    for display_name, addr in getaddresses([recipient_string or ""]):
        if not display_name and not addr:
            continue
        try:
            recipients.append(_parse_mailbox(display_name, addr))
        except (EmailNotValidError, ValueError) as e:
            raise InvalidRecipients(
                f"Invalid recipient address '{addr or display_name}': {e}"
            ) from e

    if not recipients:
        raise InvalidRecipients(f"No valid recipient addresses in '{recipient_string}'")

    return recipients


def parse_sender(sender_string: str) -> str:
    """Validate the configured sender mailbox.

    Raises:
        InvalidSender: If the value is not exactly one well-formed mailbox
    """
    mailboxes = [
        (name, addr) for name, addr in getaddresses([sender_string or ""]) if name or addr
    ]
    if len(mailboxes) != 1:
        raise InvalidSender(f"Sender must be a single mailbox, got '{sender_string}'")

    display_name, addr = mailboxes[0]
    try:
        return _parse_mailbox(display_name, addr)
    except (EmailNotValidError, ValueError) as e:
        raise InvalidSender(f"Invalid sender address '{sender_string}': {e}") from e


def mailer_name() -> str:
    """Value of the User-Agent header."""
    return f"{PRODUCT_NAME}/{__version__}"


def build_message(
    subject: str, body: str, sender: str, recipients: Sequence[str]
) -> EmailMessage:
    """Package an already validated subject, body and mailbox set."""
    message = EmailMessage()
    message["From"] = sender
    message["Reply-To"] = sender
    message["To"] = ", ".join(recipients)
    message["Subject"] = subject
    message["Date"] = formatdate(localtime=True)
    message["User-Agent"] = mailer_name()
    message.set_content(body, subtype="plain", charset="utf-8")
    return message


def assemble(event: Event, body: str, sender: str, monitor: str) -> PreparedNotification:
    """Build the subject and the send-ready message for a rendered body.

    Args:
        event: Decoded monitoring event
        body: Rendered body text
        sender: Configured From address
        monitor: Name of the notifying machine

    Returns:
        PreparedNotification

    Raises:
        InvalidRecipients: If event.addresses is not a valid mailbox list
        InvalidSender: If sender is not a valid mailbox
    """
    subject = build_subject(event, monitor)
    recipients = parse_recipients(event.addresses)
    from_mailbox = parse_sender(sender)

    logger.info(f"subject: {subject}", extra={"event": "notification.assembled"})

    message = build_message(subject, body, from_mailbox, recipients)
    return PreparedNotification(
        subject=subject,
        body=body,
        recipients=tuple(recipients),
        message=message,
    )
