"""Notification service: render, assemble and deliver one notification.

The service runs the pipeline in a single synchronous pass. Rendering and
assembly happen entirely in memory; the relay is contacted only once a
complete message exists, so a failure at any earlier stage sends nothing.
"""

import logging
from typing import Optional

from nagios_notify.config.models import SMTPConfig
from nagios_notify.domain.models import Event
from nagios_notify.logging import get_logger
from nagios_notify.logging.context import log_context

from .assembler import assemble
from .models import NotificationError, PreparedNotification
from .payloads import build_render_context
from .smtp_client import SMTPClient
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")


class NotificationService:
    """Coordinates the notification flow for one event.

    1. Build template context (title, datetime, status description)
    2. Render the body template
    3. Build subject and EmailMessage, validating mailboxes
    4. Deliver via SMTP
    """

    def __init__(
        self,
        template_renderer: Optional[TemplateRenderer] = None,
        smtp_client: Optional[SMTPClient] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize notification service.

        Args:
            template_renderer: Template renderer instance (creates default if None)
            smtp_client: SMTP client instance (creates default if None)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.template_renderer = template_renderer or TemplateRenderer()
        self.smtp_client = smtp_client or SMTPClient()
        self.logger = logger_instance or logger

    def render_body(self, event: Event, monitor: str) -> str:
        """Render the body text for an event.

        Raises:
            TemplateLoadError: If the template is missing or malformed
            TemplateRenderError: If the template references unknown variables
        """
        context = build_render_context(event, monitor)
        body = self.template_renderer.render(context)
        self.logger.debug(
            "Body rendered",
            extra={"event": "notification.rendered", "title": context["title"]},
        )
        return body

    def prepare(self, event: Event, sender: str, monitor: str) -> PreparedNotification:
        """Render and assemble a notification without sending it.

        Args:
            event: Decoded monitoring event
            sender: Configured From address
            monitor: Name of the notifying machine, used in body and subject

        Raises:
            NotificationError: On any template or addressing failure
        """
        with log_context(
            target_host=event.host,
            target_service=event.service,
            notification_type=str(event.notification_type),
        ):
            body = self.render_body(event, monitor)
            return assemble(event, body, sender, monitor)

    def deliver(self, prepared: PreparedNotification, smtp_config: SMTPConfig) -> None:
        """Hand a prepared notification to the relay.

        Raises:
            DeliveryError: If the relay rejects or cannot take the message
        """
        self.logger.debug(
            f"relay host: {smtp_config.host}",
            extra={"event": "notification.sending", "smtp_port": smtp_config.port},
        )
        try:
            self.smtp_client.send(prepared.message, smtp_config)
        except NotificationError as e:
            self.logger.error(
                f"Could not send email: {e}",
                extra={"event": "notification.failed", "error_type": type(e).__name__},
            )
            raise

        self.logger.info(
            "Email sent successfully",
            extra={
                "event": "notification.sent",
                "recipient_count": len(prepared.recipients),
            },
        )
