"""SMTP client wrapper for email delivery.

This module provides a thin wrapper around Python's smtplib with support
for implicit TLS, STARTTLS, authentication, and connection cleanup.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, Optional

from nagios_notify.config.models import SMTPConfig

from .models import DeliveryError

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


class SMTPClient:
    """Wrapper around smtplib for sending one email message.

    Every transport failure is reported as DeliveryError carrying the
    original error text. No retry, no classification.
    """

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        """Initialize SMTP client with optional factory injection.

        Args:
            smtp_factory: Factory for SMTP instances (for mocking)
            smtp_ssl_factory: Factory for SMTP_SSL instances (for mocking)
        """
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(self, message: EmailMessage, smtp_config: SMTPConfig) -> None:
        """Send an email message through the configured relay.

        Args:
            message: Fully constructed EmailMessage to send
            smtp_config: Relay host, port and credentials

        Raises:
            DeliveryError: If message delivery fails
        """
        smtp = None
        try:
            if smtp_config.port == IMPLICIT_TLS_PORT:
                logger.debug(
                    f"Connecting to {smtp_config.host}:{smtp_config.port} with implicit TLS"
                )
                smtp = self.smtp_ssl_factory(
                    smtp_config.host,
                    smtp_config.port,
                    timeout=smtp_config.timeout,
                    context=ssl.create_default_context(),
                )
            else:
                logger.debug(f"Connecting to {smtp_config.host}:{smtp_config.port}")
                smtp = self.smtp_factory(
                    smtp_config.host, smtp_config.port, timeout=smtp_config.timeout
                )

                if smtp_config.starttls:
                    logger.debug("Upgrading connection with STARTTLS")
                    smtp.starttls(context=ssl.create_default_context())

            logger.debug(f"Authenticating as {smtp_config.user_name}")
            smtp.login(smtp_config.user_name, smtp_config.password)

            smtp.send_message(message)
            logger.debug(f"Message sent successfully to {message['To']}")

        except smtplib.SMTPException as e:
            error_msg = f"SMTP error during message delivery: {e}"
            logger.error(error_msg)
            raise DeliveryError(error_msg) from e
        except OSError as e:
            error_msg = f"Network error during SMTP connection: {e}"
            logger.error(error_msg)
            raise DeliveryError(error_msg) from e
        except Exception as e:
            error_msg = f"Unexpected error during SMTP delivery: {e}"
            logger.error(error_msg)
            raise DeliveryError(error_msg) from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except (smtplib.SMTPException, OSError) as e:
                    logger.warning(f"Error closing SMTP connection: {e}")
