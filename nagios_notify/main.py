"""Main entry point for Nagios Notify.

Invoked by the monitoring scheduler once per notification, e.g.::

    nagios-notify -t service -n PROBLEM -H example.com -A 192.168.0.1 \\
        -s HTTP -S CRITICAL -d "$LONGDATETIME$" -o "$SERVICEOUTPUT$" \\
        -a "$CONTACTEMAIL$"
"""

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from nagios_notify import PRODUCT_NAME, __version__
from nagios_notify.config.environment import load_environment_config
from nagios_notify.config.exceptions import ConfigurationError
from nagios_notify.config.loader import load_config
from nagios_notify.config.models import LogLevel
from nagios_notify.domain.exceptions import InvalidEvent
from nagios_notify.domain.models import parse_event
from nagios_notify.logging import get_logger
from nagios_notify.logging.config import configure_logging
from nagios_notify.notifications.models import (
    DeliveryError,
    NotificationError,
    NotificationTemplateError,
)
from nagios_notify.notifications.phrases import monitor_name
from nagios_notify.notifications.service import NotificationService
from nagios_notify.notifications.templates import TemplateRenderer

logger = get_logger(__name__, component="cli")

EVENT_FIELDS = (
    "host",
    "addresses",
    "host_address",
    "event_type",
    "datetime",
    "notification_type",
    "service",
    "status",
    "output",
)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser.

    Enum flags are taken as plain strings; decoding happens in parse_event so
    that unknown symbols surface as InvalidEvent.
    """
    parser = argparse.ArgumentParser(
        prog="nagios-notify",
        description="Nagios Notify - send a localized email for one monitoring event",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print the rendered body")
    parser.add_argument("-H", "--host", required=True, help="Host name")
    parser.add_argument("-a", "--addresses", required=True, help="Recipient addresses")
    parser.add_argument("-A", "--host-address", dest="host_address", help="Host address")
    parser.add_argument(
        "-t", "--type", dest="event_type", required=True, help="Event type (host|service)"
    )
    parser.add_argument("-d", "--datetime", required=True, help="Event date and time")
    parser.add_argument(
        "-n",
        "--notification-type",
        dest="notification_type",
        required=True,
        help="Notification type (problem|recovery)",
    )
    parser.add_argument("-s", "--service", help="Service description")
    parser.add_argument(
        "-S", "--status", help="Status (ok|warning|critical|unknown|unreachable)"
    )
    parser.add_argument("-o", "--output", help="Service check output")
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yml)",
    )
    parser.add_argument(
        "--template-dir",
        type=Path,
        default=None,
        help="Directory containing template.txt (default: current directory)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for the daily rotated log (default: ./log)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=[level.value for level in LogLevel],
        help="Log level (overrides LOG_LEVEL)",
    )
    parser.add_argument(
        "--version", action="version", version=f"{PRODUCT_NAME} {__version__}"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Send one notification.

    Returns:
        Exit code (0 when the relay accepted the message, 1 otherwise)
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        env_config = load_environment_config(
            config_path=args.config,
            template_dir=args.template_dir,
            log_dir=args.log_dir,
            log_level=args.log_level,
        )
        configure_logging(
            log_dir=env_config.log_dir,
            level=env_config.log_level,
            format_type=env_config.log_format,
        )
    except (ConfigurationError, ValueError, OSError) as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    logger.debug(
        "started",
        extra={"event": "service.starting", "log_format": env_config.log_format},
    )

    try:
        event = parse_event({field: getattr(args, field) for field in EVENT_FIELDS})

        app_config = load_config(env_config.config_path)
        logger.info(
            "Configuration loaded",
            extra={"event": "config.loaded", "config_path": str(env_config.config_path)},
        )

        monitor = monitor_name()
        service = NotificationService(
            template_renderer=TemplateRenderer(template_dir=env_config.template_dir)
        )
        prepared = service.prepare(event, app_config.smtp.sender, monitor)

        if args.verbose:
            print(prepared.body)

        service.deliver(prepared, app_config.smtp)

    except InvalidEvent as e:
        return _fail("event.invalid", "Invalid event", e)
    except ConfigurationError as e:
        return _fail("config.error", "Configuration error", e)
    except NotificationTemplateError as e:
        return _fail("notification.template_failed", "Failed to create mail body", e)
    except DeliveryError as e:
        return _fail("notification.delivery_failed", "Delivery failed", e)
    except NotificationError as e:
        return _fail("notification.assembly_failed", "Failed to assemble message", e)
    except Exception as e:
        logger.critical(
            "Fatal error",
            extra={"event": "service.failed", "error_type": type(e).__name__},
            exc_info=True,
        )
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    logger.debug("finished", extra={"event": "service.finished"})
    return 0


def _fail(event_name: str, stage: str, error: Exception) -> int:
    """Report a terminal error on stderr and in the log."""
    print(f"{stage}: {error}", file=sys.stderr)
    logger.error(
        f"{stage}: {error}",
        extra={"event": event_name, "error_type": type(error).__name__},
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
