#!/usr/bin/env python3
"""Check a Nagios Notify configuration file without sending mail."""

import sys
from pathlib import Path

from nagios_notify.config.exceptions import ConfigurationError
from nagios_notify.config.loader import DEFAULT_CONFIG_PATH, load_config
from nagios_notify.notifications.assembler import parse_sender
from nagios_notify.notifications.models import InvalidSender


def verify_config(config_path: Path) -> bool:
    """Validate the schema and the sender mailbox of ``config_path``."""
    try:
        config = load_config(config_path)
        sender = parse_sender(config.smtp.sender)
    except ConfigurationError as e:
        print(f"✗ Configuration validation failed:\n{e}")
        return False
    except InvalidSender as e:
        print(f"✗ {e}")
        return False

    print(f"✓ {config_path} is valid")
    print(f"  - relay: {config.smtp.host}:{config.smtp.port}")
    print(f"  - login: {config.smtp.user_name}")
    print(f"  - from:  {sender}")
    return True


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH
    sys.exit(0 if verify_config(path) else 1)
