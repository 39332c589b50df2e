"""Allow running the notifier with ``python -m nagios_notify``."""

import sys

from nagios_notify.main import main

if __name__ == "__main__":
    sys.exit(main())
