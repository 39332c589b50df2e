#!/usr/bin/env python3
"""Send sample notifications through the full pipeline.

Uses the real config.yml and template.txt from the current directory, so the
messages actually go out. Useful after changing the template or the relay.

Usage:
    python scripts/send_test_notification.py --to ops@example.com
    python scripts/send_test_notification.py --to ops@example.com --case service-problem
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nagios_notify.main import main as notify_main

SAMPLE_DATETIME = "Wed Sep 20 10:43:55 JST 2023"

CASES = {
    "host-problem": ["-t", "host", "-n", "PROBLEM", "-S", "CRITICAL"],
    "host-recovery": ["-t", "host", "-n", "RECOVERY", "-S", "OK"],
    "service-problem": [
        "-t", "service", "-n", "PROBLEM", "-s", "HTTP", "-S", "CRITICAL",
        "-o", "これはテストメールです",
    ],
    "service-recovery": [
        "-t", "service", "-n", "RECOVERY", "-s", "HTTP", "-S", "OK",
        "-o", "これはテストメールです",
    ],
}


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--to", required=True, help="Recipient address(es)")
    parser.add_argument("--host", default="example.com", help="Host name to report")
    parser.add_argument("--host-address", default="192.168.0.1")
    parser.add_argument(
        "--case", choices=sorted(CASES), action="append", help="Case to send (default: all)"
    )
    args = parser.parse_args()

    exit_code = 0
    for case in args.case or sorted(CASES):
        argv = [
            "-v",
            "--log-level", "DEBUG",
            "-a", args.to,
            "-H", args.host,
            "-A", args.host_address,
            "-d", SAMPLE_DATETIME,
            *CASES[case],
        ]
        print(f"=== {case}")
        result = notify_main(argv)
        print(f"=== {case}: {'sent' if result == 0 else 'FAILED'}\n")
        exit_code = exit_code or result
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
