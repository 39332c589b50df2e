"""Exceptions raised while decoding monitoring events."""

from typing import List, Optional


class InvalidEvent(Exception):
    """Raised when a required event field is missing or an enum symbol is unknown.

    Detected before any rendering starts so that a malformed notification is
    never sent.
    """

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.message = message
        self.errors = errors or []
        detail = "; ".join(self.errors)
        super().__init__(f"{message}: {detail}" if detail else message)
