"""Core domain models for monitoring events.

This module defines the closed vocabulary handed over by the monitoring
scheduler and the immutable Event record built from it:
- EventType: host or service event
- NotificationType: problem or recovery
- Status: check result severity
- Event: one notification occurrence
"""

from enum import Enum
from typing import Any, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import InvalidEvent


class _Symbol(str, Enum):
    """Enum whose text form is its symbol, also inside templates."""

    def __str__(self) -> str:
        return self.value


class EventType(_Symbol):
    """Whether the event concerns a host or a service on a host."""

    HOST = "host"
    SERVICE = "service"


class NotificationType(_Symbol):
    """Whether the event signals a new problem or a recovery."""

    PROBLEM = "PROBLEM"
    RECOVERY = "RECOVERY"


class Status(_Symbol):
    """Check result severity."""

    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"
    UNREACHABLE = "UNREACHABLE"


def decode_symbol(enum_cls: Type[_Symbol], value: Any) -> Optional[_Symbol]:
    """Case-insensitive lookup of ``value`` in the symbol table of ``enum_cls``.

    Raises:
        ValueError: If the text matches no member
    """
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        for member in enum_cls:
            if member.name == key:
                return member
    choices = ", ".join(member.value for member in enum_cls)
    raise ValueError(f"unknown symbol {value!r}, expected one of: {choices}")


class Event(BaseModel):
    """One notification occurrence passed in by the monitoring caller.

    Read-only once constructed. ``service`` and ``status`` may be absent even
    for service events; the phrase and subject builders substitute
    placeholders instead of failing.
    """

    model_config = ConfigDict(frozen=True)

    event_type: EventType = Field(..., description="host or service")
    notification_type: NotificationType = Field(..., description="PROBLEM or RECOVERY")
    host: str = Field(..., description="Host name as known to the monitor")
    addresses: str = Field(..., description="Recipient mailbox list")
    datetime: str = Field(..., description="Event time, e.g. 'Wed Sep 20 10:43:55 JST 2023'")
    host_address: Optional[str] = Field(None, description="Host IP or DNS address")
    service: Optional[str] = Field(None, description="Service description")
    status: Optional[Status] = Field(None, description="Check result severity")
    output: Optional[str] = Field(None, description="Plugin output text")

    @field_validator("event_type", mode="before")
    @classmethod
    def decode_event_type(cls, v: Any) -> Any:
        return decode_symbol(EventType, v)

    @field_validator("notification_type", mode="before")
    @classmethod
    def decode_notification_type(cls, v: Any) -> Any:
        return decode_symbol(NotificationType, v)

    @field_validator("status", mode="before")
    @classmethod
    def decode_status(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return decode_symbol(Status, v)

    @field_validator("host", "addresses")
    @classmethod
    def require_text(cls, v: str) -> str:
        """Strip whitespace from required string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("host_address", "service", "output", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_host(self) -> bool:
        return self.event_type is EventType.HOST


def parse_event(fields: Mapping[str, Any]) -> Event:
    """
    Decode raw caller input into an Event.

    Args:
        fields: Field name to raw value (usually strings from the command line)

    Returns:
        Validated, immutable Event

    Raises:
        InvalidEvent: If a required field is missing or an enum value is unknown
    """
    try:
        provided = {key: value for key, value in fields.items() if value is not None}
        return Event.model_validate(provided)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            field_path = ".".join(str(loc) for loc in error["loc"])
            if error["type"] == "missing":
                errors.append(f"missing required field: {field_path}")
            else:
                errors.append(f"{field_path}: {error['msg']}")
        raise InvalidEvent("Invalid event", errors=errors) from e
