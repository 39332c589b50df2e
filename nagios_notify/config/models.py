"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class SMTPConfig(BaseModel):
    """Mail relay endpoint, credentials and sender address."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    host: str = Field(..., min_length=1, description="SMTP relay hostname")
    user_name: str = Field(..., min_length=1, description="SMTP login user")
    password: str = Field(..., min_length=1, description="SMTP login password")
    sender: str = Field(
        ..., alias="from", min_length=1, description="From and Reply-To mailbox"
    )
    port: int = Field(465, ge=1, le=65535, description="SMTP port (465 = implicit TLS)")
    starttls: bool = Field(True, description="Upgrade plain connections with STARTTLS")
    timeout: float = Field(30.0, gt=0, description="Socket timeout in seconds")

    @field_validator("host", "user_name", "sender")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped


class AppConfig(BaseModel):
    """Root configuration model (the contents of config.yml)."""

    model_config = ConfigDict(frozen=True)

    smtp: SMTPConfig
