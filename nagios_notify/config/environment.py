"""Environment variable overrides for runtime settings."""

import os
from pathlib import Path
from typing import Optional

from .exceptions import ConfigurationError
from .loader import DEFAULT_CONFIG_PATH
from .models import LogFormat, LogLevel

DEFAULT_TEMPLATE_DIR = Path(".")
DEFAULT_LOG_DIR = Path("log")


class EnvironmentConfig:
    """Runtime settings resolved from CLI flags, environment and defaults."""

    def __init__(
        self,
        config_path: Path = DEFAULT_CONFIG_PATH,
        template_dir: Path = DEFAULT_TEMPLATE_DIR,
        log_dir: Path = DEFAULT_LOG_DIR,
        log_level: str = LogLevel.INFO.value,
        log_format: str = LogFormat.KEY_VALUE.value,
    ):
        self.config_path = config_path
        self.template_dir = template_dir
        self.log_dir = log_dir
        self.log_level = log_level
        self.log_format = log_format


def load_environment_config(
    config_path: Optional[Path] = None,
    template_dir: Optional[Path] = None,
    log_dir: Optional[Path] = None,
    log_level: Optional[str] = None,
) -> EnvironmentConfig:
    """
    Resolve runtime settings with priority CLI > environment > default.

    Recognized environment variables:
    - NAGIOS_NOTIFY_CONFIG: Path to the YAML configuration file
    - NAGIOS_NOTIFY_TEMPLATE_DIR: Directory holding template.txt
    - NAGIOS_NOTIFY_LOG_DIR: Directory for the daily rotated log
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - LOG_FORMAT: key-value or json

    Raises:
        ConfigurationError: If LOG_LEVEL or LOG_FORMAT hold unknown values
    """
    errors = []

    level = (log_level or os.getenv("LOG_LEVEL") or LogLevel.INFO.value).upper()
    valid_levels = [lvl.value for lvl in LogLevel]
    if level not in valid_levels:
        errors.append(
            f"Invalid LOG_LEVEL: '{level}'. Must be one of: {', '.join(valid_levels)}"
        )

    log_format = os.getenv("LOG_FORMAT") or LogFormat.KEY_VALUE.value
    valid_formats = [fmt.value for fmt in LogFormat]
    if log_format not in valid_formats:
        errors.append(
            f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=["Check the values in your .env file"],
        )

    return EnvironmentConfig(
        config_path=config_path or _env_path("NAGIOS_NOTIFY_CONFIG", DEFAULT_CONFIG_PATH),
        template_dir=template_dir
        or _env_path("NAGIOS_NOTIFY_TEMPLATE_DIR", DEFAULT_TEMPLATE_DIR),
        log_dir=log_dir or _env_path("NAGIOS_NOTIFY_LOG_DIR", DEFAULT_LOG_DIR),
        log_level=level,
        log_format=log_format,
    )


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    return Path(value) if value else default
