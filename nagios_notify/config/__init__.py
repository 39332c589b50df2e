"""Configuration management module for Nagios Notify."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import DEFAULT_CONFIG_PATH, load_config
from .models import AppConfig, LogFormat, LogLevel, SMTPConfig

__all__ = [
    # Loader functions
    "load_config",
    "load_environment_config",
    "DEFAULT_CONFIG_PATH",
    # Configuration models
    "AppConfig",
    "SMTPConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
