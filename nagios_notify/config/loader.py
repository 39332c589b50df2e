"""Configuration loader for Nagios Notify."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .models import AppConfig

DEFAULT_CONFIG_PATH = Path("config.yml")


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """
    Load and validate the YAML configuration file.

    The file is read completely and closed before validation starts.

    Args:
        config_path: Path to configuration file

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid YAML
            or does not match the schema
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            suggestions=[
                "Copy config.example.yml to config.yml",
                "Use --config or NAGIOS_NOTIFY_CONFIG to point at another file",
            ],
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML configuration: {e}",
            suggestions=[
                "Check YAML syntax in your config file",
                "Ensure proper indentation (use spaces, not tabs)",
            ],
        )
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            suggestions=[
                f"Ensure {config_path} is readable",
                "Check file permissions",
            ],
        )

    if not config_dict:
        raise ConfigurationError(
            "Configuration file is empty",
            suggestions=["Copy config.example.yml to config.yml"],
        )

    if not isinstance(config_dict, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping at the top level",
            suggestions=["Start the file with an 'smtp:' section"],
        )

    try:
        return AppConfig.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            errors=_format_validation_errors(e),
            suggestions=[
                "Review config.example.yml for correct format",
                "smtp.host, smtp.user_name, smtp.password and smtp.from are required",
            ],
        )


def _format_validation_errors(exc: ValidationError) -> list[str]:
    """Turn pydantic errors into one line per offending field."""
    errors = []
    for error in exc.errors():
        field_path = ".".join(str(loc) for loc in error["loc"])
        error_type = error["type"]

        if error_type == "missing":
            errors.append(f"Missing required field: {field_path}")
        elif error_type in ["string_type", "int_type", "bool_type", "float_type"]:
            expected_type = error_type.replace("_type", "")
            errors.append(
                f"Invalid type for '{field_path}': expected {expected_type}, got {error.get('input')!r}"
            )
        else:
            errors.append(f"{field_path}: {error['msg']}")
    return errors
