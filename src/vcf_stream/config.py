"""Configuration file support for vcf-stream."""

import logging
import tomllib
from pathlib import Path
from typing import Any

from .vcf_parser import ParserConfig

logger = logging.getLogger(__name__)

CONFIG_TABLE = "vcf_stream"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

BOOLEAN_OPTIONS = ("parse_info", "parse_samples", "skip_invalid", "collect_warnings")


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    for key in BOOLEAN_OPTIONS:
        if key in config_dict and not isinstance(config_dict[key], bool):
            raise ConfigValidationError(
                f"{key} must be a boolean, got {type(config_dict[key]).__name__}"
            )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )

    if "workers" in config_dict:
        workers = config_dict["workers"]
        if not isinstance(workers, int) or isinstance(workers, bool):
            raise ConfigValidationError(f"workers must be an integer, got {type(workers).__name__}")
        if workers <= 0:
            raise ConfigValidationError(f"workers must be positive, got {workers}")


def _read_table(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            toml_data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigValidationError(f"Invalid TOML in {config_path}: {e}") from e

    return dict(toml_data.get(CONFIG_TABLE, {}))


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> ParserConfig:
    """Load parser configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        ParserConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    config_dict = _read_table(Path(config_path))

    if overrides:
        config_dict.update(overrides)

    validate_config(config_dict)

    unknown = set(config_dict) - set(BOOLEAN_OPTIONS) - {"log_level", "workers"}
    if unknown:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(sorted(unknown)))

    filtered_config = {k: v for k, v in config_dict.items() if k in BOOLEAN_OPTIONS}

    return ParserConfig(**filtered_config)


def load_settings(config_path: Path) -> dict[str, Any]:
    """Return the non-parser settings (log level, worker count) from a config file."""
    config_dict = _read_table(Path(config_path))
    validate_config(config_dict)
    settings: dict[str, Any] = {}
    if "log_level" in config_dict:
        settings["log_level"] = config_dict["log_level"].upper()
    if "workers" in config_dict:
        settings["workers"] = config_dict["workers"]
    return settings
