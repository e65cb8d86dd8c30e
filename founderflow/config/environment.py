"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
VALID_LOG_FORMATS = ["json", "key-value"]
MAX_WORKERS_LIMIT = 64


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
        max_workers: Optional[int] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment or "production"
        self.max_workers = max_workers


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - LOG_FORMAT: Override log format (json, key-value)
    - ENVIRONMENT: Deployment label attached to every log record (default: production)
    - FOUNDERFLOW_MAX_WORKERS: Override batch worker threads (1-64)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    log_level = os.getenv("LOG_LEVEL") or None
    log_format = os.getenv("LOG_FORMAT") or None
    environment = os.getenv("ENVIRONMENT") or None
    max_workers_str = os.getenv("FOUNDERFLOW_MAX_WORKERS") or None

    if log_level:
        log_level = log_level.strip().upper()
        if log_level not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

    if log_format:
        log_format = log_format.strip().lower()
        if log_format not in VALID_LOG_FORMATS:
            errors.append(
                f"Invalid LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(VALID_LOG_FORMATS)}"
            )

    max_workers = None
    if max_workers_str:
        try:
            max_workers = int(max_workers_str)
            if max_workers < 1 or max_workers > MAX_WORKERS_LIMIT:
                errors.append(
                    f"Invalid FOUNDERFLOW_MAX_WORKERS: {max_workers}. "
                    f"Must be between 1 and {MAX_WORKERS_LIMIT}."
                )
        except ValueError:
            errors.append(
                f"Invalid FOUNDERFLOW_MAX_WORKERS: '{max_workers_str}'. Must be a valid integer."
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset variables you do not need; all of them are optional",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level,
        log_format=log_format,
        environment=environment,
        max_workers=max_workers,
    )
