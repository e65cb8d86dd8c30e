"""Configuration management module for FounderFlow."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import apply_environment_overrides, load_config, validate_config_file
from .models import (
    AppConfig,
    BatchConfig,
    ChannelConfig,
    DirectoryConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    NormalizationConfig,
    SortOrder,
)

__all__ = [
    # Main loader functions
    "load_config",
    "validate_config_file",
    "load_environment_config",
    "apply_environment_overrides",
    # Configuration models
    "AppConfig",
    "NormalizationConfig",
    "ChannelConfig",
    "BatchConfig",
    "DirectoryConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "SortOrder",
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
