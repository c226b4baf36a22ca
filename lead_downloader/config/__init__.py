"""Configuration management module for the Apollo Lead Downloader."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import load_app_config, load_config
from .models import AppConfig, LogFormat, LoggingConfig, LogLevel, UpstreamConfig

__all__ = [
    # Main loader functions
    "load_config",
    "load_app_config",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "UpstreamConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
