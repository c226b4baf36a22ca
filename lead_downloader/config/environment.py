"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        apollo_api_key: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.apollo_api_key = apollo_api_key
        self.host = host or DEFAULT_HOST
        self.port = port or DEFAULT_PORT
        self.log_level = log_level
        self.environment = environment or "local"

    def __repr__(self) -> str:
        # Never echo the API key
        return (
            f"EnvironmentConfig(host={self.host!r}, port={self.port!r}, "
            f"log_level={self.log_level!r}, environment={self.environment!r})"
        )


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Required environment variables:
    - APOLLO_API_KEY: Static API key forwarded to the Apollo search API

    Optional environment variables:
    - HOST: Interface to bind the web server to (default: 127.0.0.1)
    - PORT: Web server port, 1-65535 (default: 3000)
    - LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - ENVIRONMENT: Environment label attached to log records (default: local)

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If required variables are missing or invalid
    """
    errors = []

    apollo_api_key = (os.getenv("APOLLO_API_KEY") or "").strip()
    host = os.getenv("HOST")
    port_str = os.getenv("PORT")
    log_level = os.getenv("LOG_LEVEL")
    environment = os.getenv("ENVIRONMENT")

    if not apollo_api_key:
        errors.append("Missing required environment variable: APOLLO_API_KEY")

    port = None
    if port_str:
        try:
            port = int(port_str)
            if port < 1 or port > 65535:
                errors.append(f"Invalid PORT: {port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid PORT: '{port_str}'. Must be a valid integer.")

    if log_level:
        if log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(
                f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        else:
            log_level = log_level.upper()

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Create a .env file with APOLLO_API_KEY=your_api_key_here",
                "Ensure all required environment variables are set",
                "Verify PORT is a number between 1 and 65535",
            ],
        )

    return EnvironmentConfig(
        apollo_api_key=apollo_api_key,
        host=host,
        port=port,
        log_level=log_level,
        environment=environment,
    )
