"""Configuration schema models using Pydantic."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


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


class UpstreamConfig(BaseModel):
    """Settings for the upstream contact-search API."""

    endpoint: str = Field(
        "https://api.apollo.io/v1/contacts/search",
        min_length=1,
        description="Contact search endpoint URL",
    )
    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Timeout for each upstream page request (seconds)"
    )
    user_agent: str = Field(
        "ApolloLeadDownloader/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        stripped = v.strip()
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("endpoint must be an http:// or https:// URL")
        return stripped

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class AppConfig(BaseModel):
    """Root configuration object for the Apollo Lead Downloader.

    Every section has defaults, so an absent config file is a valid
    configuration.
    """

    upstream: UpstreamConfig = Field(
        default_factory=UpstreamConfig, description="Upstream API settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
