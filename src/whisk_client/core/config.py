"""
Configuration management for the whisk client.

Credentials and the API host are read from the environment variables the
platform injects into every action container (``__OW_API_HOST`` and
``__OW_API_KEY``), or passed explicitly when building a client.
"""

from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "__OW_"


class WhiskError(Exception):
    """Base exception for whisk client errors."""


class ConfigurationError(WhiskError):
    """Exception raised when the API host or key is missing or empty."""


class WhiskConfig(BaseSettings):
    """Connection settings for the platform REST API.

    Attributes:
        api_host: Base URL of the API, e.g. ``http://host:port``
            (``__OW_API_HOST``)
        api_key: Raw credential string, e.g. ``user:password``
            (``__OW_API_KEY``)
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    api_host: str = Field(description="Base URL of the platform API.")
    api_key: str = Field(
        repr=False,
        description="Credential string sent as HTTP Basic authorization.",
    )

    @field_validator("api_host", "api_key")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject empty values."""
        if not v:
            raise ValueError("value cannot be empty")
        return v

    def __init__(self, **values: Any) -> None:
        """Validate settings from keyword arguments and the environment.

        Raises:
            ConfigurationError: If the host or key is missing or empty
        """
        try:
            super().__init__(**values)
        except ValidationError as e:
            raise ConfigurationError(_describe_invalid(e)) from e

    @property
    def base_url(self) -> str:
        """Get the API host without a trailing slash."""
        return self.api_host.rstrip("/")


def env_name(field_name: str) -> str:
    """Get the environment variable backing a config field."""
    return f"{ENV_PREFIX}{field_name}".upper()


def _describe_invalid(error: ValidationError) -> str:
    invalid = sorted({env_name(str(err["loc"][0])) for err in error.errors() if err["loc"]})
    return f"Missing or empty setting: {', '.join(invalid) or 'unknown'}"


def get_config(**overrides: Any) -> WhiskConfig:
    """
    Build a configuration from the environment.

    A new instance is created on every call so that changes to the
    environment are picked up by the next request.

    Args:
        **overrides: Field values that take precedence over the environment
            (``api_host``, ``api_key``)

    Returns:
        Validated WhiskConfig instance

    Raises:
        ConfigurationError: If the host or key is missing or empty

    Example:
        >>> config = get_config()
        >>> config.base_url
        'http://192.168.33.13:10001'
    """
    return WhiskConfig(**overrides)
