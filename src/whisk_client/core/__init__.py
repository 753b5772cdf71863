"""Core configuration and utilities for the whisk client."""

from whisk_client.core.config import (
    ConfigurationError,
    WhiskConfig,
    WhiskError,
    get_config,
)
from whisk_client.core.logging import get_logger, setup_logging

__all__ = [
    "ConfigurationError",
    "WhiskConfig",
    "WhiskError",
    "get_config",
    "get_logger",
    "setup_logging",
]
