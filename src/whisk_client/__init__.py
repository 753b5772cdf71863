"""
Whisk Client - invoke actions and fire triggers over the REST API

A small client for OpenWhisk-style platforms. It resolves qualified names,
authenticates with the credentials the platform injects into the
environment, and returns decoded JSON responses.

Key Components:
- WhiskClient: Synchronous client (invoke, trigger, post)
- AsyncWhiskClient: Async variant of the same operations
- WhiskConfig: API host and key, read from __OW_API_HOST / __OW_API_KEY
"""

__version__ = "1.0.0"

import logging

# Core exports
from whisk_client.core.config import ConfigurationError, WhiskConfig, WhiskError, get_config
from whisk_client.core.logging import get_logger, setup_logging

# HTTP Client exports
from whisk_client.client.http_client import (
    AsyncWhiskClient,
    JSONValue,
    TransportFailure,
    WhiskClient,
)
from whisk_client.client.names import QualifiedName, parse_qualified_name

# Library records stay silent unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    "ConfigurationError",
    "WhiskConfig",
    "WhiskError",
    "get_config",
    "get_logger",
    "setup_logging",
    # HTTP Client
    "AsyncWhiskClient",
    "JSONValue",
    "QualifiedName",
    "TransportFailure",
    "WhiskClient",
    "parse_qualified_name",
]
