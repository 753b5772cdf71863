"""
HTTP client for the platform REST API.

This package provides clients for invoking actions and firing triggers,
along with the qualified-name parsing and path building they rely on.
"""

from whisk_client.client.http_client import (
    AsyncWhiskClient,
    JSONValue,
    TransportFailure,
    WhiskClient,
)
from whisk_client.client.names import QualifiedName, parse_qualified_name

__all__ = [
    "AsyncWhiskClient",
    "JSONValue",
    "QualifiedName",
    "TransportFailure",
    "WhiskClient",
    "parse_qualified_name",
]
