"""
Pytest configuration and shared fixtures for whisk client tests.

This module provides the environment and transport fixtures used
across the unit tests.
"""

import json
from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from whisk_client.core.logging import setup_logging

API_HOST = "http://192.168.33.13:10001"
API_KEY = "user:password"

# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> None:
    """Configure logging for all tests."""
    setup_logging(level="DEBUG", format_type="text")


@pytest.fixture
def whisk_env(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set the API host and key environment variables."""
    env = {"__OW_API_HOST": API_HOST, "__OW_API_KEY": API_KEY}
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture
def empty_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove the API host and key environment variables."""
    monkeypatch.delenv("__OW_API_HOST", raising=False)
    monkeypatch.delenv("__OW_API_KEY", raising=False)


# =============================================================================
# Transport Fixtures
# =============================================================================


class RecordingHandler:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code: int = 200, body: Any = None, content: bytes | None = None):
        self.status_code = status_code
        self.body = {"response": {"success": True}} if body is None else body
        self.content = content
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_body(self) -> Any:
        return json.loads(self.last_request.content)


@pytest.fixture
def make_handler() -> Callable[..., RecordingHandler]:
    """Factory for recording handlers."""
    return RecordingHandler


@pytest.fixture
def handler() -> RecordingHandler:
    """Recording handler answering 200 with a JSON body."""
    return RecordingHandler()


@pytest.fixture
def transport(handler: RecordingHandler) -> Generator[httpx.Client, None, None]:
    """httpx Client backed by the recording handler."""
    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        yield client
