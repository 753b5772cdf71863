"""
HTTP client for the platform REST API.

This module provides synchronous and asynchronous clients for invoking
actions and firing triggers. Both issue a single authenticated JSON POST
per call and return the decoded JSON response.
"""

import base64
from collections.abc import Mapping
from types import TracebackType
from typing import Any, NoReturn

import httpx

from whisk_client.client.names import action_path, trigger_path
from whisk_client.core.config import WhiskConfig, WhiskError, get_config
from whisk_client.core.logging import get_logger

logger = get_logger(__name__)

# Decoded JSON document of whatever shape the platform returns
JSONValue = dict[str, Any] | list[Any] | str | int | float | bool | None

# Action failures are reported with this status and a JSON error body
PLATFORM_ERROR_STATUS = 502


class TransportFailure(WhiskError):
    """Exception raised when a request fails or returns an error status.

    Attributes:
        message: Human readable description
        status_code: HTTP status, or None when no response was received
        response_data: Decoded (or raw text) error body, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_data: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data
        super().__init__(self.message)


def basic_authorization(api_key: str) -> str:
    """Build the Authorization header value for an API key.

    The key string itself (``user:password``) is base64 encoded as-is.

    Args:
        api_key: Raw API key

    Returns:
        Header value, e.g. ``Basic dXNlcjpwYXNzd29yZA==``
    """
    encoded = base64.b64encode(api_key.encode("utf-8")).decode("ascii")
    return f"Basic {encoded}"


class _BaseWhiskClient:
    """Request building and response handling shared by both clients."""

    def __init__(self, config: WhiskConfig | None = None, timeout: float | None = None) -> None:
        """Initialize the client.

        Args:
            config: Explicit connection settings. When omitted, the
                ``__OW_API_HOST`` and ``__OW_API_KEY`` environment variables
                are read on every request.
            timeout: Request timeout in seconds for the transport the client
                builds itself (None disables the timeout)
        """
        self.config = config
        self.timeout = timeout
        self._owns_transport = False

    def _resolve_config(self) -> WhiskConfig:
        if self.config is not None:
            return self.config
        return get_config()

    def _prepare(
        self, path: str, parameters: Mapping[str, Any] | None
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        """Resolve configuration and build the URL, headers and JSON body.

        Raises:
            ConfigurationError: If the host or key is missing
        """
        config = self._resolve_config()
        url = f"{config.base_url}{path}"
        headers = {
            "Accept": "application/json",
            "Authorization": basic_authorization(config.api_key),
        }
        body = dict(parameters) if parameters else {}

        logger.debug(
            f"POST request to {path}",
            extra={"context": {"host": config.base_url, "parameters": list(body)}},
        )
        return url, headers, body

    def _decode(self, response: httpx.Response) -> JSONValue:
        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(
                f"Invalid JSON in response from {response.request.url.path}",
                status_code=response.status_code,
                response_data=response.text,
            ) from e

    def _handle_response(self, response: httpx.Response) -> JSONValue:
        """Decode a response, converting error statuses.

        Raises:
            TransportFailure: For non-2xx statuses other than 502
        """
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == PLATFORM_ERROR_STATUS:
                return self._decode(e.response)
            self._handle_error(e)
        return self._decode(response)

    def _handle_error(self, error: httpx.HTTPStatusError) -> NoReturn:
        response = error.response
        try:
            error_data: Any = response.json()
        except ValueError:
            error_data = response.text

        logger.warning(
            f"Request failed with status {response.status_code}",
            extra={"context": {"url": str(response.request.url)}},
        )
        raise TransportFailure(
            f"Request failed with status {response.status_code}",
            status_code=response.status_code,
            response_data=error_data,
        ) from error

    def _request_failed(self, error: httpx.RequestError) -> TransportFailure:
        logger.warning(f"Request failed: {error}")
        return TransportFailure(f"Request failed: {error}")


class WhiskClient(_BaseWhiskClient):
    """
    Synchronous client for invoking actions and firing triggers.

    Example:
        >>> with WhiskClient() as whisk:
        ...     whisk.invoke("/whisk.system/utils/echo", {"message": "hi"})
    """

    def __init__(
        self,
        config: WhiskConfig | None = None,
        transport: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Explicit connection settings (defaults to the environment)
            transport: Pre-built httpx client. It is used as-is and is not
                closed by this client.
            timeout: Timeout for the transport built when none is supplied
        """
        super().__init__(config=config, timeout=timeout)
        self._client = transport

    def __enter__(self) -> "WhiskClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def ensure_client(self) -> httpx.Client:
        """Get the transport, building it on first use.

        Returns:
            The httpx Client instance
        """
        if self._client is None:
            self._client = httpx.Client(timeout=self.timeout)
            self._owns_transport = True
        return self._client

    def invoke(
        self,
        action: str,
        parameters: Mapping[str, Any] | None = None,
        blocking: bool = True,
    ) -> JSONValue:
        """Invoke an action.

        Args:
            action: Qualified action name (e.g. "/whisk.system/utils/echo")
            parameters: Parameters to send to the action
            blocking: Wait for the activation result

        Returns:
            Decoded JSON response

        Raises:
            ConfigurationError: If the host or key is missing
            TransportFailure: If the request fails
        """
        return self.post(action_path(action, blocking), parameters)

    def trigger(self, event: str, parameters: Mapping[str, Any] | None = None) -> JSONValue:
        """Fire a trigger event.

        Args:
            event: Qualified trigger name (e.g. "locationUpdate")
            parameters: Parameters to send with the event

        Returns:
            Decoded JSON response
        """
        return self.post(trigger_path(event), parameters)

    def post(self, path: str, parameters: Mapping[str, Any] | None = None) -> JSONValue:
        """Make an authenticated JSON POST to the API.

        Args:
            path: API path including query string (without host)
            parameters: JSON body

        Returns:
            Decoded JSON response, including 502 error bodies

        Raises:
            ConfigurationError: If the host or key is missing
            TransportFailure: If the request fails or returns an error status
        """
        url, headers, body = self._prepare(path, parameters)
        client = self.ensure_client()

        try:
            response = client.post(url, json=body, headers=headers)
        except httpx.RequestError as e:
            raise self._request_failed(e) from e

        return self._handle_response(response)

    def close(self) -> None:
        """Close the transport if this client built it."""
        if self._client is not None and self._owns_transport:
            self._client.close()
            self._client = None
            self._owns_transport = False


class AsyncWhiskClient(_BaseWhiskClient):
    """
    Async client for invoking actions and firing triggers.

    Example:
        >>> async with AsyncWhiskClient() as whisk:
        ...     await whisk.trigger("locationUpdate", {"place": "Paris"})
    """

    def __init__(
        self,
        config: WhiskConfig | None = None,
        transport: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Explicit connection settings (defaults to the environment)
            transport: Pre-built httpx async client, not closed by this client
            timeout: Timeout for the transport built when none is supplied
        """
        super().__init__(config=config, timeout=timeout)
        self._client = transport

    async def __aenter__(self) -> "AsyncWhiskClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def ensure_client(self) -> httpx.AsyncClient:
        """Get the transport, building it on first use.

        Returns:
            The httpx AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_transport = True
        return self._client

    async def invoke(
        self,
        action: str,
        parameters: Mapping[str, Any] | None = None,
        blocking: bool = True,
    ) -> JSONValue:
        """Invoke an action. See WhiskClient.invoke."""
        return await self.post(action_path(action, blocking), parameters)

    async def trigger(
        self, event: str, parameters: Mapping[str, Any] | None = None
    ) -> JSONValue:
        """Fire a trigger event. See WhiskClient.trigger."""
        return await self.post(trigger_path(event), parameters)

    async def post(self, path: str, parameters: Mapping[str, Any] | None = None) -> JSONValue:
        """Make an authenticated JSON POST to the API. See WhiskClient.post."""
        url, headers, body = self._prepare(path, parameters)
        client = await self.ensure_client()

        try:
            response = await client.post(url, json=body, headers=headers)
        except httpx.RequestError as e:
            raise self._request_failed(e) from e

        return self._handle_response(response)

    async def aclose(self) -> None:
        """Close the transport if this client built it."""
        if self._client is not None and self._owns_transport:
            await self._client.aclose()
            self._client = None
            self._owns_transport = False
