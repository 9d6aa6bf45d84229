"""Async HTTP Client for Data Toolkits
=====================================

A small HTTP client that gives toolkits a uniform way to call REST APIs.
Endpoints are registered by name with their base URL, headers and timeout;
one ``httpx.AsyncClient`` is created lazily per endpoint and reused for every
request until ``aclose()``.

Key Features:
- Named endpoints with per-endpoint headers and timeouts
- Automatic JSON parsing with HTTP status classification
- Bounded retries on transport failures only (never on HTTP error statuses)
- Proper async resource management
"""

import asyncio
from typing import Any, Dict, Optional

import httpx
from loguru import logger

__all__ = ["DataHTTPClient", "HTTPClientError"]


class HTTPClientError(Exception):
    """Base exception for HTTP client errors.

    ``status_code`` is None when no HTTP response was received at all
    (DNS failure, refused connection, timeout).
    """

    def __init__(self, message: str, status_code: int = None, response_text: str = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text


class DataHTTPClient:
    """Generic async HTTP client for data toolkit operations.

    Example:
        ```python
        client = DataHTTPClient(default_timeout=30.0)
        await client.add_endpoint(
            "dexpaprika",
            "https://api.dexpaprika.com",
            headers={"Authorization": "Bearer your_key"},
        )
        pools = await client.get("dexpaprika", "/pools", params={"limit": 5})
        await client.aclose()
        ```
    """

    def __init__(
        self,
        default_timeout: float = 30.0,
        default_headers: Optional[Dict[str, str]] = None,
        max_retries: int = 0,
        retry_delay: float = 1.0,
    ):
        """Initialize the HTTP client.

        Args:
            default_timeout: Default timeout for all requests in seconds
            default_headers: Default headers applied to all requests
            max_retries: Retry attempts after a transport failure
            retry_delay: Delay before each retry in seconds
        """
        self._default_timeout = default_timeout
        self._default_headers = default_headers or {}
        self._max_retries = max_retries
        self._retry_delay = retry_delay

        self._endpoints: Dict[str, Dict[str, Any]] = {}
        self._clients: Dict[str, httpx.AsyncClient] = {}

        logger.debug(f"Initialized DataHTTPClient with {default_timeout}s timeout")

    async def add_endpoint(
        self,
        name: str,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        **client_kwargs: Any,
    ) -> None:
        """Add a new endpoint configuration.

        Args:
            name: Unique identifier for this endpoint
            base_url: Base URL for the endpoint
            headers: Additional headers specific to this endpoint
            timeout: Custom timeout for this endpoint (overrides default)
            **client_kwargs: Additional arguments passed to httpx.AsyncClient
        """
        if name in self._endpoints:
            logger.warning(f"Endpoint '{name}' already exists, updating configuration")
            if name in self._clients:
                await self._clients[name].aclose()
                del self._clients[name]

        endpoint_headers = {**self._default_headers}
        if headers:
            endpoint_headers.update(headers)

        self._endpoints[name] = {
            "base_url": base_url,
            "headers": endpoint_headers,
            "timeout": timeout or self._default_timeout,
            "client_kwargs": client_kwargs,
        }

        logger.debug(f"Added endpoint '{name}' with base URL: {base_url}")

    def _get_client(self, endpoint_name: str) -> httpx.AsyncClient:
        """Get or create HTTP client for the specified endpoint.

        Raises:
            ValueError: If endpoint is not configured
        """
        if endpoint_name not in self._endpoints:
            available = list(self._endpoints.keys())
            raise ValueError(f"Endpoint '{endpoint_name}' not configured. Available: {available}")

        if endpoint_name not in self._clients:
            config = self._endpoints[endpoint_name]

            self._clients[endpoint_name] = httpx.AsyncClient(
                base_url=config["base_url"],
                headers=config["headers"],
                timeout=config["timeout"],
                **config["client_kwargs"],
            )

            logger.debug(f"Created HTTP client for endpoint '{endpoint_name}'")

        return self._clients[endpoint_name]

    async def get(
        self,
        endpoint_name: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make a GET request to the specified endpoint.

        Args:
            endpoint_name: Name of the configured endpoint
            path: URL path (relative to endpoint base URL)
            params: Query parameters

        Returns:
            Parsed JSON body, or None when the response body is empty

        Raises:
            HTTPClientError: For HTTP errors, transport failures, unusable URLs or invalid JSON
        """
        return await self._make_request(endpoint_name, "GET", path, params=params)

    async def _make_request(
        self,
        endpoint_name: str,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Make an HTTP request, retrying only when no response was received."""
        try:
            client = self._get_client(endpoint_name)
        except httpx.InvalidURL as e:
            raise HTTPClientError(f"Invalid URL for endpoint '{endpoint_name}': {e}")

        max_retries = self._max_retries
        last_error = None

        for attempt in range(max_retries + 1):
            try:
                logger.debug(f"Making {method} request to {endpoint_name}{path} (attempt {attempt + 1})")

                response = await client.request(method, path, params=params)
                response.raise_for_status()

                if not response.content:
                    return None

                try:
                    return response.json()
                except ValueError as e:
                    raise HTTPClientError(f"Invalid JSON response: {e}", response.status_code, response.text)

            except httpx.InvalidURL as e:
                raise HTTPClientError(f"Invalid URL for {endpoint_name}{path}: {e}")

            except httpx.HTTPStatusError as e:
                # HTTP error statuses are answers, not transport failures
                raise HTTPClientError(
                    f"HTTP {e.response.status_code} error: {e.response.text}",
                    e.response.status_code,
                    e.response.text
                )

            except httpx.RequestError as e:
                last_error = HTTPClientError(f"Request failed: {str(e) or type(e).__name__}")
                logger.warning(f"Request to {endpoint_name}{path} failed: {last_error}")

            if attempt < max_retries:
                logger.debug(f"Retrying request after {self._retry_delay}s delay")
                await asyncio.sleep(self._retry_delay)

        logger.error(f"Request to {endpoint_name}{path} failed after {max_retries + 1} attempts")
        raise last_error

    def get_endpoints(self) -> Dict[str, str]:
        """Get a summary of configured endpoints.

        Returns:
            dict: Mapping of endpoint names to their base URLs
        """
        return {name: config["base_url"] for name, config in self._endpoints.items()}

    async def aclose(self) -> None:
        """Close all HTTP clients and clean up resources."""
        for endpoint_name, client in self._clients.items():
            await client.aclose()
            logger.debug(f"Closed HTTP client for endpoint '{endpoint_name}'")

        self._clients.clear()
        self._endpoints.clear()
        logger.debug("Closed DataHTTPClient and all endpoints")

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()
