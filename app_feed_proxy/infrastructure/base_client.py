"""Base class for async HTTP clients of the upstream content API."""

import logging

import httpx

from ..application.exceptions import (
    ConfigurationError,
    UpstreamStatusError,
    UpstreamTransportError,
)


class BaseClient:
    """A base client that handles an async client and timeout configuration."""

    def __init__(self, client: httpx.AsyncClient, url: str, timeout: float):
        """
        Initializes the base client.

        Args:
            client: An instance of httpx.AsyncClient.
            url: The upstream endpoint (or base URL) this client talks to.
            timeout: Seconds before an upstream request is abandoned.

        Raises:
            ConfigurationError: If the upstream URL is missing.
        """

        if not url:
            raise ConfigurationError(
                f"Upstream URL for {self.__class__.__name__} is missing. "
                f"Please check your config files or environment."
            )

        self.client = client
        self.timeout = timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    async def _execute_fetch(self, url: str) -> bytes:
        """
        Executes the raw HTTP GET request and returns the response body.

        Raises:
            UpstreamTransportError: If the request cannot be completed.
            UpstreamStatusError: If the upstream answers with a non-200 status.
        """
        try:
            response = await self.client.get(url, timeout=self.timeout)
        except httpx.TransportError as e:
            self.logger.error(f"HTTP request to {url} failed: {e!r}")
            raise UpstreamTransportError(
                f"Failed to make HTTP request: {e!r}"
            ) from e

        if response.status_code != httpx.codes.OK:
            self.logger.error(
                f"API returned non-200 status {response.status_code} for {url}"
            )
            raise UpstreamStatusError(
                f"Received non-200 status code: {response.status_code}",
                status_code=response.status_code,
            )

        return response.content
