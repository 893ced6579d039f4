"""
HTTP client utilities with connection pooling.
Provides the reusable httpx client shared by the completion and embedding clients.
"""
import httpx
from config import Config


class HTTPClientManager:
    """Owns a shared httpx client with connection pooling for outbound API calls."""

    def __init__(self, timeout: float = Config.COMPLETION_TIMEOUT):
        self._timeout = timeout
        self._api_client: httpx.AsyncClient | None = None

    def get_api_client(self) -> httpx.AsyncClient:
        """
        Get or create the shared httpx client for provider API calls.

        Features:
        - Connection pooling (reuses TCP connections)
        - Request timeout matching the completion bound

        Returns:
            Configured httpx.AsyncClient
        """
        if self._api_client is None:
            limits = httpx.Limits(
                max_connections=100,
                max_keepalive_connections=20,
                keepalive_expiry=30.0
            )

            self._api_client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=limits
            )

        return self._api_client

    async def close_all(self) -> None:
        """
        Close all managed clients and clean up connections.
        """
        if self._api_client is not None:
            await self._api_client.aclose()
            self._api_client = None
