"""HTTP adapter that fetches the Pi-hole status document with httpx."""

import logging

import httpx

from pihole_statsd.core.errors import FetchError

logger = logging.getLogger(__name__)

STATUS_PATH = "/admin/api.php"


def status_url(api_host: str) -> str:
    """Build the status endpoint URL for a Pi-hole host (``host[:port]``)."""
    return f"http://{api_host}{STATUS_PATH}"


class HttpStatusSource:
    """StatusSourcePort implementation backed by an httpx.AsyncClient.

    The client is created lazily unless one is injected; an injected client
    is never closed by this adapter.
    """

    def __init__(
        self,
        api_host: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = status_url(api_host)
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client (lazy to avoid event loop issues)."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=None)
        return self._client

    async def fetch(self) -> str:
        """GET the status endpoint and return the buffered body.

        Raises:
            FetchError: On transport failure or a non-2xx status code.
        """
        try:
            response = await self._get_client().get(self.url)
        except httpx.HTTPError as exc:
            raise FetchError(self.url, str(exc) or type(exc).__name__) from exc
        if not response.is_success:
            raise FetchError(self.url, f"HTTP {response.status_code}")
        logger.debug("Fetched %d bytes from %s", len(response.content), self.url)
        return response.text

    async def close(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
