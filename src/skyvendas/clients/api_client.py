"""
SkyVendas REST API client.

Thin async JSON client used by the page fetchers. Attaches the bearer
token, logs failed requests and classifies failures into the
SkyVendas error hierarchy.
"""

import logging
from typing import Any

import httpx

from skyvendas.config import DEFAULT_API_BASE_URL
from skyvendas.utils.errors import (
    APIError,
    AuthenticationError,
    NotFoundError,
    TransientFetchError,
    format_api_error,
)

logger = logging.getLogger(__name__)

# Request timeout in seconds
REQUEST_TIMEOUT = 60.0

USER_AGENT = "skyvendas-client/1.0"

TRANSIENT_STATUS_CODES = {429, 500, 502, 503, 504}


class SkyVendasAPIClient:
    """Async client for the SkyVendas API."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        token: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: API root URL
            token: Optional bearer token
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token or None
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str | None) -> None:
        """Set or clear the bearer token for subsequent requests."""
        self._token = token or None
        if self._client is not None:
            if self._token:
                self._client.headers["Authorization"] = f"Bearer {self._token}"
            else:
                self._client.headers.pop("Authorization", None)

    @property
    def headers(self) -> dict[str, str]:
        """Build request headers."""
        headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SkyVendasAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET a JSON document.

        Args:
            path: Path relative to the base URL
            params: Query parameters

        Returns:
            Decoded JSON body, or None for 204 responses

        Raises:
            TransientFetchError: Network failure, timeout, 429 or 5xx
            AuthenticationError: 401 / 403
            NotFoundError: 404
            APIError: Other 4xx or undecodable body
        """
        client = await self._get_client()
        url = f"{self.base_url}{path}"

        try:
            response = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            logger.error(f"[API GET] {url} -> Timeout ({self.timeout:.0f}s)")
            raise TransientFetchError(
                f"Request to {path} timed out", "Try again in a moment"
            ) from e
        except httpx.TransportError as e:
            logger.error(f"[API GET] {url} -> Network Error ({e})")
            raise TransientFetchError(
                f"Could not reach the server for {path}", "Check your connection"
            ) from e

        if response.status_code == 204:
            return None

        if response.is_error:
            logger.warning(f"[API GET] {url} -> {response.status_code}")
            raise self._error_for(response)

        try:
            return response.json()
        except ValueError as e:
            raise APIError(
                f"Invalid JSON from {path}", status_code=response.status_code
            ) from e

    @staticmethod
    def _error_for(response: httpx.Response) -> Exception:
        status = response.status_code
        message = format_api_error(status, response.text[:200])

        if status in TRANSIENT_STATUS_CODES:
            return TransientFetchError(message)
        if status in (401, 403):
            return AuthenticationError(message)
        if status == 404:
            return NotFoundError(message)
        return APIError(message, status_code=status)
