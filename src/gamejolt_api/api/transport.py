"""HTTP transport for API calls and avatar downloads, built on httpx."""

import logging
import re
from types import TracebackType
from typing import Protocol, Self

import httpx

from gamejolt_api.api.errors import TransportError

logger = logging.getLogger(__name__)

# Default per-request timeout in seconds
DEFAULT_TIMEOUT = 10.0

_WEBP_SUFFIX = re.compile(r"\.webp$", re.IGNORECASE)


class Transport(Protocol):
    """Sends a fully qualified, signed URL and returns the response body."""

    async def send(self, url: str) -> str:
        """Issue a GET request.

        Raises:
            TransportError: The exchange could not be completed.
            TransportCancelledError: The exchange was cancelled.

        """
        ...


class HttpxTransport:
    """Transport backed by an ``httpx.AsyncClient``.

    Usable as an async context manager. A client passed in is borrowed and left open;
    a client created here is closed by ``aclose``.
    """

    def __init__(self, *, timeout: float = DEFAULT_TIMEOUT, client: httpx.AsyncClient | None = None) -> None:
        """Initialize the transport.

        Args:
            timeout: Per-request timeout in seconds, used when no client is given.
            client: Existing client to send through.

        """
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(timeout=timeout)

    async def send(self, url: str) -> str:
        """Issue a GET request and return the body text."""
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"HTTP {e.response.status_code} from server.") from e
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}") from e
        return response.text

    async def fetch_avatar(self, url: str) -> bytes | None:
        """Download a user's avatar image.

        WEBP avatar URLs are rewritten to their PNG variant. Returns None when the
        image does not exist.

        Raises:
            TransportError: The download failed for another reason.

        """
        url = _WEBP_SUFFIX.sub(".png", url)
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(f"Avatar download failed: {e}") from e
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("Avatar not found: %s", url)
            return None
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"HTTP {e.response.status_code} while downloading avatar.") from e
        return response.content

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self, exc_type: type[BaseException] | None, exc: BaseException | None, tb: TracebackType | None
    ) -> None:
        await self.aclose()

