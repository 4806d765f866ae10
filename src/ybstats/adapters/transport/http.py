"""HTTP transport for reaching cluster nodes."""

import asyncio
import logging
from types import TracebackType

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
DEFAULT_PROBE_TIMEOUT = 1.0


class HttpTransport:
    """httpx implementation of TransportPort.

    Liveness is a plain TCP connect to host:port. Fetches are HTTP GETs of
    ``http://host:port/<path>``. Neither raises on network errors.

    Example:
        ```python
        async with HttpTransport() as transport:
            body = await transport.fetch("yb-1", 9000, "metrics")
        ```
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        probe_timeout: float = DEFAULT_PROBE_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create the transport.

        Args:
            timeout: Timeout in seconds of one HTTP request.
            probe_timeout: Timeout in seconds of the TCP liveness probe.
            transport: httpx transport to send requests through, for example
                ``httpx.MockTransport`` in tests.
        """
        self._probe_timeout = probe_timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def liveness(self, host: str, port: int) -> bool:
        """Return True if host:port accepts a TCP connection."""
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port), self._probe_timeout
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.debug("(%s:%d) liveness probe failed: %s", host, port, exc)
            return False
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as exc:
            logger.debug("(%s:%d) closing liveness probe failed: %s", host, port, exc)
        return True

    async def fetch(self, host: str, port: int, path: str) -> bytes:
        """GET ``path`` from host:port, returning ``b""`` on failure."""
        url = f"http://{host}:{port}/{path}"
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as exc:
            logger.debug("request failed: %s: %s", url, exc)
            return b""
        if not response.is_success:
            logger.debug("non success response: %s = %d", url, response.status_code)
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
