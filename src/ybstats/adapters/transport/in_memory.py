"""In-memory transport serving canned payloads."""

from collections.abc import Mapping


class InMemoryTransport:
    """In-memory implementation of TransportPort.

    Serves fixed bodies per ``host:port`` and path. A ``host:port`` without
    any payload is treated as unreachable. Suitable for testing and for
    replaying saved endpoint output.
    """

    def __init__(
        self, payloads: Mapping[str, Mapping[str, bytes | str]] | None = None
    ) -> None:
        """Create the transport.

        Args:
            payloads: Maps ``"host:port"`` to a mapping of path to body.
        """
        self._payloads: dict[str, dict[str, bytes]] = {}
        self.requests: list[tuple[str, int, str]] = []
        for endpoint, bodies in (payloads or {}).items():
            for path, body in bodies.items():
                self.set_payload(endpoint, path, body)

    def set_payload(self, endpoint: str, path: str, body: bytes | str) -> None:
        """Serve ``body`` for ``path`` on ``endpoint`` (``"host:port"``)."""
        if isinstance(body, str):
            body = body.encode()
        self._payloads.setdefault(endpoint, {})[path] = body

    async def liveness(self, host: str, port: int) -> bool:
        return f"{host}:{port}" in self._payloads

    async def fetch(self, host: str, port: int, path: str) -> bytes:
        self.requests.append((host, port, path))
        return self._payloads.get(f"{host}:{port}", {}).get(path, b"")
