"""Port interfaces for transport and snapshot storage adapters.

These protocols define the contracts that adapters must implement.
The core domain depends only on these interfaces, not concrete implementations.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from ybstats.core.models import CanonicalRecord, CaptureInfo, RecordKind


@runtime_checkable
class TransportPort(Protocol):
    """Port for reaching cluster nodes.

    Implementations never raise for network problems: an unreachable node
    answers ``False`` to ``liveness`` and an empty body to ``fetch``.
    Examples: HttpTransport, InMemoryTransport.
    """

    async def liveness(self, host: str, port: int) -> bool:
        """Return True if something accepts connections on host:port."""
        ...

    async def fetch(self, host: str, port: int, path: str) -> bytes:
        """Fetch ``path`` from host:port.

        Args:
            host: Hostname or address.
            port: Port number.
            path: Endpoint path without leading slash, e.g. "metrics".

        Returns:
            The response body, or ``b""`` on any failure.
        """
        ...


@runtime_checkable
class SnapshotStorePort(Protocol):
    """Port for persisting numbered captures.

    Each capture has an index row (number, timestamp, comment) and one
    stream of canonical records per ``RecordKind``.
    Examples: SQLiteSnapshotStore, NdjsonSnapshotStore, InMemorySnapshotStore.
    """

    async def create_capture(
        self, comment: str = "", timestamp: float | None = None
    ) -> CaptureInfo:
        """Allocate the next capture number and record it in the index.

        Args:
            comment: Free-text comment stored with the capture.
            timestamp: Unix timestamp; defaults to now.

        Returns:
            The new index row. Numbers start at 0 and increase by one.
        """
        ...

    async def list_captures(self) -> list[CaptureInfo]:
        """Return all index rows ordered by capture number."""
        ...

    async def get_capture(self, number: int) -> CaptureInfo:
        """Return the index row for ``number``.

        Raises:
            SnapshotNotFoundError: If the capture does not exist.
        """
        ...

    async def write(
        self, number: int, kind: RecordKind, records: Sequence[CanonicalRecord]
    ) -> None:
        """Store the records of one kind for a capture."""
        ...

    async def read(self, number: int, kind: RecordKind) -> list[CanonicalRecord]:
        """Load the records of one kind for a capture.

        A capture that exists but holds no records of ``kind`` reads as empty.

        Raises:
            SnapshotNotFoundError: If the capture does not exist.
        """
        ...

    async def delete_capture(self, number: int) -> None:
        """Remove a capture together with all of its records.

        Raises:
            SnapshotNotFoundError: If the capture does not exist.
        """
        ...

    async def close(self) -> None:
        """Release connections held by the store."""
        ...
