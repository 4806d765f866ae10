"""In-memory snapshot store."""

import copy
import time
from collections.abc import Sequence

from ybstats.core.errors import SnapshotNotFoundError
from ybstats.core.models import CanonicalRecord, CaptureInfo, RecordKind


class InMemorySnapshotStore:
    """In-memory implementation of SnapshotStorePort.

    Keeps captures in dictionaries. Suitable for testing and for ad-hoc
    sessions where persistence is not required. Records are copied on the way
    in and out, so callers can mutate what they hold.
    """

    def __init__(self) -> None:
        self._captures: dict[int, CaptureInfo] = {}
        self._records: dict[tuple[int, RecordKind], list[CanonicalRecord]] = {}

    async def create_capture(
        self, comment: str = "", timestamp: float | None = None
    ) -> CaptureInfo:
        number = max(self._captures, default=-1) + 1
        info = CaptureInfo(
            number=number,
            timestamp=time.time() if timestamp is None else timestamp,
            comment=comment,
        )
        self._captures[number] = info
        return info

    async def list_captures(self) -> list[CaptureInfo]:
        return [self._captures[number] for number in sorted(self._captures)]

    async def get_capture(self, number: int) -> CaptureInfo:
        try:
            return self._captures[number]
        except KeyError:
            raise SnapshotNotFoundError(number) from None

    async def write(
        self, number: int, kind: RecordKind, records: Sequence[CanonicalRecord]
    ) -> None:
        await self.get_capture(number)
        self._records[(number, kind)] = copy.deepcopy(list(records))

    async def read(self, number: int, kind: RecordKind) -> list[CanonicalRecord]:
        await self.get_capture(number)
        return copy.deepcopy(self._records.get((number, kind), []))

    async def delete_capture(self, number: int) -> None:
        await self.get_capture(number)
        del self._captures[number]
        for kind in RecordKind:
            self._records.pop((number, kind), None)

    async def close(self) -> None:
        """Nothing to release; present for SnapshotStorePort."""
