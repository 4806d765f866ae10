"""Directory-of-files snapshot store.

Layout::

    <root>/snapshot.index          CSV with number, timestamp, comment
    <root>/<number>/<kind>.ndjson  one canonical record per line
"""

import asyncio
import csv
import shutil
import time
from collections.abc import Sequence
from pathlib import Path

from ybstats.core.encoding.ndjson import decode_records, encode_records
from ybstats.core.errors import SnapshotNotFoundError
from ybstats.core.models import CanonicalRecord, CaptureInfo, RecordKind

INDEX_FILE = "snapshot.index"
_INDEX_FIELDS = ["number", "timestamp", "comment"]


class NdjsonSnapshotStore:
    """NDJSON-file implementation of SnapshotStorePort.

    Human-readable and easy to copy between machines. File access runs in a
    worker thread so the event loop is not blocked.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)
        self._lock: asyncio.Lock | None = None

    def _get_lock(self) -> asyncio.Lock:
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    @property
    def index_path(self) -> Path:
        return self._root / INDEX_FILE

    def _read_index(self) -> list[CaptureInfo]:
        if not self.index_path.exists():
            return []
        with self.index_path.open(newline="") as handle:
            return [
                CaptureInfo(
                    number=int(row["number"]),
                    timestamp=float(row["timestamp"]),
                    comment=row["comment"],
                )
                for row in csv.DictReader(handle)
            ]

    def _write_index(self, captures: list[CaptureInfo]) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        with self.index_path.open("w", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=_INDEX_FIELDS)
            writer.writeheader()
            for info in captures:
                writer.writerow(
                    {
                        "number": info.number,
                        "timestamp": info.timestamp,
                        "comment": info.comment,
                    }
                )

    def _append_capture(self, comment: str, timestamp: float) -> CaptureInfo:
        captures = self._read_index()
        number = max((info.number for info in captures), default=-1) + 1
        info = CaptureInfo(number=number, timestamp=timestamp, comment=comment)
        (self._root / str(number)).mkdir(parents=True, exist_ok=True)
        self._write_index([*captures, info])
        return info

    async def create_capture(
        self, comment: str = "", timestamp: float | None = None
    ) -> CaptureInfo:
        timestamp = time.time() if timestamp is None else timestamp
        async with self._get_lock():
            return await asyncio.to_thread(self._append_capture, comment, timestamp)

    async def list_captures(self) -> list[CaptureInfo]:
        captures = await asyncio.to_thread(self._read_index)
        return sorted(captures, key=lambda info: info.number)

    async def get_capture(self, number: int) -> CaptureInfo:
        for info in await self.list_captures():
            if info.number == number:
                return info
        raise SnapshotNotFoundError(number)

    def _records_path(self, number: int, kind: RecordKind) -> Path:
        return self._root / str(number) / f"{kind.value}.ndjson"

    async def write(
        self, number: int, kind: RecordKind, records: Sequence[CanonicalRecord]
    ) -> None:
        await self.get_capture(number)
        path = self._records_path(number, kind)
        await asyncio.to_thread(path.write_text, encode_records(records))

    async def read(self, number: int, kind: RecordKind) -> list[CanonicalRecord]:
        await self.get_capture(number)
        path = self._records_path(number, kind)
        if not path.exists():
            return []
        text = await asyncio.to_thread(path.read_text)
        return decode_records(text, kind)

    def _remove_capture(self, number: int) -> None:
        captures = self._read_index()
        remaining = [info for info in captures if info.number != number]
        if len(remaining) == len(captures):
            raise SnapshotNotFoundError(number)
        directory = self._root / str(number)
        if directory.exists():
            shutil.rmtree(directory)
        self._write_index(remaining)

    async def delete_capture(self, number: int) -> None:
        async with self._get_lock():
            await asyncio.to_thread(self._remove_capture, number)

    async def close(self) -> None:
        """Nothing to release; files are closed after every operation."""
