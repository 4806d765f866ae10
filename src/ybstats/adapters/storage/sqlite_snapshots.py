"""SQLite storage adapter for snapshots."""

import asyncio
import dataclasses
import time
import typing
from collections.abc import Sequence
from typing import Any

from ybstats.adapters.storage.sqlite_base import AsyncConnectionManager
from ybstats.core.errors import SnapshotNotFoundError
from ybstats.core.models import RECORD_TYPES, CanonicalRecord, CaptureInfo, RecordKind

# Integers are stored as TEXT: unsigned 64-bit counters overflow INTEGER.
_COLUMN_TYPES = {str: "TEXT", float: "REAL", int: "TEXT"}

_CAPTURES_SCHEMA = """
CREATE TABLE IF NOT EXISTS captures (
    number INTEGER PRIMARY KEY,
    timestamp REAL NOT NULL,
    comment TEXT NOT NULL DEFAULT ''
);
"""

_INSERT_CAPTURE = """
INSERT INTO captures (number, timestamp, comment)
SELECT COALESCE(MAX(number), -1) + 1, ?, ? FROM captures
"""

_SELECT_CAPTURES = """
SELECT number, timestamp, comment FROM captures ORDER BY number ASC
"""

_SELECT_CAPTURE = """
SELECT number, timestamp, comment FROM captures WHERE number = ?
"""


def _table_name(kind: RecordKind) -> str:
    return f"{kind.value}_records"


def _columns(kind: RecordKind) -> list[tuple[str, type]]:
    record_type = RECORD_TYPES[kind]
    hints = typing.get_type_hints(record_type)
    return [(f.name, hints[f.name]) for f in dataclasses.fields(record_type)]


def _record_schema(kind: RecordKind) -> str:
    table = _table_name(kind)
    columns = ",\n".join(
        f"    \"{name}\" {_COLUMN_TYPES[column_type]} NOT NULL"
        for name, column_type in _columns(kind)
    )
    return f"""
CREATE TABLE IF NOT EXISTS {table} (
    capture_id INTEGER NOT NULL REFERENCES captures(number),
{columns}
);
CREATE INDEX IF NOT EXISTS idx_{table}_capture ON {table}(capture_id);
"""


SCHEMA = _CAPTURES_SCHEMA + "".join(_record_schema(kind) for kind in RecordKind)


def _to_row(number: int, kind: RecordKind, record: CanonicalRecord) -> tuple[Any, ...]:
    row: list[Any] = [number]
    for name, column_type in _columns(kind):
        value = getattr(record, name)
        row.append(str(value) if column_type is int else value)
    return tuple(row)


def _from_row(kind: RecordKind, row: Sequence[Any]) -> CanonicalRecord:
    values = {
        name: int(value) if column_type is int else value
        for (name, column_type), value in zip(_columns(kind), row)
    }
    return RECORD_TYPES[kind](**values)


class SQLiteSnapshotStore:
    """SQLite implementation of SnapshotStorePort.

    One table holds the capture index, one table per record kind holds the
    records. Each record table has exactly the fields of its canonical
    record plus the capture number.

    For :memory: databases, a persistent connection is maintained since
    in-memory databases are connection-scoped in SQLite.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._manager = AsyncConnectionManager(db_path, SCHEMA)
        self._create_lock: asyncio.Lock | None = None

    def _get_lock(self) -> asyncio.Lock:
        if self._create_lock is None:
            self._create_lock = asyncio.Lock()
        return self._create_lock

    async def create_capture(
        self, comment: str = "", timestamp: float | None = None
    ) -> CaptureInfo:
        timestamp = time.time() if timestamp is None else timestamp
        async with self._get_lock(), self._manager.transaction() as db:
            cursor = await db.execute(_INSERT_CAPTURE, (timestamp, comment))
            async with db.execute(_SELECT_CAPTURE, (cursor.lastrowid,)) as rows:
                row = await rows.fetchone()
        assert row is not None
        return CaptureInfo(number=row[0], timestamp=row[1], comment=row[2])

    async def list_captures(self) -> list[CaptureInfo]:
        async with self._manager.connection() as db:
            async with db.execute(_SELECT_CAPTURES) as cursor:
                return [
                    CaptureInfo(number=row[0], timestamp=row[1], comment=row[2])
                    async for row in cursor
                ]

    async def get_capture(self, number: int) -> CaptureInfo:
        async with self._manager.connection() as db:
            async with db.execute(_SELECT_CAPTURE, (number,)) as cursor:
                row = await cursor.fetchone()
        if row is None:
            raise SnapshotNotFoundError(number)
        return CaptureInfo(number=row[0], timestamp=row[1], comment=row[2])

    async def write(
        self, number: int, kind: RecordKind, records: Sequence[CanonicalRecord]
    ) -> None:
        """Store the records of one kind, replacing any stored before."""
        await self.get_capture(number)
        table = _table_name(kind)
        names = ["capture_id", *(f'"{name}"' for name, _ in _columns(kind))]
        insert = (
            f"INSERT INTO {table} ({', '.join(names)}) "
            f"VALUES ({', '.join('?' for _ in names)})"
        )
        async with self._manager.transaction() as db:
            await db.execute(f"DELETE FROM {table} WHERE capture_id = ?", (number,))
            await db.executemany(insert, [_to_row(number, kind, r) for r in records])

    async def read(self, number: int, kind: RecordKind) -> list[CanonicalRecord]:
        await self.get_capture(number)
        names = [f'"{name}"' for name, _ in _columns(kind)]
        select = (
            f"SELECT {', '.join(names)} FROM {_table_name(kind)} "
            "WHERE capture_id = ? ORDER BY rowid ASC"
        )
        async with self._manager.connection() as db:
            async with db.execute(select, (number,)) as cursor:
                return [_from_row(kind, row) async for row in cursor]

    async def delete_capture(self, number: int) -> None:
        async with self._manager.transaction() as db:
            for kind in RecordKind:
                await db.execute(
                    f"DELETE FROM {_table_name(kind)} WHERE capture_id = ?", (number,)
                )
            cursor = await db.execute("DELETE FROM captures WHERE number = ?", (number,))
            if cursor.rowcount == 0:
                raise SnapshotNotFoundError(number)

    async def close(self) -> None:
        """Close persistent connection (for :memory: databases)."""
        await self._manager.close()
