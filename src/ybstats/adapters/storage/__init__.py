"""Snapshot store adapters implementing SnapshotStorePort."""

from ybstats.adapters.storage.in_memory import InMemorySnapshotStore
from ybstats.adapters.storage.ndjson_files import NdjsonSnapshotStore
from ybstats.adapters.storage.sqlite_snapshots import SQLiteSnapshotStore

__all__ = [
    "InMemorySnapshotStore",
    "NdjsonSnapshotStore",
    "SQLiteSnapshotStore",
]
