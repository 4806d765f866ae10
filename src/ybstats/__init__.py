"""ybstats: capture and diff YugabyteDB cluster statistics.

Example:
    ```python
    import asyncio

    from ybstats import HttpTransport, MetricDiff, capture_cluster

    async def main() -> None:
        async with HttpTransport() as transport:
            first = await capture_cluster(transport, ["yb-1"], [9000], parallel=4)
            second = await capture_cluster(transport, ["yb-1"], [9000], parallel=4)
        diff = MetricDiff.from_captures(first, second, begin_time=0.0)

    asyncio.run(main())
    ```
"""

from ybstats.adapters.storage import (
    InMemorySnapshotStore,
    NdjsonSnapshotStore,
    SQLiteSnapshotStore,
)
from ybstats.adapters.transport import HttpTransport, InMemoryTransport
from ybstats.core.diff import MetricDiff
from ybstats.core.errors import SnapshotNotFoundError, YbStatsError
from ybstats.core.models import CaptureInfo, CaptureRecords, RecordKind
from ybstats.core.orchestrator import capture_cluster
from ybstats.core.report import ReportFilter, build_report

__all__ = [
    "CaptureInfo",
    "CaptureRecords",
    "HttpTransport",
    "InMemorySnapshotStore",
    "InMemoryTransport",
    "MetricDiff",
    "NdjsonSnapshotStore",
    "RecordKind",
    "ReportFilter",
    "SQLiteSnapshotStore",
    "SnapshotNotFoundError",
    "YbStatsError",
    "build_report",
    "capture_cluster",
]
