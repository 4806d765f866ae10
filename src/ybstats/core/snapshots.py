"""Capture workflows: stored snapshots and ad-hoc measurements."""

import logging
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ybstats.core.diff import MetricDiff
from ybstats.core.models import CaptureInfo, CaptureRecords, RecordKind
from ybstats.core.orchestrator import capture_cluster
from ybstats.core.ports import SnapshotStorePort, TransportPort

if TYPE_CHECKING:
    from ybstats.config import Settings

logger = logging.getLogger(__name__)


async def _capture(
    transport: TransportPort, settings: "Settings", clock: Callable[[], float]
) -> CaptureRecords:
    return await capture_cluster(
        transport,
        settings.hosts,
        settings.ports,
        settings.parallel,
        clock=clock,
        keep_zero_values=settings.keep_zero_values,
    )


async def take_snapshot(
    transport: TransportPort,
    store: SnapshotStorePort,
    settings: "Settings",
    comment: str = "",
    *,
    clock: Callable[[], float] = time.time,
) -> CaptureInfo:
    """Capture the cluster and store it under the next capture number.

    The capture number is allocated only after every node has been read. If
    storing the records fails, the capture is removed again, so a failed
    capture leaves no index row behind.
    """
    records = await _capture(transport, settings, clock)
    info = await store.create_capture(comment=comment, timestamp=clock())
    try:
        for kind, kind_records in records:
            await store.write(info.number, kind, kind_records)
    except Exception:
        logger.warning("snapshot %d could not be stored, removing it", info.number)
        await store.delete_capture(info.number)
        raise
    logger.info("snapshot %d stored with %d records", info.number, len(records))
    return info


async def load_capture(store: SnapshotStorePort, number: int) -> CaptureRecords:
    """Read every record kind of a stored capture.

    Raises:
        SnapshotNotFoundError: If the capture does not exist.
    """
    records = CaptureRecords()
    for kind in RecordKind:
        records.records(kind).extend(await store.read(number, kind))
    return records


async def snapshot_diff(store: SnapshotStorePort, begin: int, end: int) -> MetricDiff:
    """Diff two stored captures.

    Keys that first appear in the end capture use the begin capture's
    timestamp as their first capture time.

    Raises:
        SnapshotNotFoundError: If either capture does not exist.
    """
    begin_info = await store.get_capture(begin)
    await store.get_capture(end)
    diff = MetricDiff()
    diff.seed(await load_capture(store, begin))
    diff.merge(await load_capture(store, end), begin_info.timestamp)
    return diff


async def adhoc_diff(
    transport: TransportPort,
    settings: "Settings",
    pause: Callable[[], Awaitable[None]],
    *,
    clock: Callable[[], float] = time.time,
) -> MetricDiff:
    """Measure the cluster twice, around an operator pause, and diff.

    Args:
        transport: Adapter used to reach the nodes.
        settings: Hosts, ports and parallelism.
        pause: Awaited between the two captures, e.g. waiting for enter.
        clock: Source of timestamps.

    Returns:
        The diff of the two captures. Nothing is stored.
    """
    begin_time = clock()
    diff = MetricDiff()
    diff.seed(await _capture(transport, settings, clock))
    await pause()
    diff.merge(await _capture(transport, settings, clock), begin_time)
    return diff
