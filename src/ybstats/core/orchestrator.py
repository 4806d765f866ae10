"""Concurrent whole-cluster capture.

One task runs per (host, port) pair, bounded by a semaphore. Each task owns
its results and hands them back by value; the records are merged into one
``CaptureRecords`` at a single point, in completion order.
"""

import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from ybstats.core.decoding import parse_metrics, parse_statements
from ybstats.core.models import CaptureRecords
from ybstats.core.normalize import normalize, normalize_statements
from ybstats.core.ports import TransportPort

logger = logging.getLogger(__name__)


async def capture_node(
    transport: TransportPort,
    host: str,
    port: int,
    *,
    clock: Callable[[], float] = time.time,
    keep_zero_values: bool = False,
) -> CaptureRecords:
    """Capture the metrics and statements of one node.

    The node's capture time is taken before it is contacted. An unreachable
    node yields an empty result instead of an error.
    """
    host_identifier = f"{host}:{port}"
    capture_time = clock()

    if not await transport.liveness(host, port):
        logger.warning("(%s) node unreachable, no metrics captured", host_identifier)
        return CaptureRecords()

    raw_metrics = await transport.fetch(host, port, "metrics")
    records = normalize(
        host_identifier,
        capture_time,
        parse_metrics(raw_metrics, host_identifier),
        keep_zero_values=keep_zero_values,
    )
    raw_statements = await transport.fetch(host, port, "statements")
    records.statements = normalize_statements(
        host_identifier,
        capture_time,
        parse_statements(raw_statements, host_identifier),
    )
    logger.debug("(%s) captured %d records", host_identifier, len(records))
    return records


async def capture_cluster(
    transport: TransportPort,
    hosts: Sequence[str],
    ports: Sequence[int],
    parallel: int,
    *,
    clock: Callable[[], float] = time.time,
    keep_zero_values: bool = False,
) -> CaptureRecords:
    """Capture every (host, port) pair of the cluster.

    Args:
        transport: Adapter used to reach the nodes.
        hosts: Hostnames or addresses.
        ports: Ports to visit on every host.
        parallel: Maximum number of pairs fetched at the same time.
        clock: Source of capture timestamps.
        keep_zero_values: Passed to ``normalize``.

    Returns:
        The records of all reachable nodes. A node whose capture raises
        contributes nothing and is logged. Returns only after every task has
        finished.

    Raises:
        ValueError: If ``parallel`` is less than 1.
    """
    if parallel < 1:
        raise ValueError(f"parallel must be at least 1, got {parallel}")

    semaphore = asyncio.Semaphore(parallel)

    async def bounded(host: str, port: int) -> CaptureRecords:
        async with semaphore:
            try:
                return await capture_node(
                    transport, host, port, clock=clock, keep_zero_values=keep_zero_values
                )
            except Exception:
                logger.warning(
                    "(%s:%d) capture failed, no metrics captured", host, port, exc_info=True
                )
                return CaptureRecords()

    tasks = [
        asyncio.ensure_future(bounded(host, port)) for host in hosts for port in ports
    ]
    result = CaptureRecords()
    try:
        for completed in asyncio.as_completed(tasks):
            result.extend(await completed)
    finally:
        # Stops stragglers when the capture itself is cancelled.
        for task in tasks:
            task.cancel()
    logger.info(
        "captured %d records from %d endpoints", len(result), len(tasks)
    )
    return result
