"""Tests for concurrent cluster capture."""

import asyncio
from collections.abc import Callable

import pytest

from tests.payloads import Clock, entity, metrics_document, statements_document, value
from ybstats.adapters.transport import InMemoryTransport
from ybstats.core.normalize import is_summary
from ybstats.core.orchestrator import capture_cluster, capture_node

# All tests in this module are tier 2 (integration tests across adapters)
pytestmark = [pytest.mark.transport, pytest.mark.tier(2)]


class CountingTransport(InMemoryTransport):
    """Records the highest number of fetches in flight at once."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, host: str, port: int, path: str) -> bytes:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        return await super().fetch(host, port, path)


class FailingTransport(InMemoryTransport):
    """Raises from fetch for one host."""

    def __init__(self, failing_host: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.failing_host = failing_host

    async def fetch(self, host: str, port: int, path: str) -> bytes:
        if host == self.failing_host:
            raise ConnectionResetError("connection reset by peer")
        return await super().fetch(host, port, path)


class TestCaptureNode:
    """Tests for one (host, port) capture."""

    async def test_unreachable_node_yields_nothing(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = InMemoryTransport()

        records = await capture_node(transport, "gone", 9000, clock=Clock())

        assert len(records) == 0
        assert transport.requests == []
        assert "(gone:9000) node unreachable" in caplog.text

    async def test_metrics_and_statements(
        self, cluster_transport: Callable[[int], InMemoryTransport]
    ) -> None:
        transport = cluster_transport(1)
        transport.set_payload(
            "node-1:9000", "statements", statements_document(("select 1", 3, 1.5, 3))
        )

        records = await capture_node(transport, "node-1", 9000, clock=Clock(start=42.0))

        assert {r.host_identifier for r in records.values} == {"node-1:9000"}
        assert {r.capture_time for r in records.values} == {42.0}
        assert [s.query for s in records.statements] == ["select 1"]
        assert [path for _, _, path in transport.requests] == ["metrics", "statements"]

    async def test_garbage_metrics_leave_an_empty_result(self) -> None:
        transport = InMemoryTransport({"h:9000": {"metrics": "<html>not found</html>"}})

        records = await capture_node(transport, "h", 9000, clock=Clock())

        assert len(records) == 0


class TestCaptureCluster:
    """Tests for the whole-cluster fan-out."""

    async def test_unreachable_host_does_not_stop_the_others(
        self, cluster_transport: Callable[[int], InMemoryTransport]
    ) -> None:
        records = await capture_cluster(
            cluster_transport(1), ["node-1", "node-2", "node-3"], [9000], 3, clock=Clock()
        )

        hosts = {r.host_identifier for r in records.values}
        assert hosts == {"node-1:9000", "node-2:9000"}
        assert len(records.countsum) == 2

    async def test_each_host_gets_its_own_summary(
        self, cluster_transport: Callable[[int], InMemoryTransport]
    ) -> None:
        records = await capture_cluster(
            cluster_transport(1), ["node-1", "node-2"], [9000], 2, clock=Clock()
        )

        summaries = sorted(
            (r.host_identifier, r.value) for r in records.values if is_summary(r)
        )
        assert summaries == [("node-1:9000", 12), ("node-2:9000", 12)]

    async def test_every_port_is_visited(self) -> None:
        transport = InMemoryTransport(
            {"h:7000": {"metrics": "[]"}, "h:9000": {"metrics": "[]"}}
        )

        await capture_cluster(transport, ["h"], [7000, 9000, 13000], 1, clock=Clock())

        visited = {(host, port) for host, port, _ in transport.requests}
        assert visited == {("h", 7000), ("h", 9000)}

    @pytest.mark.parametrize("parallel", [1, 2])
    async def test_parallel_bounds_concurrent_nodes(self, parallel: int) -> None:
        transport = CountingTransport(
            {f"node-{i}:9000": {"metrics": "[]"} for i in range(4)}
        )

        await capture_cluster(
            transport, [f"node-{i}" for i in range(4)], [9000], parallel, clock=Clock()
        )

        assert 1 <= transport.peak <= parallel

    @pytest.mark.parametrize("parallel", [0, -1])
    async def test_parallel_must_be_positive(self, parallel: int) -> None:
        with pytest.raises(ValueError):
            await capture_cluster(InMemoryTransport(), ["h"], [9000], parallel)

    async def test_empty_cluster(self) -> None:
        records = await capture_cluster(InMemoryTransport(), [], [9000], 1)

        assert len(records) == 0

    async def test_malformed_node_does_not_lose_the_others(self) -> None:
        transport = InMemoryTransport(
            {
                "bad:9000": {"metrics": b"[" * 100_000},
                "good:9000": {
                    "metrics": metrics_document(entity("server", "s", [value("m", 1)]))
                },
            }
        )

        records = await capture_cluster(transport, ["bad", "good"], [9000], 2, clock=Clock())

        assert [r.host_identifier for r in records.values] == ["good:9000"]

    async def test_failing_node_does_not_lose_the_others(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        transport = FailingTransport(
            "node-1",
            {
                "node-1:9000": {"metrics": "[]"},
                "node-2:9000": {
                    "metrics": metrics_document(entity("server", "s", [value("m", 1)]))
                },
            },
        )

        records = await capture_cluster(
            transport, ["node-1", "node-2"], [9000], 2, clock=Clock()
        )

        assert [r.host_identifier for r in records.values] == ["node-2:9000"]
        assert "(node-1:9000) capture failed" in caplog.text

    async def test_cancelled_capture_cancels_every_node(self) -> None:
        started = asyncio.Event()

        class HangingTransport(InMemoryTransport):
            async def fetch(self, host: str, port: int, path: str) -> bytes:
                started.set()
                await asyncio.Event().wait()
                return b""

        transport = HangingTransport({f"n{i}:9000": {"metrics": "[]"} for i in range(3)})
        capture = asyncio.ensure_future(
            capture_cluster(transport, ["n0", "n1", "n2"], [9000], 3, clock=Clock())
        )
        await started.wait()

        capture.cancel()
        with pytest.raises(asyncio.CancelledError):
            await capture

        pending = [
            task for task in asyncio.all_tasks() if task is not asyncio.current_task()
        ]
        await asyncio.sleep(0.01)
        assert all(task.done() for task in pending)
