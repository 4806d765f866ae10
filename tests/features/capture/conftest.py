"""BDD step definitions for capture and diff features."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from tests.payloads import Clock, tserver_metrics
from ybstats.adapters.storage import InMemorySnapshotStore
from ybstats.adapters.transport import InMemoryTransport
from ybstats.config import Settings
from ybstats.core.report import ReportLine, build_report
from ybstats.core.snapshots import load_capture, snapshot_diff, take_snapshot


@dataclass
class CaptureScenarioContext:
    """State shared by the steps of one scenario."""

    settings: Settings | None = None
    transport: InMemoryTransport = field(default_factory=InMemoryTransport)
    store: InMemorySnapshotStore = field(default_factory=InMemorySnapshotStore)
    lines: list[ReportLine] = field(default_factory=list)

    def serve(self, scale: int) -> None:
        for host in self.settings.hosts:
            for port in self.settings.ports:
                self.transport.set_payload(f"{host}:{port}", "metrics", tserver_metrics(scale))

    def snapshot(self, at: float) -> None:
        run_async(take_snapshot(self.transport, self.store, self.settings, clock=Clock(start=at)))

    def find(self, name: str, hostname: str) -> ReportLine:
        matches = [
            line for line in self.lines if line.name == name and line.hostname == hostname
        ]
        assert len(matches) == 1, matches
        return matches[0]


def run_async(coro: Any) -> Any:
    """Run a coroutine synchronously."""
    return asyncio.run(coro)


@pytest.fixture
def ctx() -> CaptureScenarioContext:
    """Fresh scenario context for each test."""
    return CaptureScenarioContext()


@given(parsers.parse('a cluster of tablet servers "{hosts}" on port {port:d}'))
def given_cluster(ctx: CaptureScenarioContext, hosts: str, port: int) -> None:
    ctx.settings = Settings(hosts=tuple(hosts.split(",")), ports=(port,), parallel=2)
    ctx.serve(1)


@given(parsers.parse('node "{host}" is down'))
def given_node_down(ctx: CaptureScenarioContext, host: str) -> None:
    others = tuple(h for h in ctx.settings.hosts if h != host)
    ctx.transport = InMemoryTransport(
        {f"{h}:{p}": {"metrics": tserver_metrics(1)} for h in others for p in ctx.settings.ports}
    )


@given(parsers.parse("a snapshot taken at {at:d} seconds"))
@when(parsers.parse("a snapshot is taken at {at:d} seconds"))
def snapshot_at(ctx: CaptureScenarioContext, at: int) -> None:
    ctx.snapshot(float(at))


@when(parsers.parse("the counters triple and a snapshot is taken at {at:d} seconds"))
def when_counters_triple(ctx: CaptureScenarioContext, at: int) -> None:
    ctx.serve(3)
    ctx.snapshot(float(at))


@when(parsers.re(r"snapshot (?P<begin>\d+) is diffed against snapshot (?P<end>\d+)(?P<mode>.*)"))
def when_diffed(ctx: CaptureScenarioContext, begin: str, end: str, mode: str) -> None:
    diff = run_async(snapshot_diff(ctx.store, int(begin), int(end)))
    ctx.lines = build_report(
        diff,
        details=mode.strip() == "with details",
        include_gauges=mode.strip() == "with gauges",
    )


@then(parsers.parse('"{name}" on "{hostname}" changed by {delta:d}'))
def then_changed_by(ctx: CaptureScenarioContext, name: str, hostname: str, delta: int) -> None:
    assert ctx.find(name, hostname).delta == delta


@then(parsers.parse('"{name}" on "{hostname}" has a rate of {rate:f} per second'))
def then_rate(ctx: CaptureScenarioContext, name: str, hostname: str, rate: float) -> None:
    assert ctx.find(name, hostname).rate == pytest.approx(rate)


@then(parsers.parse('"{name}" on "{hostname}" is now {current:d}'))
def then_gauge_current(ctx: CaptureScenarioContext, name: str, hostname: str, current: int) -> None:
    line = ctx.find(name, hostname)
    assert line.is_gauge
    assert line.current == current


@then(parsers.parse('no line reports "{name}"'))
def then_no_line(ctx: CaptureScenarioContext, name: str) -> None:
    assert all(line.name != name for line in ctx.lines)


@then(parsers.parse('snapshot {number:d} holds records of "{hostname}" only'))
def then_holds_only(ctx: CaptureScenarioContext, number: int, hostname: str) -> None:
    records = run_async(load_capture(ctx.store, number))
    assert len(records) > 0
    assert {record.host_identifier for _, kind_records in records for record in kind_records} == {
        hostname
    }


@then(parsers.parse('the "{name}" lines of "{hostname}" are for tablets "{ids}"'))
def then_tablet_lines(ctx: CaptureScenarioContext, name: str, hostname: str, ids: str) -> None:
    lines = [line for line in ctx.lines if line.name == name and line.hostname == hostname]
    assert [line.entity_id for line in lines] == ids.split(",")
