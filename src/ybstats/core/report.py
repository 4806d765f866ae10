"""Turn a ``MetricDiff`` into report lines.

Only counts and sums are diffed. Percentiles, extrema and means are reset by
the server on every scrape and never show up in a report. Decreases (after a
restart, for example) are reported as negative deltas.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ybstats.core.diff import (
    CountSumDiff,
    CountSumRowsDiff,
    MetricDiff,
    StatementDiff,
    ValueDiff,
)
from ybstats.core.models import NO_VALUE, RecordKind
from ybstats.core.normalize import ROLLUP_ENTITY_KINDS, SUMMARY_ENTITY_ID
from ybstats.core.statistics import CountSumStatistics, ValueStatistics

MATCH_ALL = ".*"


@dataclass(frozen=True)
class ReportFilter:
    """Regular expressions restricting which rows are reported.

    Each pattern is searched (``re.search``) in the corresponding field.
    """

    hostname: str = MATCH_ALL
    metric: str = MATCH_ALL
    table: str = MATCH_ALL
    _compiled: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        compiled = tuple(re.compile(p) for p in (self.hostname, self.metric, self.table))
        object.__setattr__(self, "_compiled", compiled)

    def matches(
        self, hostname: str, metric: str | None = None, table: str | None = None
    ) -> bool:
        """Return True if the row passes every filter.

        A field passed as None is not filtered, for kinds that do not carry it.
        """
        fields = (hostname, metric, table)
        return all(
            value is None or pattern.search(value) is not None
            for pattern, value in zip(self._compiled, fields)
        )


@dataclass(frozen=True)
class ReportLine:
    """One printable row of a diff report.

    Attributes:
        kind: Record kind the row comes from.
        hostname: ``host:port`` of the node.
        entity_kind: Entity type, empty for statements and YSQL statistics.
        entity_id: Entity id, ``"-"`` for summaries.
        table: ``namespace.table`` or empty when neither is known.
        name: Metric name, or query text for statements.
        delta: Change of the main counter (value, count or calls). For a
            gauge this is the signed change of the gauge.
        unit: Display unit suffix.
        rate: ``delta`` per second, None for gauges or a zero interval.
        current: Current value of a gauge.
        average: Sum delta per call. Milliseconds for YSQL rows.
        total: Sum delta. Milliseconds for YSQL rows.
        rows_average: Rows per call.
        rows_total: Rows delta.
    """

    kind: RecordKind
    hostname: str
    name: str
    delta: int | float
    entity_kind: str = ""
    entity_id: str = ""
    table: str = ""
    unit: str = ""
    rate: float | None = None
    current: int | None = None
    average: float | None = None
    total: float | None = None
    rows_average: float | None = None
    rows_total: int | None = None

    @property
    def is_gauge(self) -> bool:
        return self.current is not None


def rate(delta: int | float, interval: float) -> float | None:
    """Return ``delta`` per second, or None when the interval is not positive."""
    if interval <= 0:
        return None
    return delta / interval


def _table_label(namespace: str, table_name: str) -> str:
    if namespace == NO_VALUE and table_name == NO_VALUE:
        return ""
    return f"{namespace}.{table_name}"


def _selected(entity_kind: str, entity_id: str, details: bool) -> bool:
    # Rolled-up kinds show either their summary or their detail rows.
    if entity_kind not in ROLLUP_ENTITY_KINDS:
        return True
    return (entity_id != SUMMARY_ENTITY_ID) == details


def _value_lines(
    diff: MetricDiff,
    filters: ReportFilter,
    include_gauges: bool,
    details: bool,
    statistics: ValueStatistics,
) -> Iterator[ReportLine]:
    for (hostname, entity_kind, entity_id, metric), row in diff.diff_map(
        RecordKind.VALUES
    ).items():
        assert isinstance(row, ValueDiff)
        # Zero on the second side means unused, or gone since the first capture.
        if row.second_value <= 0 or not _selected(entity_kind, entity_id, details):
            continue
        table = _table_label(row.namespace, row.table_name)
        if not filters.matches(hostname, metric, table):
            continue
        details_row = statistics.lookup(metric)
        delta = row.delta("value")
        common = {
            "kind": RecordKind.VALUES,
            "hostname": hostname,
            "name": metric,
            "delta": delta,
            "entity_kind": entity_kind,
            "entity_id": entity_id,
            "table": table,
            "unit": details_row.unit_suffix,
        }
        if details_row.is_gauge:
            if include_gauges:
                yield ReportLine(current=row.second_value, **common)
        elif delta != 0:
            yield ReportLine(rate=rate(delta, row.interval), **common)


def _countsum_lines(
    diff: MetricDiff,
    filters: ReportFilter,
    details: bool,
    statistics: CountSumStatistics,
) -> Iterator[ReportLine]:
    for (hostname, entity_kind, entity_id, metric), row in diff.diff_map(
        RecordKind.COUNTSUM
    ).items():
        assert isinstance(row, CountSumDiff)
        if row.second_total_count <= 0 or not _selected(entity_kind, entity_id, details):
            continue
        table = _table_label(row.namespace, row.table_name)
        if not filters.matches(hostname, metric, table):
            continue
        count = row.delta("total_count")
        if count == 0:
            continue
        total = row.delta("total_sum")
        yield ReportLine(
            kind=RecordKind.COUNTSUM,
            hostname=hostname,
            name=metric,
            delta=count,
            entity_kind=entity_kind,
            entity_id=entity_id,
            table=table,
            unit=statistics.lookup(metric).unit_suffix,
            rate=rate(count, row.interval),
            average=total / count,
            total=total,
        )


def _countsumrows_lines(diff: MetricDiff, filters: ReportFilter) -> Iterator[ReportLine]:
    for (hostname, metric), row in diff.diff_map(RecordKind.COUNTSUMROWS).items():
        assert isinstance(row, CountSumRowsDiff)
        count = row.delta("count")
        if count == 0 or not filters.matches(hostname, metric):
            continue
        total_ms = row.delta("sum") / 1000.0
        rows = row.delta("rows")
        yield ReportLine(
            kind=RecordKind.COUNTSUMROWS,
            hostname=hostname,
            name=metric,
            delta=count,
            unit="ms",
            rate=rate(count, row.interval),
            average=total_ms / count,
            total=total_ms,
            rows_average=rows / count,
            rows_total=rows,
        )


def _statement_lines(diff: MetricDiff, filters: ReportFilter) -> Iterator[ReportLine]:
    for (hostname, query), row in diff.diff_map(RecordKind.STATEMENTS).items():
        assert isinstance(row, StatementDiff)
        calls = row.delta("calls")
        if calls == 0 or not filters.matches(hostname):
            continue
        total_ms = row.delta("total_time")
        rows = row.delta("rows")
        yield ReportLine(
            kind=RecordKind.STATEMENTS,
            hostname=hostname,
            name=query,
            delta=calls,
            unit="ms",
            rate=rate(calls, row.interval),
            average=total_ms / calls,
            total=total_ms,
            rows_average=rows / calls,
            rows_total=rows,
        )


def build_report(
    diff: MetricDiff,
    *,
    filters: ReportFilter | None = None,
    include_gauges: bool = False,
    details: bool = False,
    value_statistics: ValueStatistics | None = None,
    countsum_statistics: CountSumStatistics | None = None,
) -> list[ReportLine]:
    """Compute the report lines of a diff.

    Args:
        diff: Diff of two captures.
        filters: Hostname, metric and table patterns. Matches everything by
            default.
        include_gauges: Report gauges (current value and signed change).
        details: For table and tablet statistics, report the per-entity rows
            instead of the per-host summaries.
        value_statistics: Unit and type lookup for value metrics.
        countsum_statistics: Unit lookup for count/sum metrics.

    Returns:
        Lines grouped by kind (values, countsum, countsumrows, statements),
        each group ordered by key.
    """
    filters = filters or ReportFilter()
    value_statistics = value_statistics or ValueStatistics()
    countsum_statistics = countsum_statistics or CountSumStatistics()
    return [
        *_value_lines(diff, filters, include_gauges, details, value_statistics),
        *_countsum_lines(diff, filters, details, countsum_statistics),
        *_countsumrows_lines(diff, filters),
        *_statement_lines(diff, filters),
    ]
