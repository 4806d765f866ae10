"""Rich rendering of report lines and the snapshot index."""

from collections.abc import Iterable, Sequence
from datetime import datetime

from rich.console import Console
from rich.table import Table

from ybstats.core.models import CaptureInfo, RecordKind
from ybstats.core.report import ReportLine

DEFAULT_SQL_LENGTH = 80

_TITLES = {
    RecordKind.VALUES: "Values",
    RecordKind.COUNTSUM: "Latencies",
    RecordKind.COUNTSUMROWS: "YSQL statistics",
    RecordKind.STATEMENTS: "Statements",
}


def _rate(line: ReportLine) -> str:
    return "" if line.rate is None else f"{line.rate:.3f} /s"


def _entity_columns(table: Table, details: bool) -> None:
    table.add_column("host")
    table.add_column("type")
    if details:
        table.add_column("id")
        table.add_column("table")


def _entity_cells(line: ReportLine, details: bool) -> list[str]:
    cells = [line.hostname, line.entity_kind]
    if details:
        cells += [line.entity_id, line.table]
    return cells


def _values_table(lines: Sequence[ReportLine], details: bool) -> Table:
    table = Table(title=_TITLES[RecordKind.VALUES])
    _entity_columns(table, details)
    table.add_column("metric")
    table.add_column("value", justify="right")
    table.add_column("unit")
    table.add_column("rate / change", justify="right")
    for line in lines:
        if line.is_gauge:
            value, change = str(line.current), f"{line.delta:+d}"
        else:
            value, change = str(line.delta), _rate(line)
        table.add_row(*_entity_cells(line, details), line.name, value, line.unit, change)
    return table


def _countsum_table(lines: Sequence[ReportLine], details: bool) -> Table:
    table = Table(title=_TITLES[RecordKind.COUNTSUM])
    _entity_columns(table, details)
    table.add_column("metric")
    table.add_column("count", justify="right")
    table.add_column("rate", justify="right")
    table.add_column("avg", justify="right")
    table.add_column("total", justify="right")
    table.add_column("unit")
    for line in lines:
        table.add_row(
            *_entity_cells(line, details),
            line.name,
            str(line.delta),
            _rate(line),
            f"{line.average:.0f}",
            str(line.total),
            line.unit,
        )
    return table


def _calls_table(kind: RecordKind, lines: Sequence[ReportLine], sql_length: int) -> Table:
    table = Table(title=_TITLES[kind])
    table.add_column("host")
    table.add_column("calls", justify="right")
    table.add_column("avg ms", justify="right")
    table.add_column("total ms", justify="right")
    table.add_column("avg rows", justify="right")
    table.add_column("total rows", justify="right")
    table.add_column("statement" if kind is RecordKind.STATEMENTS else "metric")
    for line in lines:
        name = line.name
        if kind is RecordKind.STATEMENTS:
            name = name[:sql_length].encode("unicode_escape").decode()
        table.add_row(
            line.hostname,
            str(line.delta),
            f"{line.average:.3f}",
            f"{line.total:.3f}",
            f"{line.rows_average:.0f}",
            str(line.rows_total),
            name,
        )
    return table


def render_report(
    lines: Iterable[ReportLine],
    console: Console,
    *,
    details: bool = False,
    sql_length: int = DEFAULT_SQL_LENGTH,
) -> None:
    """Print one table per record kind that has lines.

    Args:
        lines: Output of ``build_report``.
        console: Console to print to.
        details: Add entity id and table columns.
        sql_length: Statement text is cut to this many characters.
    """
    by_kind: dict[RecordKind, list[ReportLine]] = {kind: [] for kind in RecordKind}
    for line in lines:
        by_kind[line.kind].append(line)

    if not any(by_kind.values()):
        console.print("no differences found")
        return

    for kind, kind_lines in by_kind.items():
        if not kind_lines:
            continue
        if kind is RecordKind.VALUES:
            table = _values_table(kind_lines, details)
        elif kind is RecordKind.COUNTSUM:
            table = _countsum_table(kind_lines, details)
        else:
            table = _calls_table(kind, kind_lines, sql_length)
        console.print(table)


def render_captures(captures: Iterable[CaptureInfo], console: Console) -> None:
    """Print the snapshot index."""
    table = Table(title="Snapshots")
    table.add_column("number", justify="right")
    table.add_column("timestamp")
    table.add_column("comment")
    for info in captures:
        taken = datetime.fromtimestamp(info.timestamp).isoformat(sep=" ", timespec="seconds")
        table.add_row(str(info.number), taken, info.comment)
    console.print(table)
