"""Command line interface.

Commands:

- ``snapshot``: capture the cluster and store it under the next number
- ``snapshots``: list stored captures
- ``diff``: report the difference between two stored captures
- ``adhoc``: capture, wait for enter, capture again and report the difference
"""

import asyncio
import functools
import re
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from ybstats.adapters.console import DEFAULT_SQL_LENGTH, render_captures, render_report
from ybstats.adapters.logging import LOG_LEVELS, configure_logging
from ybstats.adapters.storage import NdjsonSnapshotStore, SQLiteSnapshotStore
from ybstats.adapters.transport import HttpTransport
from ybstats.config import DEFAULT_ENV_FILE, STORE_KINDS, Settings
from ybstats.core.diff import MetricDiff
from ybstats.core.errors import ConfigError, SnapshotNotFoundError
from ybstats.core.ports import SnapshotStorePort, TransportPort
from ybstats.core.report import MATCH_ALL, ReportFilter, build_report
from ybstats.core.snapshots import adhoc_diff, snapshot_diff, take_snapshot

SQLITE_FILE = "snapshots.db"

PAUSE_PROMPT = (
    "Begin snapshot taken, press enter to take the end snapshot "
    "for the difference calculation."
)


def open_store(settings: Settings) -> SnapshotStorePort:
    """Create the snapshot store configured in ``settings``."""
    settings.snapshot_dir.mkdir(parents=True, exist_ok=True)
    if settings.store == "ndjson":
        return NdjsonSnapshotStore(settings.snapshot_dir)
    return SQLiteSnapshotStore(str(settings.snapshot_dir / SQLITE_FILE))


@asynccontextmanager
async def _transport(obj: dict[str, Any]) -> AsyncIterator[TransportPort]:
    # Tests and replays put a ready transport in the click context object.
    injected = obj.get("transport")
    if injected is not None:
        yield injected
        return
    async with HttpTransport() as transport:
        yield transport


@asynccontextmanager
async def _store(obj: dict[str, Any]) -> AsyncIterator[SnapshotStorePort]:
    store = obj.get("store") or open_store(obj["settings"])
    try:
        yield store
    finally:
        await store.close()


def _compile(ctx: click.Context, param: click.Parameter, value: str) -> str:
    try:
        re.compile(value)
    except re.error as exc:
        raise click.BadParameter(f"invalid regular expression: {exc}") from exc
    return value


def report_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by the commands that print a diff."""
    options = [
        click.option("--hostname-match", default=MATCH_ALL, show_default=True,
                     callback=_compile, help="Regex on host:port."),
        click.option("--stat-name-match", default=MATCH_ALL, show_default=True,
                     callback=_compile, help="Regex on the statistic name."),
        click.option("--table-name-match", default=MATCH_ALL, show_default=True,
                     callback=_compile, help="Regex on namespace.table."),
        click.option("--gauges-enable", is_flag=True, default=False,
                     help="Also report gauges."),
        click.option("--details-enable", is_flag=True, default=False,
                     help="Report table and tablet rows instead of per-host summaries."),
        click.option("--sql-length", type=click.IntRange(min=1),
                     default=DEFAULT_SQL_LENGTH, show_default=True,
                     help="Characters of statement text to print."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _print_diff(
    obj: dict[str, Any],
    diff: MetricDiff,
    *,
    hostname_match: str,
    stat_name_match: str,
    table_name_match: str,
    gauges_enable: bool,
    details_enable: bool,
    sql_length: int,
) -> None:
    lines = build_report(
        diff,
        filters=ReportFilter(
            hostname=hostname_match, metric=stat_name_match, table=table_name_match
        ),
        include_gauges=gauges_enable,
        details=details_enable,
    )
    render_report(lines, obj["console"], details=details_enable, sql_length=sql_length)


def _handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (ConfigError, SnapshotNotFoundError) as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--hosts", help="Comma separated hosts. [env: YBSTATS_HOSTS]")
@click.option("--ports", help="Comma separated ports. [env: YBSTATS_PORTS]")
@click.option("--parallel", help="Endpoints fetched at the same time. [env: YBSTATS_PARALLEL]")
@click.option("--snapshot-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Snapshot directory. [env: YBSTATS_SNAPSHOT_DIR]")
@click.option("--store", type=click.Choice(STORE_KINDS),
              help="Snapshot store backend. [env: YBSTATS_STORE]")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False),
              help="Log level. [env: YBSTATS_LOG_LEVEL]")
@click.option("--keep-zero-values", is_flag=True, default=False,
              help="Keep value statistics that are zero.")
@click.option("--env-file", type=click.Path(dir_okay=False, path_type=Path),
              default=DEFAULT_ENV_FILE, show_default=True,
              help="File the hosts, ports and parallel options are saved to.")
@click.pass_context
@_handle_errors
def main(
    ctx: click.Context,
    hosts: str | None,
    ports: str | None,
    parallel: str | None,
    snapshot_dir: Path | None,
    store: str | None,
    log_level: str | None,
    keep_zero_values: bool,
    env_file: Path,
) -> None:
    """Capture and diff statistics of a YugabyteDB cluster."""
    obj = ctx.ensure_object(dict)
    settings = Settings.load(
        hosts=hosts,
        ports=ports,
        parallel=parallel,
        snapshot_dir=snapshot_dir,
        store=store,
        log_level=log_level,
        keep_zero_values=keep_zero_values,
        env_file=env_file,
    )
    configure_logging(settings.log_level)
    obj["settings"] = settings
    obj.setdefault("console", Console())


@main.command("snapshot")
@click.option("--comment", default="", help="Comment stored with the snapshot.")
@click.pass_obj
@_handle_errors
def snapshot_cmd(obj: dict[str, Any], comment: str) -> None:
    """Capture the cluster and store it as a new snapshot."""

    async def run() -> int:
        async with _transport(obj) as transport, _store(obj) as store:
            info = await take_snapshot(transport, store, obj["settings"], comment)
            return info.number

    number = asyncio.run(run())
    click.echo(f"snapshot number {number}")


@main.command("snapshots")
@click.pass_obj
@_handle_errors
def snapshots_cmd(obj: dict[str, Any]) -> None:
    """List stored snapshots."""

    async def run() -> list:
        async with _store(obj) as store:
            return await store.list_captures()

    render_captures(asyncio.run(run()), obj["console"])


@main.command("diff")
@click.option("--begin", type=int, required=True, help="Begin snapshot number.")
@click.option("--end", type=int, required=True, help="End snapshot number.")
@report_options
@click.pass_obj
@_handle_errors
def diff_cmd(obj: dict[str, Any], begin: int, end: int, **report: Any) -> None:
    """Report the difference between two stored snapshots."""

    async def run() -> MetricDiff:
        async with _store(obj) as store:
            return await snapshot_diff(store, begin, end)

    _print_diff(obj, asyncio.run(run()), **report)


@main.command("adhoc")
@report_options
@click.pass_obj
@_handle_errors
def adhoc_cmd(obj: dict[str, Any], **report: Any) -> None:
    """Capture twice around a pause and report the difference. Nothing is stored."""

    async def pause() -> None:
        await asyncio.to_thread(click.pause, PAUSE_PROMPT)

    async def run() -> MetricDiff:
        async with _transport(obj) as transport:
            return await adhoc_diff(transport, obj["settings"], pause)

    _print_diff(obj, asyncio.run(run()), **report)
