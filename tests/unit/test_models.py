"""Tests for core domain models."""

import pytest

from ybstats.core.models import (
    NO_VALUE,
    Attributes,
    CaptureRecords,
    CountSumRecord,
    CountSumRowsRecord,
    MetricEntity,
    RecordKind,
    StatementRecord,
    ValueRecord,
    absorb,
    numeric_fields,
)

pytestmark = [pytest.mark.unit, pytest.mark.tier(1)]


def _countsum(total_count: int, total_sum: int, p99: int) -> CountSumRecord:
    return CountSumRecord(
        host_identifier="h:9000",
        capture_time=1.0,
        entity_kind="server",
        entity_id="yb.tabletserver",
        namespace=NO_VALUE,
        table_name=NO_VALUE,
        metric_name="log_sync_latency",
        total_count=total_count,
        min=1,
        mean=2.5,
        percentile_75=p99,
        percentile_95=p99,
        percentile_99=p99,
        percentile_99_9=p99,
        percentile_99_99=p99,
        max=p99,
        total_sum=total_sum,
    )


class TestMetricEntity:
    """Tests for MetricEntity attribute fallbacks."""

    def test_missing_attributes_default_to_placeholder(self) -> None:
        """Entities without attributes report '-' for namespace and table."""
        entity = MetricEntity(entity_kind="server", entity_id="yb.master")

        assert entity.namespace == NO_VALUE
        assert entity.table_name == NO_VALUE

    def test_partial_attributes(self) -> None:
        """A missing table name falls back while the namespace is kept."""
        entity = MetricEntity(
            entity_kind="table",
            entity_id="000033e8",
            attributes=Attributes(namespace_name="yugabyte"),
        )

        assert entity.namespace == "yugabyte"
        assert entity.table_name == NO_VALUE


class TestRecordKeys:
    """Tests for canonical record keys."""

    def test_value_key_has_four_parts(self) -> None:
        record = ValueRecord("h:9000", 1.0, "tablet", "t-1", "db", "tbl", "rows_inserted", 3)

        assert record.key == ("h:9000", "tablet", "t-1", "rows_inserted")

    def test_countsumrows_key_is_host_and_metric(self) -> None:
        record = CountSumRowsRecord(
            "h:13000", 1.0, "server", "yb.ysqlserver", "-", "-", "handler_latency_SelectStmt", 1, 2, 3
        )

        assert record.key == ("h:13000", "handler_latency_SelectStmt")

    def test_statement_key_is_host_and_query(self) -> None:
        record = StatementRecord("h:13000", 1.0, "select 1", 2, 0.5, 2)

        assert record.key == ("h:13000", "select 1")


class TestAbsorb:
    """Tests for the summation policy."""

    def test_counts_and_sums_add_up(self) -> None:
        target = _countsum(total_count=10, total_sum=100, p99=7)

        absorb(target, _countsum(total_count=5, total_sum=50, p99=9))

        assert target.total_count == 15
        assert target.total_sum == 150

    def test_percentiles_and_extrema_reset_to_zero(self) -> None:
        target = _countsum(total_count=10, total_sum=100, p99=7)

        absorb(target, _countsum(total_count=5, total_sum=50, p99=9))

        assert target.percentile_99 == 0
        assert target.max == 0
        assert target.min == 0
        assert target.mean == 0.0
        assert isinstance(target.mean, float)

    def test_value_adds(self) -> None:
        target = ValueRecord("h:9000", 1.0, "server", "s", "-", "-", "m", 5)

        absorb(target, ValueRecord("h:9000", 1.0, "server", "s", "-", "-", "m", 7))

        assert target.value == 12


class TestNumericFields:
    """Tests for numeric_fields."""

    def test_countsum_fields_in_declaration_order(self) -> None:
        assert numeric_fields(CountSumRecord) == (
            "total_count",
            "min",
            "mean",
            "percentile_75",
            "percentile_95",
            "percentile_99",
            "percentile_99_9",
            "percentile_99_99",
            "max",
            "total_sum",
        )

    def test_statement_fields(self) -> None:
        assert numeric_fields(StatementRecord) == ("calls", "total_time", "rows")


class TestCaptureRecords:
    """Tests for the CaptureRecords container."""

    def test_extend_appends_every_kind(self) -> None:
        first = CaptureRecords(
            values=[ValueRecord("a:1", 1.0, "server", "s", "-", "-", "m", 1)]
        )
        second = CaptureRecords(
            values=[ValueRecord("b:1", 1.0, "server", "s", "-", "-", "m", 2)],
            statements=[StatementRecord("b:1", 1.0, "select 1", 1, 0.1, 1)],
        )

        first.extend(second)

        assert len(first.values) == 2
        assert len(first.statements) == 1
        assert len(first) == 3

    def test_iterates_in_kind_order(self) -> None:
        kinds = [kind for kind, _ in CaptureRecords()]

        assert kinds == list(RecordKind)
