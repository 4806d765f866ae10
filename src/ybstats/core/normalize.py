"""Normalization of decoded metric entities into canonical records.

Normalizing one node's document happens in two passes:

1. Every arithmetic sample becomes a canonical record. Samples sharing a key
   within the call are summed into one record instead of overwriting it.
2. Summary records are derived for table and tablet entities: one record per
   host, entity kind and metric with ``entity_id == "-"``. Detail records are
   left as they are.
"""

import dataclasses
import logging
from collections.abc import Iterable

from ybstats.core.models import (
    NO_VALUE,
    REJECTED_SAMPLE_TYPES,
    CanonicalRecord,
    CaptureRecords,
    CountSumRecord,
    CountSumRowsRecord,
    CountSumRowsSample,
    CountSumSample,
    MetricEntity,
    MetricSample,
    Statement,
    StatementRecord,
    ValueRecord,
    ValueSample,
    absorb,
)

logger = logging.getLogger(__name__)

ROLLUP_ENTITY_KINDS = frozenset({"table", "tablet"})
SUMMARY_ENTITY_ID = NO_VALUE


def is_summary(record: CanonicalRecord) -> bool:
    """Return True for a synthetic per-host summary record."""
    return getattr(record, "entity_id", None) == SUMMARY_ENTITY_ID


def _to_record(
    host_identifier: str,
    capture_time: float,
    entity: MetricEntity,
    sample: MetricSample,
) -> ValueRecord | CountSumRecord | CountSumRowsRecord:
    common = {
        "host_identifier": host_identifier,
        "capture_time": capture_time,
        "entity_kind": entity.entity_kind,
        "entity_id": entity.entity_id,
        "namespace": entity.namespace,
        "table_name": entity.table_name,
        "metric_name": sample.name,
    }
    if isinstance(sample, ValueSample):
        return ValueRecord(value=sample.value, **common)
    if isinstance(sample, CountSumSample):
        return CountSumRecord(
            total_count=sample.total_count,
            min=sample.min,
            mean=sample.mean,
            percentile_75=sample.percentile_75,
            percentile_95=sample.percentile_95,
            percentile_99=sample.percentile_99,
            percentile_99_9=sample.percentile_99_9,
            percentile_99_99=sample.percentile_99_99,
            max=sample.max,
            total_sum=sample.total_sum,
            **common,
        )
    if isinstance(sample, CountSumRowsSample):
        return CountSumRowsRecord(
            count=sample.count, sum=sample.sum, rows=sample.rows, **common
        )
    raise TypeError(f"not an arithmetic sample: {sample!r}")


def _is_unused(record: CanonicalRecord, keep_zero_values: bool) -> bool:
    # Unused statistics are dropped to keep the number of keys bounded.
    if isinstance(record, ValueRecord):
        return record.value <= 0 and not keep_zero_values
    if isinstance(record, CountSumRecord):
        return record.total_count == 0
    if isinstance(record, CountSumRowsRecord):
        return record.count == 0
    return False


def _add(index: dict, record: CanonicalRecord) -> None:
    existing = index.get(record.key)
    if existing is None:
        index[record.key] = record
        return
    logger.debug("summing duplicate key %s", record.key)
    absorb(existing, record)


def normalize(
    host_identifier: str,
    capture_time: float,
    entities: Iterable[MetricEntity],
    *,
    keep_zero_values: bool = False,
    rollup_kinds: frozenset[str] = ROLLUP_ENTITY_KINDS,
) -> CaptureRecords:
    """Turn one node's metric entities into canonical records.

    Args:
        host_identifier: ``host:port`` the entities were fetched from.
        capture_time: Unix timestamp of this node's fetch.
        entities: Decoded entities.
        keep_zero_values: Keep value samples that are zero or negative.
            By default they are dropped like unused counters.
        rollup_kinds: Entity kinds that get per-host summary records.

    Returns:
        Value, count/sum and count/sum/rows records, summaries included.
        The statements list is left empty.
    """
    indexes: dict[type, dict] = {
        ValueRecord: {},
        CountSumRecord: {},
        CountSumRowsRecord: {},
    }
    for entity in entities:
        for sample in entity.metrics:
            if isinstance(sample, REJECTED_SAMPLE_TYPES):
                logger.warning(
                    "(%s) dropping unusable statistic: type %s, namespace %s, table %s: %s",
                    host_identifier,
                    entity.entity_kind,
                    entity.namespace,
                    entity.table_name,
                    sample,
                )
                continue
            record = _to_record(host_identifier, capture_time, entity, sample)
            if _is_unused(record, keep_zero_values):
                continue
            _add(indexes[type(record)], record)

    records = CaptureRecords(
        values=list(indexes[ValueRecord].values()),
        countsum=list(indexes[CountSumRecord].values()),
        countsumrows=list(indexes[CountSumRowsRecord].values()),
    )
    return rollup_summaries(records, rollup_kinds)


def _rollup(records: list, rollup_kinds: frozenset[str]) -> list:
    detail = [record for record in records if not is_summary(record)]
    summaries: dict = {}
    for record in detail:
        if record.entity_kind not in rollup_kinds:
            continue
        summary = dataclasses.replace(
            record,
            entity_id=SUMMARY_ENTITY_ID,
            namespace=NO_VALUE,
            table_name=NO_VALUE,
        )
        existing = summaries.get(summary.key)
        if existing is None:
            for name in summary.RESET_FIELDS:
                setattr(summary, name, type(getattr(summary, name))(0))
            summaries[summary.key] = summary
        else:
            absorb(existing, summary)
    return detail + list(summaries.values())


def rollup_summaries(
    records: CaptureRecords,
    rollup_kinds: frozenset[str] = ROLLUP_ENTITY_KINDS,
) -> CaptureRecords:
    """Derive per-host summary records for table and tablet statistics.

    Counts and sums are added across every entity id of a kind on a host.
    Percentiles and extrema are zeroed, they never roll up. Summary records
    already present in ``records`` are recomputed, so applying this twice
    gives the same result as applying it once. Must run after duplicate keys
    have been merged.

    Returns:
        A new ``CaptureRecords``; the input records are not modified.
    """
    return CaptureRecords(
        values=_rollup(records.values, rollup_kinds),
        countsum=_rollup(records.countsum, rollup_kinds),
        countsumrows=list(records.countsumrows),
        statements=list(records.statements),
    )


def normalize_statements(
    host_identifier: str,
    capture_time: float,
    statements: Iterable[Statement],
) -> list[StatementRecord]:
    """Turn one node's statements into canonical records.

    The endpoint exposes no identity beyond the query text, so rows with the
    same text on a host (different users or databases) are summed.
    """
    index: dict = {}
    for statement in statements:
        _add(
            index,
            StatementRecord(
                host_identifier=host_identifier,
                capture_time=capture_time,
                query=statement.query,
                calls=statement.calls,
                total_time=statement.total_time,
                rows=statement.rows,
            ),
        )
    return list(index.values())
