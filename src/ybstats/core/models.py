"""Core domain models for cluster metric captures.

Three layers of data live here:

- What a node reports: ``MetricEntity`` holding decoded metric samples, and
  ``Statement`` rows from the YSQL statements endpoint.
- What a capture stores: canonical records, one dataclass per arithmetic
  sample shape, each carrying its host and capture time.
- What a diff holds: paired first/second views of one canonical key.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import ClassVar, Union

# Placeholder used for missing attributes and for synthetic summary entities.
NO_VALUE = "-"

I64_MAX = 2**63 - 1
I64_MIN = -(2**63)
U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Attributes:
    """Optional descriptive attributes of a metric entity.

    Attributes:
        namespace_name: Database (namespace) the entity belongs to.
        table_name: Table name. For a tablet this is the owning table.
        table_id: Table id. Equals the entity id for tables only.
    """

    namespace_name: str | None = None
    table_name: str | None = None
    table_id: str | None = None


@dataclass(frozen=True)
class ValueSample:
    """A name/value pair that fits in a signed 64-bit integer."""

    name: str
    value: int


@dataclass(frozen=True)
class CountSumSample:
    """A latency histogram summary.

    The percentiles, min, mean and max are reset by the server on every
    scrape; only ``total_count`` and ``total_sum`` are cumulative.
    """

    name: str
    total_count: int
    min: int
    mean: float
    percentile_75: int
    percentile_95: int
    percentile_99: int
    percentile_99_9: int
    percentile_99_99: int
    max: int
    total_sum: int


@dataclass(frozen=True)
class CountSumRowsSample:
    """A YSQL handler statistic with call count, time sum and row count."""

    name: str
    count: int
    sum: int
    rows: int


@dataclass(frozen=True)
class RejectedU64Sample:
    """A value that only fits an unsigned 64-bit integer."""

    name: str
    value: int


@dataclass(frozen=True)
class RejectedBooleanSample:
    """A value reported as a JSON boolean."""

    name: str
    value: bool


MetricSample = Union[
    ValueSample,
    CountSumSample,
    CountSumRowsSample,
    RejectedU64Sample,
    RejectedBooleanSample,
]

REJECTED_SAMPLE_TYPES = (RejectedU64Sample, RejectedBooleanSample)


@dataclass(frozen=True)
class MetricEntity:
    """One object from a node's ``/metrics`` JSON array.

    Attributes:
        entity_kind: Entity type as reported ("server", "table", "tablet", ...).
        entity_id: Id unique within the kind on that node.
        attributes: Optional namespace/table attributes.
        metrics: Decoded samples, in document order.
    """

    entity_kind: str
    entity_id: str
    attributes: Attributes | None = None
    metrics: tuple[MetricSample, ...] = ()

    @property
    def namespace(self) -> str:
        if self.attributes is None or self.attributes.namespace_name is None:
            return NO_VALUE
        return self.attributes.namespace_name

    @property
    def table_name(self) -> str:
        if self.attributes is None or self.attributes.table_name is None:
            return NO_VALUE
        return self.attributes.table_name


@dataclass(frozen=True)
class Statement:
    """One row of the YSQL ``/statements`` endpoint."""

    query: str
    calls: int
    total_time: float
    rows: int
    query_id: int | None = None
    min_time: float = 0.0
    max_time: float = 0.0
    mean_time: float = 0.0
    stddev_time: float = 0.0


class RecordKind(str, Enum):
    """Canonical record streams. The value doubles as the store's kind name."""

    VALUES = "values"
    COUNTSUM = "countsum"
    COUNTSUMROWS = "countsumrows"
    STATEMENTS = "statements"


# --- Canonical records ---


@dataclass
class ValueRecord:
    """Canonical record for a value sample."""

    SUMMED_FIELDS: ClassVar[tuple[str, ...]] = ("value",)
    RESET_FIELDS: ClassVar[tuple[str, ...]] = ()

    host_identifier: str
    capture_time: float
    entity_kind: str
    entity_id: str
    namespace: str
    table_name: str
    metric_name: str
    value: int

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.host_identifier, self.entity_kind, self.entity_id, self.metric_name)


@dataclass
class CountSumRecord:
    """Canonical record for a latency histogram summary."""

    SUMMED_FIELDS: ClassVar[tuple[str, ...]] = ("total_count", "total_sum")
    RESET_FIELDS: ClassVar[tuple[str, ...]] = (
        "min",
        "mean",
        "percentile_75",
        "percentile_95",
        "percentile_99",
        "percentile_99_9",
        "percentile_99_99",
        "max",
    )

    host_identifier: str
    capture_time: float
    entity_kind: str
    entity_id: str
    namespace: str
    table_name: str
    metric_name: str
    total_count: int
    min: int
    mean: float
    percentile_75: int
    percentile_95: int
    percentile_99: int
    percentile_99_9: int
    percentile_99_99: int
    max: int
    total_sum: int

    @property
    def key(self) -> tuple[str, str, str, str]:
        return (self.host_identifier, self.entity_kind, self.entity_id, self.metric_name)


@dataclass
class CountSumRowsRecord:
    """Canonical record for a YSQL count/sum/rows statistic.

    The YSQL endpoint has no entity identity, so the key is host and metric.
    """

    SUMMED_FIELDS: ClassVar[tuple[str, ...]] = ("count", "sum", "rows")
    RESET_FIELDS: ClassVar[tuple[str, ...]] = ()

    host_identifier: str
    capture_time: float
    entity_kind: str
    entity_id: str
    namespace: str
    table_name: str
    metric_name: str
    count: int
    sum: int
    rows: int

    @property
    def key(self) -> tuple[str, str]:
        return (self.host_identifier, self.metric_name)


@dataclass
class StatementRecord:
    """Canonical record for a YSQL statement, keyed by host and query text."""

    SUMMED_FIELDS: ClassVar[tuple[str, ...]] = ("calls", "total_time", "rows")
    RESET_FIELDS: ClassVar[tuple[str, ...]] = ()

    host_identifier: str
    capture_time: float
    query: str
    calls: int
    total_time: float
    rows: int

    @property
    def key(self) -> tuple[str, str]:
        return (self.host_identifier, self.query)


CanonicalRecord = Union[ValueRecord, CountSumRecord, CountSumRowsRecord, StatementRecord]

RECORD_TYPES: dict[RecordKind, type] = {
    RecordKind.VALUES: ValueRecord,
    RecordKind.COUNTSUM: CountSumRecord,
    RecordKind.COUNTSUMROWS: CountSumRowsRecord,
    RecordKind.STATEMENTS: StatementRecord,
}


def numeric_fields(record_type: type) -> tuple[str, ...]:
    """Return the numeric field names of a canonical record type, in order."""
    return tuple(
        f.name
        for f in fields(record_type)
        if f.name in record_type.SUMMED_FIELDS or f.name in record_type.RESET_FIELDS
    )


def absorb(target: CanonicalRecord, other: CanonicalRecord) -> None:
    """Fold ``other`` into ``target`` using the summation policy.

    Counts and sums add up. Fields that cannot be summed (percentiles,
    extrema, mean) are reset to zero since a sum of them means nothing.
    """
    for name in target.SUMMED_FIELDS:
        setattr(target, name, getattr(target, name) + getattr(other, name))
    for name in target.RESET_FIELDS:
        setattr(target, name, type(getattr(target, name))(0))


@dataclass
class CaptureRecords:
    """All canonical records of one capture, split by kind."""

    values: list[ValueRecord] = field(default_factory=list)
    countsum: list[CountSumRecord] = field(default_factory=list)
    countsumrows: list[CountSumRowsRecord] = field(default_factory=list)
    statements: list[StatementRecord] = field(default_factory=list)

    def records(self, kind: RecordKind) -> list:
        """Return the record list for ``kind``."""
        return getattr(self, kind.value)

    def extend(self, other: "CaptureRecords") -> None:
        """Append every record of ``other`` to this capture."""
        for kind in RecordKind:
            self.records(kind).extend(other.records(kind))

    def __iter__(self) -> Iterator[tuple[RecordKind, list]]:
        for kind in RecordKind:
            yield kind, self.records(kind)

    def __len__(self) -> int:
        return sum(len(records) for _, records in self)


@dataclass(frozen=True)
class CaptureInfo:
    """A row of the snapshot index.

    Attributes:
        number: Capture number, increasing from 0.
        timestamp: Unix timestamp at which the capture was allocated.
        comment: Free-text comment, possibly empty.
    """

    number: int
    timestamp: float
    comment: str = ""
