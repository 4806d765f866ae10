"""Diff engine: pairs two captures key by key.

A diff is built in two passes. ``seed`` loads the first capture, ``merge``
loads the second. A key seen only in the first capture keeps zeros on the
second side; a key that appears only in the second capture gets zeros on the
first side and the begin time of the measurement as its first capture time.

Diff records store both sides. Deltas and rates are computed from them when
reporting.
"""

import logging
from collections.abc import Hashable
from dataclasses import dataclass
from typing import ClassVar

from ybstats.core.models import (
    NO_VALUE,
    CanonicalRecord,
    CaptureRecords,
    CountSumRecord,
    CountSumRowsRecord,
    RecordKind,
    StatementRecord,
    ValueRecord,
    numeric_fields,
)

logger = logging.getLogger(__name__)

FIRST = "first"
SECOND = "second"


@dataclass
class DiffRecord:
    """First and second view of one canonical key.

    Attributes:
        namespace: Descriptive namespace of the key, not part of it.
        table_name: Descriptive table name of the key, not part of it.
        first_capture_time: Capture time of the first side, or the begin
            time for keys born between the captures.
        second_capture_time: Capture time of the second side.
    """

    RECORD_TYPE: ClassVar[type]

    namespace: str = NO_VALUE
    table_name: str = NO_VALUE
    first_capture_time: float = 0.0
    second_capture_time: float = 0.0

    @classmethod
    def seed(cls, record: CanonicalRecord) -> "DiffRecord":
        """Create a diff record from a first-capture observation."""
        diff = cls(
            namespace=getattr(record, "namespace", NO_VALUE),
            table_name=getattr(record, "table_name", NO_VALUE),
            first_capture_time=record.capture_time,
            second_capture_time=record.capture_time,
        )
        diff.assign(FIRST, record)
        return diff

    @classmethod
    def born(cls, record: CanonicalRecord, begin_time: float) -> "DiffRecord":
        """Create a diff record for a key missing from the first capture."""
        diff = cls(
            namespace=getattr(record, "namespace", NO_VALUE),
            table_name=getattr(record, "table_name", NO_VALUE),
            first_capture_time=begin_time,
            second_capture_time=record.capture_time,
        )
        diff.assign(SECOND, record)
        return diff

    def assign(self, side: str, record: CanonicalRecord) -> None:
        """Overwrite one side with the numeric fields of ``record``."""
        for name in numeric_fields(self.RECORD_TYPE):
            setattr(self, f"{side}_{name}", getattr(record, name))
        if side == SECOND:
            self.second_capture_time = record.capture_time

    def accumulate(self, side: str, record: CanonicalRecord) -> None:
        """Fold a repeated observation into one side.

        Summed fields add up; the others are reset to zero.
        """
        record_type = self.RECORD_TYPE
        for name in record_type.SUMMED_FIELDS:
            attr = f"{side}_{name}"
            setattr(self, attr, getattr(self, attr) + getattr(record, name))
        for name in record_type.RESET_FIELDS:
            attr = f"{side}_{name}"
            setattr(self, attr, type(getattr(self, attr))(0))

    def first(self, name: str) -> int | float:
        return getattr(self, f"{FIRST}_{name}")

    def second(self, name: str) -> int | float:
        return getattr(self, f"{SECOND}_{name}")

    def delta(self, name: str) -> int | float:
        """Return second minus first for field ``name``, negatives included."""
        return self.second(name) - self.first(name)

    @property
    def interval(self) -> float:
        """Seconds between the two sides."""
        return self.second_capture_time - self.first_capture_time


@dataclass
class ValueDiff(DiffRecord):
    RECORD_TYPE: ClassVar[type] = ValueRecord

    first_value: int = 0
    second_value: int = 0


@dataclass
class CountSumDiff(DiffRecord):
    """Diff of a latency summary. Only counts and sums are meaningful deltas."""

    RECORD_TYPE: ClassVar[type] = CountSumRecord

    first_total_count: int = 0
    second_total_count: int = 0
    first_min: int = 0
    second_min: int = 0
    first_mean: float = 0.0
    second_mean: float = 0.0
    first_percentile_75: int = 0
    second_percentile_75: int = 0
    first_percentile_95: int = 0
    second_percentile_95: int = 0
    first_percentile_99: int = 0
    second_percentile_99: int = 0
    first_percentile_99_9: int = 0
    second_percentile_99_9: int = 0
    first_percentile_99_99: int = 0
    second_percentile_99_99: int = 0
    first_max: int = 0
    second_max: int = 0
    first_total_sum: int = 0
    second_total_sum: int = 0


@dataclass
class CountSumRowsDiff(DiffRecord):
    RECORD_TYPE: ClassVar[type] = CountSumRowsRecord

    first_count: int = 0
    second_count: int = 0
    first_sum: int = 0
    second_sum: int = 0
    first_rows: int = 0
    second_rows: int = 0


@dataclass
class StatementDiff(DiffRecord):
    RECORD_TYPE: ClassVar[type] = StatementRecord

    first_calls: int = 0
    second_calls: int = 0
    first_total_time: float = 0.0
    second_total_time: float = 0.0
    first_rows: int = 0
    second_rows: int = 0


DIFF_TYPES: dict[RecordKind, type[DiffRecord]] = {
    RecordKind.VALUES: ValueDiff,
    RecordKind.COUNTSUM: CountSumDiff,
    RecordKind.COUNTSUMROWS: CountSumRowsDiff,
    RecordKind.STATEMENTS: StatementDiff,
}


class MetricDiff:
    """Diff maps of two captures, one per record kind.

    Example:
        ```python
        diff = MetricDiff()
        diff.seed(first_capture)
        diff.merge(second_capture, begin_time)
        for key, row in diff.diff_map(RecordKind.VALUES).items():
            print(key, row.delta("value"))
        ```
    """

    def __init__(self) -> None:
        self._maps: dict[RecordKind, dict[Hashable, DiffRecord]] = {
            kind: {} for kind in RecordKind
        }

    def seed(self, capture: CaptureRecords) -> None:
        """Load the first capture.

        A key seen more than once in ``capture`` is summed.
        """
        for kind, records in capture:
            diff_type = DIFF_TYPES[kind]
            diffs = self._maps[kind]
            for record in records:
                existing = diffs.get(record.key)
                if existing is None:
                    diffs[record.key] = diff_type.seed(record)
                else:
                    logger.debug("summing repeated first observation of %s", record.key)
                    existing.accumulate(FIRST, record)

    def merge(self, capture: CaptureRecords, begin_time: float) -> None:
        """Load the second capture.

        Args:
            capture: Records of the second capture.
            begin_time: Fallback first capture time for keys that are not in
                the first capture.
        """
        for kind, records in capture:
            diff_type = DIFF_TYPES[kind]
            diffs = self._maps[kind]
            seen: set[Hashable] = set()
            for record in records:
                existing = diffs.get(record.key)
                if existing is None:
                    diffs[record.key] = diff_type.born(record, begin_time)
                elif record.key in seen:
                    logger.debug("summing repeated second observation of %s", record.key)
                    existing.accumulate(SECOND, record)
                else:
                    existing.assign(SECOND, record)
                seen.add(record.key)

    def diff_map(self, kind: RecordKind) -> dict[Hashable, DiffRecord]:
        """Return the diff records of ``kind`` ordered by key."""
        return dict(sorted(self._maps[kind].items()))

    def __len__(self) -> int:
        return sum(len(diffs) for diffs in self._maps.values())

    @classmethod
    def from_captures(
        cls, first: CaptureRecords, second: CaptureRecords, begin_time: float
    ) -> "MetricDiff":
        """Build a diff from two captures."""
        diff = cls()
        diff.seed(first)
        diff.merge(second, begin_time)
        return diff
