"""Core domain: models, decoding, normalization, diff and reporting."""

from ybstats.core.diff import MetricDiff
from ybstats.core.errors import (
    ConfigError,
    SampleDecodeError,
    SnapshotNotFoundError,
    YbStatsError,
)
from ybstats.core.models import CaptureInfo, CaptureRecords, MetricEntity, RecordKind
from ybstats.core.ports import SnapshotStorePort, TransportPort

__all__ = [
    "CaptureInfo",
    "CaptureRecords",
    "ConfigError",
    "MetricDiff",
    "MetricEntity",
    "RecordKind",
    "SampleDecodeError",
    "SnapshotNotFoundError",
    "SnapshotStorePort",
    "TransportPort",
    "YbStatsError",
]
