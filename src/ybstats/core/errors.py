"""Exceptions raised by ybstats."""


class YbStatsError(Exception):
    """Base class for ybstats errors."""


class ConfigError(YbStatsError):
    """Invalid configuration value."""


class SampleDecodeError(YbStatsError):
    """A metric sample matched none of the known shapes."""

    def __init__(self, sample: object) -> None:
        super().__init__(f"unrecognized metric sample: {sample!r}")
        self.sample = sample


class SnapshotNotFoundError(YbStatsError):
    """A capture requested from the snapshot store does not exist."""

    def __init__(self, capture_id: int, kind: str | None = None) -> None:
        if kind is None:
            message = f"snapshot {capture_id} not found"
        else:
            message = f"snapshot {capture_id} has no {kind} data"
        super().__init__(message)
        self.capture_id = capture_id
        self.kind = kind
