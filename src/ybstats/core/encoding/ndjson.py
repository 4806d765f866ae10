"""NDJSON encoder and decoder for canonical records."""

import dataclasses
import json
from collections.abc import Iterable

from ybstats.core.models import RECORD_TYPES, CanonicalRecord, RecordKind


def encode_records(records: Iterable[CanonicalRecord]) -> str:
    """Encode canonical records to newline-delimited JSON.

    Args:
        records: An iterable of canonical records of one kind.

    Returns:
        NDJSON string with one JSON object per line.
        Empty string if no records.
    """
    lines = [json.dumps(dataclasses.asdict(record)) for record in records]

    if not lines:
        return ""

    return "\n".join(lines) + "\n"


def decode_records(text: str, kind: RecordKind) -> list[CanonicalRecord]:
    """Decode newline-delimited JSON into canonical records of ``kind``.

    Blank lines are ignored.

    Raises:
        ValueError: If a line is not valid JSON or lacks a record field.
    """
    record_type = RECORD_TYPES[kind]
    names = {f.name for f in dataclasses.fields(record_type)}
    records = []
    for line in text.splitlines():
        if not line.strip():
            continue
        obj = json.loads(line)
        missing = names - obj.keys()
        if missing:
            raise ValueError(f"{kind.value} record lacks {sorted(missing)}")
        records.append(record_type(**{name: obj[name] for name in names}))
    return records
