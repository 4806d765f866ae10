"""Decoders for the JSON documents served by cluster nodes.

The ``/metrics`` endpoint returns an array of entities, each holding a list of
metric samples. Samples carry no type tag: the shape has to be inferred from
the fields present and from the range of the numbers in them. Matching is done
against an explicit, ordered list of matchers so that overlapping shapes
always resolve the same way:

1. value fitting a signed 64-bit integer
2. count/sum latency summary
3. count/sum/rows YSQL statistic
4. value fitting only an unsigned 64-bit integer (rejected)
5. boolean value (rejected)

A JSON boolean is never treated as an integer, even though Python's ``bool``
is an ``int`` subclass.
"""

import dataclasses
import json
import logging
import math
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ybstats.core.errors import SampleDecodeError
from ybstats.core.models import (
    I64_MAX,
    I64_MIN,
    U64_MAX,
    Attributes,
    CountSumRowsSample,
    CountSumSample,
    MetricEntity,
    MetricSample,
    RejectedBooleanSample,
    RejectedU64Sample,
    Statement,
    ValueSample,
)

logger = logging.getLogger(__name__)

_COUNTSUM_INT_FIELDS = (
    "total_count",
    "min",
    "percentile_75",
    "percentile_95",
    "percentile_99",
    "percentile_99_9",
    "percentile_99_99",
    "max",
    "total_sum",
)

_COUNTSUMROWS_FIELDS = ("count", "sum", "rows")


def _reject_constant(name: str) -> float:
    raise ValueError(f"non-standard JSON constant: {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def _loads(raw: bytes | str) -> Any:
    """Strict ``json.loads``: NaN, Infinity and overflowing floats are errors.

    Raises:
        ValueError: If ``raw`` is not a standard JSON document. Nesting too deep
            for the parser is reported as a ``ValueError`` too.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant, parse_float=_finite_float)
    except RecursionError:
        raise ValueError("document nested too deeply") from None


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_u64(value: Any) -> bool:
    return _is_int(value) and 0 <= value <= U64_MAX


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _match_value(obj: Mapping[str, Any]) -> MetricSample | None:
    value = obj.get("value")
    if _is_int(value) and I64_MIN <= value <= I64_MAX:
        return ValueSample(name=obj["name"], value=value)
    return None


def _match_countsum(obj: Mapping[str, Any]) -> MetricSample | None:
    if not all(_is_u64(obj.get(name)) for name in _COUNTSUM_INT_FIELDS):
        return None
    if not _is_number(obj.get("mean")):
        return None
    return CountSumSample(
        name=obj["name"],
        mean=float(obj["mean"]),
        **{name: obj[name] for name in _COUNTSUM_INT_FIELDS},
    )


def _match_countsumrows(obj: Mapping[str, Any]) -> MetricSample | None:
    if not all(_is_u64(obj.get(name)) for name in _COUNTSUMROWS_FIELDS):
        return None
    return CountSumRowsSample(
        name=obj["name"], count=obj["count"], sum=obj["sum"], rows=obj["rows"]
    )


def _match_rejected_u64(obj: Mapping[str, Any]) -> MetricSample | None:
    value = obj.get("value")
    if _is_int(value) and I64_MAX < value <= U64_MAX:
        return RejectedU64Sample(name=obj["name"], value=value)
    return None


def _match_rejected_boolean(obj: Mapping[str, Any]) -> MetricSample | None:
    value = obj.get("value")
    if isinstance(value, bool):
        return RejectedBooleanSample(name=obj["name"], value=value)
    return None


# Order is significant, see module docstring.
SAMPLE_MATCHERS: tuple[Callable[[Mapping[str, Any]], MetricSample | None], ...] = (
    _match_value,
    _match_countsum,
    _match_countsumrows,
    _match_rejected_u64,
    _match_rejected_boolean,
)


def decode_sample(obj: Any) -> MetricSample:
    """Classify one element of an entity's ``metrics`` array.

    Args:
        obj: Parsed JSON value.

    Returns:
        The first variant whose matcher accepts ``obj``.

    Raises:
        SampleDecodeError: If no variant matches.
    """
    if isinstance(obj, Mapping) and isinstance(obj.get("name"), str):
        for matcher in SAMPLE_MATCHERS:
            sample = matcher(obj)
            if sample is not None:
                return sample
    raise SampleDecodeError(obj)


def _optional_str(raw: Mapping[str, Any], name: str) -> str | None:
    value = raw.get(name)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"attribute {name} is not a string: {value!r}")
    return value


def _decode_attributes(raw: Any) -> Attributes | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise ValueError(f"attributes is not an object: {raw!r}")
    return Attributes(
        namespace_name=_optional_str(raw, "namespace_name"),
        table_name=_optional_str(raw, "table_name"),
        table_id=_optional_str(raw, "table_id"),
    )


def _decode_entity(raw: Any, source: str) -> MetricEntity:
    if not isinstance(raw, Mapping):
        raise ValueError(f"entity is not an object: {raw!r}")
    entity_kind = raw.get("type")
    entity_id = raw.get("id")
    metrics = raw.get("metrics")
    if not isinstance(entity_kind, str) or not isinstance(entity_id, str):
        raise ValueError("entity lacks a string type or id")
    if not isinstance(metrics, list):
        raise ValueError(f"entity {entity_kind}/{entity_id} lacks a metrics array")

    samples: list[MetricSample] = []
    for item in metrics:
        try:
            samples.append(decode_sample(item))
        except SampleDecodeError as exc:
            logger.warning(
                "(%s) skipping sample of %s %s: %s", source, entity_kind, entity_id, exc
            )
    return MetricEntity(
        entity_kind=entity_kind,
        entity_id=entity_id,
        attributes=_decode_attributes(raw.get("attributes")),
        metrics=tuple(samples),
    )


def parse_metrics(raw: bytes | str, source: str = "") -> list[MetricEntity]:
    """Decode a ``/metrics`` document into metric entities.

    A document that is not a JSON array of entities decodes to an empty list:
    the node may be restarting or running an incompatible build. Individual
    samples of unknown shape are skipped without affecting their siblings.

    Args:
        raw: Response body.
        source: ``host:port`` of the node, used in log messages.

    Returns:
        Decoded entities in document order, or ``[]`` on failure.
    """
    try:
        document = _loads(raw)
        if not isinstance(document, list):
            raise ValueError("expected a JSON array of metric entities")
        return [_decode_entity(item, source) for item in document]
    except ValueError as exc:
        logger.debug("(%s) unable to parse metrics: %s", source, exc)
        return []


def _decode_statement(raw: Any) -> Statement:
    if not isinstance(raw, Mapping):
        raise ValueError(f"statement is not an object: {raw!r}")
    query = raw.get("query")
    if not isinstance(query, str):
        raise ValueError("statement lacks query text")
    if not (_is_int(raw.get("calls")) and _is_int(raw.get("rows"))):
        raise ValueError(f"statement has non-integer calls or rows: {query!r}")
    times = {}
    for name in ("total_time", "min_time", "max_time", "mean_time", "stddev_time"):
        value = raw.get(name, 0.0)
        if not _is_number(value):
            raise ValueError(f"statement has non-numeric {name}: {query!r}")
        times[name] = float(value)
    query_id = raw.get("query_id")
    return Statement(
        query=query,
        calls=raw["calls"],
        rows=raw["rows"],
        query_id=query_id if _is_int(query_id) else None,
        **times,
    )


def parse_statements(raw: bytes | str, source: str = "") -> list[Statement]:
    """Decode a ``/statements`` document.

    Returns an empty list when the node does not serve statements (only YSQL
    does) or the document cannot be decoded.
    """
    try:
        document = _loads(raw)
        if not isinstance(document, Mapping) or not isinstance(
            document.get("statements"), list
        ):
            raise ValueError("expected an object with a statements array")
        return [_decode_statement(item) for item in document["statements"]]
    except ValueError as exc:
        logger.debug("(%s) unable to parse statements: %s", source, exc)
        return []


def encode_sample(sample: MetricSample) -> dict[str, Any]:
    """Encode a sample back to its JSON object form."""
    return dataclasses.asdict(sample)


def encode_entity(entity: MetricEntity) -> dict[str, Any]:
    """Encode an entity back to its JSON object form."""
    return {
        "type": entity.entity_kind,
        "id": entity.entity_id,
        "attributes": (
            dataclasses.asdict(entity.attributes) if entity.attributes else None
        ),
        "metrics": [encode_sample(sample) for sample in entity.metrics],
    }


def encode_metrics(entities: Iterable[MetricEntity]) -> str:
    """Encode entities as a ``/metrics`` JSON document."""
    return json.dumps([encode_entity(entity) for entity in entities])
