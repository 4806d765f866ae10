"""Canned /metrics and /statements payloads and a deterministic clock."""

import json
from typing import Any


def value(name: str, amount: int) -> dict[str, Any]:
    """A value sample as served by /metrics."""
    return {"name": name, "value": amount}


def countsum(name: str, total_count: int, total_sum: int, **extra: Any) -> dict[str, Any]:
    """A count/sum sample with percentiles defaulting to zero."""
    sample = {
        "name": name,
        "total_count": total_count,
        "min": 0,
        "mean": 0.0,
        "percentile_75": 0,
        "percentile_95": 0,
        "percentile_99": 0,
        "percentile_99_9": 0,
        "percentile_99_99": 0,
        "max": 0,
        "total_sum": total_sum,
    }
    sample.update(extra)
    return sample


def countsumrows(name: str, count: int, total: int, rows: int) -> dict[str, Any]:
    """A YSQL count/sum/rows sample."""
    return {"name": name, "count": count, "sum": total, "rows": rows}


def entity(
    kind: str,
    entity_id: str,
    metrics: list[dict[str, Any]],
    namespace: str | None = None,
    table: str | None = None,
) -> dict[str, Any]:
    """A /metrics entity object."""
    attributes = None
    if namespace is not None or table is not None:
        attributes = {"namespace_name": namespace, "table_name": table}
    return {"type": kind, "id": entity_id, "attributes": attributes, "metrics": metrics}


def metrics_document(*entities: dict[str, Any]) -> str:
    return json.dumps(list(entities))


def statements_document(*rows: tuple[str, int, float, int]) -> str:
    return json.dumps(
        {
            "statements": [
                {
                    "query_id": index,
                    "query": query,
                    "calls": calls,
                    "total_time": total_time,
                    "min_time": 0.0,
                    "max_time": 0.0,
                    "mean_time": 0.0,
                    "stddev_time": 0.0,
                    "rows": rows_count,
                }
                for index, (query, calls, total_time, rows_count) in enumerate(rows)
            ]
        }
    )


def tserver_metrics(scale: int = 1) -> str:
    """A tablet server /metrics document whose counters grow with ``scale``."""
    return metrics_document(
        entity(
            "server",
            "yb.tabletserver",
            [
                value("rpc_inbound_calls_created", 100 * scale),
                value("threads_running", 10 + scale),
                countsum("handler_latency_outbound_call_queue_time", 10 * scale, 500 * scale),
            ],
        ),
        entity(
            "tablet",
            "t-1",
            [value("rows_inserted", 5 * scale)],
            namespace="yugabyte",
            table="orders",
        ),
        entity(
            "tablet",
            "t-2",
            [value("rows_inserted", 7 * scale)],
            namespace="yugabyte",
            table="orders",
        ),
    )


class Clock:
    """Deterministic clock: returns ``now`` and then advances it by ``step``."""

    def __init__(self, start: float = 1000.0, step: float = 0.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current

