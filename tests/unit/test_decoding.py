"""Tests for the /metrics and /statements decoders."""

import json
import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tests.payloads import countsum, countsumrows, entity, metrics_document, value
from ybstats.core.decoding import (
    decode_sample,
    encode_metrics,
    encode_sample,
    parse_metrics,
    parse_statements,
)
from ybstats.core.errors import SampleDecodeError
from ybstats.core.models import (
    I64_MAX,
    I64_MIN,
    U64_MAX,
    CountSumRowsSample,
    CountSumSample,
    RejectedBooleanSample,
    RejectedU64Sample,
    ValueSample,
)

pytestmark = [pytest.mark.encoding, pytest.mark.tier(1)]


class TestDecodeSample:
    """Tests for sample shape classification."""

    def test_value_sample(self) -> None:
        assert decode_sample(value("threads_running", 12)) == ValueSample(
            "threads_running", 12
        )

    def test_negative_value_is_still_a_value(self) -> None:
        assert decode_sample(value("hybrid_clock_skew", -5)) == ValueSample(
            "hybrid_clock_skew", -5
        )

    def test_value_at_signed_limit(self) -> None:
        assert isinstance(decode_sample(value("m", I64_MAX)), ValueSample)

    def test_value_above_signed_limit_is_rejected_u64(self) -> None:
        """An integer that only fits unsigned 64 bits falls through to RejectedU64."""
        sample = decode_sample(value("m", I64_MAX + 1))

        assert sample == RejectedU64Sample("m", I64_MAX + 1)

    def test_boolean_is_never_an_integer(self) -> None:
        assert decode_sample({"name": "is_leader", "value": True}) == RejectedBooleanSample(
            "is_leader", True
        )

    def test_countsum_sample(self) -> None:
        sample = decode_sample(countsum("log_sync_latency", 10, 500, percentile_99=80))

        assert isinstance(sample, CountSumSample)
        assert sample.total_count == 10
        assert sample.total_sum == 500
        assert sample.percentile_99 == 80

    def test_integer_mean_is_accepted(self) -> None:
        sample = decode_sample(countsum("log_sync_latency", 1, 5, mean=5))

        assert isinstance(sample, CountSumSample)
        assert sample.mean == 5.0

    def test_countsumrows_sample(self) -> None:
        assert decode_sample(
            countsumrows("handler_latency_SelectStmt", 3, 900, 30)
        ) == CountSumRowsSample("handler_latency_SelectStmt", 3, 900, 30)

    def test_negative_count_is_not_countsum(self) -> None:
        with pytest.raises(SampleDecodeError):
            decode_sample(countsum("m", -1, 5))

    def test_value_beyond_u64_matches_nothing(self) -> None:
        with pytest.raises(SampleDecodeError):
            decode_sample(value("m", U64_MAX + 1))

    def test_value_below_signed_limit_matches_nothing(self) -> None:
        with pytest.raises(SampleDecodeError):
            decode_sample(value("m", I64_MIN - 1))

    def test_unknown_shape(self) -> None:
        with pytest.raises(SampleDecodeError) as exc_info:
            decode_sample({"name": "m", "text": "abc"})

        assert exc_info.value.sample == {"name": "m", "text": "abc"}

    def test_missing_name(self) -> None:
        with pytest.raises(SampleDecodeError):
            decode_sample({"value": 1})


class TestParseMetrics:
    """Tests for whole-document decoding."""

    def test_entities_in_document_order(self) -> None:
        raw = metrics_document(
            entity("server", "yb.tabletserver", [value("a", 1)]),
            entity("table", "0001", [value("b", 2)], namespace="db", table="t"),
        )

        entities = parse_metrics(raw)

        assert [e.entity_kind for e in entities] == ["server", "table"]
        assert entities[1].namespace == "db"
        assert entities[1].table_name == "t"

    def test_bytes_input(self) -> None:
        raw = metrics_document(entity("server", "s", [value("a", 1)])).encode()

        assert len(parse_metrics(raw)) == 1

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "not json",
            "{}",
            json.dumps([{"type": "server", "metrics": []}]),
            json.dumps([{"type": "server", "id": "s", "metrics": {}}]),
            json.dumps([{"type": "server", "id": "s", "attributes": [], "metrics": []}]),
        ],
    )
    def test_structural_failure_yields_empty_list(self, raw: str) -> None:
        assert parse_metrics(raw, "h:9000") == []

    def test_deeply_nested_document_yields_empty_list(self) -> None:
        assert parse_metrics(b"[" * 100_000, "h:9000") == []

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity", "1e400"])
    def test_non_standard_numbers_yield_empty_list(self, token: str) -> None:
        """Documents a strict JSON parser rejects decode to nothing."""
        raw = metrics_document(entity("server", "s", [countsum("lat", 1, 5)])).replace(
            '"mean": 0.0', f'"mean": {token}'
        )

        assert parse_metrics(raw, "h:9000") == []

    def test_bad_sample_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """One unknown sample does not abort its siblings."""
        raw = metrics_document(
            entity("server", "s", [value("a", 1), {"name": "b", "text": "x"}, value("c", 3)])
        )

        with caplog.at_level(logging.WARNING, logger="ybstats.core.decoding"):
            entities = parse_metrics(raw, "h:9000")

        assert [s.name for s in entities[0].metrics] == ["a", "c"]
        assert "skipping sample" in caplog.text

    def test_rejected_samples_are_kept_by_the_decoder(self) -> None:
        raw = metrics_document(
            entity("server", "s", [value("big", U64_MAX), {"name": "flag", "value": False}])
        )

        metrics = parse_metrics(raw)[0].metrics

        assert isinstance(metrics[0], RejectedU64Sample)
        assert isinstance(metrics[1], RejectedBooleanSample)


class TestParseStatements:
    """Tests for the /statements decoder."""

    def test_statements(self) -> None:
        raw = json.dumps(
            {
                "statements": [
                    {
                        "query_id": 7,
                        "query": "select 1",
                        "calls": 2,
                        "total_time": 0.5,
                        "min_time": 0.2,
                        "max_time": 0.3,
                        "mean_time": 0.25,
                        "stddev_time": 0.05,
                        "rows": 2,
                    }
                ]
            }
        )

        statements = parse_statements(raw)

        assert len(statements) == 1
        assert statements[0].query == "select 1"
        assert statements[0].calls == 2
        assert statements[0].query_id == 7

    @pytest.mark.parametrize("raw", ["", "[]", '{"statements": 1}', "<html></html>"])
    def test_unusable_document_yields_empty_list(self, raw: str) -> None:
        assert parse_statements(raw) == []

    def test_deeply_nested_document_yields_empty_list(self) -> None:
        assert parse_statements(b"{\"statements\": " + b"[" * 100_000) == []

    def test_nan_time_yields_empty_list(self) -> None:
        raw = '{"statements": [{"query": "q", "calls": 1, "rows": 1, "total_time": NaN}]}'

        assert parse_statements(raw) == []


class TestEncoding:
    """Tests for re-encoding decoded data."""

    @given(
        name=st.text(min_size=1, max_size=40),
        amount=st.integers(min_value=I64_MIN, max_value=I64_MAX),
    )
    def test_value_sample_round_trip(self, name: str, amount: int) -> None:
        """Decoding then encoding a value sample keeps name and value."""
        encoded = encode_sample(decode_sample({"name": name, "value": amount}))

        assert encoded == {"name": name, "value": amount}

    def test_encode_metrics_decodes_to_same_entities(self) -> None:
        raw = metrics_document(
            entity("tablet", "t-1", [value("a", 1), countsum("b", 2, 3)], namespace="db", table="t")
        )
        entities = parse_metrics(raw)

        assert parse_metrics(encode_metrics(entities)) == entities
