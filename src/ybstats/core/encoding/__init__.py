"""Encoders for canonical records."""

from ybstats.core.encoding.ndjson import decode_records, encode_records

__all__ = ["decode_records", "encode_records"]
