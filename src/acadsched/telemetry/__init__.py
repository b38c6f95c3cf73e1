"""Telemetry helpers for recording engine decisions."""

from .decision_log import DecisionLogger
from .jsonl import append_jsonl, encode_record, read_jsonl

__all__ = ["DecisionLogger", "append_jsonl", "encode_record", "read_jsonl"]
