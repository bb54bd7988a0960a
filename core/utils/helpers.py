"""
Buffet rating utility functions
"""

from __future__ import annotations
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any


# Timestamps

def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2026-10-19T08:15:00.123Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# DynamoDB value conversion

def from_dynamo(value: Any) -> Any:
    """Replace Decimals returned by boto3 with int (integral) or float, recursively."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [from_dynamo(v) for v in value]
    return value


def to_dynamo(value: Any) -> Any:
    """Replace floats with Decimals so boto3 can serialize them, recursively."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def as_count(value: Any) -> int:
    """Read a vote counter that may be missing, None, or a Decimal."""
    if value is None:
        return 0
    return int(value)
