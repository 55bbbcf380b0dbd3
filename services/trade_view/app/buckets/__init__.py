"""
Trade buckets package.

Contains helpers for deriving calendar period keys from trade timestamps
and grouping trades into per-period buckets.
"""

from .periods import derive_key, format_key, key_start, parse_timestamp, period_start, sort_keys
from .aggregator import aggregate

__all__ = [
    "aggregate",
    "derive_key",
    "format_key",
    "key_start",
    "parse_timestamp",
    "period_start",
    "sort_keys",
]
