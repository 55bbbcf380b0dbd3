"""
Trade view calculators.

Reduce bucketed trades into the metrics the charts display:
- Total volume (sum of trade sizes)
- Total notional (sum of size times price)
"""

from .reducer import reduce_bucket, reduce_buckets

__all__ = [
    "reduce_bucket",
    "reduce_buckets",
]
