"""Per-bucket volume and notional reduction."""

from typing import Iterable, List, Mapping, Union

from shared.schemas.models import Bucket, ReducedBucket
from shared.utils.errors import AggregationError


def reduce_bucket(bucket: Bucket) -> ReducedBucket:
    """Reduce a bucket to its total volume and total notional.

    Sums use plain float addition; rounding is left to renderers.

    Raises:
        AggregationError: If the bucket holds no records.
    """
    if not bucket.records:
        raise AggregationError("Cannot reduce an empty bucket", bucket_key=bucket.key)

    total_volume = 0.0
    total_notional = 0.0
    for record in bucket.records:
        total_volume += record.trade_size
        total_notional += record.trade_size * record.price

    return ReducedBucket(
        key=bucket.key,
        period_start=bucket.period_start,
        total_volume=total_volume,
        total_notional=total_notional,
        trade_count=len(bucket.records),
    )


def reduce_buckets(buckets: Union[Mapping[str, Bucket], Iterable[Bucket]]) -> List[ReducedBucket]:
    """Reduce every bucket and return the results in chronological order."""
    if isinstance(buckets, Mapping):
        buckets = buckets.values()
    reduced = [reduce_bucket(bucket) for bucket in buckets]
    reduced.sort(key=lambda item: item.period_start)
    return reduced
