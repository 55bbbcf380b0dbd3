"""Group trade records into calendar period buckets."""

from typing import Dict, Iterable, Union

from shared.schemas.models import AggregationResult, Bucket, Period, SkippedRecord, TradeRecord
from shared.utils.errors import InvalidTimestampError
from shared.utils.logging import add_period, get_logger

from .periods import format_key, period_start


logger = get_logger(__name__)


def aggregate(records: Iterable[TradeRecord], period: Union[Period, str]) -> AggregationResult:
    """Group ``records`` into buckets keyed by their period.

    Args:
        records: Trade records in any order. Each valid record ends up in
            exactly one bucket; records keep their input order inside it.
        period: Aggregation period, a ``Period`` or its name.

    Returns:
        An ``AggregationResult`` whose ``buckets`` mapping iterates in
        chronological order of period start. Records with an unparseable
        timestamp are left out and listed in ``skipped``.

    Raises:
        InvalidConfigurationError: If ``period`` is not recognized. Raised
            before any record is read.
    """
    period = Period.parse(period)
    log = add_period(logger, period.value)
    grouped: Dict[str, Bucket] = {}
    result = AggregationResult(period=period)

    for index, record in enumerate(records):
        try:
            start = period_start(record.timestamp, period)
        except InvalidTimestampError as exc:
            log.warning(
                "Skipping trade with invalid timestamp",
                index=index,
                error=exc.message,
            )
            result.skipped.append(
                SkippedRecord(
                    index=index,
                    reason=exc.message,
                    error_code=exc.error_code,
                    value=repr(record.timestamp),
                )
            )
            continue

        key = format_key(start, period)
        bucket = grouped.get(key)
        if bucket is None:
            bucket = Bucket(key=key, period_start=start)
            grouped[key] = bucket
        bucket.add(record)

    result.buckets = {
        bucket.key: bucket
        for bucket in sorted(grouped.values(), key=lambda b: b.period_start)
    }

    log.debug(
        "Aggregated trades",
        bucket_count=len(result.buckets),
        record_count=result.record_count,
        skipped_count=result.skipped_count,
    )
    return result
