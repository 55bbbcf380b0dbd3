"""Calendar period keys for trade bucketing.

Every timestamp is normalized to UTC before any calendar math, so a given
instant always lands in the same bucket regardless of the host timezone.
"""

import math
import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Iterable, List, Union

from shared.schemas.models import Period
from shared.utils.errors import AggregationError, InvalidTimestampError


# Numeric timestamps at or above this are epoch milliseconds.
EPOCH_MILLIS_THRESHOLD = 1_000_000_000_000

_MONTHLY_KEY = re.compile(r"^(\d{4})-(\d{1,2})$")
_QUARTERLY_KEY = re.compile(r"^(\d{4})-Q([1-4])$")


def parse_timestamp(value: Any) -> datetime:
    """Coerce supported timestamp representations into UTC datetimes.

    Accepts aware or naive ``datetime`` (naive is taken as UTC), ``date``
    (midnight UTC), ISO-8601 strings including a trailing ``Z``, and epoch
    numbers (seconds, or milliseconds for large values).

    Raises:
        InvalidTimestampError: If the value cannot be read as an instant.
    """
    if isinstance(value, datetime):
        return _as_utc(value, value)

    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)

    # bool is an int subclass but never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidTimestampError(f"Non-finite timestamp: {value}", value=value)
        try:
            seconds = value / 1000 if abs(value) >= EPOCH_MILLIS_THRESHOLD else value
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as exc:
            raise InvalidTimestampError(
                f"Timestamp out of range: {value}", value=value
            ) from exc

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidTimestampError("Empty timestamp", value=value)
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as exc:
            raise InvalidTimestampError(
                f"Unsupported timestamp format: {value}", value=value
            ) from exc
        return _as_utc(parsed, value)

    raise InvalidTimestampError(
        f"Unsupported timestamp type: {type(value).__name__}", value=value
    )


def _as_utc(moment: datetime, original: Any) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    try:
        return moment.astimezone(timezone.utc)
    except OverflowError as exc:
        raise InvalidTimestampError(
            f"Timestamp out of range: {original}", value=original
        ) from exc


def period_start(timestamp: Any, period: Union[Period, str]) -> date:
    """Return the first calendar day (UTC) of the period containing ``timestamp``.

    Weeks start on Sunday. The caller's timestamp is never modified; the
    week start is computed from a separate ``date`` value.

    Raises:
        InvalidTimestampError: If the timestamp cannot be parsed, or for a
            Weekly period when the preceding Sunday falls before
            ``date.min`` (0001-01-01 through 0001-01-06).
    """
    period = Period.parse(period)
    day = parse_timestamp(timestamp).date()

    if period is Period.DAILY:
        return day
    if period is Period.WEEKLY:
        # date.weekday(): Monday == 0, so Sunday is 6
        try:
            return day - timedelta(days=(day.weekday() + 1) % 7)
        except OverflowError as exc:
            raise InvalidTimestampError(
                f"Week start before supported calendar range: {day.isoformat()}",
                value=timestamp,
            ) from exc
    if period is Period.MONTHLY:
        return day.replace(day=1)
    return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)


def format_key(start: date, period: Union[Period, str]) -> str:
    """Render the bucket key for a period starting on ``start``."""
    period = Period.parse(period)

    if period in (Period.DAILY, Period.WEEKLY):
        return start.isoformat()
    if period is Period.MONTHLY:
        return f"{start.year:04d}-{start.month}"
    return f"{start.year:04d}-Q{(start.month - 1) // 3 + 1}"


def derive_key(timestamp: Any, period: Union[Period, str]) -> str:
    """Map a timestamp to its bucket key under ``period``.

    Examples:
        Daily ``2023-01-01``, Weekly ``2022-12-25`` (a Sunday),
        Monthly ``2023-1``, Quarterly ``2023-Q1``.

    Raises the same errors as :func:`period_start`.
    """
    period = Period.parse(period)
    return format_key(period_start(timestamp, period), period)


def key_start(key: str, period: Union[Period, str]) -> date:
    """Inverse of :func:`format_key`: the start date encoded in a bucket key.

    Raises:
        AggregationError: If ``key`` is not a key the period produces.
    """
    period = Period.parse(period)

    try:
        if period in (Period.DAILY, Period.WEEKLY):
            start = date.fromisoformat(key)
            if period is Period.WEEKLY and start.weekday() != 6:
                raise ValueError("weekly keys must fall on a Sunday")
            return start

        pattern = _MONTHLY_KEY if period is Period.MONTHLY else _QUARTERLY_KEY
        match = pattern.match(key)
        if not match:
            raise ValueError("key does not match period format")
        year, part = int(match.group(1)), int(match.group(2))
        month = part if period is Period.MONTHLY else 3 * (part - 1) + 1
        return date(year, month, 1)
    except ValueError as exc:
        raise AggregationError(
            f"Invalid {period.value} bucket key: {key!r}", bucket_key=key
        ) from exc


def sort_keys(keys: Iterable[str], period: Union[Period, str]) -> List[str]:
    """Order bucket keys chronologically by period start."""
    period = Period.parse(period)
    return sorted(keys, key=lambda key: key_start(key, period))
