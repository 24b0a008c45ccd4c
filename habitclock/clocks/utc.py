"""UTC clock, plus the UTC calendar helpers the other clocks build on."""

import math
from datetime import UTC, datetime, timedelta

from habitclock.shared.bucket import to_bucket
from habitclock.shared.constants import DAYS_PER_WEEK, MS_PER_DAY, MS_PER_MINUTE

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_EPOCH_WEEKDAY = 3  # 1970-01-01 was a Thursday (Monday = 0)


def utc_day_and_ms(ts_ms) -> tuple[int, int]:
    """Return (day of week, milliseconds into the UTC day) for an epoch timestamp.

    Sub-millisecond fractions are floored.
    """
    ts_ms = math.floor(ts_ms)
    days, ms_into_day = divmod(ts_ms, MS_PER_DAY)
    return (days + _EPOCH_WEEKDAY) % DAYS_PER_WEEK, ms_into_day


def utc_weekday(ts_ms) -> int:
    return utc_day_and_ms(ts_ms)[0]


def utc_datetime(ts_ms) -> datetime:
    """Aware UTC datetime for an epoch timestamp (valid for negative values too)."""
    return _EPOCH + timedelta(milliseconds=math.floor(ts_ms))


def map_utc_to_bucket(ts_ms) -> int:
    """Map an instant to its UTC time-of-week bucket. Always defined.

    Seconds and milliseconds are truncated, never rounded.
    """
    day_of_week, ms_into_day = utc_day_and_ms(ts_ms)
    return to_bucket(day_of_week, ms_into_day // MS_PER_MINUTE)
