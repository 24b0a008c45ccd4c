"""Mean solar time: UTC shifted by four minutes per degree of longitude."""

from habitclock.clocks.types import ClockConfig
from habitclock.clocks.utc import utc_day_and_ms
from habitclock.shared.bucket import to_bucket
from habitclock.shared.constants import DAYS_PER_WEEK, MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE


def is_pole(latitude: float) -> bool:
    """Solar time of day has no meaning exactly at a geographic pole."""
    return abs(latitude) == 90.0


def normalize_day_ms(day_of_week: int, ms_into_day: float) -> tuple[int, float]:
    """Wrap milliseconds into [0, 1 day), moving the weekday cyclically to match."""
    while ms_into_day < 0:
        ms_into_day += MS_PER_DAY
        day_of_week = (day_of_week - 1) % DAYS_PER_WEEK
    while ms_into_day >= MS_PER_DAY:
        ms_into_day -= MS_PER_DAY
        day_of_week = (day_of_week + 1) % DAYS_PER_WEEK
    return day_of_week, ms_into_day


def mean_solar_day_and_ms(ts_ms, longitude: float) -> tuple[int, float]:
    """(day of week, ms into the mean solar day) at ``longitude`` (east positive)."""
    day_of_week, ms_into_day = utc_day_and_ms(ts_ms)
    return normalize_day_ms(day_of_week, ms_into_day + longitude / 15 * MS_PER_HOUR)


def minute_of(ms_into_day: float) -> int:
    return int(ms_into_day // MS_PER_MINUTE)


def map_mean_solar_to_bucket(ts_ms, config: ClockConfig) -> int | None:
    """Map an instant to its mean solar bucket, or None exactly at a pole."""
    if is_pole(config.latitude):
        return None
    day_of_week, ms_into_day = mean_solar_day_and_ms(ts_ms, config.longitude)
    return to_bucket(day_of_week, minute_of(ms_into_day))
