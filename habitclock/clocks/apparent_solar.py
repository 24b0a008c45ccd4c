"""Apparent (sundial) solar time: mean solar time plus the equation of time."""

from habitclock.clocks.mean_solar import is_pole, mean_solar_day_and_ms, minute_of, normalize_day_ms
from habitclock.clocks.solar import equation_of_time_minutes
from habitclock.clocks.types import ClockConfig
from habitclock.clocks.utc import utc_datetime, utc_day_and_ms
from habitclock.shared.bucket import to_bucket
from habitclock.shared.constants import MS_PER_HOUR, MS_PER_MINUTE


def equation_of_time_at(ts_ms) -> float:
    """Equation of time in minutes at an instant (UTC day of year, fractional UTC hour)."""
    _, ms_into_day = utc_day_and_ms(ts_ms)
    day_of_year = utc_datetime(ts_ms).timetuple().tm_yday
    return equation_of_time_minutes(day_of_year, ms_into_day / MS_PER_HOUR)


def map_apparent_solar_to_bucket(ts_ms, config: ClockConfig) -> int | None:
    """Map an instant to its apparent solar bucket, or None exactly at a pole.

    The day wrap is applied twice: once for the longitude offset and again
    after adding the equation of time, which can cross midnight on its own.
    """
    if is_pole(config.latitude):
        return None
    day_of_week, ms_into_day = mean_solar_day_and_ms(ts_ms, config.longitude)
    day_of_week, ms_into_day = normalize_day_ms(day_of_week, ms_into_day + equation_of_time_at(ts_ms) * MS_PER_MINUTE)
    return to_bucket(day_of_week, minute_of(ms_into_day))
