"""Unequal (temporal) hours: daylight and darkness each stretched over 12 hours.

Daytime (sunrise to sunset) maps linearly onto 06:00-18:00. Night (sunset
to the next sunrise) maps onto 18:00-24:00 for its first half, attributed to
the day of the sunset, and 00:00-06:00 for its second half, attributed to
the day of the sunrise.

An instant has no unequal-hours bucket when its own UTC day lacks a sunrise
or a sunset (polar day/night), or when it is not bracketed by an alternating
pair of events in the surrounding three days.
"""

import logging
import math
from datetime import timedelta

from habitclock.clocks.solar import SolarProvider, default_solar_provider
from habitclock.clocks.types import ClockConfig
from habitclock.clocks.utc import utc_datetime, utc_weekday
from habitclock.shared.bucket import to_bucket

logger = logging.getLogger(__name__)

SUNRISE = "sunrise"
SUNSET = "sunset"

DAY_START_MINUTE = 360
EVENING_START_MINUTE = 1080
HALF_DAY_MINUTES = 720
QUARTER_DAY_MINUTES = 360


def _scaled_minute(start: int, span: int, elapsed: int, duration: int) -> int:
    """Minute ``elapsed / duration`` of the way through [start, start + span), clamped below the end.

    Integer arithmetic keeps bucket edges on exact milliseconds.
    """
    return min(start + span - 1, start + elapsed * span // duration)


def _surrounding_events(ts_ms, config: ClockConfig, solar: SolarProvider) -> list[tuple[int, str]] | None:
    day = utc_datetime(ts_ms).date()
    today = solar.sun_times(day, config.latitude, config.longitude)
    if not today.has_both:
        return None
    events = []
    for offset in (-1, 0, 1):
        times = today if offset == 0 else solar.sun_times(day + timedelta(days=offset), config.latitude, config.longitude)
        if times.sunrise_ms is not None:
            events.append((times.sunrise_ms, SUNRISE))
        if times.sunset_ms is not None:
            events.append((times.sunset_ms, SUNSET))
    return sorted(set(events))


def map_unequal_hours_to_bucket(ts_ms, config: ClockConfig, solar: SolarProvider | None = None) -> int | None:
    """Map an instant to its unequal-hours bucket, or None where undefined."""
    ts_ms = math.floor(ts_ms)
    solar = solar or default_solar_provider()
    events = _surrounding_events(ts_ms, config, solar)
    if events is None:
        return None

    previous = following = None
    for event in events:
        if event[0] <= ts_ms:
            previous = event
        elif following is None:
            following = event
    if previous is None or following is None:
        return None

    (start_ms, start_kind), (end_ms, end_kind) = previous, following
    elapsed = ts_ms - start_ms
    duration = end_ms - start_ms

    if start_kind == SUNRISE and end_kind == SUNSET:
        minute = _scaled_minute(DAY_START_MINUTE, HALF_DAY_MINUTES, elapsed, duration)
        return to_bucket(utc_weekday(ts_ms), minute)
    if start_kind == SUNSET and end_kind == SUNRISE:
        if 2 * elapsed < duration:
            minute = _scaled_minute(EVENING_START_MINUTE, QUARTER_DAY_MINUTES, 2 * elapsed, duration)
            return to_bucket(utc_weekday(start_ms), minute)
        minute = _scaled_minute(0, QUARTER_DAY_MINUTES, 2 * elapsed - duration, duration)
        return to_bucket(utc_weekday(end_ms), minute)

    logger.debug("No alternating sun events around %s (%s -> %s)", ts_ms, start_kind, end_kind)
    return None
