"""Sunrise/sunset and equation-of-time calculations.

Sun events come from astral (the same library Home Assistant uses for
sun.sun). The equation of time is the NOAA fractional-year series, used by
the apparent-solar clock.

Consumers depend on the ``SolarProvider`` protocol, not on astral, so tests
can inject fixed sun times.
"""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from functools import lru_cache
from typing import Protocol

from astral import Observer
from astral.sun import sunrise, sunset

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class SunTimes:
    """Sunrise and sunset for one UTC calendar day, as epoch milliseconds.

    ``None`` means the event does not occur that day (polar day or night).
    """

    sunrise_ms: int | None
    sunset_ms: int | None

    @property
    def has_both(self) -> bool:
        return self.sunrise_ms is not None and self.sunset_ms is not None


class SolarProvider(Protocol):
    """Anything that can report sunrise/sunset for a UTC date and location."""

    def sun_times(self, day: date, latitude: float, longitude: float) -> SunTimes: ...


def fractional_year(day_of_year: int, utc_hour: float) -> float:
    """NOAA fractional year in radians."""
    return 2 * math.pi / 365 * (day_of_year - 1 + (utc_hour - 12) / 24)


def equation_of_time_minutes(day_of_year: int, utc_hour: float) -> float:
    """Apparent minus mean solar time, in minutes (roughly -14.3 to +16.4)."""
    y = fractional_year(day_of_year, utc_hour)
    return 229.18 * (
        0.000075
        + 0.001868 * math.cos(y)
        - 0.032077 * math.sin(y)
        - 0.014615 * math.cos(2 * y)
        - 0.040849 * math.sin(2 * y)
    )


def _epoch_ms(moment: datetime) -> int:
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def _event_ms(event, observer: Observer, day: date) -> int | None:
    """Epoch ms of an astral event on ``day`` (UTC), or None if the sun never crosses the horizon."""
    try:
        return _epoch_ms(event(observer, date=day, tzinfo=UTC))
    except ValueError as err:
        logger.debug("No %s on %s at (%s, %s): %s", event.__name__, day, observer.latitude, observer.longitude, err)
        return None


@lru_cache(maxsize=4096)
def _astral_sun_times(day: date, latitude: float, longitude: float) -> SunTimes:
    observer = Observer(latitude=latitude, longitude=longitude)
    return SunTimes(
        sunrise_ms=_event_ms(sunrise, observer, day),
        sunset_ms=_event_ms(sunset, observer, day),
    )


class AstralSolarProvider:
    """Default SolarProvider backed by astral.

    Results are memoized per (date, location); the computation is pure, so
    one instance can be shared by concurrent callers.
    """

    def sun_times(self, day: date, latitude: float, longitude: float) -> SunTimes:
        return _astral_sun_times(day, float(latitude), float(longitude))


_DEFAULT_PROVIDER = AstralSolarProvider()


def default_solar_provider() -> SolarProvider:
    """Shared provider used when a caller does not inject one."""
    return _DEFAULT_PROVIDER
