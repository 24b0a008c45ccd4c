"""Shared fixtures for habitclock tests."""

from datetime import UTC, date, datetime

import pytest

from habitclock.clocks.solar import SunTimes
from habitclock.clocks.types import ClockConfig

# Monday 2024-01-01 00:00:00 UTC
MONDAY_MS = 1_704_067_200_000


class FixedSunProvider:
    """SolarProvider with the same UTC sunrise/sunset every day.

    Dates listed in ``dark_days`` get neither event (polar night).
    """

    def __init__(self, sunrise_hour: float = 6.0, sunset_hour: float = 18.0, dark_days=()):
        self.sunrise_hour = sunrise_hour
        self.sunset_hour = sunset_hour
        self.dark_days = set(dark_days)
        self.calls = 0

    def sun_times(self, day: date, latitude: float, longitude: float) -> SunTimes:
        self.calls += 1
        if day in self.dark_days:
            return SunTimes(sunrise_ms=None, sunset_ms=None)
        midnight_ms = int(datetime(day.year, day.month, day.day, tzinfo=UTC).timestamp()) * 1000
        return SunTimes(
            sunrise_ms=midnight_ms + round(self.sunrise_hour * 3_600_000),
            sunset_ms=midnight_ms + round(self.sunset_hour * 3_600_000),
        )


@pytest.fixture
def monday_ms():
    return MONDAY_MS


@pytest.fixture
def utc_config():
    return ClockConfig(timezone="UTC", latitude=0.0, longitude=0.0)


@pytest.fixture
def nyc_config():
    return ClockConfig(timezone="America/New_York", latitude=40.7128, longitude=-74.006)


@pytest.fixture
def equinox_sun():
    """Sunrise 06:00Z, sunset 18:00Z every day: unequal hours coincide with UTC."""
    return FixedSunProvider(6.0, 18.0)


@pytest.fixture
def short_day_sun():
    """Sunrise 08:00Z, sunset 16:00Z every day: 8 hour days, 16 hour nights."""
    return FixedSunProvider(8.0, 16.0)


@pytest.fixture
def make_sun():
    """Factory for FixedSunProvider with custom hours or dark days."""
    return FixedSunProvider
