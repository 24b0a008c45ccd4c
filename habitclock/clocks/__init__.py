"""Clock mappers: translate an instant into a time-of-week bucket on one of five clocks."""

from habitclock.clocks.dispatch import bind_mapper, map_all_clocks, map_timestamp_to_bucket
from habitclock.clocks.solar import AstralSolarProvider, SolarProvider, SunTimes, default_solar_provider
from habitclock.clocks.types import ClockConfig, ClockId, parse_clock_id

__all__ = [
    "ClockConfig",
    "ClockId",
    "AstralSolarProvider",
    "SolarProvider",
    "SunTimes",
    "bind_mapper",
    "default_solar_provider",
    "map_all_clocks",
    "map_timestamp_to_bucket",
    "parse_clock_id",
]
