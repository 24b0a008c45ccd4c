"""Route a timestamp to the mapper for a given clock."""

from collections.abc import Callable

from habitclock.clocks.apparent_solar import map_apparent_solar_to_bucket
from habitclock.clocks.local import map_local_to_bucket
from habitclock.clocks.mean_solar import map_mean_solar_to_bucket
from habitclock.clocks.solar import SolarProvider
from habitclock.clocks.types import ClockConfig, ClockId, parse_clock_id
from habitclock.clocks.unequal_hours import map_unequal_hours_to_bucket
from habitclock.clocks.utc import map_utc_to_bucket

Mapper = Callable[[int, ClockConfig, SolarProvider | None], int | None]

_MAPPERS: dict[ClockId, Mapper] = {
    ClockId.UTC: lambda ts_ms, config, solar: map_utc_to_bucket(ts_ms),
    ClockId.LOCAL: lambda ts_ms, config, solar: map_local_to_bucket(ts_ms, config),
    ClockId.MEAN_SOLAR: lambda ts_ms, config, solar: map_mean_solar_to_bucket(ts_ms, config),
    ClockId.APPARENT_SOLAR: lambda ts_ms, config, solar: map_apparent_solar_to_bucket(ts_ms, config),
    ClockId.UNEQUAL_HOURS: map_unequal_hours_to_bucket,
}

_missing = [clock.value for clock in ClockId if clock not in _MAPPERS]
if _missing:
    raise RuntimeError(f"No bucket mapper registered for clocks: {_missing}")


def map_timestamp_to_bucket(
    clock_id: ClockId | str,
    ts_ms: int,
    config: ClockConfig,
    solar: SolarProvider | None = None,
) -> int | None:
    """Map an epoch-millisecond instant to a bucket on ``clock_id``.

    Returns None where the clock is undefined for the instant and location.
    Raises InvalidArgumentError for an unknown clock id.
    """
    return _MAPPERS[parse_clock_id(clock_id)](ts_ms, config, solar)


def bind_mapper(
    clock_id: ClockId | str,
    config: ClockConfig,
    solar: SolarProvider | None = None,
) -> Callable[[int], int | None]:
    """Fix a clock's location and solar provider, leaving only the timestamp free."""
    mapper = _MAPPERS[parse_clock_id(clock_id)]
    return lambda ts_ms: mapper(ts_ms, config, solar)


def map_all_clocks(ts_ms: int, config: ClockConfig, solar: SolarProvider | None = None) -> dict[ClockId, int | None]:
    """Bucket for every clock at one instant, in canonical clock order."""
    return {clock: _MAPPERS[clock](ts_ms, config, solar) for clock in ClockId}
