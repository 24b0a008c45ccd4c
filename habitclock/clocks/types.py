"""Clock identifiers and the location/timezone configuration clocks need."""

import os
from dataclasses import dataclass
from enum import StrEnum
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from habitclock.errors import InvalidArgumentError
from habitclock.shared.constants import CLOCK_ORDER


class ClockId(StrEnum):
    """The five time-of-week clocks, declared in canonical array order."""

    UTC = "utc"
    LOCAL = "local"
    MEAN_SOLAR = "meanSolar"
    APPARENT_SOLAR = "apparentSolar"
    UNEQUAL_HOURS = "unequalHours"

    @property
    def index(self) -> int:
        """Ordinal of this clock's block inside a dense array group."""
        return CLOCK_INDICES[self]


CLOCK_INDICES: dict[ClockId, int] = {ClockId(name): i for i, name in enumerate(CLOCK_ORDER)}

if list(CLOCK_INDICES) != list(ClockId):
    raise RuntimeError("ClockId declaration order diverged from CLOCK_ORDER")


def parse_clock_id(value) -> ClockId:
    """Coerce a wire identifier such as ``"meanSolar"`` into a ClockId."""
    try:
        return ClockId(value)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown clock id {value!r}. Available: {[c.value for c in ClockId]}"
        ) from None


@dataclass(frozen=True)
class ClockConfig:
    """Location and timezone used by the clock mappers.

    Only the local clock reads ``timezone``; the solar and unequal-hours
    clocks read ``latitude``/``longitude`` (east-positive degrees).
    """

    timezone: str = "UTC"
    latitude: float = 0.0
    longitude: float = 0.0

    @classmethod
    def from_env(cls):
        return cls(
            timezone=os.environ.get("HABITCLOCK_TIMEZONE", cls.timezone),
            latitude=float(os.environ.get("HABITCLOCK_LATITUDE", cls.latitude)),
            longitude=float(os.environ.get("HABITCLOCK_LONGITUDE", cls.longitude)),
        )

    @property
    def zone(self) -> ZoneInfo:
        return get_zone(self.timezone)

    def validate(self) -> list[str]:
        """Return a list of configuration errors (empty = valid)."""
        errors = []
        if not -90.0 <= self.latitude <= 90.0:
            errors.append(f"latitude must be in [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            errors.append(f"longitude must be in [-180, 180], got {self.longitude}")
        try:
            get_zone(self.timezone)
        except InvalidArgumentError as e:
            errors.append(str(e))
        return errors


@lru_cache(maxsize=64)
def get_zone(name: str) -> ZoneInfo:
    """Resolve an IANA timezone name, raising InvalidArgumentError if unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidArgumentError(f"Unknown IANA timezone {name!r}") from e
