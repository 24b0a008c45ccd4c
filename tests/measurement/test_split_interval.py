"""Tests for splitting holding intervals into bucket allocations."""

from datetime import date

import pytest

from habitclock.clocks.types import ClockConfig, ClockId
from habitclock.errors import InvalidArgumentError, OutOfRangeError
from habitclock.measurement.split_interval import (
    allocate_interval,
    split_hold_interval,
    split_hold_interval_all_clocks,
)

MON = 1_704_067_200_000  # Mon 2024-01-01 00:00Z
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
SPRING_FORWARD_DAY = 1_710_028_800_000  # Sun 2024-03-10 00:00Z


class TestSplitHoldInterval:
    def test_two_buckets(self, utc_config):
        result = split_hold_interval(MON + 4 * MINUTE, MON + 6 * MINUTE, ClockId.UTC, utc_config)
        assert result == {0: 60_000, 1: 60_000}

    def test_week_wrap(self, utc_config):
        result = split_hold_interval(MON - 2 * MINUTE, MON + 2 * MINUTE, "utc", utc_config)
        assert result == {2015: 120_000, 0: 120_000}

    def test_empty_and_reversed_intervals(self, utc_config):
        assert split_hold_interval(MON, MON, ClockId.UTC, utc_config) == {}
        assert split_hold_interval(MON + 1, MON, ClockId.UTC, utc_config) == {}

    def test_single_millisecond(self, utc_config):
        assert split_hold_interval(MON + 5 * MINUTE - 1, MON + 5 * MINUTE, ClockId.UTC, utc_config) == {0: 1}

    def test_rejects_bad_arguments(self, utc_config):
        with pytest.raises(InvalidArgumentError):
            split_hold_interval(MON, MON + 1, "sidereal", utc_config)
        with pytest.raises(OutOfRangeError):
            split_hold_interval(float(MON), MON + 1, ClockId.UTC, utc_config)

    @pytest.mark.parametrize("clock", [ClockId.UTC, ClockId.LOCAL, ClockId.MEAN_SOLAR, ClockId.APPARENT_SOLAR])
    def test_uniform_clocks_partition_exactly(self, nyc_config, clock):
        t0 = MON + 3 * HOUR + 17_123
        t1 = t0 + 2 * DAY + 7 * HOUR + 999
        result = split_hold_interval(t0, t1, clock, nyc_config)
        assert sum(result.values()) == t1 - t0
        assert all(ms > 0 for ms in result.values())
        assert all(0 <= b <= 2015 for b in result)

    def test_spring_forward_day(self, nyc_config):
        t0, t1 = SPRING_FORWARD_DAY, SPRING_FORWARD_DAY + DAY
        result = split_hold_interval(t0, t1, ClockId.LOCAL, nyc_config)
        assert sum(result.values()) == DAY
        assert not set(result) & set(range(1752, 1764))
        assert result[1751] == 5 * MINUTE
        assert result[1764] == 5 * MINUTE

    def test_uniform_bucket_lengths(self):
        result = split_hold_interval(MON, MON + HOUR, ClockId.MEAN_SOLAR, ClockConfig(longitude=0.0))
        assert result == {b: 5 * MINUTE for b in range(12)}

    def test_pole_gives_nothing(self):
        result = split_hold_interval(MON, MON + HOUR, ClockId.MEAN_SOLAR, ClockConfig(latitude=90.0))
        assert result == {}


class TestUnequalHoursSplit:
    def test_daytime_buckets_are_stretched(self, utc_config, short_day_sun):
        result = split_hold_interval(MON + 8 * HOUR, MON + 16 * HOUR, ClockId.UNEQUAL_HOURS, utc_config, short_day_sun)
        # 8 hours of daylight over 144 buckets: 200 s each
        assert result == {b: 200_000 for b in range(72, 216)}

    def test_full_day_partitions_exactly(self, utc_config, short_day_sun):
        t0 = MON + 5 * HOUR + 1
        t1 = t0 + DAY + 3 * HOUR
        result = split_hold_interval(t0, t1, ClockId.UNEQUAL_HOURS, utc_config, short_day_sun)
        assert sum(result.values()) == t1 - t0

    def test_nyc_real_sun_partitions_exactly(self, nyc_config):
        t0 = MON + 79 * DAY
        t1 = t0 + DAY
        result = split_hold_interval(t0, t1, ClockId.UNEQUAL_HOURS, nyc_config)
        assert sum(result.values()) == DAY
        assert len(result) >= 288

    def test_stops_in_polar_night(self, utc_config, make_sun):
        sun = make_sun(8.0, 16.0, dark_days={date(2024, 1, 2)})
        result = split_hold_interval(MON + 12 * HOUR, MON + DAY + 23 * HOUR, ClockId.UNEQUAL_HOURS, utc_config, sun)
        # Defined only from Monday noon to Monday sunset
        assert sum(result.values()) == 4 * HOUR
        assert min(result) == 144
        assert max(result) == 215


class TestAllocateInterval:
    def test_skips_undefined_gap(self):
        def mapping(ts):
            if 1_000 <= ts < 2_500:
                return None
            return 0 if ts < 1_000 else 1

        assert allocate_interval(mapping, 0, 4_000, step_ms=700) == {0: 1_000, 1: 1_500}

    def test_short_bucket_is_not_skipped(self):
        def mapping(ts):
            if ts < 100_000:
                return 0
            if ts < 100_050:
                return 1
            return 2

        for adaptive in (False, True):
            result = allocate_interval(mapping, 0, 200_000, step_ms=30_000, adaptive=adaptive)
            assert result == {0: 100_000, 1: 50, 2: 99_950}


class TestAllClocks:
    def test_every_clock_reported(self, utc_config, equinox_sun):
        result = split_hold_interval_all_clocks(MON, MON + 10 * MINUTE, utc_config, equinox_sun)
        assert list(result) == list(ClockId)
        for clock in (ClockId.UTC, ClockId.LOCAL, ClockId.MEAN_SOLAR, ClockId.UNEQUAL_HOURS):
            assert result[clock] == {0: 300_000, 1: 300_000}
        assert sum(result[ClockId.APPARENT_SOLAR].values()) == 600_000
