"""Tests for habitclock.shared.bucket and time-of-day aggregation."""

import operator

import pytest

from habitclock.errors import OutOfRangeError
from habitclock.shared.bucket import cyclic_distance, from_bucket, next_bucket, to_bucket
from habitclock.shared.time_of_day import aggregate_time_of_day


class TestToBucket:
    def test_week_corners(self):
        assert to_bucket(0, 0) == 0
        assert to_bucket(6, 1435) == 2015
        assert to_bucket(6, 1439) == 2015

    def test_wednesday_noon(self):
        assert to_bucket(2, 720) == 720

    def test_minutes_round_down_to_slot(self):
        assert to_bucket(0, 4) == 0
        assert to_bucket(0, 5) == 1
        assert to_bucket(1, 0) == 288

    @pytest.mark.parametrize(
        "day, minute",
        [(-1, 0), (7, 0), (0, -1), (0, 1440), (0, 1.0), (1.5, 0), (True, 0), ("1", 0), (None, 0)],
    )
    def test_rejects_bad_input(self, day, minute):
        with pytest.raises(OutOfRangeError):
            to_bucket(day, minute)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError, match="minute_of_day"):
            to_bucket(0, 2000)


class TestFromBucket:
    def test_first_and_last(self):
        first = from_bucket(0)
        assert (first.day_of_week, first.start_minute, first.end_minute) == (0, 0, 5)
        last = from_bucket(2015)
        assert (last.day_of_week, last.start_minute, last.end_minute) == (6, 1435, 1440)

    def test_contains_source_minute(self):
        for day in range(7):
            for minute in (0, 1, 4, 5, 333, 719, 720, 1439):
                span = from_bucket(to_bucket(day, minute))
                assert span.day_of_week == day
                assert span.start_minute <= minute < span.end_minute

    @pytest.mark.parametrize("bucket", [-1, 2016, 3.0, False])
    def test_rejects_bad_input(self, bucket):
        with pytest.raises(OutOfRangeError):
            from_bucket(bucket)


class TestCyclicDistance:
    def test_same_bucket_is_zero(self):
        for b in (0, 1, 1007, 1008, 2015):
            assert cyclic_distance(b, b) == 0

    def test_wraps_at_week_end(self):
        assert cyclic_distance(2015, 0) == 1
        assert cyclic_distance(0, 2015) == -1

    def test_half_week_keeps_raw_sign(self):
        assert cyclic_distance(0, 1008) == 1008
        assert cyclic_distance(500, 1508) == 1008
        assert cyclic_distance(1008, 0) == -1008
        assert cyclic_distance(2015, 1007) == -1008

    def test_just_past_half_week_goes_backward(self):
        assert cyclic_distance(0, 1009) == -1007
        assert cyclic_distance(1009, 0) == 1007

    def test_rejects_out_of_range(self):
        with pytest.raises(OutOfRangeError):
            cyclic_distance(0, 2016)
        with pytest.raises(OutOfRangeError):
            cyclic_distance(-1, 0)

    def test_next_bucket_wraps(self):
        assert next_bucket(0) == 1
        assert next_bucket(2015) == 0


class TestAggregateTimeOfDay:
    def test_folds_days_together(self):
        result = aggregate_time_of_day({0: 1000, 288: 2000, 577: 5}, operator.add, 0)
        assert result == {0: 3000, 1: 5}

    def test_absent_positions_are_omitted(self):
        result = aggregate_time_of_day({2015: 7}, operator.add, 0)
        assert result == {287: 7}
        assert 0 not in result

    def test_empty_input(self):
        assert aggregate_time_of_day({}, operator.add, 0) == {}

    def test_custom_combine(self):
        result = aggregate_time_of_day({10: 3, 298: 9, 586: 1}, max, float("-inf"))
        assert result == {10: 9}
