"""Test grid planning: interval parsing, grid sizing, feasibility checks."""

import pytest

from gridline.errors import GridTooLargeError, ParseError, RangeTooShortError
from gridline.resample import plan_grid
from gridline.series import TimeRange

T0 = 1_700_000_000_000_000
MINUTE_US = 60_000_000


class TestPlanGrid:
    def test_exact_multiple_reaches_range_end(self):
        plan = plan_grid("1m", TimeRange(T0, T0 + 2 * MINUTE_US))

        assert plan.interval_us == MINUTE_US
        assert plan.n == 2
        assert plan.size == 3
        assert list(plan.timestamps()) == [T0, T0 + MINUTE_US, T0 + 2 * MINUTE_US]

    def test_partial_interval_is_floored(self):
        """n = floor(span / interval); the grid never passes to_us."""
        plan = plan_grid("1m", TimeRange(T0, T0 + 150_000_000))

        assert plan.n == 2
        assert list(plan.timestamps())[-1] == T0 + 2 * MINUTE_US
        assert all(ts <= plan.to_us for ts in plan.timestamps())

    def test_timestamps_strictly_increasing(self):
        plan = plan_grid("7s", TimeRange(T0, T0 + 10 * MINUTE_US))
        stamps = list(plan.timestamps())

        assert len(stamps) == plan.n + 1
        assert all(b - a == 7_000_000 for a, b in zip(stamps, stamps[1:]))
        assert stamps[0] == T0

    def test_interval_longer_than_range(self):
        with pytest.raises(RangeTooShortError, match="shorter than the interval"):
            plan_grid("5m", TimeRange(T0, T0 + MINUTE_US))

    def test_range_equal_to_interval_is_allowed(self):
        assert plan_grid("1m", TimeRange(T0, T0 + MINUTE_US)).n == 1

    def test_negative_range(self):
        with pytest.raises(RangeTooShortError):
            plan_grid("1m", TimeRange(T0, T0 - 10 * MINUTE_US))

    def test_bad_rule(self):
        with pytest.raises(ParseError):
            plan_grid("soon", TimeRange(T0, T0 + MINUTE_US))

    def test_max_points(self):
        tr = TimeRange(T0, T0 + 10 * MINUTE_US)

        assert plan_grid("1m", tr, max_points=11).size == 11
        with pytest.raises(GridTooLargeError, match="too many points"):
            plan_grid("1m", tr, max_points=10)
