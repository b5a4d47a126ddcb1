"""Test single-pass bucket assignment.

This module tests the bucket assignment semantics:
- Grid point at T collects unconsumed points with ts <= T
- Each source point is consumed exactly once
- Scan state (last seen, next point) is carried across buckets
"""

from gridline.resample import Observed, iter_buckets, plan_grid
from gridline.series import TimeRange

S = 1_000_000


def _plan(span_s: int, rule: str = "60s"):
    return plan_grid(rule, TimeRange(0, span_s * S))


class TestBucketAssignment:
    def test_inclusive_upper_boundary(self):
        """A point exactly at a grid timestamp belongs to that grid point."""
        points = [(0, 1.0), (60 * S, 2.0), (61 * S, 3.0)]
        buckets = list(iter_buckets(points, _plan(120)))

        assert [b.values for b in buckets] == [[1.0], [2.0], [3.0]]

    def test_every_point_consumed_once(self):
        points = [(i * 10 * S, float(i)) for i in range(13)]  # 0s..120s
        buckets = list(iter_buckets(points, _plan(120)))

        consumed = [p for b in buckets for p in b.points]
        assert consumed == points
        assert [len(b.points) for b in buckets] == [1, 6, 6]

    def test_one_bucket_per_grid_index(self):
        buckets = list(iter_buckets([], _plan(300)))

        assert [b.index for b in buckets] == [0, 1, 2, 3, 4, 5]
        assert [b.ts_us for b in buckets] == [i * 60 * S for i in range(6)]
        assert all(b.is_empty for b in buckets)

    def test_first_bucket_absorbs_history(self):
        """Every point at or before the range start lands in bucket 0."""
        points = [(-3600 * S, 1.0), (-60 * S, 2.0), (0, 3.0), (30 * S, 4.0)]
        buckets = list(iter_buckets(points, _plan(60)))

        assert buckets[0].values == [1.0, 2.0, 3.0]
        assert buckets[1].values == [4.0]

    def test_points_after_range_are_not_consumed(self):
        points = [(30 * S, 1.0), (500 * S, 2.0)]
        buckets = list(iter_buckets(points, _plan(120)))

        assert [p for b in buckets for p in b.points] == [(30 * S, 1.0)]
        assert buckets[-1].next_point == (500 * S, 2.0)


class TestScanState:
    def test_last_seen_distinguishes_never_from_null(self):
        points = [(60 * S, None)]
        buckets = list(iter_buckets(points, _plan(180)))

        assert buckets[0].last_seen is None
        assert buckets[1].last_seen == Observed(None)
        assert buckets[2].last_seen == Observed(None)

    def test_last_seen_is_last_consumed_value(self):
        points = [(10 * S, 1.0), (20 * S, 2.0)]
        buckets = list(iter_buckets(points, _plan(180)))

        assert [b.last_seen for b in buckets] == [None, Observed(2.0), Observed(2.0), Observed(2.0)]

    def test_next_point_is_peeked_not_consumed(self):
        points = [(150 * S, 5.0)]
        buckets = list(iter_buckets(points, _plan(180)))

        assert buckets[0].next_point == (150 * S, 5.0)
        assert buckets[1].next_point == (150 * S, 5.0)
        assert buckets[2].next_point == (150 * S, 5.0)
        assert buckets[3].values == [5.0]
        assert buckets[3].next_point is None
