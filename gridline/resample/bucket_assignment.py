"""Bucket assignment for resample operations.

This module implements the bucket assignment semantics:
- Grid point at timestamp T collects every unconsumed point with ts <= T
- Source points are consumed exactly once, in storage order
- The cursor only moves forward, so one pass is O(len(source) + grid size)

Because the inclusion test is only ``ts <= T``, the first grid point
(``T = from_us``) also collects every source point before the range start.

Example:
    Grid:   [0s, 60s, 120s]
    Source: [(0s, 1.0), (30s, 2.0), (90s, 3.0)]

    Bucket 0 (0s)   -> [1.0]
    Bucket 1 (60s)  -> [2.0]
    Bucket 2 (120s) -> [3.0]

The source must be sorted by timestamp; unsorted input yields undefined
bucket assignment and is not detected here.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from gridline.series import Point

from .grid import GridPlan


@dataclass(frozen=True)
class Observed:
    """A value seen during the scan.

    ``None`` in place of an Observed means nothing has been consumed yet;
    ``Observed(None)`` means the last consumed point carried a null value.
    """

    value: float | None


@dataclass(frozen=True)
class Bucket:
    """Source points assigned to one grid index, plus scan state after consuming them.

    Attributes:
        index: Grid index
        ts_us: Grid timestamp
        points: Consumed source points, in storage order
        last_seen: Most recently consumed value anywhere in the scan so far
        next_point: Next unconsumed source point, if any (not consumed)
    """

    index: int
    ts_us: int
    points: tuple[Point, ...]
    last_seen: Observed | None
    next_point: Point | None

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def values(self) -> list[float | None]:
        return [value for _, value in self.points]


def iter_buckets(points: Sequence[Point], plan: GridPlan) -> Iterator[Bucket]:
    """Assign source points to grid indices in a single forward scan.

    Args:
        points: Source ``(ts_us, value)`` pairs sorted by ts_us
        plan: Output grid

    Yields:
        One Bucket per grid index, in increasing index order
    """
    cursor = 0
    last_seen: Observed | None = None
    n_points = len(points)

    for idx, ts_us in enumerate(plan.timestamps()):
        # n already bounds the loop; to_us is checked as well
        if idx > plan.n or ts_us > plan.to_us:
            break

        start = cursor
        while cursor < n_points and points[cursor][0] <= ts_us:
            cursor += 1

        consumed = tuple(points[start:cursor])
        if consumed:
            last_seen = Observed(consumed[-1][1])

        yield Bucket(
            index=idx,
            ts_us=ts_us,
            points=consumed,
            last_seen=last_seen,
            next_point=points[cursor] if cursor < n_points else None,
        )


__all__ = ["Observed", "Bucket", "iter_buckets"]
