"""Grid planning for resample operations.

The output grid is ``from_us + i * interval_us`` for ``i = 0..n`` where
``n = floor((to_us - from_us) / interval_us)``. ``from_us`` is always the
first grid point; ``to_us`` is reached only when the span is an exact
multiple of the interval.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from gridline._error_messages import grid_too_large_error, range_too_short_error
from gridline.duration import parse_duration_us
from gridline.errors import GridTooLargeError, RangeTooShortError
from gridline.series import TimeRange


@dataclass(frozen=True)
class GridPlan:
    """Fixed-spacing output grid.

    Attributes:
        from_us: First grid timestamp
        to_us: Upper bound of the grid (inclusive)
        interval_us: Grid spacing in microseconds
        n: Index of the last grid point; the grid holds n + 1 points
    """

    from_us: int
    to_us: int
    interval_us: int
    n: int

    @property
    def size(self) -> int:
        return self.n + 1

    def timestamp_at(self, idx: int) -> int:
        return self.from_us + idx * self.interval_us

    def timestamps(self) -> Iterator[int]:
        """Yield grid timestamps in increasing order."""
        for idx in range(self.n + 1):
            yield self.timestamp_at(idx)


def plan_grid(rule: str, time_range: TimeRange, *, max_points: int | None = None) -> GridPlan:
    """Parse the rule and size the output grid for a time range.

    Args:
        rule: Interval rule (e.g., "1m")
        time_range: Resampling window
        max_points: Optional upper bound on grid size

    Returns:
        GridPlan with n >= 1

    Raises:
        ParseError: If the rule is not a positive duration
        RangeTooShortError: If the range cannot hold one interval (n <= 0)
        GridTooLargeError: If n + 1 exceeds max_points

    Example:
        >>> plan = plan_grid("60s", TimeRange(0, 120_000_000))
        >>> list(plan.timestamps())
        [0, 60000000, 120000000]
    """
    interval_us = parse_duration_us(rule)

    n = time_range.span_us // interval_us
    if n <= 0:
        raise RangeTooShortError(
            range_too_short_error(time_range.from_us, time_range.to_us, interval_us)
        )

    if max_points is not None and n + 1 > max_points:
        raise GridTooLargeError(grid_too_large_error(n + 1, max_points))

    return GridPlan(
        from_us=time_range.from_us,
        to_us=time_range.to_us,
        interval_us=interval_us,
        n=n,
    )


__all__ = ["GridPlan", "plan_grid"]
