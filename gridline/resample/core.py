"""Resample execution.

Runs the four stages in order:
1. Resolve policies (unknown names fail before any work)
2. Plan the grid (parse rule, size output, validate range)
3. Scan source points into one bucket per grid index
4. Aggregate non-empty buckets, fill empty ones, write each grid point once
"""

from __future__ import annotations

import logging

import polars as pl

from gridline.series import Series, TimeRange, new_series

from .bucket_assignment import iter_buckets
from .config import Downsampler, ResampleConfig, Upsampler, coerce_downsampler, coerce_upsampler
from .grid import plan_grid
from .registry import PolicyRegistry

logger = logging.getLogger(__name__)


def resample(
    series: Series,
    rule: str,
    downsampler: Downsampler | str,
    upsampler: Upsampler | str,
    time_range: TimeRange,
    *,
    max_points: int | None = None,
) -> Series:
    """Resample a series onto a uniform grid over a time range.

    The output has the same name and labels as the source and exactly
    ``n + 1`` points at ``time_range.from_us + i * interval`` where
    ``n = floor((to_us - from_us) / interval)``. A grid point whose bucket
    holds source points gets the downsampler's reduction; an empty bucket
    gets the upsampler's fill.

    Args:
        series: Source series, sorted by timestamp
        rule: Interval rule (e.g., "30s", "1m", "1h30m")
        downsampler: "sum", "mean", "min" or "max"
        upsampler: "pad", "backfill" or "fillna"
        time_range: Output window
        max_points: Optional upper bound on output size

    Returns:
        New Series on the grid

    Raises:
        UnsupportedPolicyError: Unknown downsampler or upsampler name
        ParseError: Rule is not a positive duration
        RangeTooShortError: Range shorter than one interval
        GridTooLargeError: Grid larger than max_points
        StorageError: An output point could not be written

    Example:
        >>> src = Series.from_points("s", {}, [(0, 1.0), (30_000_000, 2.0), (90_000_000, 3.0)])
        >>> out = resample(src, "60s", "mean", "pad", TimeRange(0, 120_000_000))
        >>> out.frame["value"].to_list()
        [1.0, 2.0, 3.0]
    """
    down = coerce_downsampler(downsampler)
    up = coerce_upsampler(upsampler)
    down_func = PolicyRegistry.get_downsampler(down)
    up_func = PolicyRegistry.get_upsampler(up)

    plan = plan_grid(rule, time_range, max_points=max_points)
    logger.debug(
        f"resample {series.name!r}: interval_us={plan.interval_us} n={plan.n} "
        f"source_points={len(series)} downsampler={down.value} upsampler={up.value}"
    )

    output = new_series(series.name, series.labels, plan.size)
    aggregated = 0
    filled = 0

    for bucket in iter_buckets(series.points(), plan):
        if bucket.is_empty:
            value = up_func(bucket)
            filled += 1
        else:
            if bucket.index == 0:
                _warn_on_prefix_absorption(series, bucket.points, plan.from_us)
            value = down_func(pl.Series("value", bucket.values, dtype=pl.Float64))
            aggregated += 1
        output.set_point(bucket.index, bucket.ts_us, value)

    logger.debug(
        f"resample {series.name!r}: {plan.size} points, "
        f"{aggregated} aggregated, {filled} filled"
    )
    return output.build()


def resample_with_config(series: Series, config: ResampleConfig, time_range: TimeRange) -> Series:
    """Resample using a ResampleConfig."""
    return resample(
        series,
        config.rule,
        config.downsampler,
        config.upsampler,
        time_range,
        max_points=config.max_points,
    )


def _warn_on_prefix_absorption(series: Series, points, from_us: int) -> None:
    before = sum(1 for ts_us, _ in points if ts_us < from_us)
    if before:
        logger.warning(
            f"resample {series.name!r}: {before} point(s) before range start {from_us} "
            f"were folded into the first grid point"
        )


__all__ = ["resample", "resample_with_config"]
