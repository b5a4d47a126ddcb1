"""Built-in resample policies.

Downsamplers reduce a bucket's values with Polars vector aggregations.
Nulls are skipped and an all-null bucket reduces to null (not 0.0).

Upsamplers fill an empty bucket from the scan state carried by the Bucket.
"""

from __future__ import annotations

import polars as pl

from .bucket_assignment import Bucket
from .config import Downsampler, Upsampler
from .registry import PolicyRegistry


def _non_null(values: pl.Series) -> pl.Series | None:
    present = values.drop_nulls()
    return present if present.len() else None


def _as_float(result) -> float | None:
    return None if result is None else float(result)


@PolicyRegistry.register_downsampler(Downsampler.SUM, description="Sum of non-null values")
def down_sum(values: pl.Series) -> float | None:
    """Sum aggregation.

    Suitable for: counts, volumes, rates already scaled to the interval
    Not suitable for: gauges (use mean or max instead)
    """
    present = _non_null(values)
    return None if present is None else _as_float(present.sum())


@PolicyRegistry.register_downsampler(Downsampler.MEAN, description="Mean of non-null values")
def down_mean(values: pl.Series) -> float | None:
    """Arithmetic mean aggregation.

    Suitable for: gauges, temperatures, latencies
    """
    present = _non_null(values)
    return None if present is None else _as_float(present.mean())


@PolicyRegistry.register_downsampler(Downsampler.MIN, description="Minimum of non-null values")
def down_min(values: pl.Series) -> float | None:
    present = _non_null(values)
    return None if present is None else _as_float(present.min())


@PolicyRegistry.register_downsampler(Downsampler.MAX, description="Maximum of non-null values")
def down_max(values: pl.Series) -> float | None:
    present = _non_null(values)
    return None if present is None else _as_float(present.max())


@PolicyRegistry.register_upsampler(
    Upsampler.PAD, description="Repeat the last seen value (may be null)"
)
def up_pad(bucket: Bucket) -> float | None:
    """Forward fill from the most recently consumed point.

    Null before any point has been consumed. A consumed null is carried
    forward as null.
    """
    if bucket.last_seen is None:
        return None
    return bucket.last_seen.value


@PolicyRegistry.register_upsampler(
    Upsampler.BACKFILL, description="Use the next unconsumed value"
)
def up_backfill(bucket: Bucket) -> float | None:
    """Backward fill from the next source point without consuming it.

    Null once the source is exhausted.
    """
    if bucket.next_point is None:
        return None
    return bucket.next_point[1]


@PolicyRegistry.register_upsampler(Upsampler.FILLNA, description="Always null")
def up_fillna(bucket: Bucket) -> float | None:
    return None


def aggregate_values(values: list[float | None], downsampler: Downsampler | str) -> float | None:
    """Reduce a list of nullable floats with a registered downsampler."""
    func = PolicyRegistry.get_downsampler(downsampler)
    return func(pl.Series("value", values, dtype=pl.Float64))


__all__ = [
    "down_sum",
    "down_mean",
    "down_min",
    "down_max",
    "up_pad",
    "up_backfill",
    "up_fillna",
    "aggregate_values",
]
