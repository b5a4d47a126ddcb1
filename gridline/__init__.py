"""gridline: resample timestamped numeric series onto a uniform time grid."""

from __future__ import annotations

from gridline.duration import parse_duration_us
from gridline.errors import (
    GridTooLargeError,
    ParseError,
    RangeTooShortError,
    ResampleError,
    StorageError,
    UnsupportedPolicyError,
)
from gridline.resample import (
    Downsampler,
    GridPlan,
    ResampleConfig,
    Upsampler,
    iter_buckets,
    plan_grid,
    resample,
    resample_with_config,
)
from gridline.series import Series, SeriesBuilder, TimeRange, new_series

__all__ = [
    "resample",
    "resample_with_config",
    "plan_grid",
    "iter_buckets",
    "parse_duration_us",
    "GridPlan",
    "ResampleConfig",
    "Downsampler",
    "Upsampler",
    "Series",
    "SeriesBuilder",
    "TimeRange",
    "new_series",
    "ResampleError",
    "ParseError",
    "RangeTooShortError",
    "GridTooLargeError",
    "UnsupportedPolicyError",
    "StorageError",
]
