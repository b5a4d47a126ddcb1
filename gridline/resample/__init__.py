"""Resample operations.

This module provides:
- Closed policy selectors (Downsampler, Upsampler) and ResampleConfig
- Policy registry with built-in sum/mean/min/max and pad/backfill/fillna
- Grid planning from an interval rule and a time range
- Single-pass bucket assignment
- Resample execution engine
"""

# Import builtins to register policies
from . import builtins  # noqa: F401
from .bucket_assignment import Bucket, Observed, iter_buckets
from .builtins import aggregate_values
from .config import (
    Downsampler,
    ResampleConfig,
    Upsampler,
    coerce_downsampler,
    coerce_upsampler,
)
from .core import resample, resample_with_config
from .grid import GridPlan, plan_grid
from .registry import PolicyMetadata, PolicyRegistry

__all__ = [
    # Registry
    "PolicyRegistry",
    "PolicyMetadata",
    # Config
    "Downsampler",
    "Upsampler",
    "ResampleConfig",
    "coerce_downsampler",
    "coerce_upsampler",
    # Operations
    "GridPlan",
    "plan_grid",
    "Bucket",
    "Observed",
    "iter_buckets",
    "aggregate_values",
    "resample",
    "resample_with_config",
]
