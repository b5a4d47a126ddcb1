"""Policy registry for resample operations.

This module provides a registry keyed by the closed policy enumerations:
- Downsamplers reduce the values of a non-empty bucket
- Upsamplers produce a value for an empty bucket from scan state

Built-in policies are registered on import of ``gridline.resample.builtins``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import polars as pl

from .config import Downsampler, Upsampler, coerce_downsampler, coerce_upsampler

if TYPE_CHECKING:
    from .bucket_assignment import Bucket

# Downsampling: nullable Float64 vector -> nullable float (null-skipping, null if all null)
DownsampleCallable = Callable[[pl.Series], "float | None"]

# Upsampling: empty bucket with scan state -> nullable float
UpsampleCallable = Callable[["Bucket"], "float | None"]


@dataclass(frozen=True)
class PolicyMetadata:
    """Registry entry for a resample policy.

    Attributes:
        name: Policy identifier (enum value)
        kind: "downsampler" or "upsampler"
        description: One-line summary shown in CLI help
        impl_ref: Dotted path of the implementing function
    """

    name: str
    kind: str
    description: str
    impl_ref: str = ""


class PolicyRegistry:
    """Global registry for downsampling and upsampling policies."""

    _downsamplers: dict[Downsampler, DownsampleCallable] = {}
    _upsamplers: dict[Upsampler, UpsampleCallable] = {}
    _metadata: dict[tuple[str, str], PolicyMetadata] = {}

    @classmethod
    def register_downsampler(cls, policy: Downsampler, *, description: str = ""):
        """Decorator registering a downsampler implementation.

        Example:
            @PolicyRegistry.register_downsampler(Downsampler.SUM)
            def down_sum(values: pl.Series) -> float | None:
                ...
        """

        def decorator(func: DownsampleCallable):
            cls._downsamplers[policy] = func
            cls._metadata[("downsampler", policy.value)] = PolicyMetadata(
                name=policy.value,
                kind="downsampler",
                description=description,
                impl_ref=f"{func.__module__}.{func.__name__}",
            )
            return func

        return decorator

    @classmethod
    def register_upsampler(cls, policy: Upsampler, *, description: str = ""):
        """Decorator registering an upsampler implementation."""

        def decorator(func: UpsampleCallable):
            cls._upsamplers[policy] = func
            cls._metadata[("upsampler", policy.value)] = PolicyMetadata(
                name=policy.value,
                kind="upsampler",
                description=description,
                impl_ref=f"{func.__module__}.{func.__name__}",
            )
            return func

        return decorator

    @classmethod
    def get_downsampler(cls, policy: Downsampler | str) -> DownsampleCallable:
        """Retrieve a downsampler implementation.

        Raises:
            UnsupportedPolicyError: If the name is unknown
            KeyError: If the policy is known but has no implementation registered
        """
        return cls._downsamplers[coerce_downsampler(policy)]

    @classmethod
    def get_upsampler(cls, policy: Upsampler | str) -> UpsampleCallable:
        """Retrieve an upsampler implementation.

        Raises:
            UnsupportedPolicyError: If the name is unknown
            KeyError: If the policy is known but has no implementation registered
        """
        return cls._upsamplers[coerce_upsampler(policy)]

    @classmethod
    def describe(cls, kind: str, name: str) -> PolicyMetadata:
        """Return metadata for a registered policy.

        Raises:
            KeyError: If no such policy is registered
        """
        return cls._metadata[(kind, name)]

    @classmethod
    def list_downsamplers(cls) -> list[str]:
        return [policy.value for policy in cls._downsamplers]

    @classmethod
    def list_upsamplers(cls) -> list[str]:
        return [policy.value for policy in cls._upsamplers]


__all__ = [
    "DownsampleCallable",
    "UpsampleCallable",
    "PolicyMetadata",
    "PolicyRegistry",
]
