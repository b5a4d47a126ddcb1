"""Configuration schemas and policy selectors for resample operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gridline._error_messages import unsupported_policy_error
from gridline.errors import UnsupportedPolicyError


class Downsampler(str, Enum):
    """Reduction applied to a bucket holding one or more source points."""

    SUM = "sum"
    MEAN = "mean"
    MIN = "min"
    MAX = "max"


class Upsampler(str, Enum):
    """Fill applied to a bucket holding no source points."""

    PAD = "pad"
    BACKFILL = "backfill"
    FILLNA = "fillna"


_UPSAMPLER_ALIASES: dict[str, Upsampler] = {
    "backfilling": Upsampler.BACKFILL,
}


def coerce_downsampler(value: Downsampler | str) -> Downsampler:
    """Resolve a downsampler name (case-insensitive) to its enum member.

    Raises:
        UnsupportedPolicyError: If the name is unknown
    """
    if isinstance(value, Downsampler):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        try:
            return Downsampler(token)
        except ValueError:
            pass
    raise UnsupportedPolicyError(
        unsupported_policy_error("downsampler", value, [d.value for d in Downsampler]),
        kind="downsampler",
        name=value,
    )


def coerce_upsampler(value: Upsampler | str) -> Upsampler:
    """Resolve an upsampler name (case-insensitive, aliases allowed) to its enum member.

    Raises:
        UnsupportedPolicyError: If the name is unknown
    """
    if isinstance(value, Upsampler):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token in _UPSAMPLER_ALIASES:
            return _UPSAMPLER_ALIASES[token]
        try:
            return Upsampler(token)
        except ValueError:
            pass
    raise UnsupportedPolicyError(
        unsupported_policy_error("upsampler", value, [u.value for u in Upsampler]),
        kind="upsampler",
        name=value,
    )


@dataclass(frozen=True)
class ResampleConfig:
    """Configuration for a resample operation.

    Attributes:
        rule: Grid interval (e.g., "30s", "1m", "1h30m")
        downsampler: Reduction for buckets with source points
        upsampler: Fill for buckets without source points
        max_points: Optional safety limit on output size (None = configured default)
    """

    rule: str
    downsampler: Downsampler | str = Downsampler.MEAN
    upsampler: Upsampler | str = Upsampler.FILLNA
    max_points: int | None = None

    def __post_init__(self):
        # Fail on bad selector names at construction, not mid-scan.
        object.__setattr__(self, "downsampler", coerce_downsampler(self.downsampler))
        object.__setattr__(self, "upsampler", coerce_upsampler(self.upsampler))

    @classmethod
    def from_defaults(
        cls,
        rule: str,
        *,
        downsampler: Downsampler | str | None = None,
        upsampler: Upsampler | str | None = None,
        max_points: int | None = None,
    ) -> ResampleConfig:
        """Build a config, filling unset fields from gridline.config."""
        from gridline import config as gridline_config

        return cls(
            rule=rule,
            downsampler=downsampler or gridline_config.get_default_downsampler(),
            upsampler=upsampler or gridline_config.get_default_upsampler(),
            max_points=max_points if max_points is not None else gridline_config.get_max_points(),
        )


__all__ = [
    "Downsampler",
    "Upsampler",
    "coerce_downsampler",
    "coerce_upsampler",
    "ResampleConfig",
]
