"""Exception types raised by gridline.

Every error is terminal for the call that raised it: a failed resample never
returns a partially built series.
"""

from __future__ import annotations


class ResampleError(Exception):
    """Base class for all gridline errors."""


class ParseError(ResampleError, ValueError):
    """Raised when an interval rule cannot be parsed into a positive duration."""


class RangeTooShortError(ResampleError, ValueError):
    """Raised when the time range cannot hold a single interval."""


class GridTooLargeError(ResampleError, ValueError):
    """Raised when the planned grid exceeds the configured point limit."""


class UnsupportedPolicyError(ResampleError, ValueError):
    """Raised for an unknown downsampler or upsampler name."""

    def __init__(self, message: str, *, kind: str, name: object):
        super().__init__(message)
        self.kind = kind
        self.name = name


class StorageError(ResampleError, IndexError):
    """Raised when a series point cannot be read or written."""


__all__ = [
    "ResampleError",
    "ParseError",
    "RangeTooShortError",
    "GridTooLargeError",
    "UnsupportedPolicyError",
    "StorageError",
]
