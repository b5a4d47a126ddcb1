"""Time-series container for gridline.

A Series is an immutable, named, labelled sequence of ``(ts_us, value)``
points backed by a Polars DataFrame:

- ``ts_us``: Int64 microseconds since epoch, non-decreasing
- ``value``: Float64, nullable (null means missing data, distinct from 0.0)

Output series are allocated up front with ``new_series()`` and filled slot by
slot through a SeriesBuilder.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, timezone

import polars as pl

from gridline.errors import StorageError

TimestampInput = int | datetime | date | str
Point = tuple[int, float | None]

TS_COL = "ts_us"
VALUE_COL = "value"

SERIES_SCHEMA = {TS_COL: pl.Int64, VALUE_COL: pl.Float64}


def to_timestamp_us(ts: TimestampInput, param_name: str = "ts") -> int:
    """Convert datetime, date, or ISO string to microseconds since epoch, or pass through int.

    Naive datetimes and date-only strings are interpreted as UTC with a warning.

    Args:
        ts: int (microseconds since epoch), datetime/date object, or ISO string
        param_name: Parameter name for error messages

    Returns:
        Microseconds since epoch

    Raises:
        TypeError: If ts is not int, datetime, date, or str
        ValueError: If an ISO string cannot be parsed
    """
    if isinstance(ts, bool):
        raise TypeError(f"{param_name}: expected int, datetime, or str, got bool")

    if isinstance(ts, int):
        return ts

    if isinstance(ts, str):
        text = ts.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        try:
            # Handle Z suffix (not supported by fromisoformat in Python 3.10)
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            ts = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(
                f"{param_name}: Invalid ISO datetime string. "
                f"Expected formats: 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM:SS', "
                f"'YYYY-MM-DDTHH:MM:SSZ', or 'YYYY-MM-DDTHH:MM:SS+00:00'. "
                f"Error: {e}"
            ) from e

    if isinstance(ts, date) and not isinstance(ts, datetime):
        ts = datetime(ts.year, ts.month, ts.day)

    if isinstance(ts, datetime):
        if ts.tzinfo is None:
            warnings.warn(
                f"{param_name}: naive datetime interpreted as UTC. "
                f"Use timezone-aware datetime for clarity: "
                f"datetime(..., tzinfo=timezone.utc) or an ISO string with offset",
                UserWarning,
                stacklevel=3,
            )
            ts = ts.replace(tzinfo=timezone.utc)
        delta = ts - datetime(1970, 1, 1, tzinfo=timezone.utc)
        return (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds

    raise TypeError(f"{param_name}: expected int, datetime, or str, got {type(ts).__name__}")


@dataclass(frozen=True)
class TimeRange:
    """Resampling window; ``from_us`` is the first grid timestamp.

    Attributes:
        from_us: Window start (microseconds since epoch)
        to_us: Window end (microseconds since epoch)
    """

    from_us: int
    to_us: int

    @classmethod
    def of(cls, start: TimestampInput, end: TimestampInput) -> TimeRange:
        """Build a TimeRange from any supported timestamp input."""
        return cls(
            from_us=to_timestamp_us(start, "start"),
            to_us=to_timestamp_us(end, "end"),
        )

    @property
    def span_us(self) -> int:
        return self.to_us - self.from_us


@dataclass(frozen=True, eq=False)
class Series:
    """Immutable named time series.

    Attributes:
        name: Series name, opaque to gridline
        labels: String-keyed labels, opaque to gridline (insertion order kept)
        frame: DataFrame with ``ts_us`` (Int64) and ``value`` (Float64)
    """

    name: str
    labels: dict[str, str] = field(default_factory=dict)
    frame: pl.DataFrame = field(default_factory=lambda: pl.DataFrame(schema=SERIES_SCHEMA))

    @classmethod
    def from_points(
        cls,
        name: str,
        labels: Mapping[str, str] | None,
        points: Iterable[tuple[TimestampInput, float | None]],
    ) -> Series:
        """Build a series from ``(timestamp, value)`` pairs.

        Example:
            >>> s = Series.from_points("cpu", {"host": "a"}, [(0, 1.0), (60_000_000, None)])
            >>> len(s)
            2
        """
        ts_values: list[int] = []
        values: list[float | None] = []
        for ts, value in points:
            ts_values.append(to_timestamp_us(ts))
            values.append(None if value is None else float(value))
        frame = pl.DataFrame({TS_COL: ts_values, VALUE_COL: values}, schema=SERIES_SCHEMA)
        return cls(name=name, labels=dict(labels or {}), frame=frame)

    @classmethod
    def from_frame(
        cls,
        frame: pl.DataFrame,
        *,
        name: str = "",
        labels: Mapping[str, str] | None = None,
        time_col: str = TS_COL,
        value_col: str = VALUE_COL,
    ) -> Series:
        """Wrap a DataFrame as a series.

        Date and Datetime time columns are converted to microseconds since
        epoch (naive datetimes and dates are treated as UTC). Values are cast
        to Float64.

        Raises:
            ValueError: If the time or value column is missing, or the time
                column is not an integer, Date, or Datetime column
        """
        missing = {time_col, value_col} - set(frame.columns)
        if missing:
            raise ValueError(f"Frame missing required columns: {sorted(missing)}")

        ts_dtype = frame.schema[time_col]
        ts_expr = pl.col(time_col)
        if isinstance(ts_dtype, pl.Datetime):
            ts_expr = ts_expr.dt.epoch(time_unit="us")
        elif ts_dtype == pl.Date:
            # Dates are midnight UTC.
            ts_expr = ts_expr.cast(pl.Datetime("us")).dt.epoch(time_unit="us")
        elif not ts_dtype.is_integer():
            raise ValueError(
                f"Time column {time_col!r} has dtype {ts_dtype}; "
                f"expected integer microseconds, Date, or Datetime"
            )

        normalized = frame.select(
            ts_expr.cast(pl.Int64).alias(TS_COL),
            pl.col(value_col).cast(pl.Float64).alias(VALUE_COL),
        )
        return cls(name=name, labels=dict(labels or {}), frame=normalized)

    def __len__(self) -> int:
        return self.frame.height

    def get_point(self, idx: int) -> Point:
        """Return ``(ts_us, value)`` at ``idx``.

        Raises:
            StorageError: If idx is out of range
        """
        if not 0 <= idx < self.frame.height:
            raise StorageError(f"point index {idx} out of range for series of length {len(self)}")
        ts_us, value = self.frame.row(idx)
        return ts_us, value

    def points(self) -> list[Point]:
        """Return all points in storage order."""
        return list(self.frame.iter_rows())

    def is_sorted(self) -> bool:
        """Whether timestamps are non-decreasing."""
        if self.frame.height < 2:
            return True
        return bool((self.frame[TS_COL].diff().drop_nulls() >= 0).all())


class SeriesBuilder:
    """Fixed-size, write-once-per-slot output buffer for a Series."""

    def __init__(self, name: str, labels: Mapping[str, str] | None, size: int):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.name = name
        self.labels = dict(labels or {})
        self._ts: list[int | None] = [None] * size
        self._values: list[float | None] = [None] * size

    def __len__(self) -> int:
        return len(self._ts)

    def set_point(self, idx: int, ts_us: int, value: float | None) -> None:
        """Write the point at ``idx``.

        Raises:
            StorageError: If idx is outside [0, size)
        """
        if not 0 <= idx < len(self._ts):
            raise StorageError(
                f"cannot set point {idx}: series allocated with {len(self._ts)} points"
            )
        self._ts[idx] = ts_us
        self._values[idx] = value

    def build(self) -> Series:
        """Freeze the buffer into a Series.

        Raises:
            StorageError: If any slot was never written
        """
        unwritten = [idx for idx, ts in enumerate(self._ts) if ts is None]
        if unwritten:
            raise StorageError(
                f"{len(unwritten)} of {len(self._ts)} points were never written "
                f"(first: {unwritten[0]})"
            )
        frame = pl.DataFrame({TS_COL: self._ts, VALUE_COL: self._values}, schema=SERIES_SCHEMA)
        return Series(name=self.name, labels=dict(self.labels), frame=frame)


def new_series(name: str, labels: Mapping[str, str] | None, size: int) -> SeriesBuilder:
    """Allocate an output series of exactly ``size`` points."""
    return SeriesBuilder(name, labels, size)


__all__ = [
    "TimestampInput",
    "Point",
    "TS_COL",
    "VALUE_COL",
    "to_timestamp_us",
    "TimeRange",
    "Series",
    "SeriesBuilder",
    "new_series",
]
