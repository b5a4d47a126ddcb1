"""Tests for the Series container, builder, and timestamp normalization."""

from datetime import date, datetime, timedelta, timezone

import polars as pl
import pytest

from gridline.errors import StorageError
from gridline.series import Series, TimeRange, new_series, to_timestamp_us

T0 = 1_700_000_000_000_000


class TestTimestampNormalization:
    def test_int_passthrough(self):
        assert to_timestamp_us(T0) == T0

    def test_aware_datetime(self):
        ts = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert to_timestamp_us(ts) == int(ts.timestamp()) * 1_000_000

    def test_offset_datetime_converted_to_utc(self):
        utc = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        offset = utc.astimezone(timezone(timedelta(hours=8)))
        assert to_timestamp_us(offset) == to_timestamp_us(utc)

    def test_iso_string_with_z_suffix(self):
        expected = to_timestamp_us(datetime(2024, 5, 1, tzinfo=timezone.utc))
        assert to_timestamp_us("2024-05-01T00:00:00Z") == expected

    def test_numeric_string(self):
        assert to_timestamp_us(str(T0)) == T0

    def test_naive_datetime_warns_and_uses_utc(self):
        with pytest.warns(UserWarning, match="naive datetime interpreted as UTC"):
            result = to_timestamp_us(datetime(2024, 5, 1))
        assert result == to_timestamp_us(datetime(2024, 5, 1, tzinfo=timezone.utc))

    def test_date_is_midnight_utc(self):
        with pytest.warns(UserWarning):
            result = to_timestamp_us(date(2024, 5, 1))
        assert result == to_timestamp_us(datetime(2024, 5, 1, tzinfo=timezone.utc))

    def test_invalid_string(self):
        with pytest.raises(ValueError, match="Invalid ISO datetime string"):
            to_timestamp_us("yesterday")

    def test_invalid_type(self):
        with pytest.raises(TypeError):
            to_timestamp_us(1.5)  # type: ignore[arg-type]


class TestTimeRange:
    def test_of_normalizes_inputs(self):
        tr = TimeRange.of("2024-05-01T00:00:00Z", "2024-05-01T00:02:00Z")
        assert tr.span_us == 120_000_000


class TestSeries:
    def test_from_points_keeps_nulls(self):
        series = Series.from_points("cpu", {"host": "a"}, [(0, 1), (10, None)])

        assert len(series) == 2
        assert series.get_point(0) == (0, 1.0)
        assert series.get_point(1) == (10, None)
        assert dict(series.frame.schema) == {"ts_us": pl.Int64, "value": pl.Float64}

    def test_labels_are_copied(self):
        labels = {"host": "a", "dc": "eu"}
        series = Series.from_points("cpu", labels, [])
        labels["host"] = "b"

        assert series.labels == {"host": "a", "dc": "eu"}
        assert list(series.labels) == ["host", "dc"]

    def test_get_point_out_of_range(self):
        series = Series.from_points("cpu", None, [(0, 1.0)])
        with pytest.raises(StorageError, match="out of range"):
            series.get_point(1)
        with pytest.raises(IndexError):
            series.get_point(-1)

    def test_from_frame_converts_datetimes(self):
        frame = pl.DataFrame(
            {
                "time": [
                    datetime(2024, 5, 1, 0, 0, tzinfo=timezone.utc),
                    datetime(2024, 5, 1, 0, 1, tzinfo=timezone.utc),
                ],
                "v": [1, 2],
            }
        )
        series = Series.from_frame(frame, name="x", time_col="time", value_col="v")
        base = to_timestamp_us(datetime(2024, 5, 1, tzinfo=timezone.utc))

        assert series.points() == [(base, 1.0), (base + 60_000_000, 2.0)]

    def test_from_frame_converts_dates_to_midnight_utc(self):
        frame = pl.DataFrame({"ts": [date(2024, 5, 1), date(2024, 5, 2)], "value": [1.0, 2.0]})
        series = Series.from_frame(frame, time_col="ts")
        base = to_timestamp_us(datetime(2024, 5, 1, tzinfo=timezone.utc))

        assert series.frame.schema["ts_us"] == pl.Int64
        assert series.frame["ts_us"].to_list() == [base, base + 86_400_000_000]

    def test_from_frame_rejects_non_temporal_time_column(self):
        frame = pl.DataFrame({"ts": ["a", "b"], "value": [1.0, 2.0]})
        with pytest.raises(ValueError, match="expected integer microseconds"):
            Series.from_frame(frame, time_col="ts")

    def test_from_frame_missing_columns(self):
        with pytest.raises(ValueError, match="missing required columns"):
            Series.from_frame(pl.DataFrame({"ts_us": [1]}))

    def test_is_sorted(self):
        assert Series.from_points("s", None, [(0, 1.0), (0, 2.0), (5, 3.0)]).is_sorted()
        assert not Series.from_points("s", None, [(5, 1.0), (0, 2.0)]).is_sorted()


class TestSeriesBuilder:
    def test_build_after_all_points_written(self):
        builder = new_series("out", {"k": "v"}, 2)
        builder.set_point(0, 0, 1.0)
        builder.set_point(1, 60, None)
        series = builder.build()

        assert series.name == "out"
        assert series.labels == {"k": "v"}
        assert series.points() == [(0, 1.0), (60, None)]

    def test_set_point_out_of_bounds(self):
        builder = new_series("out", None, 1)
        with pytest.raises(StorageError, match="allocated with 1 points"):
            builder.set_point(1, 0, 1.0)

    def test_build_with_unwritten_slot(self):
        builder = new_series("out", None, 2)
        builder.set_point(0, 0, 1.0)
        with pytest.raises(StorageError, match="never written"):
            builder.build()
