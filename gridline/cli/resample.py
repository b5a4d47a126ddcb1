"""``gridline resample`` — resample a series file onto a uniform grid."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def register(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("resample", help="Resample a CSV/Parquet series file")
    p.add_argument("input", help="Input file (.csv or .parquet)")
    p.add_argument("--rule", required=True, help="Grid interval (e.g. 30s, 1m, 1h30m)")
    p.add_argument(
        "--from",
        dest="start",
        required=True,
        help="Range start (ISO datetime, date, or microsecond timestamp)",
    )
    p.add_argument(
        "--to",
        dest="end",
        required=True,
        help="Range end (ISO datetime, date, or microsecond timestamp)",
    )
    p.add_argument(
        "--downsampler",
        default=None,
        help="sum, mean, min or max (default: config, else mean)",
    )
    p.add_argument(
        "--upsampler",
        default=None,
        help="pad, backfill or fillna (default: config, else fillna)",
    )
    p.add_argument("--time-col", default="ts_us", help="Time column name (default: ts_us)")
    p.add_argument("--value-col", default="value", help="Value column name (default: value)")
    p.add_argument("--name", default=None, help="Series name (default: input file stem)")
    p.add_argument(
        "--label",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Series label (repeatable)",
    )
    p.add_argument(
        "--format",
        choices=["table", "csv", "json", "parquet"],
        default="table",
        help="Output format (default: table)",
    )
    p.add_argument("--output", default=None, help="Output file path (default: stdout)")
    p.set_defaults(handler=_handle)


def _parse_labels(raw: list[str]) -> dict[str, str]:
    labels: dict[str, str] = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"--label expects KEY=VALUE, got {item!r}")
        labels[key.strip()] = value.strip()
    return labels


def _read_frame(path: Path):
    import polars as pl

    suffix = path.suffix.lower()
    if suffix == ".parquet":
        return pl.read_parquet(path)
    if suffix == ".csv":
        return pl.read_csv(path, try_parse_dates=True)
    raise ValueError(f"Unsupported input format {suffix!r}; expected .csv or .parquet")


def _handle(args: argparse.Namespace) -> int:
    import polars as pl

    from gridline.cli._output import write_output
    from gridline.errors import ResampleError
    from gridline.resample import ResampleConfig, resample_with_config
    from gridline.series import Series, TimeRange

    path = Path(args.input)
    if not path.exists():
        print(f"error: input file not found: {path}", file=sys.stderr)
        return 1

    try:
        labels = _parse_labels(args.label)
        time_range = TimeRange.of(args.start, args.end)
        config = ResampleConfig.from_defaults(
            args.rule,
            downsampler=args.downsampler,
            upsampler=args.upsampler,
        )
        frame = _read_frame(path)
        series = Series.from_frame(
            frame.sort(args.time_col) if args.time_col in frame.columns else frame,
            name=args.name if args.name is not None else path.stem,
            labels=labels,
            time_col=args.time_col,
            value_col=args.value_col,
        )
        logger.info(f"loaded {len(series)} points from {path}")
        result = resample_with_config(series, config, time_range)
    except (ResampleError, ValueError, TypeError, pl.exceptions.PolarsError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    out = result.frame.with_columns(
        pl.from_epoch(pl.col("ts_us"), time_unit="us").dt.replace_time_zone("UTC").alias("time")
    ).select(["time", "ts_us", "value"])

    try:
        write_output(out, fmt=args.format, output=args.output)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0
