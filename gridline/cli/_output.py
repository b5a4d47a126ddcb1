"""Output formatting helpers for CLI commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import polars as pl


def write_output(
    df: pl.DataFrame,
    *,
    fmt: str = "table",
    output: str | Path | None = None,
) -> None:
    """Write a Polars DataFrame to stdout or file in the requested format.

    Supported formats: table, csv, json, parquet.
    """
    if not isinstance(df, pl.DataFrame):
        raise TypeError(f"Expected polars DataFrame, got {type(df)}")

    if fmt == "parquet":
        if not output:
            raise ValueError("--output is required for parquet format")
        df.write_parquet(output)
        return

    sink = open(output, "w", encoding="utf-8") if output else sys.stdout  # noqa: SIM115

    try:
        if fmt == "table":
            with pl.Config(tbl_rows=-1):
                print(df, file=sink)
        elif fmt == "csv":
            sink.write(df.write_csv())
        elif fmt == "json":
            # row-oriented JSON
            sink.write(json.dumps(df.to_dicts(), default=str, indent=2))
            sink.write("\n")
        else:
            raise ValueError(f"Unknown format: {fmt}")
    finally:
        if sink is not sys.stdout:
            sink.close()
