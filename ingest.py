"""ingest.py

Read comma-separated time series files into a Table.

Assumptions:
- First line is the header; the first header names the timestamp column.
- Timestamps are ISO-8601 (e.g. 2025-01-01T00:00:00Z); naive ones are taken as UTC.
- Empty fields are blank cells; everything else is kept as text.
- A trailing statistics block (rows labelled Average, Median, ...) ends the data.
"""
from __future__ import annotations

import logging
import os
from typing import List

import pandas as pd

from model import InputError, Table
from stats import STAT_LABELS

LOG = logging.getLogger("gapfill.ingest")


def read_table(path: str) -> Table:
    """Load one CSV file as a Table (rows in file order, not yet sorted)."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    try:
        raw = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        raise InputError(f"CSV file is empty: {path}") from None
    except pd.errors.ParserError as e:
        raise InputError(f"malformed CSV {path}: {e}") from None

    raw = raw.fillna("").apply(lambda col: col.str.strip())
    # the parser sizes every row to the header line: short rows come back
    # padded, longer rows are a ParserError above
    headers = list(raw.iloc[0])
    if not any(headers):
        raise InputError(f"CSV header is empty: {path}")
    data = raw.iloc[1:]

    labels = data.iloc[:, 0].isin(STAT_LABELS).to_numpy()
    if labels.any():
        data = data.iloc[: labels.argmax()]

    timestamps = pd.to_datetime(data.iloc[:, 0], utc=True, format="ISO8601", errors="coerce")
    bad = timestamps.isna().to_numpy()
    if bad.any():
        n = int(bad.argmax())
        raise InputError(f"unparsable timestamp {data.iloc[n, 0]!r} in data row {n + 1} of {path}")

    frame = data.iloc[:, 1:].copy()
    frame.index = pd.DatetimeIndex(timestamps)
    table = Table(headers, frame)
    LOG.debug("read %d rows x %d columns from %s", table.row_count, table.header_count, path)
    return table


def find_csvs_in_dir(directory: str) -> List[str]:
    """Return CSV file paths in a directory (non-recursive)."""
    files = []
    for entry in os.listdir(directory):
        if entry.lower().endswith(".csv"):
            files.append(os.path.join(directory, entry))
    return sorted(files)


if __name__ == "__main__":
    # quick smoke test (manual) when invoked directly
    import sys
    if len(sys.argv) < 2:
        print("usage: python ingest.py <csv>")
        raise SystemExit(1)
    table = read_table(sys.argv[1])
    print("Loaded rows:", table.row_count)
