"""clean.py

Grid completion and gap interpolation.

complete_grid densifies a sorted table to a uniform step, inserting blank rows
for missing timestamps. interpolate_table then fills blank cells that sit
strictly between two numeric anchors, column by column. Keyword cells (any
non-blank text that is not a finite number) are never touched and never used
as anchors.
"""
from __future__ import annotations

from typing import Callable, Dict, List, NamedTuple, Optional

import numpy as np
import pandas as pd

from model import InputError, ProcessingCancelled, StepDetectionError, Table

MISALIGNED_POLICIES = ("raise", "drop")


class Anchor(NamedTuple):
    row: int
    value: float


def blank_mask(cells: pd.Series) -> pd.Series:
    return cells.fillna("").astype(str).str.strip().eq("")


def cast_numeric(cells: pd.Series) -> pd.Series:
    """Parse cells as floats; blanks, keywords and non-finite values become NaN."""
    numeric = pd.to_numeric(cells.fillna("").astype(str).str.strip(), errors="coerce")
    numeric = numeric.astype(float)
    return numeric.where(np.isfinite(numeric))


def misaligned_timestamps(timestamps: pd.DatetimeIndex, step: pd.Timedelta) -> pd.DatetimeIndex:
    """Timestamps that do not land on first + k*step."""
    if timestamps.empty:
        return timestamps
    elapsed = timestamps - timestamps.min()
    return timestamps[(elapsed % step) != pd.Timedelta(0)]


def complete_grid(table: Table, step: pd.Timedelta, on_misaligned: str = "raise") -> Table:
    """Return a new table covering [first, last] at exactly `step` spacing.

    Rows whose timestamp is on the grid are reused verbatim (the last one wins
    for duplicated timestamps); missing grid points get all-blank rows.
    Off-grid rows raise InputError, or are dropped with on_misaligned="drop".
    """
    if on_misaligned not in MISALIGNED_POLICIES:
        raise ValueError(f"on_misaligned must be one of {MISALIGNED_POLICIES}, got {on_misaligned!r}")
    if step <= pd.Timedelta(0):
        raise StepDetectionError(f"step must be positive, got {step}")
    if table.row_count == 0:
        raise InputError("cannot complete the grid of an empty table")

    frame = table.frame
    misaligned = misaligned_timestamps(frame.index, step)
    if len(misaligned) and on_misaligned == "raise":
        raise InputError(
            f"{len(misaligned.unique())} timestamp(s) do not align with the inferred step "
            f"of {step}, first at {misaligned.min().isoformat()}"
        )

    frame = frame[~frame.index.duplicated(keep="last")]
    grid = pd.date_range(start=frame.index.min(), end=frame.index.max(), freq=step, name=frame.index.name)
    return Table(table.headers, frame.reindex(grid, fill_value=""))


def find_anchors(cells: pd.Series) -> List[Anchor]:
    numeric = cast_numeric(cells).to_numpy()
    return [Anchor(int(row), float(numeric[row])) for row in np.flatnonzero(~np.isnan(numeric))]


def interpolate_column(table: Table, col: int) -> int:
    """Fill blanks between consecutive anchors of one column, in place.

    Uses elapsed time as the fraction between anchors. Segments whose anchors
    share a timestamp are skipped. Returns the number of cells filled.
    """
    cells = table.column(col)
    blanks = blank_mask(cells).to_numpy()
    timestamps = table.timestamps
    anchors = find_anchors(cells)
    filled = 0
    for start, end in zip(anchors, anchors[1:]):
        if end.row - start.row < 2:
            continue
        span = timestamps[end.row] - timestamps[start.row]
        if span <= pd.Timedelta(0):
            continue
        rows = np.arange(start.row + 1, end.row)
        rows = rows[blanks[rows]]
        if not len(rows):
            continue
        fraction = np.asarray((timestamps[rows] - timestamps[start.row]) / span, dtype=float)
        values = start.value + (end.value - start.value) * fraction
        values = np.clip(values, min(start.value, end.value), max(start.value, end.value))
        for row, value in zip(rows, values):
            table.frame.iat[row, col] = repr(float(value))
        filled += len(rows)
    return filled


def interpolate_table(
    table: Table,
    cancel_check: Optional[Callable[[], bool]] = None,
) -> Dict[str, int]:
    """Interpolate every value column in place.

    `cancel_check` is consulted before each column; ProcessingCancelled is
    raised when it returns True. Returns filled-cell counts keyed by header.
    """
    counts: Dict[str, int] = {}
    for col, name in enumerate(table.value_headers):
        if cancel_check is not None and cancel_check():
            raise ProcessingCancelled(f"cancelled before column {name!r}")
        counts[name] = counts.get(name, 0) + interpolate_column(table, col)
    return counts
