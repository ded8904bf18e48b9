"""analyze.py

Step inference and run summaries.

- infer_step: canonical sampling interval (mode of the positive deltas)
- compute_time_range / summarize_run: JSON-friendly description of a run
"""
from __future__ import annotations

from typing import Any, Dict, Iterable

import pandas as pd

from model import InputError, StepDetectionError, Table


def most_frequent(values: Iterable[Any]) -> Any:
    """Return the most frequent value; ties go to the smallest value.

    Raises ValueError on an empty input.
    """
    counts = pd.Series(list(values)).value_counts()
    if counts.empty:
        raise ValueError("most_frequent() arg is empty")
    return counts[counts == counts.max()].index.min()


def infer_step(table: Table) -> pd.Timedelta:
    """Infer the sampling interval from consecutive timestamps.

    Expects rows sorted ascending. Zero and negative deltas (duplicates,
    out-of-order rows) are ignored.
    """
    if table.row_count < 2:
        raise InputError("need at least 2 rows to interpolate")
    deltas = pd.Series(table.timestamps).diff().iloc[1:]
    deltas = deltas[deltas > pd.Timedelta(0)]
    if deltas.empty:
        raise StepDetectionError("cannot detect a positive step size")
    return pd.Timedelta(most_frequent(deltas))


def compute_time_range(table: Table) -> Dict[str, Any]:
    ts = table.timestamps
    if ts.empty:
        return {"start": None, "end": None, "count": 0}
    return {"start": ts.min().isoformat(), "end": ts.max().isoformat(), "count": int(len(ts))}


def summarize_run(
    original: Table,
    completed: Table,
    step: pd.Timedelta,
    interpolated: Dict[str, int],
    misaligned: int = 0,
) -> Dict[str, Any]:
    """Describe one gap-filling run.

    `original` is the table as read, `completed` the interpolated grid and
    `interpolated` the filled-cell count per value column.
    """
    unique_rows = int(original.timestamps.nunique())
    kept_rows = unique_rows - misaligned
    return {
        "time_range": compute_time_range(original),
        "step_seconds": step.total_seconds(),
        "original_rows": original.row_count,
        "completed_rows": completed.row_count,
        "inserted_rows": completed.row_count - kept_rows,
        "misaligned_timestamps": int(misaligned),
        "interpolated_cells": {k: int(v) for k, v in interpolated.items()},
    }
