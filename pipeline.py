"""pipeline.py

End-to-end processing of one table or file:
sort -> infer step -> complete grid -> interpolate -> statistics -> write.
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pandas as pd

from analyze import infer_step, summarize_run
from clean import complete_grid, interpolate_table, misaligned_timestamps
from export import output_path_for, write_table
from ingest import read_table
from model import Table
from stats import ColumnStatistics, compute_statistics

LOG = logging.getLogger("gapfill.pipeline")


@dataclass
class ProcessResult:
    table: Table
    step: pd.Timedelta
    statistics: List[ColumnStatistics]
    summary: Dict[str, Any] = field(default_factory=dict)
    output_path: Optional[str] = None


def process_table(
    table: Table,
    on_misaligned: str = "raise",
    cancel_check: Optional[Callable[[], bool]] = None,
) -> ProcessResult:
    """Densify and interpolate a table; the input table is left unchanged."""
    ordered = table.sorted()
    step = infer_step(ordered)
    misaligned = misaligned_timestamps(ordered.timestamps, step).unique()
    completed = complete_grid(ordered, step, on_misaligned=on_misaligned)
    if len(misaligned):
        LOG.warning(
            "dropped %d timestamp(s) not aligned to step %s (first %s)",
            len(misaligned), step, misaligned.min().isoformat(),
        )
    interpolated = interpolate_table(completed, cancel_check=cancel_check)
    statistics = compute_statistics(completed)
    summary = summarize_run(table, completed, step, interpolated, misaligned=len(misaligned))
    return ProcessResult(completed, step, statistics, summary)


def process_file(
    input_path: str,
    suffix: Optional[str] = "",
    output_dir: Optional[str] = None,
    on_misaligned: str = "raise",
    cancel_event: Optional[threading.Event] = None,
) -> ProcessResult:
    """Read, process and write one file; returns the result with output_path set."""
    table = read_table(input_path)
    LOG.info("Processing %s (%d rows, %d value columns)", input_path, table.row_count, table.header_count - 1)
    result = process_table(
        table,
        on_misaligned=on_misaligned,
        cancel_check=cancel_event.is_set if cancel_event is not None else None,
    )
    out_path = output_path_for(input_path, suffix, output_dir)
    if os.path.abspath(out_path) == os.path.abspath(input_path):
        LOG.warning("no suffix or output directory given, overwriting %s", input_path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    write_table(out_path, result.table, result.statistics)
    result.output_path = out_path
    LOG.info(
        "Wrote %s: step %s, %d rows (%d inserted)",
        out_path, result.step, result.table.row_count, result.summary["inserted_rows"],
    )
    return result
