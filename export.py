"""export.py

Write completed tables (with their statistics block) and JSON run summaries.
"""
from __future__ import annotations

import json
import math
import os
from typing import Any, Dict, List, Optional

import pandas as pd

from model import Table
from stats import ColumnStatistics, statistics_frame


def format_number(value: float) -> str:
    if value is None or math.isnan(value):
        return "NaN"
    return repr(float(value))


def format_timestamp(ts: pd.Timestamp) -> str:
    return ts.tz_convert("UTC").isoformat().replace("+00:00", "Z")


def output_path_for(input_path: str, suffix: Optional[str] = "", output_dir: Optional[str] = None) -> str:
    """Build `<base>[_<suffix>]<ext>` next to the input (or in output_dir).

    Files without an extension get '.csv'. An empty suffix adds nothing, so
    without output_dir the input path itself is returned.
    """
    directory, name = os.path.split(input_path)
    dot = name.rfind(".")
    base, ext = (name[:dot], name[dot:]) if dot > 0 else (name, ".csv")
    suffix = (suffix or "").strip()
    middle = f"_{suffix}" if suffix else ""
    return os.path.join(output_dir if output_dir else directory, base + middle + ext)


def _format_flag(flag: bool) -> str:
    return "1" if flag else "0"


def _format_statistics(stats: List[ColumnStatistics], headers: List[str]) -> pd.DataFrame:
    frame = statistics_frame(stats, headers)
    rows = []
    for label, values in zip(frame.index, frame.itertuples(index=False, name=None)):
        fmt = _format_flag if label == "NonNumericalDetected" else format_number
        rows.append([label] + [fmt(v) for v in values])
    return pd.DataFrame(rows)


def write_table(out_path: str, table: Table, stats: Optional[List[ColumnStatistics]] = None) -> None:
    """Write header, data rows and, when given, the trailing statistics block."""
    out = table.frame.copy()
    out.insert(0, table.headers[0], [format_timestamp(ts) for ts in table.timestamps], allow_duplicates=True)
    with open(out_path, "w", encoding="utf8", newline="") as fh:
        out.to_csv(fh, index=False, header=table.headers, lineterminator="\n")
        if stats is not None:
            _format_statistics(stats, table.value_headers).to_csv(
                fh, header=False, index=False, lineterminator="\n"
            )


def write_json_summary(obj: Dict[str, Any], out_path: str) -> None:
    with open(out_path, "w", encoding="utf8") as fh:
        json.dump(obj, fh, indent=2, default=str)
