"""stats.py

Per-column descriptive statistics over a completed grid.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np
import pandas as pd

from analyze import most_frequent
from clean import blank_mask, cast_numeric
from model import Table

STAT_LABELS = ("Average", "Median", "Minimum", "Maximum", "Mode", "NonNumericalDetected")


@dataclass(frozen=True)
class ColumnStatistics:
    average: float
    median: float
    minimum: float
    maximum: float
    mode: float
    non_numerical_detected: bool

    def as_row(self) -> list:
        return [self.average, self.median, self.minimum, self.maximum, self.mode, self.non_numerical_detected]


def column_statistics(cells: pd.Series) -> ColumnStatistics:
    """Statistics over the numeric cells of one column.

    Blank cells are skipped. Any other cell that is not a finite number marks
    the column as non-numerical without stopping collection. With no numeric
    cells every statistic is NaN.
    """
    numeric = cast_numeric(cells)
    non_numerical = bool((numeric.isna() & ~blank_mask(cells)).any())
    values = numeric.dropna()
    if values.empty:
        return ColumnStatistics(np.nan, np.nan, np.nan, np.nan, np.nan, non_numerical)
    return ColumnStatistics(
        average=float(values.mean()),
        median=float(values.median()),
        minimum=float(values.min()),
        maximum=float(values.max()),
        mode=float(most_frequent(values)),
        non_numerical_detected=non_numerical,
    )


def compute_statistics(table: Table) -> List[ColumnStatistics]:
    return [column_statistics(table.column(col)) for col in range(table.header_count - 1)]


def statistics_frame(stats: List[ColumnStatistics], headers: List[str]) -> pd.DataFrame:
    """Statistics as a DataFrame indexed by STAT_LABELS, one column per value header."""
    data = np.array([s.as_row() for s in stats], dtype=object).T if stats else np.empty((len(STAT_LABELS), 0))
    return pd.DataFrame(data, index=list(STAT_LABELS), columns=list(headers), dtype=object)
