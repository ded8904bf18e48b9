"""model.py

In-memory table for an irregularly sampled time series.

A Table holds the header names (the first one names the timestamp column) and a
pandas DataFrame of text cells indexed by a UTC DatetimeIndex. Cells are kept
as text so keyword markers such as 'BLOCK' survive untouched; numeric
classification happens in clean.py.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, List, NamedTuple, Sequence

import pandas as pd


class GapFillError(Exception):
    """Base class for errors raised by the gap-filling engine."""


class InputError(GapFillError):
    """Structurally invalid input: empty header, bad cell counts, too few rows."""


class StepDetectionError(GapFillError):
    """No positive interval exists between any two observed timestamps."""


class ProcessingCancelled(GapFillError):
    """Raised between columns when the caller asked the run to stop."""


class Row(NamedTuple):
    timestamp: pd.Timestamp
    values: List[str]


def _as_text(cell: Any) -> str:
    return "" if cell is None else str(cell)


def _normalize_index(timestamps: Any, name: str) -> pd.DatetimeIndex:
    index = pd.DatetimeIndex(pd.to_datetime(timestamps, utc=True), name=name)
    return index.as_unit("ns")


class Table:
    """Header names plus ordered rows of (timestamp, cells).

    `frame` has one column per value header (duplicates allowed, always
    addressed by position) and dtype object.
    """

    def __init__(self, headers: Sequence[str], frame: pd.DataFrame):
        headers = list(headers)
        if not headers:
            raise InputError("CSV header is empty")
        if frame.shape[1] != len(headers) - 1:
            raise InputError(
                f"expected {len(headers) - 1} value columns, got {frame.shape[1]}"
            )
        frame = frame.astype(object)
        frame.columns = headers[1:]
        frame.index = _normalize_index(frame.index, headers[0])
        self.headers = headers
        self.frame = frame

    @classmethod
    def from_rows(cls, headers: Sequence[str], rows: Iterable[Row]) -> "Table":
        headers = list(headers)
        if not headers:
            raise InputError("CSV header is empty")
        width = len(headers) - 1
        timestamps = []
        cells = []
        for n, (timestamp, values) in enumerate(rows):
            values = [_as_text(v) for v in values]
            if len(values) != width:
                raise InputError(
                    f"row {n} has {len(values)} cells, expected {width}"
                )
            timestamps.append(timestamp)
            cells.append(values)
        frame = pd.DataFrame(
            cells,
            index=_normalize_index(timestamps, headers[0]),
            columns=range(width),
            dtype=object,
        )
        return cls(headers, frame)

    @property
    def header_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.frame)

    @property
    def value_headers(self) -> List[str]:
        return self.headers[1:]

    @property
    def timestamps(self) -> pd.DatetimeIndex:
        return self.frame.index

    def cell(self, row: int, col: int) -> str:
        """Text of value column `col` (0-based, timestamp excluded) at `row`."""
        return self.frame.iat[row, col]

    def column(self, col: int) -> pd.Series:
        return self.frame.iloc[:, col]

    def rows(self) -> Iterator[Row]:
        for timestamp, values in zip(self.frame.index, self.frame.itertuples(index=False, name=None)):
            yield Row(timestamp, list(values))

    def sorted(self) -> "Table":
        """Return a copy ordered by timestamp; equal timestamps keep file order."""
        return Table(self.headers, self.frame.sort_index(kind="mergesort"))

    def copy(self) -> "Table":
        return Table(self.headers, self.frame.copy())

    def __repr__(self) -> str:
        return f"Table(headers={self.headers!r}, rows={self.row_count})"
