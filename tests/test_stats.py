"""Tests for per-column statistics."""

import math

import pandas as pd

from model import Row, Table
from stats import STAT_LABELS, column_statistics, compute_statistics, statistics_frame


def cells(*values):
    return pd.Series(list(values), dtype=object)


def test_basic_statistics():
    stats = column_statistics(cells("4", "1", "", "3", "1"))
    assert stats.average == 2.25
    assert stats.median == 2.0
    assert stats.minimum == 1.0
    assert stats.maximum == 4.0
    assert stats.mode == 1.0
    assert stats.non_numerical_detected is False


def test_median_odd_count():
    assert column_statistics(cells("9", "1", "5")).median == 5.0


def test_mode_tie_goes_to_smallest_value():
    assert column_statistics(cells("7", "3", "7", "3", "5")).mode == 3.0


def test_keywords_flagged_but_collection_continues():
    stats = column_statistics(cells("2", "BLOCK", "4"))
    assert stats.non_numerical_detected is True
    assert stats.average == 3.0


def test_all_keyword_column_is_nan():
    """A column of only 'BLOCK' has no numeric values at all."""
    stats = column_statistics(cells("BLOCK", "BLOCK", "BLOCK"))
    assert stats.non_numerical_detected is True
    for value in (stats.average, stats.median, stats.minimum, stats.maximum, stats.mode):
        assert math.isnan(value)


def test_blank_only_column_is_not_flagged():
    stats = column_statistics(cells("", " ", ""))
    assert stats.non_numerical_detected is False
    assert math.isnan(stats.average)


def test_compute_statistics_follows_column_order():
    start = pd.Timestamp("2025-01-01T00:00:00Z")
    table = Table.from_rows(
        ["t", "a", "b"],
        [Row(start, ["1", "x"]), Row(start + pd.Timedelta(hours=1), ["3", "10"])],
    )
    stats = compute_statistics(table)
    assert [s.average for s in stats] == [2.0, 10.0]
    assert [s.non_numerical_detected for s in stats] == [False, True]

    frame = statistics_frame(stats, table.value_headers)
    assert list(frame.index) == list(STAT_LABELS)
    assert list(frame.columns) == ["a", "b"]
    assert frame.loc["Maximum", "a"] == 3.0
    assert frame.loc["NonNumericalDetected", "b"]
    assert not frame.loc["NonNumericalDetected", "a"]
