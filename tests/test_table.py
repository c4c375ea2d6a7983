"""Tests for batch breakdown reports."""
from __future__ import annotations

import math

import pandas as pd
import pytest

from breakdown.category import REVENUE_SOURCES
from reporting.table import REPORT_COLUMNS, breakdown_report, distribute_frame


def make_frame() -> pd.DataFrame:
    return pd.DataFrame({
        "listing_id": ["a", "b", "c"],
        "advertising": [60, 10, None],
        "affiliates": [40, 20, 50],
        "productSales": [0, 0, None],
        "subscriptions": [0, 0, None],
        "other": [0, 0, None],
    })


class TestBreakdownReport:
    """Report rows."""

    def test_columns_and_flags(self):
        report = breakdown_report(make_frame(), REVENUE_SOURCES)

        assert list(report.columns) == REPORT_COLUMNS
        assert list(report["listing_id"]) == ["a", "b", "c"]
        assert list(report["valid"]) == [True, False, True]
        assert list(report["complete"]) == [True, True, False]
        assert report.loc[1, "message"] == "Revenue sources should add up to 100%. Current total: 30%"

    def test_missing_column(self):
        frame = make_frame().drop(columns=["other"])
        with pytest.raises(KeyError):
            breakdown_report(frame, REVENUE_SOURCES)


class TestDistributeFrame:
    """Row-wise auto-distribution."""

    def test_rows_adjusted(self):
        out = distribute_frame(make_frame(), REVENUE_SOURCES)

        assert out.loc[1, "advertising"] == 45.0
        assert out.loc[1, "affiliates"] == 55.0
        assert out.loc[0, "advertising"] == 60

    def test_partial_row_keeps_unset_cells(self):
        out = distribute_frame(make_frame(), REVENUE_SOURCES)

        assert out.loc[2, "affiliates"] == 100.0
        assert out.loc[2, "advertising"] is None or math.isnan(out.loc[2, "advertising"])

    def test_input_not_mutated(self):
        frame = make_frame()
        distribute_frame(frame, REVENUE_SOURCES)
        assert frame.loc[1, "advertising"] == 10
