"""Batch breakdown reports.

Checks many listings at once from a flat table where each row is one listing
and each slot of a breakdown category is one column.
"""
from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd

from breakdown.allocation_set import AllocationSet
from breakdown.category import BreakdownCategory
from engine.allocator import auto_distribute, check_validity

REPORT_COLUMNS = ["listing_id", "total", "complete", "valid", "message"]


def _row_set(row: pd.Series, cat: BreakdownCategory) -> AllocationSet:
    allocation = AllocationSet.create(cat.slots, default=None)
    for slot in cat.slots:
        raw = row.get(slot)
        # empty CSV cells arrive as NaN and mean "unset"
        allocation.set(slot, None if pd.isna(raw) else raw)
    return allocation


def missing_columns(frame: pd.DataFrame, cat: BreakdownCategory) -> List[str]:
    return [s for s in cat.slots if s not in frame.columns]


def breakdown_report(frame: pd.DataFrame, cat: BreakdownCategory) -> pd.DataFrame:
    """One report row per listing: total, completeness, validity and message.

    Args:
        frame: Listings table with one column per slot of ``cat``. An optional
            ``listing_id`` column labels the rows; the index is used otherwise.
        cat: Breakdown category to check.

    Returns:
        DataFrame with the columns in REPORT_COLUMNS.
    """
    missing = missing_columns(frame, cat)
    if missing:
        raise KeyError(f"Missing columns for {cat.key}: {missing}")

    rows: List[Dict[str, Any]] = []
    for idx, row in frame.iterrows():
        allocation = _row_set(row, cat)
        result = check_validity(allocation, cat.label)
        listing_id = row["listing_id"] if "listing_id" in frame.columns else idx
        rows.append({
            "listing_id": listing_id,
            "total": allocation.total(),
            "complete": result.complete,
            "valid": result.valid,
            "message": result.message or "",
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def distribute_frame(frame: pd.DataFrame, cat: BreakdownCategory) -> pd.DataFrame:
    """Return a copy of ``frame`` with every row auto-distributed."""
    missing = missing_columns(frame, cat)
    if missing:
        raise KeyError(f"Missing columns for {cat.key}: {missing}")

    out = frame.copy()
    slots = list(cat.slots)
    out[slots] = out[slots].astype(object)
    for idx, row in frame.iterrows():
        allocation = _row_set(row, cat)
        if auto_distribute(allocation):
            for slot, value in allocation.values().items():
                out.at[idx, slot] = value
    return out
