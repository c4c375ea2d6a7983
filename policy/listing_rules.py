from __future__ import annotations
import math
from typing import Any, Dict, Iterable, List
from breakdown.allocation_set import MAX_PCT, MIN_PCT, AllocationSet
from breakdown.category import BreakdownCategory
from engine.allocator import check_validity
from listings.listing import get_path

def slot_issue(slot: str, raw: Any) -> str | None:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return None
    try:
        v = float(raw)
    except (TypeError, ValueError):
        return f"{slot}: Must be a number"
    if math.isnan(v):
        return f"{slot}: Must be a number"
    if v < MIN_PCT or v > MAX_PCT:
        return f"{slot}: Must be between {MIN_PCT:g}% and {MAX_PCT:g}%"
    return None

def validate_breakdown(record: Dict[str, Any], cat: BreakdownCategory) -> List[str]:
    issues: List[str] = []
    allocation = AllocationSet.create(cat.slots, default=None)
    for slot in cat.slots:
        raw = get_path(record, cat.slot_path(slot))
        issue = slot_issue(slot, raw)
        if issue:
            issues.append(issue)
        allocation.set(slot, raw)
    result = check_validity(allocation, cat.label)
    if result.message:
        issues.append(result.message)
    return issues

def validate_breakdowns(record: Dict[str, Any], categories: Iterable[BreakdownCategory]) -> List[str]:
    issues: List[str] = []
    for cat in categories:
        issues.extend(validate_breakdown(record, cat))
    return issues
