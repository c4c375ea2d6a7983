"""Percentage allocation engine.

Validates that a breakdown adds up to 100% and redistributes the deviation
across the populated slots when the user asks for it.

Redistribution is a single pass: every filled slot receives the same share of
the deviation and is then clamped to [0, 100]. When clamping kicks in the
resulting total can miss 100; no corrective second pass is made.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from breakdown.allocation_set import (
    TARGET_TOTAL,
    TOLERANCE,
    AllocationSet,
    clamp,
    round1,
)
from breakdown.category import BreakdownCategory

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a breakdown check."""

    complete: bool
    valid: bool
    message: Optional[str] = None


def format_total(total: float) -> str:
    """Render a total the way the listing forms display numbers.

    Integral values drop the decimal point (30), plain decimal notation is
    used from 1e-6 up to 1e21 (0.00001), exponent notation outside that
    range (1e-7, 1e+21).
    """
    if math.isnan(total):
        return "NaN"
    if math.isinf(total):
        return "Infinity" if total > 0 else "-Infinity"
    if total == int(total) and abs(total) < 1e21:
        return str(int(total))
    text = repr(float(total))
    if "e" not in text:
        return text
    if 1e-6 <= abs(total) < 1e21:
        return format(Decimal(text), "f")
    mantissa, exp = text.split("e")
    return f"{mantissa}e{int(exp):+d}"


def get_total(allocation: AllocationSet) -> float:
    return allocation.total()


def check_validity(allocation: AllocationSet, label: str) -> ValidationResult:
    """Check a breakdown against the 100% rule.

    Incomplete sets are never flagged; the message only appears once every
    slot holds a value and the total is off by more than the tolerance.
    """
    if not allocation.is_complete():
        return ValidationResult(complete=False, valid=True)
    total = allocation.total()
    if abs(total - TARGET_TOTAL) <= TOLERANCE:
        return ValidationResult(complete=True, valid=True)
    return ValidationResult(
        complete=True,
        valid=False,
        message=f"{label} should add up to 100%. Current total: {format_total(total)}%",
    )


def auto_distribute(allocation: AllocationSet) -> bool:
    """Spread the deviation from 100 across filled slots, in place.

    Returns True when any slot was written.
    """
    values = {n: (v if v is not None else 0.0) for n, v in allocation.slots.items()}
    total = sum(values.values())
    if abs(total - TARGET_TOTAL) <= TOLERANCE:
        return False

    filled = [n for n, v in values.items() if v > 0]
    if not filled:
        even = round1(TARGET_TOTAL / len(values)) if values else 0.0
        for name in values:
            allocation.slots[name] = even
        _log.debug("auto_distribute: empty set, even split %s", even)
        return bool(values)

    adjustment = (TARGET_TOTAL - total) / len(filled)
    for name in filled:
        allocation.slots[name] = round1(clamp(values[name] + adjustment))
    _log.debug(
        "auto_distribute: total=%s filled=%s adjustment=%s -> %s",
        total, filled, adjustment, allocation.total(),
    )
    return True


@dataclass(frozen=True)
class PercentageAllocator:
    """Allocator bound to one breakdown category."""

    category: BreakdownCategory

    def new_set(self, default: Optional[float] = 0.0) -> AllocationSet:
        return AllocationSet.create(self.category.slots, default=default)

    def get_total(self, allocation: AllocationSet) -> float:
        return get_total(allocation)

    def check_validity(self, allocation: AllocationSet) -> ValidationResult:
        return check_validity(allocation, self.category.label)

    def auto_distribute(self, allocation: AllocationSet) -> AllocationSet:
        auto_distribute(allocation)
        return allocation
