"""Percentage allocation sets.

An allocation set is a fixed group of named percentage slots (for example the
five traffic sources of a digital asset) whose values live in [0, 100] and are
expected to add up to 100.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, Optional

TOLERANCE = 0.01  # percentage points
TARGET_TOTAL = 100.0
MIN_PCT = 0.0
MAX_PCT = 100.0

SlotValue = Optional[float]


def clamp(value: float, lo: float = MIN_PCT, hi: float = MAX_PCT) -> float:
    return max(lo, min(hi, value))


def round1(value: float) -> float:
    """Round to one decimal place, half up on the exact binary value."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def coerce_percentage(raw: Any) -> SlotValue:
    """Turn raw form input into a slot value.

    None and blank strings mean the field is unset. Anything else is read as
    a number; NaN or unparseable input becomes 0.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == "":
            return None
    if isinstance(raw, bool):
        return float(raw)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(value):
        return 0.0
    return value


@dataclass
class AllocationSet:
    """Named percentage slots; the slot names never change after creation."""

    slots: Dict[str, SlotValue] = field(default_factory=dict)

    @classmethod
    def create(cls, names: Iterable[str], default: SlotValue = 0.0) -> "AllocationSet":
        names = list(names)
        if len(set(names)) != len(names):
            raise ValueError(f"Slot names must be unique, got {names}")
        value = coerce_percentage(default)
        if value is not None:
            value = clamp(value)
        return cls(slots={n: value for n in names})

    @property
    def names(self) -> list[str]:
        return list(self.slots)

    def get(self, name: str) -> SlotValue:
        return self.slots[name]

    def set(self, name: str, raw: Any) -> SlotValue:
        """Write a slot, clamping numeric input to [0, 100]."""
        if name not in self.slots:
            raise KeyError(f"Unknown slot: {name}")
        value = coerce_percentage(raw)
        if value is not None:
            value = clamp(value)
        self.slots[name] = value
        return value

    def update(self, values: Dict[str, Any]) -> None:
        for name, raw in values.items():
            self.set(name, raw)

    def total(self) -> float:
        return sum(v for v in self.slots.values() if v is not None)

    def is_complete(self) -> bool:
        return all(v is not None for v in self.slots.values())

    def is_valid(self) -> bool:
        return not self.is_complete() or abs(self.total() - TARGET_TOTAL) <= TOLERANCE

    def values(self) -> Dict[str, SlotValue]:
        return dict(self.slots)
