from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Tuple


class BreakdownConfigError(ValueError):
    """Raised when a breakdown category is declared incorrectly."""

    pass


@dataclass(frozen=True)
class BreakdownCategory:
    key: str
    label: str  # used in the "should add up to 100%" message
    slots: Tuple[str, ...]
    path: str  # dotted location of the slots inside a listing record
    success_message: str = ""

    @property
    def error_path(self) -> str:
        return f"{self.path}.totalPercentageError"

    def slot_path(self, slot: str) -> str:
        return f"{self.path}.{slot}"


TRAFFIC_SOURCES = BreakdownCategory(
    key="traffic",
    label="Traffic source percentages",
    slots=(
        "organicTrafficPercentage",
        "directTrafficPercentage",
        "referralTrafficPercentage",
        "socialTrafficPercentage",
        "otherTrafficPercentage",
    ),
    path="digitalAssetDetails.traffic",
    success_message="Traffic percentages adjusted to total 100%",
)

REVENUE_SOURCES = BreakdownCategory(
    key="revenue",
    label="Revenue sources",
    slots=("advertising", "affiliates", "productSales", "subscriptions", "other"),
    path="digitalAssetDetails.financials.revenueBreakdown",
    success_message="Revenue percentages adjusted to total 100%",
)

BUILTIN_CATEGORIES: Dict[str, BreakdownCategory] = {
    TRAFFIC_SOURCES.key: TRAFFIC_SOURCES,
    REVENUE_SOURCES.key: REVENUE_SOURCES,
}


def category_from_dict(key: str, info: Dict[str, Any]) -> BreakdownCategory:
    """Build a category from its YAML declaration."""
    slots = tuple(str(s) for s in (info.get("slots") or []))
    if not slots:
        raise BreakdownConfigError(f"Category {key!r} declares no slots")
    if any(not s.strip() for s in slots):
        raise BreakdownConfigError(f"Category {key!r} has an empty slot name")
    if len(set(slots)) != len(slots):
        raise BreakdownConfigError(f"Category {key!r} has duplicate slot names: {list(slots)}")
    path = info.get("path")
    if not path:
        raise BreakdownConfigError(f"Category {key!r} declares no path")
    label = info.get("label") or key
    return BreakdownCategory(
        key=key,
        label=str(label),
        slots=slots,
        path=str(path),
        success_message=str(info.get("success_message") or f"{label} adjusted to total 100%"),
    )
