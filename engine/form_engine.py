"""Listing form state for percentage breakdowns.

Holds one allocation set per breakdown category and re-validates it
synchronously after every write, the way the listing editor re-checks the
traffic and revenue breakdowns on each keystroke.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from breakdown.allocation_set import AllocationSet
from breakdown.category import BreakdownCategory
from engine.allocator import PercentageAllocator, ValidationResult
from listings.listing import clear_path, get_path, set_path

_log = logging.getLogger(__name__)

Listener = Callable[[str, ValidationResult], None]


class BreakdownForm:
    """Form-side owner of the breakdowns of a single listing."""

    def __init__(self, categories: Iterable[BreakdownCategory], default: Optional[float] = 0.0):
        self.allocators: Dict[str, PercentageAllocator] = {}
        self.sets: Dict[str, AllocationSet] = {}
        self.results: Dict[str, ValidationResult] = {}
        self._listeners: List[Listener] = []
        for cat in categories:
            allocator = PercentageAllocator(cat)
            self.allocators[cat.key] = allocator
            self.sets[cat.key] = allocator.new_set(default)
            self.results[cat.key] = allocator.check_validity(self.sets[cat.key])

    def category(self, key: str) -> BreakdownCategory:
        if key not in self.allocators:
            raise KeyError(f"Unknown breakdown category: {key}")
        return self.allocators[key].category

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def revalidate(self, key: str) -> ValidationResult:
        cat = self.category(key)
        result = self.allocators[key].check_validity(self.sets[key])
        self.results[key] = result
        _log.debug("revalidate %s: total=%s valid=%s", key, self.sets[key].total(), result.valid)
        for listener in list(self._listeners):
            listener(cat.key, result)
        return result

    def set_value(self, key: str, slot: str, raw: Any) -> ValidationResult:
        self.category(key)
        self.sets[key].set(slot, raw)
        return self.revalidate(key)

    def set_values(self, key: str, values: Dict[str, Any]) -> ValidationResult:
        self.category(key)
        self.sets[key].update(values)
        return self.revalidate(key)

    def values(self, key: str) -> Dict[str, Optional[float]]:
        self.category(key)
        return self.sets[key].values()

    def error(self, key: str) -> Optional[str]:
        self.category(key)
        return self.results[key].message

    def errors(self) -> Dict[str, str]:
        """Error messages keyed by their location in the listing record."""
        return {
            self.allocators[k].category.error_path: r.message
            for k, r in self.results.items()
            if r.message
        }

    def auto_distribute(self, key: str) -> Optional[str]:
        """Run auto-distribution for one category.

        Returns the category's success message, or None when the breakdown
        already added up to 100 and nothing was written.
        """
        cat = self.category(key)
        before = self.sets[key].values()
        self.allocators[key].auto_distribute(self.sets[key])
        if self.sets[key].values() == before:
            return None
        self.revalidate(key)
        return cat.success_message

    def load(self, record: Dict[str, Any]) -> None:
        """Populate every breakdown from a nested listing record."""
        for key, allocator in self.allocators.items():
            cat = allocator.category
            self.set_values(key, {s: get_path(record, cat.slot_path(s)) for s in cat.slots})

    def dump(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Write values and total errors back into a listing record."""
        for key, allocator in self.allocators.items():
            cat = allocator.category
            for slot, value in self.sets[key].values().items():
                set_path(record, cat.slot_path(slot), value)
            message = self.results[key].message
            if message:
                set_path(record, cat.error_path, message)
            else:
                clear_path(record, cat.error_path)
        return record
