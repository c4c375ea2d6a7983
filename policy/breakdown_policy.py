from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List
from breakdown.category import BUILTIN_CATEGORIES, BreakdownCategory, BreakdownConfigError, category_from_dict

@dataclass(frozen=True)
class BreakdownPolicy:
    raw: Dict[str, Any]

    @property
    def default_value(self) -> float | None:
        v = (self.raw.get("form") or {}).get("default_value", 0.0)
        return None if v is None else float(v)

    @property
    def categories(self) -> Dict[str, BreakdownCategory]:
        cats = dict(BUILTIN_CATEGORIES)
        declared = self.raw.get("categories") or {}
        if not isinstance(declared, dict):
            raise BreakdownConfigError("'categories' must be a mapping of key -> definition")
        for key, info in declared.items():
            if not isinstance(info, dict):
                raise BreakdownConfigError(f"Category {key!r} must be a mapping")
            cats[str(key)] = category_from_dict(str(key), info)
        return cats

    def select(self, keys: List[str] | None = None) -> List[BreakdownCategory]:
        cats = self.categories
        if not keys:
            return list(cats.values())
        missing = [k for k in keys if k not in cats]
        if missing:
            raise KeyError(f"Unknown breakdown categories: {missing}")
        return [cats[k] for k in keys]
