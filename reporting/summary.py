from __future__ import annotations
from typing import Dict, Any
from engine.form_engine import BreakdownForm

def form_summary(form: BreakdownForm) -> Dict[str, Any]:
    return {
        key: {
            "label": form.category(key).label,
            "values": form.values(key),
            "total": form.sets[key].total(),
            "complete": result.complete,
            "valid": result.valid,
            "message": result.message,
        }
        for key, result in form.results.items()
    }
