from __future__ import annotations
from typing import Any, Dict

def get_path(record: Dict[str, Any], path: str, default: Any = None) -> Any:
    node: Any = record
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


def set_path(record: Dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    node = record
    for part in parts[:-1]:
        child = node.get(part)
        if not isinstance(child, dict):
            child = {}
            node[part] = child
        node = child
    node[parts[-1]] = value


def clear_path(record: Dict[str, Any], path: str) -> None:
    parts = path.split(".")
    parent = get_path(record, ".".join(parts[:-1])) if len(parts) > 1 else record
    if isinstance(parent, dict):
        parent.pop(parts[-1], None)
