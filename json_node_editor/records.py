from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

COMPOSITE_TYPES = ("array", "object")


@dataclass(frozen=True)
class FieldRow:
    """One child of a node as shown in the flat view.

    `key` is None only when the node itself is a bare scalar.
    """

    key: Optional[str]
    value: Any
    type: str

    @property
    def is_composite(self) -> bool:
        return self.type in COMPOSITE_TYPES


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):  # bool is a subclass of int
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def node_rows(node: Any) -> List[FieldRow]:
    """Flatten a node into FieldRows, one per direct child.

    - dict  -> one keyed row per entry
    - list  -> one row per element, keyed by its index
    - other -> a single unkeyed row holding the scalar itself
    """
    if isinstance(node, dict):
        return [FieldRow(str(k), v, json_type_name(v)) for k, v in node.items()]
    if isinstance(node, list):
        return [FieldRow(str(i), v, json_type_name(v)) for i, v in enumerate(node)]
    return [FieldRow(None, node, json_type_name(node))]


def editable_fields(rows: Optional[Iterable[FieldRow]]) -> Dict[str, Any]:
    """Initial edit buffer for a node: keyed scalar rows only."""
    fields: Dict[str, Any] = {}
    for row in rows or []:
        if row.is_composite or not row.key:
            continue
        fields[row.key] = row.value
    return fields
