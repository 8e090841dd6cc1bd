from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

from .records import FieldRow


def format_scalar(value: Any) -> str:
    """Text of a bare scalar: strings unquoted, everything else as JSON."""
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def flatten_node(rows: Optional[Sequence[FieldRow]]) -> str:
    """Normalize a node's rows into the text shown in the content panel.

    Array and object children are left out; only scalar fields are inlined.
    """
    if not rows:
        return "{}"
    if len(rows) == 1 and not rows[0].key:
        return format_scalar(rows[0].value)

    obj: Dict[str, Any] = {}
    for row in rows:
        if row.is_composite:
            continue
        if row.key:
            obj[row.key] = row.value
    return json.dumps(obj, indent=2, ensure_ascii=False)
