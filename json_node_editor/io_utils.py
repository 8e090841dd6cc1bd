from __future__ import annotations

import json
from typing import Any

from .errors import ParseError, SerializeError


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_document(text: str) -> Any:
    """Parse document text, rejecting NaN/Infinity like a strict JSON parser."""
    if not isinstance(text, (str, bytes, bytearray)):
        raise ParseError(f"Expected JSON text, got {type(text).__name__}")
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ParseError(f"Invalid JSON: {exc}") from exc


def dump_document(data: Any) -> str:
    """Serialize a whole document in canonical form (2-space indent, key order kept)."""
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializeError(f"Cannot serialize document: {exc}") from exc


def read_json_text(file_obj) -> str:
    """Read raw JSON text from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return content

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
