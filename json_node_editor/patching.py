from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from .errors import NotObjectError
from .io_utils import dump_document, parse_document
from .paths import PathSegment, render_path
from .selection import resolve_path

logger = logging.getLogger(__name__)


def merge_fields(target: Any, updates: Optional[Mapping[str, Any]], path: Sequence[PathSegment] = ()) -> Any:
    """Set each update key on `target` in place.

    Existing keys keep their position in the object, new keys are appended.
    """
    if not isinstance(target, dict):
        raise NotObjectError(
            f"Node at {render_path(path)} is a {type(target).__name__}, not an object",
            path=path,
        )
    for key, value in (updates or {}).items():
        target[str(key)] = value
    return target


def apply_field_updates(
    document: str,
    path: Optional[Sequence[PathSegment]],
    updates: Optional[Mapping[str, Any]],
) -> str:
    """Return `document` with `updates` merged into the object at `path`.

    The whole document is re-serialized with 2-space indentation. Raises a
    MutationError subclass (ParseError, PathResolutionError, NotObjectError,
    SerializeError) and produces no output when any step fails.
    """
    path = tuple(path or ())
    data = parse_document(document)
    target = resolve_path(data, path)
    merge_fields(target, updates, path)
    text = dump_document(data)
    logger.debug("Merged %d field(s) into %s", len(updates or {}), render_path(path))
    return text
