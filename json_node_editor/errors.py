from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple


class MutationError(ValueError):
    """Raised when a field update cannot be applied to a document.

    `reason` is a short, stable description of the failure kind that UI code
    can show as is. The document the caller holds is never modified.
    """

    reason = "mutation failed"

    def __init__(self, message: Optional[str] = None, path: Optional[Sequence[Any]] = None):
        self.path: Optional[Tuple[Any, ...]] = tuple(path) if path is not None else None
        super().__init__(message or self.reason)


class ParseError(MutationError):
    reason = "parse failed"


class PathResolutionError(MutationError):
    reason = "path not found"


class NotObjectError(MutationError):
    reason = "target is not an object"


class SerializeError(MutationError):
    reason = "serialize failed"
