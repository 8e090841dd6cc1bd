from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any, Dict, Optional

from .patching import apply_field_updates
from .records import editable_fields
from .selection import SelectedNode, select_node

logger = logging.getLogger(__name__)


class SessionState(Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    SAVED = "saved"
    CANCELLED = "cancelled"


# SAVED and CANCELLED are terminal for one edit and fall back to viewing.
_VIEW_STATES = (SessionState.VIEWING, SessionState.SAVED, SessionState.CANCELLED)


class SessionStateError(RuntimeError):
    pass


def coerce_field_value(text: Any, type_tag: Optional[str]) -> Any:
    """Convert text typed into the editor back to the field's JSON type.

    Text that does not read as the original type is kept as a string.
    """
    if not isinstance(text, str):
        return text
    raw = text.strip()

    if type_tag == "number":
        try:
            return int(raw)
        except ValueError:
            pass
        try:
            number = float(raw)
        except ValueError:
            return text
        return number if math.isfinite(number) else text

    if type_tag == "boolean":
        lowered = raw.lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        return text

    if type_tag == "null" and raw in ("", "null"):
        return None

    return text


class EditSession:
    """Edit lifecycle of one selected node.

    viewing -> editing -> saved | cancelled, and back to editing on the next
    begin_edit(). The session never holds the document itself; save() takes
    the current text and returns the replacement.
    """

    def __init__(self, node: SelectedNode):
        self.node = node
        self.state = SessionState.VIEWING
        self.buffer: Dict[str, Any] = editable_fields(node.rows)

    @classmethod
    def open(cls, document: str, path) -> "EditSession":
        return cls(select_node(document, path))

    @property
    def is_editing(self) -> bool:
        return self.state is SessionState.EDITING

    @property
    def field_types(self) -> Dict[str, str]:
        return {row.key: row.type for row in self.node.rows if row.key and not row.is_composite}

    def _require(self, *states: SessionState):
        if self.state not in states:
            names = ", ".join(s.value for s in states)
            raise SessionStateError(f"Session is {self.state.value}; expected one of: {names}")

    def begin_edit(self):
        self._require(*_VIEW_STATES)
        self.buffer = editable_fields(self.node.rows)
        self.state = SessionState.EDITING

    def set_field(self, key: str, value: Any):
        self._require(SessionState.EDITING)
        if key not in self.buffer:
            raise KeyError(key)
        self.buffer[key] = coerce_field_value(value, self.field_types.get(key))

    def cancel(self):
        self._require(SessionState.EDITING)
        self.buffer = editable_fields(self.node.rows)
        self.state = SessionState.CANCELLED

    def save(self, document: str) -> str:
        """Apply the edit buffer to `document` and return the new text.

        On MutationError the session stays in editing with its buffer intact.
        """
        self._require(SessionState.EDITING)
        updated = apply_field_updates(document, self.node.path, self.buffer)
        self.node = select_node(updated, self.node.path)
        self.buffer = editable_fields(self.node.rows)
        self.state = SessionState.SAVED
        logger.debug("Saved %s", self.node.json_path)
        return updated
