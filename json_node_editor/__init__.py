"""Core logic for JSON Node Editor.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- render structural paths as `$[...]` JSONPath notation
- flatten a node's fields into a compact display form
- merge scalar field updates into the object at a path
"""

from .errors import MutationError, NotObjectError, ParseError, PathResolutionError, SerializeError
from .flattening import flatten_node
from .paths import render_path
from .patching import apply_field_updates
from .records import FieldRow

__all__ = [
    "FieldRow",
    "MutationError",
    "NotObjectError",
    "ParseError",
    "PathResolutionError",
    "SerializeError",
    "apply_field_updates",
    "flatten_node",
    "render_path",
]
