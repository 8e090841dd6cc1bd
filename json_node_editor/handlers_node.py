from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, List, Optional, Tuple

import gradio as gr

from .errors import MutationError
from .flattening import format_scalar
from .io_utils import parse_document, read_json_text
from .paths import render_path
from .selection import iter_node_paths
from .session import EditSession, SessionStateError

logger = logging.getLogger(__name__)


def encode_path_choice(path) -> str:
    return json.dumps(list(path), ensure_ascii=False)


def decode_path_choice(value: Optional[str]) -> Tuple[Any, ...]:
    if not value:
        return ()
    return tuple(json.loads(value))


def build_path_choices(data: Any) -> List[Tuple[str, str]]:
    """Dropdown choices for every object node: (display path, encoded path)."""
    return [(render_path(p), encode_path_choice(p)) for p in iter_node_paths(data)]


def fields_table_rows(session: Optional[EditSession]) -> List[List[str]]:
    if session is None:
        return []
    return [[key, format_scalar(value)] for key, value in session.buffer.items()]


def node_view(session: Optional[EditSession], status: str):
    """Outputs shared by every handler that (re)draws the node panel."""
    editing = session is not None and session.is_editing
    content = session.node.content if session is not None else ""
    json_path = session.node.json_path if session is not None else ""
    return (
        session,
        content,
        json_path,
        fields_table_rows(session),
        gr.update(visible=not editing),
        gr.update(visible=editing),
        status,
    )


def prepare_document(text: Optional[str]):
    empty = (None, gr.update(choices=[], value=None))
    if text is None or not text.strip():
        return empty + ("No document loaded.",)

    try:
        data = parse_document(text)
    except MutationError as e:
        return empty + (f"Error parsing JSON: {str(e)}",)

    choices = build_path_choices(data)
    if not choices:
        return text, gr.update(choices=[], value=None), "Loaded, but the document has no object nodes to edit."
    default = choices[0][1]
    return text, gr.update(choices=choices, value=default), f"Successfully loaded. Found {len(choices)} object nodes."


def load_document_file(file_obj):
    if file_obj is None:
        return prepare_document(None)
    try:
        text = read_json_text(file_obj)
    except (OSError, ValueError) as e:
        return None, gr.update(choices=[], value=None), f"Error reading file: {str(e)}"
    return prepare_document(text)


def load_document_text(text):
    return prepare_document(text)


def select_node_handler(document, path_value):
    if document is None or not path_value:
        return node_view(None, "")
    try:
        session = EditSession.open(document, decode_path_choice(path_value))
    except MutationError as e:
        return node_view(None, f"Cannot open node: {e.reason}")
    return node_view(session, "")


def begin_edit_handler(session):
    if session is None:
        return node_view(None, "Select a node first.")
    try:
        session.begin_edit()
    except SessionStateError as e:
        return node_view(session, str(e))
    if not session.buffer:
        session.cancel()
        return node_view(session, "This node has no scalar fields to edit.")
    return node_view(session, "")


def cancel_edit_handler(session):
    if session is None:
        return node_view(None, "")
    try:
        session.cancel()
    except SessionStateError as e:
        return node_view(session, str(e))
    return node_view(session, "Changes discarded.")


def write_document_file(document: str, file_name: Optional[str]) -> str:
    output_name = (file_name or "edited").strip() or "edited"
    if not output_name.lower().endswith('.json'):
        output_name += '.json'
    path = os.path.join(tempfile.gettempdir(), output_name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(document)
    return path


def save_edit_handler(document, session, table_rows, file_name):
    """Returns the new document text, a download path and the node view.

    On failure the document is returned unchanged and the session stays in
    editing so the user can correct the values and resubmit.
    """
    if document is None or session is None:
        return (document, None) + node_view(session, "Nothing to save.")

    try:
        for row in table_rows or []:
            if not row or row[0] in (None, ""):
                continue
            session.set_field(str(row[0]), row[1] if len(row) > 1 else "")
        updated = session.save(document)
    except MutationError as e:
        logger.warning("Save failed at %s: %s", session.node.json_path, e)
        return (document, None) + node_view(session, f"Failed to save changes: {e.reason}")
    except (SessionStateError, KeyError) as e:
        return (document, None) + node_view(session, f"Failed to save changes: {str(e)}")

    try:
        download = write_document_file(updated, file_name)
    except OSError as e:
        return (updated, None) + node_view(session, f"Saved, but writing the download failed: {str(e)}")
    return (updated, download) + node_view(session, "Changes saved successfully")
