from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .errors import PathResolutionError
from .flattening import flatten_node
from .io_utils import parse_document
from .paths import PathSegment, render_path
from .records import FieldRow, node_rows

logger = logging.getLogger(__name__)


def resolve_path(data: Any, path: Optional[Sequence[PathSegment]]) -> Any:
    """Walk `path` from the root of `data` and return the node it points at.

    Integer segments index lists, string segments index dicts. Raises
    PathResolutionError on the first segment that cannot be followed.
    """
    current = data
    for depth, seg in enumerate(path or ()):
        if isinstance(current, list) and isinstance(seg, int) and not isinstance(seg, bool):
            if 0 <= seg < len(current):
                current = current[seg]
                continue
        elif isinstance(current, dict) and isinstance(seg, str):
            if seg in current:
                current = current[seg]
                continue
        logger.debug("Path %s broke at segment %d (%r)", render_path(path), depth, seg)
        raise PathResolutionError(
            f"No node at {render_path(path)}: cannot follow segment {seg!r}",
            path=path,
        )
    return current


def iter_node_paths(data: Any, parent: Tuple[PathSegment, ...] = ()) -> Iterator[Tuple[PathSegment, ...]]:
    """Yield the path of every object node in document order, root first."""
    if isinstance(data, dict):
        yield parent
        for k, v in data.items():
            yield from iter_node_paths(v, parent + (k,))
    elif isinstance(data, list):
        for i, item in enumerate(data):
            yield from iter_node_paths(item, parent + (i,))


@dataclass
class SelectedNode:
    """The node currently picked in the tree, with its display texts."""

    path: Tuple[PathSegment, ...]
    rows: List[FieldRow] = field(default_factory=list)

    @property
    def content(self) -> str:
        return flatten_node(self.rows)

    @property
    def json_path(self) -> str:
        return render_path(self.path)


def select_node(document: str, path: Optional[Sequence[PathSegment]]) -> SelectedNode:
    data = parse_document(document)
    node = resolve_path(data, path)
    return SelectedNode(path=tuple(path or ()), rows=node_rows(node))
