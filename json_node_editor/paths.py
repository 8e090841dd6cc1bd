from __future__ import annotations

from typing import List, Optional, Sequence, Union

PathSegment = Union[int, str]


def format_path_segment(segment: PathSegment) -> str:
    """Render one segment for bracket notation.

    Integer segments are bare digits. String segments are wrapped in double
    quotes as they are: quotes, brackets and backslashes inside a key are not
    escaped, so the result is a display aid and not a guaranteed-parseable
    JSONPath query.
    """
    if isinstance(segment, int) and not isinstance(segment, bool):
        return str(segment)
    return f'"{segment}"'


def render_path(path: Optional[Sequence[PathSegment]]) -> str:
    """Render a structural path as `$[...]` JSONPath-style notation.

    >>> render_path([])
    '$'
    >>> render_path(["customer", 0, "name"])
    '$["customer"][0]["name"]'
    """
    if not path:
        return "$"
    segments: List[str] = [format_path_segment(seg) for seg in path]
    return "$[" + "][".join(segments) + "]"
