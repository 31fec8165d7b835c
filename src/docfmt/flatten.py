"""
Path Flattener.

Converts a nested Document into an ordered mapping from dot-joined paths to
scalar values:

    {"a": {"b": 1, "c": [2, 3]}}  ->  {"a.b": 1, "a.c.0": 2, "a.c.1": 3}

Entries appear in depth-first document order. Values are passed through
verbatim, without type coercion.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Union

from docfmt.errors import MalformedDocument
from docfmt.model import Document, Kind, ScalarValue

Path = str

SEPARATOR = "."


def join_path(prefix: Optional[Path], key: Union[str, int]) -> Path:
    """Append one key or index to a path; a None prefix means the root."""
    if prefix is None:
        return str(key)
    return f"{prefix}{SEPARATOR}{key}"


def flatten(doc: Document) -> Dict[Path, ScalarValue]:
    """
    Flatten a Document into path -> scalar entries.

    A scalar root produces a single entry under the empty path. Empty
    containers hold no leaf and produce no entry.

    Raises:
        MalformedDocument: If two leaves resolve to the same path, e.g. a key
            "a.b" next to {"a": {"b": ...}}
    """
    result: Dict[Path, ScalarValue] = {}
    # Explicit stack keeps deep documents off the interpreter stack
    stack: List[Tuple[Optional[Path], Document]] = [(None, doc)]

    while stack:
        path, node = stack.pop()
        if node.kind is Kind.SCALAR:
            key = "" if path is None else path
            if key in result:
                raise MalformedDocument(f"Path collision while flattening: {key!r}")
            result[key] = node.value
            continue
        children = [(join_path(path, key), child) for key, child in node.children()]
        stack.extend(reversed(children))

    return result
