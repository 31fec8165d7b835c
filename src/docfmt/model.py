"""
Core Document Model

Defines the recursive value converted by every backend.

A Document is exactly one of:
    - Scalar   (str, int, float, bool or None)
    - Sequence (ordered, index-addressed children)
    - Mapping  (ordered, unique string keys)

ARCHITECTURAL RULE:
    Components branch on the `kind` tag, never on ad hoc "is this a list"
    checks. A Mapping whose keys look numeric stays a Mapping; it is never
    reinterpreted as a Sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, List, Optional, Set, Tuple, Union

from docfmt.errors import EncodingError, MalformedDocument, RecursionLimitExceeded


DEFAULT_MAX_DEPTH = 512

ScalarValue = Union[str, int, float, bool, None]


class Kind(Enum):
    """Tag identifying which variant a Document is."""
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


def _check_text(text: str) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as err:
        raise EncodingError(f"String {text!r} cannot be encoded as UTF-8: {err.reason}") from err
    return text


@dataclass(frozen=True)
class Scalar:
    """
    A leaf value.

    Properties:
        value: str, int, float, bool or None. Strings must be representable
            in UTF-8.
    """

    value: ScalarValue
    kind: ClassVar[Kind] = Kind.SCALAR

    def __post_init__(self) -> None:
        if self.value is not None and not isinstance(self.value, (str, int, float, bool)):
            raise MalformedDocument(f"Unsupported scalar type: {type(self.value).__name__}")
        if isinstance(self.value, str):
            _check_text(self.value)


@dataclass(frozen=True)
class Sequence:
    """
    An ordered list of Documents.

    Indices are 0-based positions, never meaningful keys.
    """

    items: Tuple["Document", ...] = ()
    kind: ClassVar[Kind] = Kind.SEQUENCE

    def __post_init__(self) -> None:
        for index, item in enumerate(self.items):
            if not is_document(item):
                raise MalformedDocument(f"Sequence item {index} is not a Document: {type(item).__name__}")

    def __len__(self) -> int:
        return len(self.items)

    def children(self) -> Iterator[Tuple[int, "Document"]]:
        """Yield (index, child) pairs in order."""
        return iter(enumerate(self.items))


@dataclass(frozen=True)
class Mapping:
    """
    An ordered collection of (key, Document) pairs.

    INVARIANTS:
        - Keys are strings
        - Keys are unique within one mapping
        - Insertion order is preserved
    """

    entries: Tuple[Tuple[str, "Document"], ...] = ()
    kind: ClassVar[Kind] = Kind.MAPPING

    def __post_init__(self) -> None:
        seen: Set[str] = set()
        for key, value in self.entries:
            if not isinstance(key, str):
                raise MalformedDocument(f"Mapping keys must be strings, got {type(key).__name__}")
            if not is_document(value):
                raise MalformedDocument(f"Value of key {key!r} is not a Document: {type(value).__name__}")
            if key in seen:
                raise MalformedDocument(f"Duplicate mapping key: {key!r}")
            _check_text(key)
            seen.add(key)

    def __len__(self) -> int:
        return len(self.entries)

    def children(self) -> Iterator[Tuple[str, "Document"]]:
        """Yield (key, child) pairs in insertion order."""
        return iter(self.entries)

    def keys(self) -> List[str]:
        return [key for key, _ in self.entries]

    def get(self, key: str) -> Optional["Document"]:
        for entry_key, value in self.entries:
            if entry_key == key:
                return value
        return None


Document = Union[Scalar, Sequence, Mapping]


def is_document(value: Any) -> bool:
    return isinstance(value, (Scalar, Sequence, Mapping))


def is_container(doc: Document) -> bool:
    return doc.kind is not Kind.SCALAR


def from_native(value: Any, max_depth: int = DEFAULT_MAX_DEPTH) -> Document:
    """
    Convert plain Python data into a Document.

    Containers are walked with an explicit stack, so the only bound on
    nesting is `max_depth`, never the interpreter's recursion limit.

    Args:
        value: dict / list / tuple / scalar data, an existing Document, or an
            object exposing ``to_array()``
        max_depth: Maximum container nesting accepted

    Returns:
        The equivalent Document

    Raises:
        MalformedDocument: On cycles, non-string keys or unsupported types
        EncodingError: On bytes that are not valid UTF-8 or unencodable text
        RecursionLimitExceeded: If nesting exceeds max_depth
    """
    value = _resolve(value)
    if is_document(value):
        return value

    active: Set[int] = set()
    stack: List[_Frame] = [_Frame.open(value, 0, max_depth, active)]

    while True:
        frame = stack[-1]
        pair = next(frame.pairs, None)
        if pair is not None:
            key, child = pair
            child = _resolve(child)
            if is_document(child):
                frame.built.append((key, child))
            else:
                frame.pending_key = key
                stack.append(_Frame.open(child, len(stack), max_depth, active))
            continue

        stack.pop()
        active.discard(id(frame.source))
        doc = frame.close()
        if not stack:
            return doc
        parent = stack[-1]
        parent.built.append((parent.pending_key, doc))


@dataclass
class _Frame:
    """One plain container being converted."""

    source: Any
    pairs: Iterator[Tuple[Any, Any]]
    is_mapping: bool
    built: List[Tuple[Any, Document]] = field(default_factory=list)
    pending_key: Any = None

    @classmethod
    def open(cls, value: Any, depth: int, max_depth: int, active: Set[int]) -> "_Frame":
        if depth >= max_depth:
            raise RecursionLimitExceeded(max_depth)
        if id(value) in active:
            raise MalformedDocument("Document contains a cycle")
        active.add(id(value))
        if isinstance(value, dict):
            pairs = ((_normalize_key(key), child) for key, child in value.items())
            return cls(value, pairs, True)
        return cls(value, iter(enumerate(value)), False)

    def close(self) -> Document:
        if self.is_mapping:
            return Mapping(tuple(self.built))
        return Sequence(tuple(child for _, child in self.built))


def _resolve(value: Any) -> Any:
    """Return a Document for leaves, or the plain container to descend into."""
    if is_document(value):
        return value

    if value is None or isinstance(value, (str, bool, int, float)):
        return Scalar(value)

    if isinstance(value, (bytes, bytearray)):
        try:
            return Scalar(bytes(value).decode("utf-8"))
        except UnicodeDecodeError as err:
            raise EncodingError(f"Byte string is not valid UTF-8: {err.reason}") from err

    if isinstance(value, (dict, list, tuple)):
        return value

    to_array = getattr(value, "to_array", None)
    if callable(to_array):
        return _resolve(to_array())

    raise MalformedDocument(f"Unsupported value type: {type(value).__name__}")


def _normalize_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    # bool is an int subclass but True/False are not index keys
    if isinstance(key, int) and not isinstance(key, bool):
        return str(key)
    raise MalformedDocument(f"Mapping keys must be strings, got {type(key).__name__}")


def to_native(doc: Document) -> Any:
    """Convert a Document back to plain dicts, lists and scalars."""
    if doc.kind is Kind.SCALAR:
        return doc.value

    def empty(node: Document) -> Any:
        return [] if node.kind is Kind.SEQUENCE else {}

    root = empty(doc)
    stack: List[Tuple[Document, Any]] = [(doc, root)]
    while stack:
        node, target = stack.pop()
        for key, child in node.children():
            value = child.value if child.kind is Kind.SCALAR else empty(child)
            if node.kind is Kind.SEQUENCE:
                target.append(value)
            else:
                target[key] = value
            if child.kind is not Kind.SCALAR:
                stack.append((child, value))
    return root
