"""
XML projector for Documents.

Converts a Document into an XML string in two passes:
    1. `build_tree` maps the Document onto an immutable XmlElement tree
    2. `serialize` renders that tree with lxml

Naming rules:
    - Numeric keys (list indices, or numeric-looking mapping keys) are never
      emitted as element names. Members take the singular of the enclosing
      element's name ("books" -> "book") or the fallback name "item".
    - A key "prefix:local" whose prefix is a registered namespace is created
      in that namespace.

Scalars:
    - Booleans render as "1" / "0"
    - None renders as an empty element
    - Entities in strings are decoded before output so that pre-escaped
      text is not escaped twice
"""

from __future__ import annotations

import html
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple, Union

from lxml import etree
from lxml.etree import QName

from docfmt.errors import EncodingError, MalformedDocument, RecursionLimitExceeded
from docfmt.flatten import join_path
from docfmt.inflection import DEFAULT_FALLBACK, Singularizer, english_singular, singular_or_fallback
from docfmt.model import Document, Kind, ScalarValue, Sequence, from_native

log = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = "xml"

DEFAULT_MAX_DEPTH = 256

NUMERIC_KEY = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")

# Complete references only; "&copy2024" is text, not an entity
ENTITY_REF = re.compile(r"&(#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")

Namespaces = Mapping[str, str]


@dataclass(frozen=True)
class XmlOptions:
    """
    Formatting options for XML output.

    Properties:
        max_depth: Maximum container nesting below the root element
        singularize: Strategy deriving list member names from their parent
        fallback_name: Member name used when no distinct singular exists
        pretty_print: Indent the serialized output
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    singularize: Singularizer = field(default=english_singular, compare=False)
    fallback_name: str = DEFAULT_FALLBACK
    pretty_print: bool = False


@dataclass(frozen=True)
class XmlElement:
    """
    One element of the output tree.

    Properties:
        name: Local name (or literal name when not namespaced)
        namespace: Namespace URI, or None
        text: Text content, or None for no text
        children: Child elements in document order
    """

    name: str
    namespace: Optional[str] = None
    text: Optional[str] = None
    children: Tuple["XmlElement", ...] = ()

    @property
    def tag(self) -> str:
        """Tag in lxml's Clark notation ("{uri}local")."""
        if self.namespace is None:
            return self.name
        return QName(self.namespace, self.name).text


def is_numeric_key(key: Union[str, int]) -> bool:
    if isinstance(key, int):
        return True
    return NUMERIC_KEY.match(key) is not None


def qualify(name: str, namespaces: Namespaces) -> Tuple[str, Optional[str]]:
    """Split "prefix:local" into (local, uri) when prefix is registered."""
    parts = name.split(":")
    if len(parts) == 2 and parts[0] in namespaces:
        return parts[1], namespaces[parts[0]]
    return name, None


def decode_entities(text: str) -> str:
    return ENTITY_REF.sub(lambda match: html.unescape(match.group(0)), text)


def scalar_text(value: ScalarValue) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return decode_entities(value)
    return str(value)


def build_tree(
    doc: Document,
    root_name: str = DEFAULT_ROOT_NAME,
    namespaces: Optional[Namespaces] = None,
    options: Optional[XmlOptions] = None,
) -> XmlElement:
    """
    Map a Document onto an XmlElement tree rooted at `root_name`.

    A scalar document is wrapped in a one-element sequence first.

    Raises:
        RecursionLimitExceeded: If nesting exceeds options.max_depth
    """
    namespaces = dict(namespaces or {})
    options = options or XmlOptions()

    if doc.kind is Kind.SCALAR:
        doc = Sequence((doc,))

    name, uri = qualify(root_name, namespaces)
    children = _build_children(doc, root_name, namespaces, options, 1, None)
    return XmlElement(name=name, namespace=uri, children=children)


def _build_children(
    container: Document,
    parent_name: str,
    namespaces: Dict[str, str],
    options: XmlOptions,
    depth: int,
    path: Optional[str],
) -> Tuple[XmlElement, ...]:
    if depth > options.max_depth:
        raise RecursionLimitExceeded(options.max_depth, path or "")

    elements = []
    for key, value in container.children():
        if is_numeric_key(key):
            child_name = singular_or_fallback(parent_name, options.singularize, options.fallback_name)
        else:
            child_name = key
        local, uri = qualify(child_name, namespaces)

        if value.kind is Kind.SCALAR:
            elements.append(XmlElement(name=local, namespace=uri, text=scalar_text(value.value)))
            continue

        grandchildren: Tuple[XmlElement, ...] = ()
        if len(value):
            grandchildren = _build_children(
                value, child_name, namespaces, options, depth + 1, join_path(path, key)
            )
        elements.append(XmlElement(name=local, namespace=uri, children=grandchildren))

    return tuple(elements)


def serialize(
    tree: XmlElement,
    namespaces: Optional[Namespaces] = None,
    pretty_print: bool = False,
) -> str:
    """
    Render an XmlElement tree as an XML document string.

    Namespace bindings are declared on the root element.

    Raises:
        MalformedDocument: If a name or namespace prefix is not valid XML
        EncodingError: If text holds characters XML cannot carry
    """
    nsmap = {(prefix or None): uri for prefix, uri in (namespaces or {}).items()}
    try:
        root = etree.Element(tree.tag, nsmap=nsmap or None)
    except ValueError as err:
        raise MalformedDocument(f"Invalid root element '{tree.name}': {err}") from err

    _fill(root, tree)
    data = etree.tostring(root, xml_declaration=True, encoding="utf-8", pretty_print=pretty_print)
    return data.decode("utf-8")


def _fill(node: etree._Element, element: XmlElement) -> None:
    if element.text is not None:
        try:
            node.text = element.text
        except ValueError as err:
            raise EncodingError(f"Text of element '{element.name}' is not XML compatible: {err}") from err

    for child in element.children:
        try:
            sub = etree.SubElement(node, child.tag)
        except ValueError as err:
            raise MalformedDocument(f"Invalid element name '{child.name}': {err}") from err
        _fill(sub, child)


def to_xml(
    doc: Document,
    root_name: str = DEFAULT_ROOT_NAME,
    namespaces: Optional[Namespaces] = None,
    options: Optional[XmlOptions] = None,
) -> str:
    """
    Convert a Document to an XML document string.

    Args:
        doc: Document (or plain Python data) to convert
        root_name: Name of the root element
        namespaces: prefix -> URI bindings declared on the root
        options: XmlOptions; defaults apply when omitted

    Returns:
        UTF-8 XML text starting with <?xml version='1.0' encoding='utf-8'?>
    """
    options = options or XmlOptions()
    tree = build_tree(from_native(doc), root_name, namespaces, options)
    log.debug("Built XML tree '%s' with %d top-level elements", root_name, len(tree.children))
    return serialize(tree, namespaces, pretty_print=options.pretty_print)


__all__ = [
    "XmlElement",
    "XmlOptions",
    "build_tree",
    "is_numeric_key",
    "qualify",
    "scalar_text",
    "serialize",
    "to_xml",
]
