"""
Input adapters.

A Parser wraps some input and exposes it as a Document through
`to_array()`. This is the only coupling point between the converters and
whatever produced the data; every output method is derived from it.

Parsers for textual inputs (JSON, YAML, XML, CSV files) live outside this
package. `ArrayParser` covers data that is already in memory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from docfmt.backends.csv_builder import to_csv
from docfmt.backends.xml_projector import DEFAULT_ROOT_NAME, Namespaces, XmlOptions, to_xml
from docfmt.model import Document, from_native
from docfmt.serialization import to_json, to_yaml


class Parser(ABC):
    """Base adapter: subclasses supply `to_array`, outputs come for free."""

    @abstractmethod
    def to_array(self) -> Document:
        """Return the wrapped data as a Document."""

    def to_json(self, indent: Optional[int] = None) -> str:
        return to_json(self.to_array(), indent=indent)

    def to_yaml(self) -> str:
        return to_yaml(self.to_array())

    def to_xml(
        self,
        root_name: str = DEFAULT_ROOT_NAME,
        namespaces: Optional[Namespaces] = None,
        options: Optional[XmlOptions] = None,
    ) -> str:
        return to_xml(self.to_array(), root_name, namespaces, options)

    def to_csv(
        self,
        newline: str = "\n",
        delimiter: str = ",",
        enclosure: str = '"',
        escape: str = "\\",
    ) -> str:
        return to_csv(self.to_array(), newline, delimiter, enclosure, escape)


class ArrayParser(Parser):
    """
    Adapter over plain Python data (dicts, lists, scalars).

    The data is converted on construction, so malformed input fails here
    rather than on the first output call.
    """

    def __init__(self, data: Any):
        self._document = from_native(data)

    def to_array(self) -> Document:
        return self._document


__all__ = ["ArrayParser", "Parser"]
