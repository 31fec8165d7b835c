"""
Document Formatter Package

Converts an in-memory nested document (scalars, sequences and string-keyed
mappings) into JSON, YAML, XML and CSV.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Where a document came from (file, HTTP body, parser)
    - Command line or configuration handling

Every conversion is a pure function of a Document and its options.
"""

from docfmt.errors import (
    EncodingError,
    FormatterError,
    MalformedDocument,
    RecursionLimitExceeded,
)
from docfmt.model import Kind, Mapping, Scalar, Sequence, from_native, to_native
from docfmt.flatten import flatten
from docfmt.parsers import ArrayParser, Parser

__version__ = "0.1.0"

__all__ = [
    "ArrayParser",
    "EncodingError",
    "FormatterError",
    "Kind",
    "MalformedDocument",
    "Mapping",
    "Parser",
    "RecursionLimitExceeded",
    "Scalar",
    "Sequence",
    "flatten",
    "from_native",
    "to_native",
]
