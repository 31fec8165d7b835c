"""
JSON and YAML output for Documents.

Both formats map one-to-one onto plain Python data, so the Document is
converted with `to_native` and handed to the standard encoders. Key order
is preserved in both outputs.
"""
from __future__ import annotations

import json
from typing import Any, Optional

import yaml

from docfmt.errors import EncodingError
from docfmt.model import Document, from_native, to_native


def to_json(doc: Document | Any, indent: Optional[int] = None) -> str:
    """
    Raises:
        EncodingError: For NaN or infinite floats, which JSON cannot express
    """
    data = to_native(from_native(doc))
    try:
        return json.dumps(data, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as err:
        raise EncodingError(f"Document cannot be encoded as JSON: {err}") from err


def to_yaml(doc: Document | Any) -> str:
    return yaml.safe_dump(to_native(from_native(doc)), sort_keys=False, allow_unicode=True)
