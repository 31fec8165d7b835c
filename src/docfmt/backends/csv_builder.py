"""
CSV table builder for batches of Documents.

Flattens every row to dot paths, unions the paths into one column schema
(first-seen order), fills the gaps of rows missing some columns and emits
an enclosed, delimited table:

    [{"a": 1, "b": 2}, {"a": 3}]

    "a","b"
    "1","2"
    "3",""

Enclosure characters inside a field are prefixed with the escape string,
not doubled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from docfmt.flatten import Path, flatten
from docfmt.model import Document, Kind, ScalarValue, from_native

log = logging.getLogger(__name__)

Row = Dict[Path, ScalarValue]


@dataclass(frozen=True)
class CsvOptions:
    """
    Formatting options for CSV output.

    Properties:
        newline: Line terminator (stripped once from the end of the output)
        delimiter: Single character separating fields
        enclosure: Single character wrapping every field
        escape: String placed before enclosure characters inside a field
    """

    newline: str = "\n"
    delimiter: str = ","
    enclosure: str = '"'
    escape: str = "\\"

    def __post_init__(self) -> None:
        if not self.newline:
            raise ValueError("CSV newline must not be empty")
        if len(self.delimiter) != 1:
            raise ValueError(f"CSV delimiter must be a single character, got {self.delimiter!r}")
        if len(self.enclosure) != 1:
            raise ValueError(f"CSV enclosure must be a single character, got {self.enclosure!r}")


def normalize_batch(doc: Document) -> List[Document]:
    """
    Turn the input into a list of rows.

    A bare mapping, a scalar, or a sequence whose first element is a scalar
    is a single record. Any other sequence is a batch of records.
    """
    if doc.kind is not Kind.SEQUENCE:
        return [doc]
    if not doc.items:
        return []
    if doc.items[0].kind is Kind.SCALAR:
        return [doc]
    return list(doc.items)


def build_schema(rows: List[Row]) -> Tuple[List[Path], bool]:
    """
    Union the paths of all rows in first-seen order.

    Returns:
        (columns, have_gaps) where have_gaps is True when any row's paths
        differ from the final column list
    """
    seen: Dict[Path, None] = {}
    for index, row in enumerate(rows):
        before = len(seen)
        for path in row:
            seen.setdefault(path, None)
        if before and len(seen) != before:
            log.debug("Row %d introduced %d new column(s)", index, len(seen) - before)

    columns = list(seen)
    have_gaps = any(list(row) != columns for row in rows)
    return columns, have_gaps


def fill_gaps(rows: List[Row], columns: List[Path]) -> List[List[ScalarValue]]:
    """Re-map every row onto `columns`, using None where a row has no value."""
    return [[row.get(column) for column in columns] for row in rows]


def render_field(value: ScalarValue) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def escape_field(text: str, enclosure: str = '"', escape: str = "\\") -> str:
    return text.replace(enclosure, escape + enclosure)


def format_line(fields: Iterable[str], options: CsvOptions) -> str:
    separator = options.enclosure + options.delimiter + options.enclosure
    escaped = [escape_field(f, options.enclosure, options.escape) for f in fields]
    return options.enclosure + separator.join(escaped) + options.enclosure + options.newline


def to_csv(
    doc: Document,
    newline: str = "\n",
    delimiter: str = ",",
    enclosure: str = '"',
    escape: str = "\\",
    options: Optional[CsvOptions] = None,
) -> str:
    """
    Convert a Document (one record or a batch of records) to CSV text.

    Every line, header included, has one field per column of the schema.
    A batch with no rows or no leaf values produces an empty string.

    Args:
        doc: Document (or plain Python data) to convert
        newline, delimiter, enclosure, escape: Formatting characters
        options: CsvOptions overriding the individual arguments
    """
    if options is None:
        options = CsvOptions(newline=newline, delimiter=delimiter, enclosure=enclosure, escape=escape)

    rows = [flatten(row) for row in normalize_batch(from_native(doc))]
    if not rows:
        return ""

    columns, have_gaps = build_schema(rows)
    if not columns:
        return ""
    if have_gaps:
        log.debug("Reconciling %d row(s) onto %d column(s)", len(rows), len(columns))
        values = fill_gaps(rows, columns)
    else:
        values = [list(row.values()) for row in rows]

    lines = [format_line(columns, options)]
    for row_values in values:
        lines.append(format_line((render_field(v) for v in row_values), options))

    output = "".join(lines)
    if output.endswith(options.newline):
        output = output[: -len(options.newline)]
    return output


__all__ = [
    "CsvOptions",
    "build_schema",
    "escape_field",
    "fill_gaps",
    "normalize_batch",
    "render_field",
    "to_csv",
]
