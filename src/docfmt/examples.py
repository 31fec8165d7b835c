"""
Example documents for demos and tests.

`build_example_library` returns a small catalogue mixing nested mappings,
lists of records, booleans, nulls and text needing escaping in both XML
and CSV.
"""
from docfmt.model import Document, from_native


def build_example_library(book_count: int = 3) -> Document:
    books = []
    for i in range(1, book_count + 1):
        book = {
            "id": i,
            "title": f"Volume {i}",
            "available": i % 2 == 1,
            "author": {"name": f"Author {i}", "country": "NZ"},
            "tags": ["fiction", f"series-{i}"],
        }
        # Only odd books carry a rating, which gives the CSV batch gaps
        if i % 2 == 1:
            book["rating"] = 4.5
        books.append(book)

    return from_native(
        {
            "name": 'Smith & Sons "Rare" Books',
            "open": True,
            "closed_on": None,
            "books": books,
        }
    )


def build_example_rows() -> Document:
    """A batch of flat-ish records whose second row lacks a column."""
    return from_native(
        [
            {"sku": "A-1", "price": 10, "stock": {"warehouse": 5}},
            {"sku": "B-2", "price": 12},
            {"sku": "C-3", "price": 7, "stock": {"warehouse": 0}, "note": 'say "hi"'},
        ]
    )
