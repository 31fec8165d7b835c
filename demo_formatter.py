#!/usr/bin/env python3
"""
Demo: Render the example library document in every output format.
"""

from docfmt import ArrayParser, to_native
from docfmt.examples import build_example_library, build_example_rows


def main():
    library = ArrayParser(build_example_library(book_count=3))
    rows = ArrayParser(build_example_rows())

    print("=" * 80)
    print("FORMATTER DEMO")
    print("=" * 80)

    print("\nJSON:")
    print("-" * 80)
    print(library.to_json(indent=2))

    print("\nYAML:")
    print("-" * 80)
    print(library.to_yaml())

    print("\nXML:")
    print("-" * 80)
    print(library.to_xml("library", {"dc": "http://purl.org/dc/elements/1.1/"}))

    print("\nCSV (books):")
    print("-" * 80)
    print(ArrayParser(to_native(library.to_array())["books"]).to_csv())

    print("\nCSV (rows with gaps, semicolon delimited):")
    print("-" * 80)
    print(rows.to_csv(delimiter=";"))
    print("=" * 80)


if __name__ == "__main__":
    main()
