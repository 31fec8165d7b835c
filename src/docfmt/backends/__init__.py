"""Backends for Document output generation (XML, CSV)."""

from .csv_builder import CsvOptions, to_csv
from .xml_projector import XmlElement, XmlOptions, build_tree, to_xml

__all__ = ["CsvOptions", "XmlElement", "XmlOptions", "build_tree", "to_csv", "to_xml"]
