"""
Tests for the Document model.

These tests verify:
    - Conversion from plain Python data
    - The kind tag on every variant
    - Mapping invariants (string keys, uniqueness)
    - Cycle, type and depth errors
"""

import pytest

from docfmt.errors import EncodingError, MalformedDocument, RecursionLimitExceeded
from docfmt.model import DEFAULT_MAX_DEPTH, Kind, Mapping, Scalar, Sequence, from_native, to_native


class TestFromNative:
    """Test conversion of plain data into Documents."""

    def test_scalars(self):
        """str, int, float, bool and None become Scalars."""
        for value in ["x", 1, 1.5, True, None]:
            doc = from_native(value)
            assert doc.kind is Kind.SCALAR
            assert doc.value == value

    def test_dict_becomes_mapping(self):
        """Dicts keep their key order."""
        doc = from_native({"b": 1, "a": 2})
        assert doc.kind is Kind.MAPPING
        assert doc.keys() == ["b", "a"]
        assert doc.get("a") == Scalar(2)

    def test_list_and_tuple_become_sequence(self):
        assert from_native([1, 2]).kind is Kind.SEQUENCE
        assert from_native((1, 2)) == Sequence((Scalar(1), Scalar(2)))

    def test_numeric_string_keys_stay_mapping(self):
        """A dict with numeric-looking keys is not reinterpreted as a list."""
        doc = from_native({"0": "a", "1": "b"})
        assert doc.kind is Kind.MAPPING
        assert doc.keys() == ["0", "1"]

    def test_int_keys_become_strings(self):
        doc = from_native({0: "a", 7: "b"})
        assert doc.keys() == ["0", "7"]

    def test_bytes_decoded_as_utf8(self):
        assert from_native("é".encode("utf-8")) == Scalar("é")

    def test_document_passes_through(self):
        doc = Mapping((("a", Scalar(1)),))
        assert from_native(doc) is doc

    def test_object_with_to_array_is_unwrapped(self):
        class Source:
            def to_array(self):
                return {"a": [1]}

        assert to_native(from_native(Source())) == {"a": [1]}

    def test_shared_substructure_is_not_a_cycle(self):
        """The same list used twice in siblings is fine."""
        shared = [1, 2]
        doc = from_native({"a": shared, "b": shared})
        assert to_native(doc) == {"a": [1, 2], "b": [1, 2]}


class TestErrors:
    """Test malformed input is rejected with typed errors."""

    def test_cycle_detected(self):
        data = {"a": []}
        data["a"].append(data)
        with pytest.raises(MalformedDocument):
            from_native(data)

    def test_unsupported_type(self):
        with pytest.raises(MalformedDocument):
            from_native({"a": {1, 2}})

    def test_unsupported_key_type(self):
        with pytest.raises(MalformedDocument):
            from_native({(1, 2): "x"})

    def test_invalid_utf8_bytes(self):
        with pytest.raises(EncodingError):
            from_native(b"\xff\xfe")

    def test_lone_surrogate(self):
        with pytest.raises(EncodingError):
            from_native({"a": "\ud800"})

    def test_duplicate_keys(self):
        with pytest.raises(MalformedDocument):
            Mapping((("a", Scalar(1)), ("a", Scalar(2))))

    def test_non_string_key_in_mapping(self):
        with pytest.raises(MalformedDocument):
            Mapping(((1, Scalar(1)),))

    def test_invalid_scalar(self):
        with pytest.raises(MalformedDocument):
            Scalar(object())

    def test_depth_limit(self):
        data = current = []
        for _ in range(20):
            nested = []
            current.append(nested)
            current = nested
        with pytest.raises(RecursionLimitExceeded):
            from_native(data, max_depth=10)
        assert from_native(data, max_depth=50).kind is Kind.SEQUENCE


class TestToNative:
    """Test conversion back to plain data."""

    def test_roundtrip(self):
        data = {"a": {"b": [1, None, True, "x"]}, "c": []}
        assert to_native(from_native(data)) == data

    def test_len(self):
        assert len(from_native([1, 2, 3])) == 3
        assert len(from_native({})) == 0


def nested_lists(depth):
    """`depth` lists nested inside each other around a single leaf."""
    data = current = []
    for _ in range(depth - 1):
        nested = []
        current.append(nested)
        current = nested
    current.append(1)
    return data


class TestDeepDocuments:
    """Test nesting right up to the default depth bound."""

    def test_default_bound_converts(self):
        doc = from_native(nested_lists(DEFAULT_MAX_DEPTH))
        native = to_native(doc)
        for _ in range(DEFAULT_MAX_DEPTH - 1):
            native = native[0]
        assert native == [1]

    def test_past_default_bound_is_typed_error(self):
        with pytest.raises(RecursionLimitExceeded):
            from_native(nested_lists(DEFAULT_MAX_DEPTH + 1))
        with pytest.raises(RecursionLimitExceeded):
            from_native(nested_lists(5000))

    def test_deep_mappings_convert(self):
        data = current = {}
        for _ in range(DEFAULT_MAX_DEPTH - 1):
            current["n"] = {}
            current = current["n"]
        assert to_native(from_native(data)) == data


class TestChildValidation:
    """Test containers reject children that are not Documents."""

    def test_mapping_value(self):
        with pytest.raises(MalformedDocument):
            Mapping((("a", 1),))

    def test_sequence_item(self):
        with pytest.raises(MalformedDocument):
            Sequence((Scalar(1), "two"))

    def test_nested_documents_accepted(self):
        doc = Mapping((("a", Sequence((Scalar(1), Mapping()))),))
        assert to_native(doc) == {"a": [1, {}]}
