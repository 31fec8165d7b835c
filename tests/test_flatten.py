"""
Tests for the path flattener.

Every leaf scalar becomes exactly one entry keyed by its dot path, in
depth-first document order.
"""

import pytest

from docfmt.errors import MalformedDocument
from docfmt.flatten import flatten, join_path
from docfmt.model import from_native


class TestFlatten:
    """Test flattening of nested documents."""

    def test_nested_mapping_and_sequence(self):
        doc = from_native({"a": {"b": 1, "c": [2, 3]}})
        assert flatten(doc) == {"a.b": 1, "a.c.0": 2, "a.c.1": 3}

    def test_order_is_depth_first(self):
        doc = from_native({"z": 1, "a": {"y": 2, "b": 3}, "m": [4, {"k": 5}]})
        assert list(flatten(doc)) == ["z", "a.y", "a.b", "m.0", "m.1.k"]
        assert list(flatten(doc).values()) == [1, 2, 3, 4, 5]

    def test_one_entry_per_leaf(self):
        """N leaf scalars give N unique paths."""
        doc = from_native({"a": [1, [2, 3], {"b": None, "c": False}], "d": "x"})
        result = flatten(doc)
        assert len(result) == 6
        assert len(set(result)) == 6

    def test_values_not_coerced(self):
        result = flatten(from_native({"i": 1, "f": 1.5, "b": True, "n": None, "s": "1"}))
        assert result == {"i": 1, "f": 1.5, "b": True, "n": None, "s": "1"}
        assert result["b"] is True

    def test_sequence_root(self):
        assert flatten(from_native(["x", "y"])) == {"0": "x", "1": "y"}

    def test_scalar_root(self):
        assert flatten(from_native(42)) == {"": 42}

    def test_empty_containers_have_no_entry(self):
        assert flatten(from_native({"a": [], "b": {}, "c": 1})) == {"c": 1}

    def test_flat_mapping_is_unchanged(self):
        """Re-flattening an already flat mapping yields the same mapping."""
        flat = flatten(from_native({"a": {"b": 1}, "c": [2]}))
        assert flatten(from_native(flat)) == flat

    def test_path_collision(self):
        doc = from_native({"a.b": 1, "a": {"b": 2}})
        with pytest.raises(MalformedDocument):
            flatten(doc)

    def test_deep_document(self):
        """Flattening does not rely on the interpreter stack."""
        data = current = {}
        for _ in range(400):
            current["n"] = {}
            current = current["n"]
        current["leaf"] = 1
        result = flatten(from_native(data))
        assert list(result.values()) == [1]
        assert next(iter(result)).endswith(".leaf")


class TestJoinPath:
    """Test path joining."""

    def test_root(self):
        assert join_path(None, "a") == "a"
        assert join_path(None, 0) == "0"

    def test_nested(self):
        assert join_path("a.b", 3) == "a.b.3"

    def test_empty_key_kept(self):
        assert join_path("", "x") == ".x"
