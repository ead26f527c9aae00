"""
Tests for column key collision handling and ordering
"""
from core.key_unifier import unique_key, column_key, sort_columns


class TestUniqueKey:
    """Test collision suffixes"""

    def test_unused_key_returned_unchanged(self):
        assert unique_key("A.B", {}) == "A.B"

    def test_second_and_third_collision(self):
        row = {"A.B": "1"}
        second = unique_key("A.B", row)
        assert second == "A.B (2)"
        row[second] = "2"
        assert unique_key("A.B", row) == "A.B (3)"

    def test_fills_first_gap(self):
        row = {"A.B": "1", "A.B (3)": "3"}
        assert unique_key("A.B", row) == "A.B (2)"


class TestColumnOrdering:
    """Test column naming and sorting"""

    def test_column_key_joins_path(self):
        assert column_key("Item", ["Name"]) == "Item.Name"
        assert column_key("Pset", ["Layer", "Thickness"]) == "Pset.Layer.Thickness"

    def test_ordinal_sort(self):
        assert sort_columns(["Z.Last", "A.First", "A.First (2)"]) == ["A.First", "A.First (2)", "Z.Last"]

    def test_sort_is_case_sensitive(self):
        assert sort_columns(["b.x", "B.x", "a.x"]) == ["B.x", "a.x", "b.x"]
