"""
Tests for remove_from.
"""

from pointer_tracker.utils.array_utils import remove_from


class TestRemoveFrom:

    def test_removes_all_matching_values(self):
        items = ["a", "b", "a"]
        assert remove_from(items, "a", True) == 2
        assert items == ["b"]

    def test_removes_first_match_only_by_default(self):
        items = ["a", "b", "a"]
        assert remove_from(items, "a", False) == 1
        assert items == ["b", "a"]
        assert remove_from(["a"], "a") == 1

    def test_predicate_without_matches_leaves_list_unchanged(self):
        items = [1, 2, 3]
        assert remove_from(items, lambda x: x > 5, True) == 0
        assert items == [1, 2, 3]

    def test_predicate_removes_matches(self):
        items = [1, 6, 2, 7]
        assert remove_from(items, lambda x: x > 5, True) == 2
        assert items == [1, 2]

    def test_list_of_criteria_is_applied_recursively(self):
        items = ["piece", "c-a", "r-2", "white-pawn", "c-a"]
        removed = remove_from(items, ["c-a", lambda name: name.startswith("r-")], True)
        assert removed == 3
        assert items == ["piece", "white-pawn"]

    def test_list_of_criteria_first_match_each(self):
        items = ["x", "y", "x", "y"]
        assert remove_from(items, ("x", "y")) == 2
        assert items == ["x", "y"]

    def test_missing_value(self):
        items = ["a"]
        assert remove_from(items, "z", True) == 0
        assert items == ["a"]
