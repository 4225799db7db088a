"""Tests for validation paths."""

from dataknobs_validator import Path


class Node:
    def __init__(self, name):
        self.name = name


class TestPath:
    """Test Path construction and rendering."""

    def test_root_is_empty(self):
        root = Path.root()
        assert root.full_name == ""
        assert root.names == []
        assert root.parent is None

    def test_append_does_not_mutate(self):
        """Test that appending returns a new node sharing the tail."""
        root = Path.root()
        user = root.append("user")
        name = user.append("name")
        other = user.append("age")
        assert root.full_name == ""
        assert user.full_name == "user"
        assert name.parent is user
        assert other.parent is user
        assert name.full_name == "user.name"
        assert other.full_name == "user.age"

    def test_full_name_brackets(self):
        """Test that index and marker segments attach without a dot."""
        path = Path.root().append("order").append("items").append("[2]<collection element>").append("sku")
        assert path.full_name == "order.items[2]<collection element>.sku"
        assert str(path) == path.full_name

    def test_leading_bracket_segment(self):
        path = Path.root().append("[0]<collection element>")
        assert path.full_name == "[0]<collection element>"

    def test_names_skip_empty(self):
        path = Path.root().append("").append("a").append("b")
        assert path.names == ["a", "b"]


class TestCycleDetection:
    """Test identity-based cycle checks."""

    def test_refuses_entered_object(self):
        node = Node("a")
        path = Path.root(node).append("child", Node("b"))
        assert path.contains_object(node)
        assert path.append_checked("next", node) is None

    def test_accepts_equal_but_distinct_object(self):
        path = Path.root([1, 2])
        assert not path.contains_object([1, 2])
        assert path.append_checked("copy", [1, 2]) is not None

    def test_scalars_and_none_never_match(self):
        path = Path.root("same").append("n", 5).append("x", None)
        assert path.append_checked("again", "same") is not None
        assert path.append_checked("again", 5) is not None
        assert path.append_checked("again", None) is not None

    def test_detached_drops_values(self):
        node = Node("a")
        path = Path.root(node).append("child", node)
        detached = path.detached()
        assert detached.full_name == "child"
        assert not detached.contains_object(node)
