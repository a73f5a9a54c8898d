"""Unit tests for the node arena and path resolver.

This module tests Tree in vfs/tree.py:
- resolve(): absolute, relative, ".", "..", empty segments, missing segments
- path_of() and absolute()
- split_parent(): parent/name splitting and its error cases
- Mutation primitives and validate_state()
"""

from datetime import datetime, timezone

import pytest

from vfs.errors import InvalidPathError, NotDirectoryError, PathNotFoundError
from vfs.tree import Tree

NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def build_tree() -> Tree:
    """Create a tree with /a/b (directories) and /a/f.txt (file)."""
    tree = Tree.empty(NOW)
    a = tree.new_node("a", True, NOW)
    tree.attach(tree.root, a, NOW)
    b = tree.new_node("b", True, NOW)
    tree.attach(a, b, NOW)
    f = tree.new_node("f.txt", False, NOW)
    tree.attach(a, f, NOW)
    return tree


class TestEmptyTree:
    """Tests for Tree.empty()."""

    def test_root_is_only_node(self):
        tree = Tree.empty(NOW)

        assert list(tree.nodes) == [0]
        assert tree.root.is_directory
        assert tree.root.is_root
        assert tree.cwd is tree.root

    def test_root_path_is_separator(self):
        tree = Tree.empty(NOW)

        assert tree.path_of(tree.root) == "/"

    def test_empty_tree_is_valid(self):
        assert Tree.empty(NOW).validate_state() == []


class TestResolve:
    """Tests for Tree.resolve()."""

    def test_empty_path_is_cwd(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a"))

        assert tree.resolve("").name == "a"

    def test_root(self):
        tree = build_tree()

        assert tree.resolve("/") is tree.root

    def test_absolute_path(self):
        tree = build_tree()

        assert tree.resolve("/a/b").name == "b"

    def test_relative_path_starts_at_cwd(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a"))

        assert tree.resolve("b").name == "b"
        assert tree.resolve("f.txt").name == "f.txt"

    def test_dot_and_empty_segments_are_skipped(self):
        tree = build_tree()

        assert tree.resolve("/a/./b/").name == "b"
        assert tree.resolve("//a//b").name == "b"

    def test_dotdot_climbs_to_parent(self):
        tree = build_tree()

        assert tree.resolve("/a/b/..").name == "a"
        assert tree.resolve("/a/b/../..") is tree.root

    def test_dotdot_at_root_stays_at_root(self):
        tree = build_tree()

        assert tree.resolve("..") is tree.root
        assert tree.resolve("/../../a").name == "a"

    def test_missing_segment_raises(self):
        tree = build_tree()

        with pytest.raises(PathNotFoundError) as exc_info:
            tree.resolve("/a/missing/b")

        assert exc_info.value.segment == "missing"
        assert exc_info.value.path == "/a/missing/b"
        assert str(exc_info.value) == "path not found: missing"

    def test_descending_through_file_raises_not_found(self):
        tree = build_tree()

        with pytest.raises(PathNotFoundError):
            tree.resolve("/a/f.txt/x")


class TestPathOfAndAbsolute:
    """Tests for Tree.path_of() and Tree.absolute()."""

    def test_path_of_nested_node(self):
        tree = build_tree()

        assert tree.path_of(tree.resolve("/a/b")) == "/a/b"

    def test_absolute_path_is_unchanged(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a"))

        assert tree.absolute("/x/../y") == "/x/../y"

    def test_relative_at_root(self):
        tree = build_tree()

        assert tree.absolute("x") == "/x"

    def test_relative_below_root(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a/b"))

        assert tree.absolute("x") == "/a/b/x"

    def test_empty_is_cwd_path(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a"))

        assert tree.absolute("") == "/a"

    @pytest.mark.parametrize("path", ["", "b", "f.txt", "b/..", "../a/b", "/a"])
    def test_absolute_resolves_to_same_node(self, path):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a"))

        assert tree.resolve(tree.absolute(path)) is tree.resolve(path)


class TestSplitParent:
    """Tests for Tree.split_parent()."""

    def test_bare_name_parent_is_cwd(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a"))

        parent, name = tree.split_parent("new")

        assert parent.name == "a"
        assert name == "new"

    def test_top_level_absolute_name_parent_is_root(self):
        tree = build_tree()
        tree.set_cwd(tree.resolve("/a/b"))

        parent, name = tree.split_parent("/new")

        assert parent is tree.root
        assert name == "new"

    def test_nested_path(self):
        tree = build_tree()

        parent, name = tree.split_parent("/a/b/new")

        assert parent.name == "b"
        assert name == "new"

    def test_single_trailing_separator_is_ignored(self):
        tree = build_tree()

        parent, name = tree.split_parent("/a/new/")

        assert parent.name == "a"
        assert name == "new"

    @pytest.mark.parametrize("path", ["", "/", "/a/.", "/a/..", "..", "."])
    def test_unusable_final_name_raises(self, path):
        tree = build_tree()

        with pytest.raises(InvalidPathError):
            tree.split_parent(path)

    def test_missing_parent_raises(self):
        tree = build_tree()

        with pytest.raises(PathNotFoundError):
            tree.split_parent("/nope/new")

    def test_file_parent_raises(self):
        tree = build_tree()

        with pytest.raises(NotDirectoryError) as exc_info:
            tree.split_parent("/a/f.txt/new")

        assert exc_info.value.path == "/a/f.txt"


class TestPrimitives:
    """Tests for new_node/attach/detach and the inspection helpers."""

    def test_ids_are_never_reused(self):
        tree = Tree.empty(NOW)
        first = tree.new_node("x", False, NOW)
        tree.attach(tree.root, first, NOW)
        tree.detach(first, NOW)

        second = tree.new_node("x", False, NOW)

        assert second.node_id != first.node_id

    def test_attach_touches_parent(self):
        tree = Tree.empty(NOW)
        later = datetime(2025, 1, 16, tzinfo=timezone.utc)

        tree.attach(tree.root, tree.new_node("x", True, later), later)

        assert tree.root.modified_at == later
        assert tree.root.created_at == NOW

    def test_detach_drops_node_from_arena(self):
        tree = build_tree()
        f = tree.resolve("/a/f.txt")

        tree.detach(f, NOW)

        assert f.node_id not in tree.nodes
        assert "f.txt" not in tree.resolve("/a").children

    def test_children_sorted_by_name(self):
        tree = Tree.empty(NOW)
        for name in ["zeta", "alpha", "mid"]:
            tree.attach(tree.root, tree.new_node(name, False, NOW), NOW)

        assert [n.name for n in tree.children_of(tree.root)] == ["alpha", "mid", "zeta"]

    def test_structure(self):
        tree = build_tree()
        tree.resolve("/a/f.txt").content = "data"

        assert tree.structure() == {"a": {"b": {}, "f.txt": "data"}}

    def test_snapshot_nests_children(self):
        tree = build_tree()

        snapshot = tree.get_snapshot()

        assert snapshot["name"] == ""
        a = snapshot["children"][0]
        assert a["name"] == "a"
        assert [c["name"] for c in a["children"]] == ["b", "f.txt"]
        assert a["children"][1]["content"] == ""
        assert a["children"][1]["size"] == 0


class TestValidateState:
    """Tests for Tree.validate_state()."""

    def test_valid_tree(self):
        assert build_tree().validate_state() == []

    def test_detects_mismatched_child_key(self):
        tree = build_tree()
        a = tree.resolve("/a")
        a.children["renamed"] = a.children.pop("b")

        issues = tree.validate_state()

        assert any("does not match name" in issue for issue in issues)

    def test_detects_file_with_children(self):
        tree = build_tree()
        tree.resolve("/a/f.txt").children["x"] = 99

        issues = tree.validate_state()

        assert any("has children" in issue for issue in issues)

    def test_detects_unreachable_node(self):
        tree = build_tree()
        b = tree.resolve("/a/b")
        del tree.resolve("/a").children["b"]

        issues = tree.validate_state()

        assert any("not reachable" in issue for issue in issues)
        assert b.node_id in tree.nodes
