#!/usr/bin/env python3
"""
Unit tests for models/node.py
"""

import itertools
import stat
from datetime import datetime

import pytest

from unix_tutor_mcp.models.node import (
    DirectoryNode,
    FileNode,
    NodeStore,
    is_valid_name,
    mode_to_mask,
    timestamp,
)


class TestModeToMask:
    """Tests for octal mode expansion"""

    @pytest.mark.parametrize("mode", ["".join(d) for d in itertools.product("01234567", repeat=3)])
    def test_matches_stat_filemode(self, mode):
        """Every 3-digit mode expands like the kernel's own mask"""
        assert mode_to_mask(mode) == stat.filemode(int(mode, 8))[1:]

    @pytest.mark.parametrize("mode", ["", "7", "77", "7777", "abc", "78a", "888", "-77", " 77"])
    def test_invalid_modes(self, mode):
        """Anything that is not exactly three octal digits is rejected"""
        assert mode_to_mask(mode) is None

    def test_examples(self):
        assert mode_to_mask("750") == "rwxr-x---"
        assert mode_to_mask("000") == "---------"
        assert mode_to_mask("777") == "rwxrwxrwx"


class TestNodes:
    """Tests for FileNode and DirectoryNode metadata"""

    @pytest.fixture
    def store(self):
        return NodeStore()

    def test_default_permissions(self, store):
        """Files default to 644 and directories to 755"""
        file = store.create_file("a.txt")
        directory = store.create_directory("docs")
        assert file.permissions == "-rw-r--r--"
        assert directory.permissions == "drwxr-xr-x"

    def test_invalid_mode_keeps_previous(self, store):
        """An invalid mode leaves the old permissions untouched"""
        file = store.create_file("a.txt", mode="600")
        file.set_permissions("9zz")
        assert file.mode == "600"
        assert file.permissions == "-rw-------"

    def test_size_is_utf8_length(self, store):
        file = store.create_file("a.txt", content="hello")
        assert file.size == 5
        file.set_content("é")
        assert file.size == 2

    def test_directory_size_is_zero(self, store):
        assert store.create_directory("docs").size == 0

    def test_long_listing_columns(self, store):
        """Columns are tab separated and the name is left to the caller"""
        file = store.create_file("a.txt", content="hello", last_modified="Jan 1 00:00")
        assert file.long_listing() == "-rw-r--r--\t1\tuser\tgroup\t5\tJan 1 00:00"

    def test_setters_chain(self, store):
        file = store.create_file("a.txt")
        file.set_permissions("700").set_ownership("alice", "staff").set_last_modified("May 5 05:05")
        assert (file.mode, file.owner, file.group, file.last_modified) == ("700", "alice", "staff", "May 5 05:05")

    def test_kind_discriminator(self, store):
        """The store validates back into the right node type"""
        store.create_file("a.txt")
        store.create_directory("docs")
        restored = NodeStore.model_validate(store.model_dump())
        assert isinstance(restored.get(1), FileNode)
        assert isinstance(restored.get(2), DirectoryNode)


class TestNodeStore:
    """Tests for the arena that owns the tree"""

    @pytest.fixture
    def store(self):
        return NodeStore()

    @pytest.fixture
    def root(self, store):
        return store.create_directory("/")

    def test_ids_are_unique(self, store):
        ids = {store.create_file(f"f{i}").id for i in range(10)}
        assert len(ids) == 10

    def test_add_child_sets_parent_and_path(self, store, root):
        docs = store.create_directory("docs")
        assert store.add_child(root, docs)
        file = store.create_file("a.txt")
        assert store.add_child(docs, file)

        assert file.parent == docs.id
        assert file.path == "/docs/a.txt"
        assert store.parent_of(file) is docs

    def test_add_child_to_file_fails(self, store, root):
        """Files never get children"""
        file = store.create_file("a.txt")
        store.add_child(root, file)
        other = store.create_file("b.txt")
        assert store.add_child(file, other) is False
        assert other.parent is None

    def test_add_child_rejects_duplicate_name(self, store, root):
        store.add_child(root, store.create_file("a.txt"))
        assert store.add_child(root, store.create_directory("a.txt")) is False
        assert len(root.children) == 1

    @pytest.mark.parametrize("order", list(itertools.permutations(["b", "a", "C", "a1"])))
    def test_children_stay_sorted(self, store, root, order):
        """Whatever the insertion order, children are kept sorted by name"""
        for name in order:
            store.add_child(root, store.create_file(name))
        assert [child.name for child in store.children_of(root)] == ["C", "a", "a1", "b"]

    def test_find_child_is_case_sensitive(self, store, root):
        store.add_child(root, store.create_file("Notes"))
        assert store.find_child(root, "notes") is None
        assert store.find_child(root, "Notes") is not None

    def test_remove_cascades(self, store, root):
        """Removing a directory purges every descendant from the store"""
        docs = store.create_directory("docs")
        store.add_child(root, docs)
        sub = store.create_directory("sub")
        store.add_child(docs, sub)
        leaf = store.create_file("leaf.txt")
        store.add_child(sub, leaf)

        assert store.remove(docs) == 3
        assert docs.id not in root.children
        for node in (docs, sub, leaf):
            assert node.id not in store
        assert len(store) == 1

    def test_rename_refreshes_descendant_paths(self, store, root):
        docs = store.create_directory("docs")
        store.add_child(root, docs)
        leaf = store.create_file("leaf.txt")
        store.add_child(docs, leaf)

        store.rename(docs, "papers")
        assert docs.path == "/papers"
        assert leaf.path == "/papers/leaf.txt"

    def test_detach_keeps_node_in_store(self, store, root):
        file = store.create_file("a.txt")
        store.add_child(root, file)
        store.detach(file)
        assert root.children == []
        assert file.parent is None
        assert file.id in store

    def test_is_ancestor(self, store, root):
        docs = store.create_directory("docs")
        store.add_child(root, docs)
        assert store.is_ancestor(root, docs)
        assert store.is_ancestor(docs, docs)
        assert not store.is_ancestor(docs, root)


def test_is_valid_name():
    assert is_valid_name("notes.txt")
    assert is_valid_name(".hidden")
    for name in ("", ".", "..", "~", "a/b"):
        assert not is_valid_name(name)


def test_timestamp_format():
    assert timestamp(datetime(2024, 3, 7, 14, 20)) == "Mar 7 14:20"
    assert timestamp(datetime(2024, 12, 25, 9, 5)) == "Dec 25 09:05"
