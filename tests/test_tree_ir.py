"""Tests for ir/tree.py — traversal, mirroring and networkx conversion."""

from __future__ import annotations

import networkx as nx
import pytest

from tree_layout.ir import TreeNode
from tree_layout.ir.tree import (
    TreeDocument,
    iter_tree,
    mirror_tree,
    tree_depth,
    tree_from_digraph,
    tree_size,
    tree_to_digraph,
)
from tree_layout.types import SizingMode

# ─── Helpers ──────────────────────────────────────────────────────────────────


def node(node_id: str, *children: TreeNode) -> TreeNode:
    return TreeNode(node_id, node_id.upper(), children)


def sample() -> TreeNode:
    return node("r", node("a", node("a1"), node("a2")), node("b"), node("c", node("c1")))


# ─── Traversal ────────────────────────────────────────────────────────────────


def test_pre_order():
    assert [n.id for n in iter_tree(sample())] == ["r", "a", "a1", "a2", "b", "c", "c1"]


def test_size_and_depth():
    assert tree_size(sample()) == 7
    assert tree_depth(sample()) == 3
    assert tree_depth(node("x")) == 1


def test_leaf_and_explicit_size():
    leaf = TreeNode("x", "X", width=10, height=5)
    assert leaf.is_leaf()
    assert leaf.has_explicit_size()
    assert not TreeNode("y", "Y", width=10).has_explicit_size()


def test_mirror_reverses_every_level():
    mirrored = mirror_tree(sample())
    assert [n.id for n in iter_tree(mirrored)] == ["r", "c", "c1", "b", "a", "a2", "a1"]
    assert mirror_tree(mirrored) == sample()


def test_mirror_shared_subtree():
    shared = node("s", node("s1"), node("s2"))
    root = node("r", shared, shared)
    mirrored = mirror_tree(root)
    assert [c.id for c in mirrored.children[0].children] == ["s2", "s1"]
    assert [c.id for c in mirrored.children[1].children] == ["s2", "s1"]


def test_deep_chain_traversal():
    root = TreeNode("leaf", "leaf")
    for i in range(5000):
        root = TreeNode(f"n{i}", "x", (root,))
    assert tree_depth(root) == 5001
    assert tree_size(mirror_tree(root)) == 5001


def test_document_for_root():
    doc = TreeDocument.for_root(sample())
    assert doc.id == "r"
    assert doc.name == "R"
    assert doc.sizing_mode == SizingMode.FitContent
    assert doc.style == {}


# ─── networkx conversion ──────────────────────────────────────────────────────


class TestDigraph:
    def test_round_trip_keeps_order(self):
        graph = tree_to_digraph(sample())
        assert graph.number_of_nodes() == 7
        assert graph.edges["r", "c"]["order"] == 2
        assert tree_from_digraph(graph) == sample()

    def test_order_attribute_wins_over_insertion(self):
        graph = nx.DiGraph()
        graph.add_edge("r", "b", order=1)
        graph.add_edge("r", "a", order=0)
        tree = tree_from_digraph(graph)
        assert [c.id for c in tree.children] == ["a", "b"]
        assert tree.label == "r"

    def test_empty_graph(self):
        with pytest.raises(ValueError, match="empty"):
            tree_from_digraph(nx.DiGraph())

    def test_not_a_tree(self):
        graph = nx.DiGraph([("a", "c"), ("b", "c")])
        with pytest.raises(ValueError, match="not a tree"):
            tree_from_digraph(graph)

    def test_wrong_root(self):
        graph = nx.DiGraph([("a", "b")])
        with pytest.raises(ValueError, match="not the root"):
            tree_from_digraph(graph, root="b")
