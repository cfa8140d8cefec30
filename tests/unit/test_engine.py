"""Tests for layout/engine.py — the post-order driver and context building."""

from __future__ import annotations

import math

import pytest

from tree_layout.config import TreeStyle
from tree_layout.ir.tree import TreeDocument, TreeNode, tree_size
from tree_layout.layout.algorithms import tidy_layout
from tree_layout.layout.engine import build_context, layout_document, layout_subtree, layout_tree
from tree_layout.layout.measure import MonospaceTextMeasurer
from tree_layout.layout.types import TextMeasurement
from tree_layout.types import LayoutAlgorithmType, SizingMode


def labelled(label: str, *children: TreeNode) -> TreeNode:
    return TreeNode(label.lower(), label, tuple(children))


class FixedMeasurer:
    """Every label measures 30 x 10 plus padding."""

    def measure(self, label: str, padding: float) -> TextMeasurement:
        return TextMeasurement(width=30 + 2 * padding, height=10 + 2 * padding, lines=(label,))


class TestLayoutDocument:
    def test_default_style_measures_labels(self):
        root = labelled("Root", labelled("A"), labelled("B"))
        laid_out = layout_document(TreeDocument.for_root(root))
        assert (laid_out.width, laid_out.height) == (52, 38)
        a, b = laid_out.children
        assert (a.x, a.y) == (-19, 78)
        assert (b.x, b.y) == (19, 78)

    def test_fixed_sizing(self):
        root = labelled("Root", labelled("A much longer label"))
        doc = TreeDocument("d", "D", root, SizingMode.Fixed, node_width=40, node_height=20)
        laid_out = layout_document(doc)
        assert all((n.width, n.height) == (40, 20) for n in laid_out.iter_nodes())
        assert laid_out.children[0].y == 60

    def test_custom_measurer(self):
        root = labelled("Root", labelled("A"), labelled("B"))
        style = TreeStyle()
        style.node.padding = 0
        laid_out = layout_tree(root, TreeDocument.for_root(root), style, FixedMeasurer())
        assert [c.x for c in laid_out.children] == [-20, 20]
        assert laid_out.children[0].y == 50

    def test_root_at_origin(self):
        root = labelled("Root", labelled("A", labelled("A1")), labelled("B"))
        for algorithm in LayoutAlgorithmType:
            style = TreeStyle()
            style.layout.algorithm = algorithm
            laid_out = layout_document(TreeDocument.for_root(root), style)
            assert (laid_out.x, laid_out.y) == (0, 0)


class TestDriver:
    def test_each_node_dispatched_once(self):
        root = labelled("R", labelled("A", labelled("A1"), labelled("A2")), labelled("B"))
        doc = TreeDocument.for_root(root)
        context = build_context(doc, TreeStyle(), MonospaceTextMeasurer())
        seen: list[str] = []

        def pick(node: TreeNode):
            seen.append(node.id)
            return tidy_layout

        result = layout_subtree(root, context, pick)
        assert seen == ["a1", "a2", "a", "b", "r"]
        assert sum(1 for _ in result.root.iter_nodes()) == tree_size(root)

    def test_deep_chain_has_no_recursion_limit(self):
        node = TreeNode("leaf", "leaf", width=40, height=20)
        for i in range(2000):
            node = TreeNode(f"n{i}", "x", (node,), width=40, height=20)
        style = TreeStyle()
        style.layout.algorithm = LayoutAlgorithmType.Tidy
        laid_out = layout_tree(node, TreeDocument.for_root(node), style)
        nodes = list(laid_out.iter_nodes())
        assert len(nodes) == 2001
        assert nodes[-1].y == 2000 * 60
        assert all(n.x == 0 for n in nodes)

    def test_repeat_calls_are_independent(self):
        root = labelled("R", labelled("A"), labelled("B", labelled("B1")))
        doc = TreeDocument.for_root(root)
        first = layout_document(doc)
        second = layout_document(doc)
        assert first.to_dict() == second.to_dict()

        first_ids = {id(n) for n in first.iter_nodes()}
        assert not first_ids & {id(n) for n in second.iter_nodes()}
        first.children[0].x += 1000
        assert second.children[0].x == layout_document(doc).children[0].x

    def test_input_tree_untouched(self):
        root = labelled("R", labelled("A"))
        before = repr(root)
        layout_document(TreeDocument.for_root(root))
        assert repr(root) == before


class TestContextValidation:
    @pytest.mark.parametrize(
        "field, value",
        [("horizontal_gap", -1), ("vertical_gap", math.nan), ("horizontal_gap", math.inf)],
    )
    def test_bad_gap(self, field, value):
        style = TreeStyle()
        setattr(style.layout, field, value)
        root = labelled("R")
        with pytest.raises(ValueError, match="gap"):
            layout_document(TreeDocument.for_root(root), style)

    def test_bad_padding(self):
        style = TreeStyle()
        style.node.padding = -2
        with pytest.raises(ValueError, match="padding"):
            build_context(TreeDocument.for_root(labelled("R")), style, MonospaceTextMeasurer())

    def test_zero_gaps_allowed(self):
        style = TreeStyle()
        style.layout.horizontal_gap = 0
        style.layout.vertical_gap = 0
        leaves = (TreeNode("a", "a", width=10, height=10), TreeNode("b", "b", width=10, height=10))
        root = TreeNode("r", "r", leaves, width=10, height=10)
        laid_out = layout_document(TreeDocument.for_root(root), style)
        assert [c.x for c in laid_out.children] == [-5, 5]
        assert laid_out.children[0].y == 10
