"""Intermediate representation: the trees handed to the layout engine."""

from tree_layout.ir.tree import (
    TreeDocument,
    TreeNode,
    iter_tree,
    mirror_tree,
    tree_depth,
    tree_from_digraph,
    tree_size,
    tree_to_digraph,
)

__all__ = [
    "TreeDocument",
    "TreeNode",
    "iter_tree",
    "mirror_tree",
    "tree_depth",
    "tree_from_digraph",
    "tree_size",
    "tree_to_digraph",
]
