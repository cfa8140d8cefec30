"""Tree IR — the immutable input trees consumed by the layout engine.

A ``TreeNode`` is never mutated once built: layout produces a separate
``LayoutNode`` tree. ``TreeDocument`` carries the per-document sizing metadata
and style overrides that travel with a tree (the YAML/JSON documents).

Conversion to and from a networkx ``DiGraph`` lets callers that already hold
graph data feed it to the engine; the graph must be an arborescence.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from tree_layout.types import SizingMode


@dataclass(frozen=True)
class TreeNode:
    id: str
    label: str
    children: tuple[TreeNode, ...] = ()
    width: float | None = None
    height: float | None = None

    def is_leaf(self) -> bool:
        return not self.children

    def has_explicit_size(self) -> bool:
        return self.width is not None and self.height is not None


@dataclass
class TreeDocument:
    """A tree plus the metadata it was authored with."""

    id: str
    name: str
    root: TreeNode
    sizing_mode: SizingMode = SizingMode.FitContent
    node_width: float | None = None
    node_height: float | None = None
    style: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_root(cls, root: TreeNode) -> TreeDocument:
        """Wrap a bare tree with default (fit-content) metadata."""
        return cls(id=root.id, name=root.label, root=root)


# ─── Traversal ───────────────────────────────────────────────────────────────


def iter_tree(root: TreeNode) -> Iterator[TreeNode]:
    """Yield every node in pre-order without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def tree_size(root: TreeNode) -> int:
    return sum(1 for _ in iter_tree(root))


def tree_depth(root: TreeNode) -> int:
    """Number of levels in the tree (a single node has depth 1)."""
    deepest = 0
    stack = [(root, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in node.children)
    return deepest


def _rebuild(root: TreeNode, build: Callable[[TreeNode, tuple[TreeNode, ...]], TreeNode]) -> TreeNode:
    """Rebuild a tree bottom-up; ``build`` receives the original node and its rebuilt children."""
    # Finished subtrees are pushed on ``done`` in post-order, so a node's
    # rebuilt children are always the last len(children) entries.
    done: list[TreeNode] = []
    stack: list[tuple[TreeNode, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.children))
            continue
        count = len(node.children)
        children = tuple(done[len(done) - count :]) if count else ()
        del done[len(done) - count :]
        done.append(build(node, children))
    return done[0]


def mirror_tree(root: TreeNode) -> TreeNode:
    """Return the left-right mirror image: children reversed at every level."""
    return _rebuild(
        root,
        lambda node, children: TreeNode(
            id=node.id,
            label=node.label,
            children=tuple(reversed(children)),
            width=node.width,
            height=node.height,
        ),
    )


# ─── networkx conversion ─────────────────────────────────────────────────────


def tree_to_digraph(root: TreeNode) -> nx.DiGraph:
    """Build a DiGraph with one node per TreeNode; edges carry the child ``order``."""
    graph: nx.DiGraph = nx.DiGraph()
    for node in iter_tree(root):
        graph.add_node(node.id, label=node.label, width=node.width, height=node.height)
        for order, child in enumerate(node.children):
            graph.add_edge(node.id, child.id, order=order)
    return graph


def tree_from_digraph(graph: nx.DiGraph, root: str | None = None) -> TreeNode:
    """Convert an arborescence into a TreeNode tree.

    Children are ordered by the ``order`` edge attribute when present, then by
    edge insertion order. Node attributes ``label``, ``width`` and ``height``
    are honoured; the label defaults to the node id.

    Raises:
        ValueError: If the graph is empty or not a tree rooted at ``root``.
    """
    if graph.number_of_nodes() == 0:
        raise ValueError("Cannot build a tree from an empty graph")
    if not nx.is_arborescence(graph):
        raise ValueError("Graph is not a tree: every node except the root needs exactly one parent")

    roots = [n for n in graph.nodes if graph.in_degree(n) == 0]
    if root is None:
        root = roots[0]
    elif root not in roots:
        raise ValueError(f"Node '{root}' is not the root of the graph")

    def ordered_children(node_id: Any) -> list[Any]:
        succ = list(graph.successors(node_id))
        position = {child: i for i, child in enumerate(succ)}
        return sorted(succ, key=lambda c: (graph.edges[node_id, c].get("order", position[c]), position[c]))

    built: dict[Any, TreeNode] = {}
    for node_id in nx.dfs_postorder_nodes(graph, source=root):
        attrs = graph.nodes[node_id]
        built[node_id] = TreeNode(
            id=str(node_id),
            label=str(attrs.get("label", node_id)),
            children=tuple(built.pop(child) for child in ordered_children(node_id)),
            width=attrs.get("width"),
            height=attrs.get("height"),
        )
    return built[root]
