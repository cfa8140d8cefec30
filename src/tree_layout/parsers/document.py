"""Shared conversion from decoded YAML/JSON data to TreeDocument.

Tree nodes are written either in the fluent DSL (``{node: Label, children:
[...]}``) or in the explicit form (``{id, label, children}``). Nodes without an
``id`` get ``n1, n2, ...`` in pre-order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from tree_layout.ir.tree import TreeDocument, TreeNode
from tree_layout.types import SizingMode

logger = logging.getLogger(__name__)

ID_PREFIX = "n"


@dataclass
class _Entry:
    id: str | None
    label: str
    width: float | None
    height: float | None
    children: list[Any]


def _optional_size(value: Any, where: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        raise ValueError(f"{where}: expected a non-negative number, got {value!r}")
    return value


def _read_entry(raw: Any, where: str) -> _Entry:
    if not isinstance(raw, dict):
        raise ValueError(f"{where}: expected a node mapping")
    if "node" in raw:
        label = raw["node"]
    elif "label" in raw:
        label = raw["label"]
    else:
        raise ValueError(f"{where}: node needs a 'node' or 'label' value")
    children = raw.get("children") or []
    if not isinstance(children, list):
        raise ValueError(f"{where}: 'children' must be a list")
    node_id = raw.get("id")
    return _Entry(
        id=None if node_id is None else str(node_id),
        label="" if label is None else str(label),
        width=_optional_size(raw.get("width"), f"{where}.width"),
        height=_optional_size(raw.get("height"), f"{where}.height"),
        children=children,
    )


def build_tree(raw_root: Any, where: str = "tree[0]") -> TreeNode:
    """Build a TreeNode tree from nested node mappings without recursion."""
    entries: list[_Entry] = []
    stack: list[tuple[Any, str]] = [(raw_root, where)]
    while stack:
        raw, path = stack.pop()
        entry = _read_entry(raw, path)
        entries.append(entry)
        for i in range(len(entry.children) - 1, -1, -1):
            stack.append((entry.children[i], f"{path}.children[{i}]"))

    # Walking the pre-order list backwards leaves a node's children on top of
    # ``built`` with the first child last pushed.
    built: list[TreeNode] = []
    for index in range(len(entries) - 1, -1, -1):
        entry = entries[index]
        children = tuple(built.pop() for _ in entry.children)
        built.append(
            TreeNode(
                id=entry.id if entry.id is not None else f"{ID_PREFIX}{index + 1}",
                label=entry.label,
                children=children,
                width=entry.width,
                height=entry.height,
            )
        )
    return built[0]


def _sizing_mode(value: Any, source: str) -> SizingMode:
    try:
        return SizingMode(value)
    except ValueError:
        raise ValueError(f"{source}: Invalid 'sizingMode' (expected 'fit-content' or 'fixed')") from None


def document_from_mapping(obj: Any, source: str) -> TreeDocument:
    """Build a TreeDocument from a decoded document mapping.

    A ``tree`` list (the DSL form) requires ``id``, ``name`` and
    ``sizingMode``; only its first root is used. A ``root`` mapping is accepted
    with optional metadata.

    Raises:
        ValueError: On any structural problem, naming ``source``.
    """
    if not isinstance(obj, dict):
        raise ValueError(f"{source}: Expected an object at root")

    if "tree" in obj:
        if not isinstance(obj.get("id"), str):
            raise ValueError(f"{source}: Missing or invalid 'id' (expected string)")
        if not isinstance(obj.get("name"), str):
            raise ValueError(f"{source}: Missing or invalid 'name' (expected string)")
        sizing_mode = _sizing_mode(obj.get("sizingMode"), source)
        roots = obj["tree"]
        if not isinstance(roots, list):
            raise ValueError(f"{source}: Missing or invalid 'tree' (expected array)")
        if not roots:
            raise ValueError(f"{source}: Tree must have at least one root node")
        if len(roots) > 1:
            logger.warning("%s: %d root nodes given, only the first is used", source, len(roots))
        root = build_tree(roots[0])
    elif "root" in obj:
        root = build_tree(obj["root"], "root")
        sizing_mode = _sizing_mode(obj.get("sizingMode", SizingMode.FitContent.value), source)
    else:
        root = build_tree(obj, "root")
        return TreeDocument.for_root(root)

    style = obj.get("style") or {}
    if not isinstance(style, dict):
        raise ValueError(f"{source}: 'style' must be a mapping")

    return TreeDocument(
        id=str(obj.get("id", root.id)),
        name=str(obj.get("name", root.label)),
        root=root,
        sizing_mode=sizing_mode,
        node_width=_optional_size(obj.get("nodeWidth"), f"{source}: nodeWidth"),
        node_height=_optional_size(obj.get("nodeHeight"), f"{source}: nodeHeight"),
        style=style,
    )
