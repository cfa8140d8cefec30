"""Parser for JSON tree documents.

Accepted shapes:
  - a document with a nested ``root`` node (``{id, label, children}``)
  - a document with a ``tree`` list in the YAML DSL form
  - a bare root node
  - an edge list: ``{"nodes": [...], "edges": [[parent, child], ...]}``
"""

from __future__ import annotations

import json
import logging
from typing import Any

import networkx as nx

from tree_layout.ir.tree import TreeDocument, tree_from_digraph, tree_size
from tree_layout.parsers.document import document_from_mapping

logger = logging.getLogger(__name__)


def edge_list_to_digraph(obj: dict[str, Any], source: str) -> nx.DiGraph:
    """Build a DiGraph from ``nodes`` (ids or mappings) and ``edges`` pairs."""
    graph: nx.DiGraph = nx.DiGraph()
    for i, raw in enumerate(obj.get("nodes", [])):
        if isinstance(raw, dict):
            if "id" not in raw:
                raise ValueError(f"{source}: nodes[{i}] needs an 'id'")
            attrs = {k: raw[k] for k in ("label", "width", "height") if raw.get(k) is not None}
            graph.add_node(str(raw["id"]), **attrs)
        else:
            graph.add_node(str(raw))

    edges = obj["edges"]
    if not isinstance(edges, list):
        raise ValueError(f"{source}: 'edges' must be a list of [parent, child] pairs")
    for order_hint, pair in enumerate(edges):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValueError(f"{source}: edges[{order_hint}] must be a [parent, child] pair")
        parent, child = (str(p) for p in pair)
        graph.add_edge(parent, child, order=order_hint)
    return graph


class JsonTreeParser:
    """Parses JSON tree documents into a TreeDocument."""

    def __init__(self, source: str = "<json>") -> None:
        self.source = source

    def parse(self, src: str) -> TreeDocument:
        try:
            data = json.loads(src)
        except ValueError as e:
            raise ValueError(f"{self.source}: invalid JSON: {e}") from e

        if isinstance(data, dict) and "edges" in data:
            graph = edge_list_to_digraph(data, self.source)
            root_id = data.get("root")
            root = tree_from_digraph(graph, None if root_id is None else str(root_id))
            document = TreeDocument.for_root(root)
            if "name" in data:
                document.name = str(data["name"])
        else:
            document = document_from_mapping(data, self.source)

        logger.debug("parsed %s: '%s' with %d nodes", self.source, document.id, tree_size(document.root))
        return document
