"""Parser for ``*.tree.yaml`` documents.

```yaml
id: my-tree
name: My Tree
sizingMode: fixed
nodeWidth: 40
nodeHeight: 40
style:
  edge: { style: straight-arrow }
tree:
  - node: Root
    children:
      - node: Child 1
      - node: Child 2
```
"""

from __future__ import annotations

import logging

import yaml

from tree_layout.ir.tree import TreeDocument, tree_size
from tree_layout.parsers.document import document_from_mapping

logger = logging.getLogger(__name__)


class YamlTreeParser:
    """Parses the YAML tree DSL into a TreeDocument."""

    def __init__(self, source: str = "<yaml>") -> None:
        self.source = source

    def parse(self, src: str) -> TreeDocument:
        try:
            data = yaml.safe_load(src)
        except yaml.YAMLError as e:
            raise ValueError(f"{self.source}: invalid YAML: {e}") from e
        document = document_from_mapping(data, self.source)
        logger.debug("parsed %s: '%s' with %d nodes", self.source, document.id, tree_size(document.root))
        return document
