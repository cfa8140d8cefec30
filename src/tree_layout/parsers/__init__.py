"""Parser registry — detect the document format and dispatch to the right parser."""

from __future__ import annotations

from pathlib import Path

from tree_layout.ir.tree import TreeDocument
from tree_layout.parsers.json_tree import JsonTreeParser
from tree_layout.parsers.yaml_dsl import YamlTreeParser

_PARSERS = {
    "json": JsonTreeParser,
    "yaml": YamlTreeParser,
}

_SUFFIXES = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def detect_format(src: str) -> str:
    """Return 'json' when the text starts like a JSON value, else 'yaml'."""
    stripped = src.lstrip()
    if stripped.startswith("{") or stripped.startswith("["):
        return "json"
    return "yaml"


def parse(src: str, fmt: str | None = None, source: str | None = None) -> TreeDocument:
    """Parse a tree document, auto-detecting the format when ``fmt`` is None."""
    fmt = fmt or detect_format(src)
    parser_cls = _PARSERS.get(fmt)
    if parser_cls is None:
        raise ValueError(f"Unsupported tree format: {fmt}")
    return parser_cls(source or f"<{fmt}>").parse(src)


def parse_file(path: str | Path) -> TreeDocument:
    """Parse a file, choosing the format from its suffix (content sniffing otherwise)."""
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    return parse(text, _SUFFIXES.get(path.suffix.lower()), source=str(path))


__all__ = ["JsonTreeParser", "YamlTreeParser", "detect_format", "parse", "parse_file"]
