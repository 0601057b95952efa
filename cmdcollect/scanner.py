"""Tree-sitter powered scan for collectible command functions."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional

import tree_sitter_rust
from tree_sitter import Language, Node, Parser

from .config import DEFAULT_COMMAND_ATTRIBUTE, DEFAULT_MARKER_ATTRIBUTE
from .logging import get_logger
from .models import Member

SOURCE_SUFFIX = ".rs"

# Nodes that may sit between an attribute and the item it decorates.
_TRIVIA_NODES = {"line_comment", "block_comment"}

logger = get_logger("scanner")


@dataclass
class _ParsedFunction:
    name: str
    attributes: List[str] = field(default_factory=list)


class CommandScanner:
    """Extracts names of top-level functions tagged with the collect marker."""

    def __init__(
        self,
        *,
        marker_attribute: str = DEFAULT_MARKER_ATTRIBUTE,
        command_attribute: str = DEFAULT_COMMAND_ATTRIBUTE,
        collect_all: bool = False,
    ) -> None:
        self.marker_attribute = marker_attribute
        self.command_attribute = command_attribute
        self.collect_all = collect_all
        self._parser: Optional[Parser] = None

    def scan_member(self, member: Member) -> List[str]:
        """Return collected function names for every source file in ``member``."""
        functions: List[str] = []
        for path in iter_source_files(member.src_dir):
            functions.extend(self.scan_file(path))
        return functions

    def scan_file(self, path: Path) -> List[str]:
        try:
            source_bytes = path.read_text(encoding="utf-8").encode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", path, exc)
            return []
        return self.scan_source(source_bytes, origin=path)

    def scan_source(self, source_bytes: bytes, *, origin: Path | None = None) -> List[str]:
        tree = self._get_parser().parse(source_bytes)
        if tree.root_node.has_error:
            logger.warning("Skipping %s: file does not parse", origin or "<source>")
            return []
        return [
            function.name
            for function in _collect_functions(tree.root_node, source_bytes)
            if self._is_collectible(function)
        ]

    def _is_collectible(self, function: _ParsedFunction) -> bool:
        if self.marker_attribute in function.attributes:
            return True
        return self.collect_all and self.command_attribute in function.attributes

    def _get_parser(self) -> Parser:
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_rust.language()))
        return self._parser


def iter_source_files(src_dir: Path) -> Iterator[Path]:
    """Yield ``.rs`` files below ``src_dir`` in a stable order."""
    for dirpath, dirnames, filenames in os.walk(src_dir):
        dirnames.sort()
        for filename in sorted(filenames):
            if filename.endswith(SOURCE_SUFFIX):
                yield Path(dirpath) / filename


def _collect_functions(root: Node, source_bytes: bytes) -> Iterator[_ParsedFunction]:
    # Outer attributes are siblings of the item they decorate in the
    # tree-sitter grammar, so gather them until the next real item.
    pending: List[str] = []
    for child in root.children:
        if child.type == "attribute_item":
            path = _attribute_path(child, source_bytes)
            if path:
                pending.append(path)
            continue
        if child.type in _TRIVIA_NODES:
            continue
        if child.type == "function_item":
            name_node = child.child_by_field_name("name")
            if name_node is not None:
                yield _ParsedFunction(name=_node_text(name_node, source_bytes), attributes=pending)
        pending = []


def _attribute_path(attribute_item: Node, source_bytes: bytes) -> str:
    for node in attribute_item.named_children:
        if node.type == "attribute" and node.named_children:
            text = _node_text(node.named_children[0], source_bytes)
            return "".join(text.split())
    return ""


def _node_text(node: Node, source_bytes: bytes) -> str:
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["CommandScanner", "SOURCE_SUFFIX", "iter_source_files"]
