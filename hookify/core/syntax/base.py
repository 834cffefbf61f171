"""Base interface for language-specific parsers.

Defines the Strategy pattern base class that all language parsers implement.
Shared parsing logic lives here (tree-sitter parse, error detection, arena
construction); language-specific node kinds and field names are delegated.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

import tree_sitter

from .arena import SyntaxArena
from .models import COMMON_KINDS, NodeKind, ParseResult, SourceParseError, SyntaxNode

logger = logging.getLogger(__name__)


class BaseLanguageParser(ABC):
    """Abstract base for tree-sitter parsers producing a ``SyntaxArena``.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - extra_kinds(): grammar types beyond ``COMMON_KINDS``
    - field_aliases(): per-type field renames onto the shared field names
    """

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'javascript', 'tsx')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    def extra_kinds(self) -> Dict[str, NodeKind]:
        """Grammar types specific to this language."""
        return {}

    def field_aliases(self) -> Dict[str, Dict[str, str]]:
        """Map ``{grammar_type: {field: shared_field}}`` for this language."""
        return {}

    def parse_file(self, file_path: str) -> ParseResult:
        """Read and parse a source file.

        Raises:
            OSError: If the file cannot be read
            SourceParseError: If the source is malformed
        """
        with open(file_path, "r", encoding="utf-8") as f:
            source_text = f.read()
        return self.parse_source(source_text, file_path)

    def parse_source(self, source_text: str, file_path: str) -> ParseResult:
        """Parse source code string into a ParseResult.

        Args:
            source_text: Source code as string
            file_path: File path (for metadata and error messages)

        Returns:
            ParseResult holding the arena

        Raises:
            SourceParseError: If tree-sitter reports an error or missing node
        """
        source_bytes = source_text.encode("utf-8")
        line_count = source_text.count("\n") + (1 if source_text and not source_text.endswith("\n") else 0)

        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        tree = parser.parse(source_bytes)

        if tree.root_node.has_error:
            line, column = self._first_error(tree.root_node)
            logger.debug(f"Parse error in {file_path} at {line}:{column}")
            raise SourceParseError(file_path, line, column)

        arena = self._build_arena(tree, source_bytes)
        logger.debug(f"Parsed {file_path}: {len(arena)} nodes, {line_count} lines")

        return ParseResult(
            file_path=file_path,
            language=self.get_language(),
            arena=arena,
            line_count=line_count,
        )

    def _build_arena(self, tree: tree_sitter.Tree, source: bytes) -> SyntaxArena:
        """Copy the tree-sitter tree into an arena with an explicit worklist."""
        kinds = dict(COMMON_KINDS)
        kinds.update(self.extra_kinds())
        aliases = self.field_aliases()

        arena = SyntaxArena(source)
        root_index = arena.add(self._make_node(tree.root_node, kinds, source))
        arena.root = root_index

        worklist: List[Tuple[tree_sitter.Node, int]] = [(tree.root_node, root_index)]
        while worklist:
            ts_node, index = worklist.pop()
            renames = aliases.get(ts_node.type, {})
            cursor = ts_node.walk()
            if not cursor.goto_first_child():
                continue
            while True:
                child = cursor.node
                child_index = arena.add(self._make_node(child, kinds, source))
                arena[child_index].parent = index
                arena[index].children.append(child_index)
                field_name = cursor.field_name
                if field_name:
                    arena[index].fields.setdefault(renames.get(field_name, field_name), child_index)
                if child.child_count:
                    worklist.append((child, child_index))
                if not cursor.goto_next_sibling():
                    break
        return arena

    @staticmethod
    def _make_node(ts_node: tree_sitter.Node, kinds: Dict[str, NodeKind], source: bytes) -> SyntaxNode:
        if ts_node.is_named:
            kind = kinds.get(ts_node.type, NodeKind.OTHER)
        else:
            kind = NodeKind.TOKEN
        span = (ts_node.start_byte, ts_node.end_byte)
        text: Optional[str] = None
        if ts_node.child_count == 0:
            text = source[ts_node.start_byte:ts_node.end_byte].decode("utf-8", errors="replace")
        return SyntaxNode(
            type=ts_node.type,
            kind=kind,
            named=ts_node.is_named,
            span=span,
            slot=span,
            start_point=(ts_node.start_point[0], ts_node.start_point[1]),
            text=text,
        )

    @staticmethod
    def _first_error(root: tree_sitter.Node) -> Tuple[int, int]:
        """Locate the first ERROR or MISSING node (1-based line, 0-based column)."""
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == "ERROR" or node.is_missing:
                return node.start_point[0] + 1, node.start_point[1]
            if node.has_error:
                stack.extend(reversed(node.children))
        return root.start_point[0] + 1, root.start_point[1]
