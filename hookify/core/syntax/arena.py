"""Index-addressed syntax tree.

The arena owns every node of one source file. Nodes are addressed by their
integer index; rewrites go through ``replace_subtree`` and
``insert_children`` so an index always names whatever currently sits at that
position in the tree. Traversal is an explicit worklist, never recursion.
"""

import dataclasses
import logging
from typing import Callable, Iterator, List, Optional, Sequence, Set, Tuple

from .models import NodeKind, SlotValue, SyntaxNode

logger = logging.getLogger(__name__)


class SyntaxArena:
    """Mutable tree of ``SyntaxNode`` objects for a single source file."""

    def __init__(self, source: bytes):
        self.source = source
        self.nodes: List[SyntaxNode] = []
        self.root = 0
        self._dirty: Set[int] = set()

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> SyntaxNode:
        return self.nodes[index]

    def add(self, node: SyntaxNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    # =========================================================================
    # Queries
    # =========================================================================

    def kind(self, index: Optional[int]) -> Optional[NodeKind]:
        if index is None:
            return None
        return self.nodes[index].kind

    def child(self, index: int, field_name: str) -> Optional[int]:
        return self.nodes[index].fields.get(field_name)

    def named_children(self, index: int) -> List[int]:
        """Named children, comments excluded."""
        return [
            c for c in self.nodes[index].children
            if self.nodes[c].named and self.nodes[c].kind is not NodeKind.COMMENT
        ]

    def has_token(self, index: int, token: str) -> bool:
        """True if an anonymous child token (keyword/punctuation) is present."""
        return any(
            not self.nodes[c].named and self.nodes[c].type == token
            for c in self.nodes[index].children
        )

    def text(self, index: int) -> str:
        """Source text of a leaf or unmodified node."""
        node = self.nodes[index]
        if node.text is not None:
            return node.text
        if node.span is not None:
            start, end = node.span
            return self.source[start:end].decode("utf-8", errors="replace")
        return ""

    def ancestors(self, index: int) -> Iterator[int]:
        parent = self.nodes[index].parent
        while parent is not None:
            yield parent
            parent = self.nodes[parent].parent

    def is_attached(self, index: int) -> bool:
        """True if the node is still reachable from the root."""
        current = index
        while current != self.root:
            parent = self.nodes[current].parent
            if parent is None or current not in self.nodes[parent].children:
                return False
            current = parent
        return True

    def is_dirty(self, index: int) -> bool:
        return index in self._dirty

    def walk(
        self,
        index: int,
        prune: Optional[Callable[[int], bool]] = None,
    ) -> Iterator[int]:
        """Pre-order traversal from ``index``.

        Children are read after the consumer has seen a node, so a node
        replaced during iteration is traversed through its replacement.
        ``prune`` stops the descent below nodes for which it returns True.
        """
        stack = [index]
        while stack:
            current = stack.pop()
            yield current
            if prune is not None and prune(current):
                continue
            stack.extend(reversed(self.nodes[current].children))

    def position(self, index: int) -> Tuple[int, int]:
        """1-based line and 0-based column of a node's original position."""
        row, column = self.nodes[index].start_point
        return row + 1, column

    def line_indent(self, index: int) -> str:
        """Leading whitespace of the source line a node starts on."""
        node = self.nodes[index]
        anchor = node.slot or node.span
        if anchor is None:
            return ""
        line_start = self.source.rfind(b"\n", 0, anchor[0]) + 1
        end = line_start
        while end < len(self.source) and self.source[end:end + 1] in (b" ", b"\t"):
            end += 1
        return self.source[line_start:end].decode("utf-8")

    # =========================================================================
    # Construction
    # =========================================================================

    def leaf(self, type_name: str, text: str, kind: NodeKind = NodeKind.OTHER) -> int:
        """Create a synthesised leaf node, e.g. an identifier."""
        return self.add(SyntaxNode(type=type_name, kind=kind, text=text))

    def synthesize(
        self,
        type_name: str,
        template: str,
        kind: NodeKind = NodeKind.OTHER,
        joiner: str = ", ",
        **slots: SlotValue,
    ) -> int:
        """Create a node rendered from a ``string.Template`` source.

        Each ``$name`` placeholder is filled with the printed slot: a single
        node, or a list of nodes joined by ``joiner``. Single-node slots are
        also exposed as fields so structural queries work on the result.
        """
        children: List[int] = []
        fields = {}
        for name, value in slots.items():
            if isinstance(value, list):
                children.extend(value)
            else:
                children.append(value)
                fields[name] = value
        index = self.add(SyntaxNode(
            type=type_name,
            kind=kind,
            children=children,
            fields=fields,
            template=template,
            slots=dict(slots),
            joiner=joiner,
        ))
        for child in children:
            self.nodes[child].parent = index
        return index

    # =========================================================================
    # Mutation
    # =========================================================================

    def replace_subtree(
        self,
        index: int,
        new_nodes: Sequence[int],
        separator: Optional[str] = None,
        block: bool = False,
    ) -> None:
        """Replace the node at ``index`` with one or more nodes.

        One node is copied into place. Several become a fragment joined by
        ``separator`` (default: newline plus the replaced node's indent),
        optionally wrapped in braces. The replaced subtree is detached.
        """
        old = self.nodes[index]
        if len(new_nodes) == 1:
            replacement = dataclasses.replace(self.nodes[new_nodes[0]])
            replacement.children = list(replacement.children)
        else:
            if separator is None:
                separator = " " if block else "\n" + self.line_indent(index)
            replacement = SyntaxNode(
                type="fragment",
                kind=NodeKind.FRAGMENT,
                children=list(new_nodes),
                joiner=separator,
                block=block,
            )
        replacement.parent = old.parent
        replacement.slot = old.slot
        if replacement.span is None:
            replacement.start_point = old.start_point
        self.nodes[index] = replacement
        for child in replacement.children:
            self.nodes[child].parent = index
        self._mark_dirty(index)
        logger.debug("Replaced node %d (%s) with %s", index, old.type, replacement.type)

    def insert_children(self, parent: int, position: int, new_nodes: Sequence[int]) -> None:
        """Insert synthesised nodes into a statement list before ``position``."""
        children = self.nodes[parent].children
        children[position:position] = list(new_nodes)
        for child in new_nodes:
            self.nodes[child].parent = parent
            self.nodes[child].slot = None
        self._mark_dirty(parent)

    def _mark_dirty(self, index: int) -> None:
        self._dirty.add(index)
        self._dirty.update(self.ancestors(index))
