"""Arena printer.

Turns a (possibly rewritten) arena back into source text. Untouched regions
are copied byte-for-byte from the original source, so formatting and
comments survive; only replaced or inserted nodes are rendered from their
templates. Diagnostics are rendered as leading block comments at their
anchors; nodes themselves are never annotated.
"""

import logging
from string import Template
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .arena import SyntaxArena
from .models import NodeKind

logger = logging.getLogger(__name__)


class Printer:
    """Renders one arena, with optional (anchor, comment) annotations."""

    def __init__(self, arena: SyntaxArena, annotations: Iterable[Tuple[int, str]] = ()):
        self.arena = arena
        self._comments: Dict[int, List[str]] = {}
        for anchor, comment in annotations:
            self._comments.setdefault(anchor, []).append(comment)
        # Nodes that must be printed piecewise so annotated descendants show up
        self._descend: Set[int] = set()
        for anchor in self._comments:
            self._descend.update(arena.ancestors(anchor))

    def print(self, index: Optional[int] = None) -> str:
        if index is not None:
            return self._print(index)
        # Whitespace outside the program node belongs to the file
        root = self.arena.root
        start, end = self.arena[root].span
        return self._gap(0, start) + self._print(root) + self._gap(end, len(self.arena.source))

    def _print(self, index: int) -> str:
        node = self.arena[index]
        if node.kind is NodeKind.FRAGMENT:
            text = node.joiner.join(self._print(c) for c in node.children)
            if node.block:
                text = "{ " + text + " }"
        elif node.template is not None:
            text = self._print_template(index)
        elif node.span is None:
            text = node.text or ""
        elif self.arena.is_dirty(index) or index in self._descend:
            text = self._print_spliced(index)
        else:
            text = self.arena.text(index)

        comments = self._comments.get(index)
        if comments:
            text = "".join(f"/* {c} */ " for c in comments) + text
        return text

    def _print_template(self, index: int) -> str:
        node = self.arena[index]
        values = {}
        for name, value in node.slots.items():
            if isinstance(value, list):
                values[name] = node.joiner.join(self._print(c) for c in value)
            else:
                values[name] = self._print(value)
        return Template(node.template).substitute(values)

    def _print_spliced(self, index: int) -> str:
        """Print an original node by interleaving source gaps and children.

        Children without a slot were inserted; they are emitted just before
        the next slotted sibling, each on its own line at that sibling's
        indentation.
        """
        arena = self.arena
        start, end = arena[index].span
        cursor = start
        parts: List[str] = []
        pending: List[int] = []

        for child in arena[index].children:
            slot = arena[child].slot
            if slot is None:
                pending.append(child)
                continue
            parts.append(self._gap(cursor, slot[0]))
            indent = arena.line_indent(child)
            for inserted in pending:
                parts.append(self._print(inserted))
                parts.append("\n" + indent)
            pending = []
            parts.append(self._print(child))
            cursor = slot[1]

        for inserted in pending:
            parts.append("\n" + self._print(inserted))
        parts.append(self._gap(cursor, end))
        return "".join(parts)

    def _gap(self, start: int, end: int) -> str:
        if end <= start:
            return ""
        return self.arena.source[start:end].decode("utf-8", errors="replace")


def print_tree(arena: SyntaxArena, annotations: Iterable[Tuple[int, str]] = ()) -> str:
    """Render the whole arena back to source text."""
    return Printer(arena, annotations).print()
