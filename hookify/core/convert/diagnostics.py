"""Diagnostics — non-fatal annotations on unresolved constructs.

Diagnostics are collected in a side list of (anchor, message) records; the
printer renders them as leading block comments. The unresolved-self
detector runs last and flags every ``this`` the rewrites left behind, so
unsupported constructs stay visible instead of being silently mistranslated.
"""

import logging
from typing import Iterable, List, Tuple

from ..constants import MSG_UNHANDLED_THIS
from ..syntax import NodeKind, SyntaxArena
from .models import Diagnostic

logger = logging.getLogger(__name__)


class DiagnosticCollector:
    """Per-file list of diagnostics, in the order they were raised."""

    def __init__(self, arena: SyntaxArena, warning_prefix: str = "@warning", file_path: str = ""):
        self.arena = arena
        self.warning_prefix = warning_prefix
        self.file_path = file_path
        self.items: List[Diagnostic] = []

    def __len__(self) -> int:
        return len(self.items)

    def add(self, anchor: int, message: str) -> Diagnostic:
        line, column = self.arena.position(anchor)
        diagnostic = Diagnostic(anchor=anchor, message=message, line=line, column=column)
        self.items.append(diagnostic)
        logger.warning(f"{self.file_path}:{line}:{column}: {message}")
        return diagnostic

    def flag_unresolved_self(self, roots: Iterable[int]) -> int:
        """Attach a diagnostic to every remaining ``this`` under ``roots``."""
        count = 0
        for root in roots:
            for index in self.arena.walk(root):
                if self.arena.kind(index) is NodeKind.THIS:
                    self.add(index, MSG_UNHANDLED_THIS)
                    count += 1
        return count

    def rehome(self, diagnostics: Iterable[Diagnostic], target: int) -> None:
        """Move diagnostics whose anchor did not survive onto ``target``.

        Line and column keep pointing at the original construct.
        """
        for diagnostic in diagnostics:
            if not self.arena.is_attached(diagnostic.anchor):
                diagnostic.anchor = target

    def comment_text(self, diagnostic: Diagnostic) -> str:
        return f"{self.warning_prefix}: {diagnostic.message}"

    def is_annotated(self, anchor: int, message: str) -> bool:
        """True if the source already carries this warning right before ``anchor``.

        Keeps repeated runs over a file from stacking identical comments.
        """
        parent = self.arena[anchor].parent
        if parent is None:
            return False
        siblings = self.arena[parent].children
        position = siblings.index(anchor) if anchor in siblings else 0
        if position == 0:
            return False
        previous = siblings[position - 1]
        if self.arena.kind(previous) is not NodeKind.COMMENT:
            return False
        expected = f"/* {self.warning_prefix}: {message} */"
        return self.arena.text(previous).strip() == expected

    def annotations(self) -> List[Tuple[int, str]]:
        """``(anchor, comment)`` pairs for the printer."""
        return [(d.anchor, self.comment_text(d)) for d in self.items]
