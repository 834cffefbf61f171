"""Expression rewriter — in-place substitution of matched subexpressions.

One substitution mechanism (``substitute``) with three uses, applied in a
fixed order by the pipeline:

1. props rewrite:        ``this.props``          → ``props``
2. state-read rewrite:   ``this.state.<field>``  → ``<getter>``
3. hoist-usage rewrite:  ``this.<name>``         → ``<name>``

Only the member bodies handed in as roots are traversed. Written-to
accesses are left alone so the unresolved-self detector can flag them.
"""

import logging
from typing import Callable, Dict, Iterable, Optional

from ..syntax import NodeKind, SyntaxArena
from .context import ConversionContext
from .matcher import is_assignment_target, is_self_access, state_field_access
from .models import HoistedVar, StateBinding

logger = logging.getLogger(__name__)

# Returns the replacement node for a match, or None
Matcher = Callable[[int], Optional[int]]


def substitute(arena: SyntaxArena, roots: Iterable[int], match: Matcher) -> int:
    """Replace every node under ``roots`` for which ``match`` yields a node.

    Returns the number of substitutions made.
    """
    count = 0
    for root in roots:
        for index in arena.walk(root):
            replacement = match(index)
            if replacement is not None:
                arena.replace_subtree(index, [replacement])
                count += 1
    return count


def identifier(arena: SyntaxArena, name: str) -> int:
    return arena.leaf("identifier", name, NodeKind.IDENTIFIER)


def rewrite_props_usage(ctx: ConversionContext, roots: Iterable[int]) -> int:
    """``this.props`` → ``props``."""
    arena = ctx.arena
    props_name = ctx.settings.props_name

    def match(index: int) -> Optional[int]:
        if is_self_access(arena, index, "props") and not is_assignment_target(arena, index):
            return identifier(arena, props_name)
        return None

    count = substitute(arena, roots, match)
    logger.debug(f"Rewrote {count} props access(es)")
    return count


def rewrite_state_reads(
    ctx: ConversionContext,
    roots: Iterable[int],
    bindings: Dict[str, StateBinding],
) -> int:
    """``this.state.<field>`` → getter, for fields with a binding."""
    arena = ctx.arena
    state_field = ctx.settings.state_field

    def match(index: int) -> Optional[int]:
        name = state_field_access(arena, index, state_field)
        if name is None or name not in bindings or is_assignment_target(arena, index):
            return None
        return identifier(arena, bindings[name].getter)

    count = substitute(arena, roots, match)
    logger.debug(f"Rewrote {count} state read(s)")
    return count


def rewrite_hoisted_usage(
    ctx: ConversionContext,
    roots: Iterable[int],
    hoisted: Dict[str, HoistedVar],
) -> int:
    """``this.<name>`` → ``<name>`` for hoisted members."""
    arena = ctx.arena

    def match(index: int) -> Optional[int]:
        if arena.kind(index) is not NodeKind.MEMBER_ACCESS:
            return None
        for name in hoisted:
            if is_self_access(arena, index, name):
                if is_assignment_target(arena, index):
                    return None
                return identifier(arena, name)
        return None

    count = substitute(arena, roots, match)
    logger.debug(f"Rewrote {count} hoisted member access(es)")
    return count
