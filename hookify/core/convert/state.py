"""State binding builder.

Turns the ``state`` initial-value literal into one getter/setter/initialiser
triple per property, and renders each triple as a state-hook declaration.
"""

import logging
from typing import Dict, Optional

from ..constants import MSG_COMPLEX_STATE
from ..syntax import NodeKind, SyntaxArena
from .context import ConversionContext
from .extractor import find_member
from .matcher import (
    is_binding_name,
    is_immutable_literal,
    needs_parens_as_arrow_body,
    object_pairs,
    unparenthesize,
)
from .models import ComponentDeclaration, MemberKind, StateBinding

logger = logging.getLogger(__name__)


def setter_name(field_name: str) -> str:
    """``count`` → ``setCount``."""
    return "set" + field_name[:1].upper() + field_name[1:]


def build_state_bindings(
    ctx: ConversionContext,
    decl: ComponentDeclaration,
) -> Optional[Dict[str, StateBinding]]:
    """Ordered ``field_name -> StateBinding`` mapping, or None.

    None means there is no usable state: either the state field is absent,
    or its initialiser is not a plain keyed object literal whose keys are
    all valid binding names (in which case a diagnostic is raised at the
    initialiser and processing continues).
    """
    arena = ctx.arena
    member = find_member(decl, ctx.settings.state_field, MemberKind.FIELD)
    if member is None:
        return None
    if member.value is None:
        ctx.diagnostics.add(member.node, MSG_COMPLEX_STATE)
        return None

    literal = unparenthesize(arena, member.value)
    pairs = object_pairs(arena, literal)
    if pairs is None or not all(is_binding_name(key) for key, _, _ in pairs):
        ctx.diagnostics.add(member.value, MSG_COMPLEX_STATE)
        return None

    bindings: Dict[str, StateBinding] = {}
    for key, value, _ in pairs:
        if key in bindings:
            # Later duplicate keys win in the literal itself
            bindings[key].init = value
            bindings[key].is_literal = is_immutable_literal(arena, unparenthesize(arena, value))
            continue
        bindings[key] = StateBinding(
            field_name=key,
            getter=key,
            setter=setter_name(key),
            init=value,
            is_literal=is_immutable_literal(arena, unparenthesize(arena, value)),
        )
    logger.debug(f"State bindings for {decl.name}: {list(bindings)}")
    return bindings


def initial_value(arena: SyntaxArena, binding: StateBinding) -> int:
    """Literal initialisers pass through; anything else is made lazy."""
    if binding.is_literal:
        return binding.init
    if needs_parens_as_arrow_body(arena, unparenthesize(arena, binding.init)) and \
            arena.kind(binding.init) is not NodeKind.PARENTHESIZED:
        template = "() => ($init)"
    else:
        template = "() => $init"
    return arena.synthesize("arrow_function", template, kind=NodeKind.ARROW_FUNCTION, init=binding.init)


def hook_declaration(arena: SyntaxArena, binding: StateBinding, hook_name: str) -> int:
    """``const [<getter>, <setter>] = <hook>(<init>);``"""
    return arena.synthesize(
        "lexical_declaration",
        "const [$getter, $setter] = $hook($init);",
        kind=NodeKind.LEXICAL_DECLARATION,
        getter=arena.leaf("identifier", binding.getter, NodeKind.IDENTIFIER),
        setter=arena.leaf("identifier", binding.setter, NodeKind.IDENTIFIER),
        hook=arena.leaf("identifier", hook_name, NodeKind.IDENTIFIER),
        init=initial_value(arena, binding),
    )
