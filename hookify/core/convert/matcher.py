"""Structural matcher — shape predicates over arena nodes.

Purely syntactic: no type resolution, no data flow. Every predicate
dispatches on ``NodeKind`` so the set of recognised shapes stays closed.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from ..syntax import NodeKind, SyntaxArena

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Names that cannot be bound by a ``const`` in module (strict) code
RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue",
    "debugger", "default", "delete", "do", "else", "enum", "export",
    "extends", "false", "finally", "for", "function", "if", "import", "in",
    "instanceof", "new", "null", "return", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with",
    "yield",
    # strict mode
    "implements", "interface", "let", "package", "private", "protected",
    "public", "static", "arguments", "eval",
})

_IMMUTABLE_KINDS = frozenset({
    NodeKind.NUMBER,
    NodeKind.STRING,
    NodeKind.TRUE,
    NodeKind.FALSE,
    NodeKind.NULL,
    NodeKind.UNDEFINED,
})

_STATEMENT_LIST_KINDS = frozenset({
    NodeKind.PROGRAM,
    NodeKind.STATEMENT_BLOCK,
    NodeKind.SWITCH_CASE,
    NodeKind.FRAGMENT,
})


# =========================================================================
# Component eligibility
# =========================================================================


def base_expression(arena: SyntaxArena, class_index: int) -> Optional[int]:
    """The expression after ``extends``, without TypeScript type arguments."""
    for child in arena[class_index].children:
        if arena.kind(child) is not NodeKind.CLASS_HERITAGE:
            continue
        for part in arena.named_children(child):
            if arena.kind(part) is NodeKind.EXTENDS_CLAUSE:
                return arena.child(part, "value")
        named = arena.named_children(child)
        return named[0] if named else None
    return None


def is_eligible(arena: SyntaxArena, class_index: int, base_names: Sequence[str]) -> bool:
    """True iff the class extends a supported base, bare or as ``ns.Base``."""
    if arena.kind(class_index) is not NodeKind.CLASS_DECLARATION:
        return False
    if arena.child(class_index, "name") is None:
        return False
    base = base_expression(arena, class_index)
    if base is None:
        return False

    kind = arena.kind(base)
    if kind is NodeKind.IDENTIFIER:
        return arena.text(base) in base_names
    if kind is NodeKind.MEMBER_ACCESS:
        obj = arena.child(base, "object")
        prop = arena.child(base, "property")
        return (
            arena.kind(obj) is NodeKind.IDENTIFIER
            and arena.kind(prop) is NodeKind.PROPERTY_IDENTIFIER
            and arena.text(prop) in base_names
        )
    return False


# =========================================================================
# Member access shapes
# =========================================================================


def property_name(arena: SyntaxArena, index: int) -> Optional[str]:
    """Name of a non-computed ``a.b`` access, else None."""
    if arena.kind(index) is not NodeKind.MEMBER_ACCESS:
        return None
    prop = arena.child(index, "property")
    if arena.kind(prop) is not NodeKind.PROPERTY_IDENTIFIER:
        return None
    return arena.text(prop)


def is_self_access(arena: SyntaxArena, index: int, name: Optional[str] = None) -> bool:
    """``this.<name>`` (any plain name when ``name`` is None)."""
    prop = property_name(arena, index)
    if prop is None or (name is not None and prop != name):
        return False
    return arena.kind(arena.child(index, "object")) is NodeKind.THIS


def state_field_access(arena: SyntaxArena, index: int, state_field: str) -> Optional[str]:
    """Field name of ``this.<state_field>.<field>``, else None."""
    prop = property_name(arena, index)
    if prop is None:
        return None
    obj = arena.child(index, "object")
    if not is_self_access(arena, obj, state_field):
        return None
    return prop


def alias_field_access(arena: SyntaxArena, index: int, alias: str) -> Optional[str]:
    """Field name of ``<alias>.<field>``, else None."""
    prop = property_name(arena, index)
    if prop is None:
        return None
    obj = arena.child(index, "object")
    if arena.kind(obj) is not NodeKind.IDENTIFIER or arena.text(obj) != alias:
        return None
    return prop


def is_assignment_target(arena: SyntaxArena, index: int) -> bool:
    """True if the node is written to (``x = ..``, ``x += ..``, ``x++``)."""
    parent = arena[index].parent
    if parent is None:
        return False
    kind = arena.kind(parent)
    if kind is NodeKind.ASSIGNMENT:
        return arena.child(parent, "left") == index
    if kind is NodeKind.UPDATE:
        return arena.child(parent, "argument") == index
    return False


def is_update_call(arena: SyntaxArena, index: int, update_method: str) -> bool:
    """``this.<update_method>(arg)`` with exactly one argument."""
    if arena.kind(index) is not NodeKind.CALL:
        return False
    if not is_self_access(arena, arena.child(index, "function"), update_method):
        return False
    args = arena.child(index, "arguments")
    return args is not None and len(arena.named_children(args)) == 1


# =========================================================================
# Literals
# =========================================================================


def is_binding_name(name: Optional[str]) -> bool:
    """True if an identifier-shaped ``name`` can be declared as a local binding."""
    return bool(name) and name not in RESERVED_WORDS


def unparenthesize(arena: SyntaxArena, index: int) -> int:
    while arena.kind(index) is NodeKind.PARENTHESIZED:
        inner = arena.named_children(index)
        if len(inner) != 1:
            break
        index = inner[0]
    return index


def is_immutable_literal(arena: SyntaxArena, index: int) -> bool:
    """Number, string, boolean, null or undefined literal."""
    kind = arena.kind(index)
    if kind in _IMMUTABLE_KINDS:
        return True
    return kind is NodeKind.IDENTIFIER and arena.text(index) == "undefined"


def object_pairs(arena: SyntaxArena, index: int) -> Optional[List[Tuple[str, int, int]]]:
    """``(key, value, pair)`` triples of a plain keyed object literal.

    Plain keyed means every property is ``key: value`` with an identifier
    key or an identifier-like string key. Returns None for anything else
    (shorthand, spread, methods, computed or numeric keys).
    """
    if arena.kind(index) is not NodeKind.OBJECT:
        return None
    pairs = []
    for prop in arena.named_children(index):
        if arena.kind(prop) is not NodeKind.PAIR:
            return None
        key = arena.child(prop, "key")
        value = arena.child(prop, "value")
        if key is None or value is None:
            return None
        key_kind = arena.kind(key)
        if key_kind is NodeKind.PROPERTY_IDENTIFIER:
            name = arena.text(key)
        elif key_kind is NodeKind.STRING:
            name = arena.text(key)[1:-1]
            if not _IDENTIFIER_RE.match(name):
                return None
        else:
            return None
        pairs.append((name, value, prop))
    return pairs


# =========================================================================
# Functions and statements
# =========================================================================


def is_function(arena: SyntaxArena, index: int) -> bool:
    return arena.kind(index) in (NodeKind.ARROW_FUNCTION, NodeKind.FUNCTION_EXPRESSION)


def function_params(arena: SyntaxArena, index: int) -> List[int]:
    """Parameter nodes of an arrow or function expression."""
    single = arena.child(index, "parameter")
    if single is not None:
        return [single]
    params = arena.child(index, "parameters")
    if params is None:
        return []
    return arena.named_children(params)


def param_identifier(arena: SyntaxArena, param: int) -> Optional[str]:
    """Name of a simple identifier parameter (TypeScript-typed or not)."""
    if arena.kind(param) is NodeKind.REQUIRED_PARAMETER:
        pattern = arena.child(param, "pattern")
        if pattern is None or arena.child(param, "value") is not None:
            return None
        param = pattern
    if arena.kind(param) is NodeKind.IDENTIFIER:
        return arena.text(param)
    return None


def is_in_statement_list(arena: SyntaxArena, statement: int) -> bool:
    """True if ``statement`` sits directly in a block, program or case."""
    parent = arena[statement].parent
    return parent is not None and arena.kind(parent) in _STATEMENT_LIST_KINDS


def needs_parens_as_arrow_body(arena: SyntaxArena, index: int) -> bool:
    """Object and comma expressions must be parenthesised after ``=>``."""
    return arena.kind(index) in (NodeKind.OBJECT, NodeKind.SEQUENCE)
