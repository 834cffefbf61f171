"""Update-call rewriter.

Rewrites ``this.setState(...)`` calls into calls of the per-field setters:

    this.setState({a: 1, b: 2});            →  setA(1); setB(2);
    this.setState(prev => ({a: prev.a + 1})) →  setA(a => a + 1)

Anything outside these two shapes is left alone; the remaining ``this`` is
picked up by the unresolved-self detector.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from ..constants import MSG_ALIAS_ESCAPE, MSG_ALIAS_MISMATCH
from ..syntax import NodeKind, SyntaxArena
from .context import ConversionContext
from .matcher import (
    alias_field_access,
    function_params,
    is_function,
    is_in_statement_list,
    is_update_call,
    needs_parens_as_arrow_body,
    object_pairs,
    param_identifier,
    unparenthesize,
)
from .models import StateBinding

logger = logging.getLogger(__name__)

_FUNCTION_KINDS = frozenset({
    NodeKind.ARROW_FUNCTION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.METHOD,
})


def rewrite_state_updates(
    ctx: ConversionContext,
    roots: Iterable[int],
    bindings: Dict[str, StateBinding],
) -> int:
    """Rewrite every supported update call under ``roots``.

    Returns the number of calls rewritten.
    """
    arena = ctx.arena
    update_method = ctx.settings.update_method
    calls = [
        index
        for root in roots
        for index in arena.walk(root)
        if is_update_call(arena, index, update_method)
    ]

    count = 0
    for call in calls:
        if not arena.is_attached(call) or not is_update_call(arena, call, update_method):
            continue
        arg = unparenthesize(arena, arena.named_children(arena.child(call, "arguments"))[0])
        if arena.kind(arg) is NodeKind.OBJECT:
            rewritten = _rewrite_object_update(ctx, call, arg, bindings)
        elif is_function(arena, arg):
            rewritten = _rewrite_updater(ctx, call, arg, bindings)
        else:
            rewritten = False
        if rewritten:
            count += 1
        else:
            logger.debug(f"Left update call at {arena.position(call)} unrewritten")
    return count


def _setter_call(arena: SyntaxArena, binding: StateBinding, value: int) -> int:
    return arena.synthesize(
        "call_expression",
        "$setter($value)",
        kind=NodeKind.CALL,
        setter=arena.leaf("identifier", binding.setter, NodeKind.IDENTIFIER),
        value=value,
    )


# ── Object argument ──────────────────────────────────────────────────


def _rewrite_object_update(
    ctx: ConversionContext,
    call: int,
    literal: int,
    bindings: Dict[str, StateBinding],
) -> bool:
    arena = ctx.arena
    pairs = object_pairs(arena, literal)
    if not pairs or any(key not in bindings for key, _, _ in pairs):
        return False

    calls = [_setter_call(arena, bindings[key], value) for key, value, _ in pairs]
    parent = arena[call].parent

    if arena.kind(parent) is NodeKind.EXPRESSION_STATEMENT:
        statements = [
            arena.synthesize(
                "expression_statement", "$call;", kind=NodeKind.EXPRESSION_STATEMENT, call=c
            )
            for c in calls
        ]
        arena.replace_subtree(parent, statements, block=not is_in_statement_list(arena, parent))
    elif len(calls) == 1:
        arena.replace_subtree(call, calls)
    else:
        sequence = arena.synthesize(
            "parenthesized_expression",
            "($calls)",
            kind=NodeKind.PARENTHESIZED,
            calls=calls,
        )
        arena.replace_subtree(call, [sequence])
    return True


# ── Updater argument ─────────────────────────────────────────────────


def _returned_literal(arena: SyntaxArena, body: int) -> Optional[int]:
    """The ``return`` statement of a block body, or the body expression.

    For a block, the final statement must return and no other ``return``
    may be reachable, however deeply nested. Nested functions are not
    searched.
    """
    if arena.kind(body) is not NodeKind.STATEMENT_BLOCK:
        return body
    statements = arena.named_children(body)
    if not statements or arena.kind(statements[-1]) is not NodeKind.RETURN:
        return None
    final = statements[-1]
    for index in arena.walk(body, prune=lambda i: i != body and _is_function_boundary(arena, i)):
        if index != final and arena.kind(index) is NodeKind.RETURN:
            return None
    return final


def _is_function_boundary(arena: SyntaxArena, index: int) -> bool:
    return arena.kind(index) in _FUNCTION_KINDS


def _rewrite_updater(
    ctx: ConversionContext,
    call: int,
    function: int,
    bindings: Dict[str, StateBinding],
) -> bool:
    arena = ctx.arena
    if arena.has_token(function, "async") or arena.has_token(function, "*"):
        return False

    params = function_params(arena, function)
    if len(params) > 1:
        return False
    alias = None
    if params:
        alias = param_identifier(arena, params[0])
        if alias is None:
            return False

    body = arena.child(function, "body")
    if body is None:
        return False
    returned = _returned_literal(arena, body)
    if returned is None:
        return False
    if arena.kind(returned) is NodeKind.RETURN:
        expression = arena.named_children(returned)
        if len(expression) != 1:
            return False
        literal = unparenthesize(arena, expression[0])
    else:
        literal = unparenthesize(arena, returned)

    pairs = object_pairs(arena, literal)
    if pairs is None or len(pairs) != 1 or pairs[0][0] not in bindings:
        return False
    field_name, value, _ = pairs[0]
    binding = bindings[field_name]

    if alias is not None:
        _rewrite_alias_reads(ctx, body, alias, field_name, bindings)

    param = arena.leaf("identifier", binding.getter, NodeKind.IDENTIFIER)
    if arena.kind(body) is NodeKind.STATEMENT_BLOCK:
        arena.replace_subtree(arena.named_children(returned)[0], [value])
        updater = arena.synthesize(
            "arrow_function", "$param => $body", kind=NodeKind.ARROW_FUNCTION, param=param, body=body
        )
    else:
        template = "$param => ($value)" if needs_parens_as_arrow_body(arena, value) else "$param => $value"
        updater = arena.synthesize(
            "arrow_function", template, kind=NodeKind.ARROW_FUNCTION, param=param, value=value
        )

    arena.replace_subtree(call, [_setter_call(arena, binding, updater)])
    return True


def _rewrite_alias_reads(
    ctx: ConversionContext,
    body: int,
    alias: str,
    field_name: str,
    bindings: Dict[str, StateBinding],
) -> None:
    """``<alias>.<field>`` → getter inside an updater body.

    Reads of another field are flagged, and rewritten to that field's
    getter when it has a binding. Any other use of the alias is flagged.
    """
    arena = ctx.arena
    handled: Set[int] = set()
    replacements: List[tuple] = []

    for index in arena.walk(body, prune=handled.__contains__):
        name = alias_field_access(arena, index, alias)
        if name is not None:
            handled.add(index)
            if name != field_name:
                ctx.diagnostics.add(
                    index, MSG_ALIAS_MISMATCH.format(alias=alias, name=name, field=field_name)
                )
            if name in bindings:
                replacements.append((index, bindings[name].getter))
            continue
        kind = arena.kind(index)
        if kind in (NodeKind.IDENTIFIER, NodeKind.SHORTHAND_PROPERTY) and arena.text(index) == alias:
            ctx.diagnostics.add(index, MSG_ALIAS_ESCAPE.format(alias=alias))

    for index, getter in replacements:
        arena.replace_subtree(index, [arena.leaf("identifier", getter, NodeKind.IDENTIFIER)])
