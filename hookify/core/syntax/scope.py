"""Lexical binding lookup over an arena.

A syntactic approximation of scope analysis: a name is bound at a node if a
declaration for it appears directly in the program, in an enclosing block,
or among the parameters of an enclosing function. Imports, ``const``/``let``/
``var`` declarators (including destructuring patterns), function and class
declarations are recognised. Works on synthesised nodes too, as long as
they carry the same grammar types and fields.
"""

import logging
from typing import List, Set

from .arena import SyntaxArena
from .models import NodeKind

logger = logging.getLogger(__name__)

_SCOPE_KINDS = frozenset({
    NodeKind.PROGRAM,
    NodeKind.STATEMENT_BLOCK,
    NodeKind.CLASS_BODY,
    NodeKind.SWITCH_CASE,
})

_FUNCTION_KINDS = frozenset({
    NodeKind.FUNCTION_DECLARATION,
    NodeKind.FUNCTION_EXPRESSION,
    NodeKind.ARROW_FUNCTION,
    NodeKind.METHOD,
})


def is_name_bound(arena: SyntaxArena, index: int, name: str) -> bool:
    """True if ``name`` is visible as a binding at ``index``."""
    for ancestor in arena.ancestors(index):
        kind = arena.kind(ancestor)
        if kind in _SCOPE_KINDS and name in declared_names(arena, ancestor):
            return True
        if kind in _FUNCTION_KINDS and name in parameter_names(arena, ancestor):
            return True
    return False


def declared_names(arena: SyntaxArena, scope: int) -> Set[str]:
    """Names declared by the statements directly inside ``scope``."""
    names: Set[str] = set()
    for statement in arena[scope].children:
        _collect_statement(arena, statement, names)
    return names


def parameter_names(arena: SyntaxArena, function: int) -> Set[str]:
    names: Set[str] = set()
    single = arena.child(function, "parameter")
    if single is not None:
        _collect_pattern(arena, single, names)
    params = arena.child(function, "parameters")
    if params is not None:
        for param in arena.named_children(params):
            _collect_pattern(arena, param, names)
    return names


def import_bindings(arena: SyntaxArena, import_index: int) -> List[tuple]:
    """``(imported_name, local_name)`` pairs of an import statement.

    Default imports report ``"default"`` and namespace imports ``"*"`` as
    the imported name.
    """
    bindings = []
    for clause in arena[import_index].children:
        if arena.kind(clause) is not NodeKind.IMPORT_CLAUSE:
            continue
        for part in arena.named_children(clause):
            kind = arena.kind(part)
            if kind is NodeKind.IDENTIFIER:
                bindings.append(("default", arena.text(part)))
            elif kind is NodeKind.NAMESPACE_IMPORT:
                for ident in arena.named_children(part):
                    bindings.append(("*", arena.text(ident)))
            elif kind is NodeKind.NAMED_IMPORTS:
                for spec in arena.named_children(part):
                    if arena.kind(spec) is not NodeKind.IMPORT_SPECIFIER:
                        continue
                    imported = arena.child(spec, "name")
                    alias = arena.child(spec, "alias")
                    if imported is None:
                        continue
                    imported_name = arena.text(imported).strip("'\"")
                    local_name = arena.text(alias) if alias is not None else imported_name
                    bindings.append((imported_name, local_name))
    return bindings


def _collect_statement(arena: SyntaxArena, index: int, names: Set[str]) -> None:
    kind = arena.kind(index)
    if kind is NodeKind.IMPORT:
        names.update(local for _, local in import_bindings(arena, index))
    elif kind is NodeKind.LEXICAL_DECLARATION:
        # Synthesised declarations expose their name directly
        name = arena.child(index, "name")
        if name is not None:
            _collect_pattern(arena, name, names)
        for declarator in arena.named_children(index):
            target = arena.child(declarator, "name")
            if target is not None:
                _collect_pattern(arena, target, names)
    elif kind in (NodeKind.FUNCTION_DECLARATION, NodeKind.CLASS_DECLARATION):
        name = arena.child(index, "name")
        if name is not None:
            names.add(arena.text(name))
    elif kind is NodeKind.EXPORT:
        declaration = arena.child(index, "declaration")
        if declaration is not None:
            _collect_statement(arena, declaration, names)
    elif kind is NodeKind.FRAGMENT:
        for child in arena[index].children:
            _collect_statement(arena, child, names)


def _collect_pattern(arena: SyntaxArena, index: int, names: Set[str]) -> None:
    """Collect identifiers bound by a parameter or destructuring pattern."""
    stack = [index]
    while stack:
        current = stack.pop()
        kind = arena.kind(current)
        if kind in (NodeKind.IDENTIFIER, NodeKind.SHORTHAND_PATTERN):
            names.add(arena.text(current))
        elif kind is NodeKind.PAIR_PATTERN:
            value = arena.child(current, "value")
            if value is not None:
                stack.append(value)
        elif kind is NodeKind.ASSIGNMENT_PATTERN:
            left = arena.child(current, "left")
            if left is not None:
                stack.append(left)
        elif kind is NodeKind.REQUIRED_PARAMETER:
            pattern = arena.child(current, "pattern")
            if pattern is not None:
                stack.append(pattern)
        elif kind in (NodeKind.OBJECT_PATTERN, NodeKind.ARRAY_PATTERN, NodeKind.REST_PATTERN):
            stack.extend(arena.named_children(current))
