"""Assembler — builds the function component that replaces a class.

    const Name = (props) => {
      <state hooks>
      <hoisted bindings>
      <effects>
      <render statements>
    };

The result replaces the class in place. ``export class`` becomes
``export const``; ``export default class X`` becomes the declaration
followed by ``export default X;``.
"""

import logging
from typing import List, Optional

from ..syntax import NodeKind, SyntaxArena
from .models import ComponentDeclaration, Member

logger = logging.getLogger(__name__)


def render_statements(arena: SyntaxArena, render: Optional[Member]) -> List[int]:
    """Statements of the render body, comments included, in order."""
    if render is None or render.body is None:
        return []
    return [c for c in arena[render.body].children if arena[c].named]


def props_type(arena: SyntaxArena, class_index: int) -> Optional[str]:
    """First type argument of a TypeScript base (``Component<Props>``), if any."""
    for heritage in arena[class_index].children:
        if arena.kind(heritage) is not NodeKind.CLASS_HERITAGE:
            continue
        for clause in arena.named_children(heritage):
            if arena.kind(clause) is not NodeKind.EXTENDS_CLAUSE:
                continue
            arguments = arena.child(clause, "type_arguments")
            if arguments is None:
                return None
            types = arena.named_children(arguments)
            return arena.text(types[0]) if types else None
    return None


def body_indent(arena: SyntaxArena, decl: ComponentDeclaration, render: Optional[Member]) -> str:
    statements = render_statements(arena, render)
    if statements:
        return arena.line_indent(statements[0])
    return arena.line_indent(decl.node) + "  "


def build_component(
    arena: SyntaxArena,
    decl: ComponentDeclaration,
    statements: List[int],
    indent: str,
    props_name: str = "props",
) -> int:
    """``const <Name> = (<props>) => { <statements> };``"""
    outer = arena.line_indent(decl.export if decl.export is not None else decl.node)
    param = props_name
    annotation = props_type(arena, decl.node)
    if annotation is not None:
        param = f"{props_name}: {annotation}"

    if statements:
        template = "const $name = ($props) => {\n" + indent + "$body\n" + outer + "};"
    else:
        template = "const $name = ($props) => {};"
    return arena.synthesize(
        "lexical_declaration",
        template,
        kind=NodeKind.LEXICAL_DECLARATION,
        joiner="\n" + indent,
        name=arena.leaf("identifier", decl.name, NodeKind.IDENTIFIER),
        props=arena.leaf("identifier", param, NodeKind.IDENTIFIER),
        body=statements,
    )


def replace_component(arena: SyntaxArena, decl: ComponentDeclaration, component: int) -> int:
    """Put the function component where the class was.

    Returns:
        Index of the node that now holds the component
    """
    if decl.export is not None and decl.is_default_export:
        export = arena.synthesize(
            "export_statement",
            "export default $name;",
            kind=NodeKind.EXPORT,
            name=arena.leaf("identifier", decl.name, NodeKind.IDENTIFIER),
        )
        arena.replace_subtree(decl.export, [component, export])
        logger.debug(f"Replaced default export of {decl.name}")
        return decl.export
    arena.replace_subtree(decl.node, [component])
    return decl.node
