"""Field/method extractor — collects class members into ordered mappings.

Reads a class body into ``Member`` records, finds members by name, and
decides which members are hoisted into the function body, which are
reserved (state, render, lifecycle) and which cannot be carried over.
"""

import logging
from typing import Dict, List, Optional

from ..config import ConvertSettings
from ..syntax import NodeKind, SyntaxArena
from .models import ComponentDeclaration, HoistedVar, Member, MemberKind

logger = logging.getLogger(__name__)


def read_component(arena: SyntaxArena, class_index: int) -> ComponentDeclaration:
    """Build a ComponentDeclaration from a class declaration node."""
    name_node = arena.child(class_index, "name")
    decl = ComponentDeclaration(
        name=arena.text(name_node) if name_node is not None else "",
        node=class_index,
        members=read_members(arena, class_index),
    )
    parent = arena[class_index].parent
    if parent is not None and arena.kind(parent) is NodeKind.EXPORT:
        decl.export = parent
        decl.is_default_export = arena.has_token(parent, "default")
    return decl


def read_members(arena: SyntaxArena, class_index: int) -> List[Member]:
    """Fields and methods of a class body, in declaration order."""
    body = arena.child(class_index, "body")
    if body is None:
        return []

    members: List[Member] = []
    for element in arena.named_children(body):
        kind = arena.kind(element)
        if kind is NodeKind.FIELD:
            members.append(_read_field(arena, element))
        elif kind is NodeKind.METHOD:
            members.append(_read_method(arena, element))
    return members


def _member_name(arena: SyntaxArena, name_node: Optional[int]) -> Optional[str]:
    if name_node is None or arena.kind(name_node) is not NodeKind.PROPERTY_IDENTIFIER:
        return None
    return arena.text(name_node)


def _read_field(arena: SyntaxArena, element: int) -> Member:
    name_node = arena.child(element, "property")
    name = _member_name(arena, name_node)
    return Member(
        kind=MemberKind.FIELD,
        node=element,
        name=name,
        is_static=arena.has_token(element, "static"),
        is_computed=name is None,
        value=arena.child(element, "value"),
    )


def _read_method(arena: SyntaxArena, element: int) -> Member:
    name = _member_name(arena, arena.child(element, "name"))
    if arena.has_token(element, "get"):
        method_kind = "get"
    elif arena.has_token(element, "set"):
        method_kind = "set"
    elif name == "constructor":
        method_kind = "constructor"
    else:
        method_kind = "method"
    return Member(
        kind=MemberKind.METHOD,
        node=element,
        name=name,
        is_static=arena.has_token(element, "static"),
        is_computed=name is None,
        params=arena.child(element, "parameters"),
        body=arena.child(element, "body"),
        method_kind=method_kind,
        is_async=arena.has_token(element, "async"),
        is_generator=arena.has_token(element, "*"),
    )


def find_member(
    decl: ComponentDeclaration,
    name: str,
    kind: Optional[MemberKind] = None,
) -> Optional[Member]:
    """First plain (non-static, non-computed) member with this exact name."""
    for member in decl.members:
        if not member.is_plain or member.name != name:
            continue
        if kind is not None and member.kind is not kind:
            continue
        if member.kind is MemberKind.METHOD and member.method_kind != "method":
            continue
        return member
    return None


def find_unmount_method(decl: ComponentDeclaration, settings: ConvertSettings) -> Optional[Member]:
    for name in settings.unmount_methods:
        member = find_member(decl, name, MemberKind.METHOD)
        if member is not None and not member.is_generator:
            return member
    return None


def is_hoistable(member: Member, settings: ConvertSettings) -> bool:
    if not member.is_plain:
        return False
    if member.kind is MemberKind.FIELD:
        return member.name != settings.state_field
    if member.method_kind != "method":
        return False
    return member.name != settings.render_method and member.name not in settings.lifecycle_methods


def collect_hoistable(
    arena: SyntaxArena,
    decl: ComponentDeclaration,
    settings: ConvertSettings,
) -> Dict[str, HoistedVar]:
    """Ordered mapping of members that become standalone bindings.

    Fields keep their initialiser verbatim; methods become anonymous
    function values with their original parameters and body. No
    free-variable analysis is performed.
    """
    hoisted: Dict[str, HoistedVar] = {}
    for member in decl.members:
        if not is_hoistable(member, settings) or member.name in hoisted:
            continue
        if member.kind is MemberKind.FIELD:
            value = member.value
        else:
            value = function_value(arena, member)
        hoisted[member.name] = HoistedVar(name=member.name, value=value, member=member)
    logger.debug(f"Hoisting from {decl.name}: {list(hoisted)}")
    return hoisted


def function_value(arena: SyntaxArena, member: Member) -> int:
    """Anonymous function equivalent of a method.

    Plain and async methods become arrow functions; generator methods
    become ``function*`` expressions since arrows cannot yield.
    """
    prefix = "async " if member.is_async else ""
    if member.is_generator:
        template = prefix + "function* $params $body"
        kind = NodeKind.FUNCTION_EXPRESSION
    else:
        template = prefix + "$params => $body"
        kind = NodeKind.ARROW_FUNCTION
    return arena.synthesize(
        "function_value",
        template,
        kind=kind,
        params=member.params,
        body=member.body,
    )


def hoisted_declaration(arena: SyntaxArena, var: HoistedVar) -> int:
    """``const <name> = <value>;``"""
    name = arena.leaf("identifier", var.name, NodeKind.IDENTIFIER)
    if var.value is None:
        value = arena.leaf("undefined", "undefined", NodeKind.UNDEFINED)
    else:
        value = var.value
    return arena.synthesize(
        "lexical_declaration",
        "const $name = $value;",
        kind=NodeKind.LEXICAL_DECLARATION,
        name=name,
        value=value,
    )


def member_roots(decl: ComponentDeclaration, settings: ConvertSettings) -> List[int]:
    """Subtrees the rewrites traverse: bodies of members that survive.

    The ``state`` initialiser, static and computed members, accessors and
    constructors are never traversed.
    """
    roots: List[int] = []
    for member in decl.members:
        if not member.is_plain:
            continue
        if member.kind is MemberKind.FIELD:
            if member.name != settings.state_field and member.value is not None:
                roots.append(member.value)
        elif member.method_kind == "method":
            roots.extend(r for r in (member.params, member.body) if r is not None)
    return roots


def dropped_members(decl: ComponentDeclaration, settings: ConvertSettings) -> List[Member]:
    """Members that have no place in the function component."""
    dropped = []
    unmount_seen = False
    for member in decl.members:
        if not member.is_plain:
            dropped.append(member)
        elif member.kind is MemberKind.METHOD and member.method_kind != "method":
            dropped.append(member)
        elif member.kind is MemberKind.METHOD and member.is_generator and \
                member.name in settings.lifecycle_methods:
            # Effects cannot yield
            dropped.append(member)
        elif member.kind is MemberKind.METHOD and member.name in settings.unmount_methods:
            # Only the first unmount spelling present is converted
            if unmount_seen:
                dropped.append(member)
            unmount_seen = True
    return dropped


def describe_member(arena: SyntaxArena, member: Member) -> tuple:
    """``(what, name)`` wording for a dropped-member diagnostic."""
    if member.name is not None:
        name = member.name
    else:
        name_field = "property" if member.kind is MemberKind.FIELD else "name"
        name_node = arena.child(member.node, name_field)
        name = arena.text(name_node) if name_node is not None else "?"

    if member.is_static:
        what = "static " + member.kind.value
    elif member.kind is MemberKind.METHOD and member.method_kind == "constructor":
        what = "constructor"
    elif member.kind is MemberKind.METHOD and member.method_kind in ("get", "set"):
        what = f"{member.method_kind}ter"
    elif member.is_generator:
        what = "generator lifecycle method"
    elif member.is_plain:
        what = "duplicate lifecycle method"
    else:
        what = "computed " + member.kind.value
    return what, name
