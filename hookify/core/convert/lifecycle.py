"""Lifecycle extractor.

Mount and unmount methods become once-at-mount effects:

    componentDidMount() { A }     →  useEffect(() => { A }, []);
    componentWillUnmount() { B }  →  useEffect(() => () => { B }, []);

Emission order is always mount then unmount.
"""

import logging
from typing import List, Optional

from ..syntax import NodeKind, SyntaxArena
from .context import ConversionContext
from .extractor import find_member, find_unmount_method
from .models import ComponentDeclaration, EffectBlock, Member, MemberKind

logger = logging.getLogger(__name__)


def _effect_body(member: Member) -> Optional[int]:
    if member.is_generator:
        return None
    return member.body


def extract_effects(ctx: ConversionContext, decl: ComponentDeclaration) -> List[EffectBlock]:
    effects: List[EffectBlock] = []

    mount = find_member(decl, ctx.settings.mount_method, MemberKind.METHOD)
    if mount is not None and _effect_body(mount) is not None:
        effects.append(EffectBlock(body=mount.body, is_async=mount.is_async))

    unmount = find_unmount_method(decl, ctx.settings)
    if unmount is not None and _effect_body(unmount) is not None:
        effects.append(EffectBlock(cleanup=unmount.body, is_async=unmount.is_async))

    logger.debug(f"Effects for {decl.name}: {len(effects)}")
    return effects


def _callback(arena: SyntaxArena, body: int, is_async: bool) -> int:
    """The body as it sits inside the effect.

    Effect callbacks must not return a promise, so an async body runs in
    an immediately invoked async arrow.
    """
    if not is_async:
        return body
    return arena.synthesize(
        "statement_block",
        "{ (async () => $body)(); }",
        kind=NodeKind.STATEMENT_BLOCK,
        body=body,
    )


def effect_statement(arena: SyntaxArena, effect: EffectBlock, hook_name: str) -> int:
    """``<hook>(() => {...}, []);`` or ``<hook>(() => () => {...}, []);``"""
    if effect.cleanup is not None:
        template = "$hook(() => () => $body, []);"
        body = _callback(arena, effect.cleanup, effect.is_async)
    else:
        template = "$hook(() => $body, []);"
        body = _callback(arena, effect.body, effect.is_async)
    return arena.synthesize(
        "expression_statement",
        template,
        kind=NodeKind.EXPRESSION_STATEMENT,
        hook=arena.leaf("identifier", hook_name, NodeKind.IDENTIFIER),
        body=body,
    )
