"""Conversion pipeline — class components to hook-based function components.

Runs a fixed step sequence per eligible class declaration:

1. reserved-name and name-collision checks (component left unconverted)
2. props rewrite
3. state bindings → state-read rewrite → update-call rewrite
4. hoist extraction → hoist-usage rewrite
5. lifecycle extraction
6. import reconciliation
7. assembly and in-place replacement
8. unresolved-self detection, dropped-member diagnostics

Steps that depend on state or lifecycle methods are skipped when those are
absent. Nothing in here raises for unsupported input: it either converts,
declines with a diagnostic, or leaves code alone for the detector to flag.
"""

import logging
import os
from typing import List, Optional

from ..config import ConvertSettings, get_settings
from ..constants import MSG_DROPPED_MEMBER, MSG_MISSING_RENDER, MSG_NAME_COLLISION, MSG_RESERVED_NAME
from ..syntax import NodeKind, SyntaxArena, declared_names, detect_language, parse_source, print_tree
from .assembler import body_indent, build_component, render_statements, replace_component
from .context import ConversionContext
from .extractor import (
    collect_hoistable,
    describe_member,
    dropped_members,
    find_member,
    hoisted_declaration,
    is_hoistable,
    member_roots,
    read_component,
)
from .imports import ImportManager
from .lifecycle import effect_statement, extract_effects
from .matcher import is_binding_name, is_eligible, object_pairs, unparenthesize
from .models import ComponentDeclaration, ConversionReport, ImportRequirement, MemberKind, TransformResult
from .rewriter import rewrite_hoisted_usage, rewrite_props_usage, rewrite_state_reads
from .state import build_state_bindings, hook_declaration, setter_name
from .updates import rewrite_state_updates

logger = logging.getLogger(__name__)


class ComponentConverter:
    """Converts the eligible class components of one file, one at a time."""

    def __init__(self, ctx: ConversionContext):
        self.ctx = ctx
        self.arena = ctx.arena
        self.settings = ctx.settings
        self.imports = ImportManager(ctx)

    def convert(self, class_index: int) -> ConversionReport:
        arena = self.arena
        settings = self.settings
        first_diagnostic = len(self.ctx.diagnostics)

        decl = read_component(arena, class_index)
        report = ConversionReport(component=decl.name, converted=False)
        render = find_member(decl, settings.render_method, MemberKind.METHOD)

        # 1. Collisions and unbindable names
        message = None
        reserved = self._find_reserved_name(decl)
        if reserved is not None:
            message = MSG_RESERVED_NAME.format(name=reserved)
        else:
            collision = self._find_collision(decl)
            if collision is not None:
                message = MSG_NAME_COLLISION.format(name=collision)
        if message is not None:
            anchor = decl.export if decl.export is not None else decl.node
            if not self.ctx.diagnostics.is_annotated(anchor, message):
                self.ctx.diagnostics.add(anchor, message)
            report.skipped_reason = message
            report.diagnostics = self.ctx.diagnostics.items[first_diagnostic:]
            logger.info(f"Skipped {decl.name}: {message}")
            return report

        roots = member_roots(decl, settings)

        # 2. Props
        rewrite_props_usage(self.ctx, roots)

        # 3. State
        bindings = build_state_bindings(self.ctx, decl) or {}
        if bindings:
            rewrite_state_reads(self.ctx, roots, bindings)
            rewrite_state_updates(self.ctx, roots, bindings)

        # 4. Hoisting
        hoisted = collect_hoistable(arena, decl, settings)
        if hoisted:
            rewrite_hoisted_usage(self.ctx, roots, hoisted)

        # 5. Lifecycle
        effects = extract_effects(self.ctx, decl)

        # 6. Imports
        requirement = ImportRequirement(module=settings.framework_module)
        if bindings:
            requirement.symbols.append(settings.state_hook)
        if effects:
            requirement.symbols.append(settings.effect_hook)
        if requirement.symbols:
            self.imports.reconcile(decl.node, requirement)
        local_names = requirement.local_names

        # 7. Assembly
        indent = body_indent(arena, decl, render)
        statements: List[int] = []
        for binding in bindings.values():
            statements.append(hook_declaration(arena, binding, local_names[settings.state_hook]))
        for var in hoisted.values():
            statements.append(hoisted_declaration(arena, var))
        for effect in effects:
            statements.append(effect_statement(arena, effect, local_names[settings.effect_hook]))
        statements.extend(render_statements(arena, render))

        component = build_component(arena, decl, statements, indent, settings.props_name)
        target = replace_component(arena, decl, component)

        # 8. Diagnostics
        self.ctx.diagnostics.flag_unresolved_self([target])
        for member in dropped_members(decl, settings):
            what, name = describe_member(arena, member)
            self.ctx.diagnostics.add(target, MSG_DROPPED_MEMBER.format(what=what, name=name))
        if render is None:
            self.ctx.diagnostics.add(target, MSG_MISSING_RENDER)
        raised = self.ctx.diagnostics.items[first_diagnostic:]
        self.ctx.diagnostics.rehome(raised, target)

        report.converted = True
        report.bindings = list(bindings)
        report.hoisted = list(hoisted)
        report.effects = len(effects)
        report.diagnostics = raised
        logger.info(
            f"Converted {decl.name}: {len(bindings)} state binding(s), "
            f"{len(hoisted)} hoisted, {len(effects)} effect(s), {len(raised)} diagnostic(s)"
        )
        return report

    def _find_collision(self, decl: ComponentDeclaration) -> Optional[str]:
        """First name the function body would declare twice, if any."""
        arena = self.arena
        settings = self.settings
        names = [settings.props_name]

        state = find_member(decl, settings.state_field, MemberKind.FIELD)
        if state is not None and state.value is not None:
            pairs = object_pairs(arena, unparenthesize(arena, state.value)) or []
            keys = list(dict.fromkeys(key for key, _, _ in pairs))
            if not all(is_binding_name(key) for key in keys):
                # State falls back to the complex-state diagnostic
                keys = []
            names.extend(keys)
            names.extend(setter_name(key) for key in keys)

        names.extend(m.name for m in decl.members if is_hoistable(m, settings))

        render = find_member(decl, settings.render_method, MemberKind.METHOD)
        if render is not None and render.body is not None:
            names.extend(sorted(declared_names(arena, render.body)))

        seen = set()
        for name in names:
            if name in seen:
                return name
            seen.add(name)
        return None

    def _find_reserved_name(self, decl: ComponentDeclaration) -> Optional[str]:
        """First hoisted member name that cannot be declared with ``const``."""
        for member in decl.members:
            if is_hoistable(member, self.settings) and not is_binding_name(member.name):
                return member.name
        return None


def transform_tree(
    arena: SyntaxArena,
    settings: Optional[ConvertSettings] = None,
    file_path: str = "",
) -> ConversionContext:
    """Convert every eligible class component in ``arena`` in place.

    Returns:
        The conversion context, holding the collected diagnostics
    """
    settings = settings or get_settings()
    ctx = ConversionContext.for_arena(arena, settings, file_path)
    converter = ComponentConverter(ctx)

    candidates = [
        index for index in arena.walk(arena.root)
        if arena.kind(index) is NodeKind.CLASS_DECLARATION
    ]
    for index in candidates:
        if not arena.is_attached(index):
            continue
        if not is_eligible(arena, index, settings.base_names):
            continue
        ctx.reports.append(converter.convert(index))
    return ctx


def transform_source(
    source_text: str,
    file_path: str,
    language: Optional[str] = None,
    settings: Optional[ConvertSettings] = None,
) -> TransformResult:
    """Parse, convert and print one source file held in memory.

    Raises:
        ValueError: If the language cannot be determined
        SourceParseError: If the source does not parse
    """
    parsed = parse_source(source_text, file_path, language)
    ctx = transform_tree(parsed.arena, settings, file_path)

    if ctx.reports:
        output = print_tree(parsed.arena, ctx.diagnostics.annotations())
    else:
        output = source_text

    return TransformResult(
        file_path=file_path,
        language=parsed.language,
        source=source_text,
        output=output,
        components=ctx.reports,
        diagnostics=list(ctx.diagnostics.items),
    )


def transform_file(
    file_path: str,
    settings: Optional[ConvertSettings] = None,
    write: bool = True,
) -> TransformResult:
    """Convert a file on disk, writing it back when it changed.

    Raises:
        OSError: If the file cannot be read or written
        ValueError: If the file extension is not supported
        SourceParseError: If the source does not parse
    """
    language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Cannot detect language for {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        source_text = f.read()

    result = transform_source(source_text, file_path, language, settings)
    if write and result.changed:
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(result.output)
        logger.info(f"Wrote {os.path.basename(file_path)} ({result.converted_count} component(s))")
    return result
