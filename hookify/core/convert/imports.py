"""Import manager — reconciles hook imports from the framework module.

For each hook symbol a converted component needs:

1. already imported from the framework module (possibly aliased):
   use the local name;
2. otherwise visible as a binding: import nothing;
3. otherwise extend an existing value import from the framework module, or
   insert a new ``import { ... } from "<module>";`` at the top of the file
   (after any hashbang line and directive prologue).

A symbol is never imported twice.
"""

import logging
from typing import List, Optional, Sequence

from ..syntax import NodeKind, SyntaxArena, import_bindings, is_name_bound
from .context import ConversionContext
from .models import ImportRequirement

logger = logging.getLogger(__name__)


class ImportManager:
    """Keeps one file's framework imports in step with the hooks it uses."""

    def __init__(self, ctx: ConversionContext):
        self.ctx = ctx
        self.arena: SyntaxArena = ctx.arena
        self.module = ctx.settings.framework_module

    def framework_imports(self) -> List[int]:
        """Program-level value imports from the framework module, in order."""
        arena = self.arena
        imports = []
        for statement in arena[arena.root].children:
            if arena.kind(statement) is not NodeKind.IMPORT:
                continue
            if arena.has_token(statement, "type"):
                continue
            source = arena.child(statement, "source")
            if source is not None and arena.text(source).strip("'\"") == self.module:
                imports.append(statement)
        return imports

    def imported_local(self, symbol: str) -> Optional[str]:
        for statement in self.framework_imports():
            for imported, local in import_bindings(self.arena, statement):
                if imported == symbol:
                    return local
        return None

    def reconcile(self, anchor: int, requirement: ImportRequirement) -> ImportRequirement:
        """Make the required symbols available at ``anchor``.

        Fills ``requirement.local_names`` with the name each symbol is
        reachable under.
        """
        local_names = requirement.local_names
        missing: List[str] = []
        for symbol in requirement.symbols:
            if symbol in local_names or symbol in missing:
                continue
            local = self.imported_local(symbol)
            if local is not None:
                local_names[symbol] = local
            elif is_name_bound(self.arena, anchor, symbol):
                logger.debug(f"'{symbol}' already bound, not importing")
                local_names[symbol] = symbol
            else:
                missing.append(symbol)

        if missing:
            self._add_symbols(missing)
            for symbol in missing:
                local_names[symbol] = symbol
            logger.debug(f"Imported {missing} from '{self.module}'")
        return requirement

    # ── Editing ──────────────────────────────────────────────────────

    def _add_symbols(self, symbols: List[str]) -> None:
        arena = self.arena
        for statement in self.framework_imports():
            clause = self._clause(statement)
            if clause is None:
                # Side-effect import: replace with the named form
                arena.replace_subtree(statement, [self._import_statement(symbols)])
                return
            parts = arena.named_children(clause)
            named = [p for p in parts if arena.kind(p) is NodeKind.NAMED_IMPORTS]
            if named:
                specifiers = arena.named_children(named[0]) + self._specifiers(symbols)
                arena.replace_subtree(named[0], [self._named_imports(specifiers)])
                return
            if len(parts) == 1 and arena.kind(parts[0]) is NodeKind.IDENTIFIER:
                replacement = arena.synthesize(
                    "import_clause",
                    "$default, $named",
                    kind=NodeKind.IMPORT_CLAUSE,
                    default=parts[0],
                    named=self._named_imports(self._specifiers(symbols)),
                )
                arena.replace_subtree(clause, [replacement])
                return
            # Namespace imports cannot take a named list

        arena.insert_children(arena.root, self._insert_position(), [self._import_statement(symbols)])

    def _clause(self, statement: int) -> Optional[int]:
        for child in self.arena[statement].children:
            if self.arena.kind(child) is NodeKind.IMPORT_CLAUSE:
                return child
        return None

    def _insert_position(self) -> int:
        """Index in the program after the hashbang, directives and leading comments."""
        arena = self.arena
        children = arena[arena.root].children
        position = 0
        while position < len(children):
            child = children[position]
            kind = arena.kind(child)
            if kind in (NodeKind.HASHBANG, NodeKind.COMMENT) or self._is_directive(child):
                position += 1
                continue
            break
        return position

    def _is_directive(self, statement: int) -> bool:
        arena = self.arena
        if arena.kind(statement) is not NodeKind.EXPRESSION_STATEMENT:
            return False
        expression = arena.named_children(statement)
        return len(expression) == 1 and arena.kind(expression[0]) is NodeKind.STRING

    # ── Node builders ────────────────────────────────────────────────

    def _specifiers(self, symbols: Sequence[str]) -> List[int]:
        arena = self.arena
        return [
            arena.synthesize(
                "import_specifier",
                "$name",
                kind=NodeKind.IMPORT_SPECIFIER,
                name=arena.leaf("identifier", symbol, NodeKind.IDENTIFIER),
            )
            for symbol in symbols
        ]

    def _named_imports(self, specifiers: List[int]) -> int:
        return self.arena.synthesize(
            "named_imports", "{ $specifiers }", kind=NodeKind.NAMED_IMPORTS, specifiers=specifiers
        )

    def _import_statement(self, symbols: Sequence[str]) -> int:
        arena = self.arena
        clause = arena.synthesize(
            "import_clause",
            "$named",
            kind=NodeKind.IMPORT_CLAUSE,
            named=self._named_imports(self._specifiers(symbols)),
        )
        return arena.synthesize(
            "import_statement",
            "import $clause from $source;",
            kind=NodeKind.IMPORT,
            clause=clause,
            source=arena.leaf("string", f'"{self.module}"', NodeKind.STRING),
        )
