"""TypeScript parsers using tree-sitter.

Extends the JavaScript node table with TypeScript-specific constructs:
``public_field_definition`` class fields, ``extends_clause`` heritage,
typed parameters and ``type_identifier`` class names. ``.tsx`` files need
the separate TSX grammar, which adds JSX on top of TypeScript.
"""

import logging
from typing import Dict

import tree_sitter
import tree_sitter_typescript

from .base import BaseLanguageParser
from .models import NodeKind

logger = logging.getLogger(__name__)

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())

_TS_KINDS: Dict[str, NodeKind] = {
    "public_field_definition": NodeKind.FIELD,
    "extends_clause": NodeKind.EXTENDS_CLAUSE,
    "type_identifier": NodeKind.IDENTIFIER,
    "required_parameter": NodeKind.REQUIRED_PARAMETER,
    "optional_parameter": NodeKind.REQUIRED_PARAMETER,
}


class TypeScriptParser(BaseLanguageParser):
    """tree-sitter based TypeScript parser.

    Class fields are ``public_field_definition`` nodes whose name lives in
    the ``name`` field; it is exposed as ``property`` like in JavaScript.
    """

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE

    def extra_kinds(self) -> Dict[str, NodeKind]:
        return _TS_KINDS

    def field_aliases(self) -> Dict[str, Dict[str, str]]:
        return {"public_field_definition": {"name": "property"}}


class TsxParser(TypeScriptParser):
    """TypeScript parser for ``.tsx`` files (TypeScript plus JSX)."""

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE
