"""Syntax tree data models.

Defines the node representation shared by the parser, the printer and the
conversion pipeline. These are pure data containers with no parsing logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from .arena import SyntaxArena


class NodeKind(Enum):
    """Closed set of node shapes the conversion pipeline distinguishes.

    Grammar node types map onto these through ``COMMON_KINDS`` (plus
    per-language extras). Everything else is ``OTHER``; anonymous tokens
    (keywords, punctuation) are ``TOKEN``.
    """

    PROGRAM = "program"
    HASHBANG = "hashbang"
    COMMENT = "comment"

    # Modules
    IMPORT = "import"
    IMPORT_CLAUSE = "import_clause"
    NAMED_IMPORTS = "named_imports"
    IMPORT_SPECIFIER = "import_specifier"
    NAMESPACE_IMPORT = "namespace_import"
    EXPORT = "export"

    # Classes
    CLASS_DECLARATION = "class_declaration"
    CLASS_HERITAGE = "class_heritage"
    EXTENDS_CLAUSE = "extends_clause"
    CLASS_BODY = "class_body"
    FIELD = "field"
    METHOD = "method"

    # Declarations and functions
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    FUNCTION_DECLARATION = "function_declaration"
    ARROW_FUNCTION = "arrow_function"
    FUNCTION_EXPRESSION = "function_expression"
    FORMAL_PARAMETERS = "formal_parameters"

    # Statements
    STATEMENT_BLOCK = "statement_block"
    EXPRESSION_STATEMENT = "expression_statement"
    RETURN = "return"
    SWITCH_CASE = "switch_case"

    # Expressions
    MEMBER_ACCESS = "member_access"
    COMPUTED_ACCESS = "computed_access"
    CALL = "call"
    ARGUMENTS = "arguments"
    ASSIGNMENT = "assignment"
    UPDATE = "update"
    PARENTHESIZED = "parenthesized"
    SEQUENCE = "sequence"
    OBJECT = "object"
    PAIR = "pair"
    SHORTHAND_PROPERTY = "shorthand_property"
    SPREAD = "spread"

    # Patterns
    OBJECT_PATTERN = "object_pattern"
    ARRAY_PATTERN = "array_pattern"
    PAIR_PATTERN = "pair_pattern"
    ASSIGNMENT_PATTERN = "assignment_pattern"
    REST_PATTERN = "rest_pattern"
    SHORTHAND_PATTERN = "shorthand_pattern"
    REQUIRED_PARAMETER = "required_parameter"

    # Names and literals
    THIS = "this"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    PRIVATE_IDENTIFIER = "private_identifier"
    COMPUTED_NAME = "computed_name"
    NUMBER = "number"
    STRING = "string"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    UNDEFINED = "undefined"

    # Arena-only: a sequence of nodes standing in for one replaced node
    FRAGMENT = "fragment"

    TOKEN = "token"
    OTHER = "other"


# Grammar type → kind, shared by the JavaScript, TypeScript and TSX grammars
COMMON_KINDS: Dict[str, NodeKind] = {
    "program": NodeKind.PROGRAM,
    "hash_bang_line": NodeKind.HASHBANG,
    "comment": NodeKind.COMMENT,
    "import_statement": NodeKind.IMPORT,
    "import_clause": NodeKind.IMPORT_CLAUSE,
    "named_imports": NodeKind.NAMED_IMPORTS,
    "import_specifier": NodeKind.IMPORT_SPECIFIER,
    "namespace_import": NodeKind.NAMESPACE_IMPORT,
    "export_statement": NodeKind.EXPORT,
    "class_declaration": NodeKind.CLASS_DECLARATION,
    "class_heritage": NodeKind.CLASS_HERITAGE,
    "class_body": NodeKind.CLASS_BODY,
    "field_definition": NodeKind.FIELD,
    "method_definition": NodeKind.METHOD,
    "lexical_declaration": NodeKind.LEXICAL_DECLARATION,
    "variable_declaration": NodeKind.LEXICAL_DECLARATION,
    "variable_declarator": NodeKind.VARIABLE_DECLARATOR,
    "function_declaration": NodeKind.FUNCTION_DECLARATION,
    "generator_function_declaration": NodeKind.FUNCTION_DECLARATION,
    "arrow_function": NodeKind.ARROW_FUNCTION,
    "function_expression": NodeKind.FUNCTION_EXPRESSION,
    "function": NodeKind.FUNCTION_EXPRESSION,
    "generator_function": NodeKind.FUNCTION_EXPRESSION,
    "formal_parameters": NodeKind.FORMAL_PARAMETERS,
    "statement_block": NodeKind.STATEMENT_BLOCK,
    "expression_statement": NodeKind.EXPRESSION_STATEMENT,
    "return_statement": NodeKind.RETURN,
    "switch_case": NodeKind.SWITCH_CASE,
    "switch_default": NodeKind.SWITCH_CASE,
    "member_expression": NodeKind.MEMBER_ACCESS,
    "subscript_expression": NodeKind.COMPUTED_ACCESS,
    "call_expression": NodeKind.CALL,
    "arguments": NodeKind.ARGUMENTS,
    "assignment_expression": NodeKind.ASSIGNMENT,
    "augmented_assignment_expression": NodeKind.ASSIGNMENT,
    "update_expression": NodeKind.UPDATE,
    "parenthesized_expression": NodeKind.PARENTHESIZED,
    "sequence_expression": NodeKind.SEQUENCE,
    "object": NodeKind.OBJECT,
    "pair": NodeKind.PAIR,
    "shorthand_property_identifier": NodeKind.SHORTHAND_PROPERTY,
    "spread_element": NodeKind.SPREAD,
    "object_pattern": NodeKind.OBJECT_PATTERN,
    "array_pattern": NodeKind.ARRAY_PATTERN,
    "pair_pattern": NodeKind.PAIR_PATTERN,
    "assignment_pattern": NodeKind.ASSIGNMENT_PATTERN,
    "object_assignment_pattern": NodeKind.ASSIGNMENT_PATTERN,
    "rest_pattern": NodeKind.REST_PATTERN,
    "shorthand_property_identifier_pattern": NodeKind.SHORTHAND_PATTERN,
    "this": NodeKind.THIS,
    "identifier": NodeKind.IDENTIFIER,
    "property_identifier": NodeKind.PROPERTY_IDENTIFIER,
    "private_property_identifier": NodeKind.PRIVATE_IDENTIFIER,
    "computed_property_name": NodeKind.COMPUTED_NAME,
    "number": NodeKind.NUMBER,
    "string": NodeKind.STRING,
    "true": NodeKind.TRUE,
    "false": NodeKind.FALSE,
    "null": NodeKind.NULL,
    "undefined": NodeKind.UNDEFINED,
}

# Template slot value: one node, or a list of nodes joined by the node's joiner
SlotValue = Union[int, List[int]]


@dataclass
class SyntaxNode:
    """A single node stored in a ``SyntaxArena``.

    Nodes parsed from source carry ``span`` (the byte range of their own
    text). Synthesised nodes have no span and render from ``template``
    (or ``text`` for leaves). ``slot`` is the byte range a node occupies
    inside its parent's original text; it survives in-place replacement so
    the printer can splice the replacement between untouched neighbours.
    """

    type: str  # raw grammar type, e.g. "member_expression"
    kind: NodeKind
    named: bool = True
    children: List[int] = field(default_factory=list)
    fields: Dict[str, int] = field(default_factory=dict)
    parent: Optional[int] = None
    span: Optional[Tuple[int, int]] = None
    slot: Optional[Tuple[int, int]] = None
    start_point: Tuple[int, int] = (0, 0)  # (row, column), 0-based
    text: Optional[str] = None  # leaf text
    template: Optional[str] = None  # string.Template source for synthesised nodes
    slots: Dict[str, SlotValue] = field(default_factory=dict)
    joiner: str = ", "
    block: bool = False  # fragment printed inside braces

    @property
    def is_synthetic(self) -> bool:
        return self.span is None


class SourceParseError(Exception):
    """Raised when the parser cannot make sense of a source file.

    This is the only file-scoped hard failure: recognised-but-unsupported
    shapes degrade into diagnostics instead.
    """

    def __init__(self, file_path: str, line: int, column: int, message: str = "syntax error"):
        self.file_path = file_path
        self.line = line
        self.column = column
        self.message = message
        super().__init__(f"{file_path}:{line}:{column}: {message}")


@dataclass
class ParseResult:
    """Complete parse output for a single file.

    Holds the arena built from the source; the arena is exclusively owned
    by whoever transforms this file.
    """

    file_path: str
    language: str
    arena: "SyntaxArena"
    line_count: int = 0
