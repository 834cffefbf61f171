"""hookify syntax layer — tree-sitter parsing into an index-addressed arena.

Public API:
    parse_file(path) → ParseResult
    parse_source(source, file_path, language) → ParseResult
    print_tree(arena, annotations) → str
    detect_language(file_path) → str | None
"""

from .arena import SyntaxArena
from .models import NodeKind, ParseResult, SourceParseError, SyntaxNode
from .printer import Printer, print_tree
from .scope import declared_names, import_bindings, is_name_bound
from .utils import detect_language, get_parser, is_supported_file, iter_source_files, should_skip_directory

__all__ = [
    "parse_file",
    "parse_source",
    "print_tree",
    "detect_language",
    "is_supported_file",
    "iter_source_files",
    "should_skip_directory",
    "is_name_bound",
    "declared_names",
    "import_bindings",
    "NodeKind",
    "ParseResult",
    "Printer",
    "SourceParseError",
    "SyntaxArena",
    "SyntaxNode",
]


def parse_file(file_path: str, language: str | None = None) -> ParseResult:
    """Parse a source file into an arena.

    Args:
        file_path: Path to the source file
        language: Language identifier. If None, detected from file_path.

    Returns:
        ParseResult holding the arena

    Raises:
        ValueError: If the language is not supported
        SourceParseError: If the file does not parse
    """
    if language is None:
        language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Cannot detect language for {file_path}")
    return get_parser(language).parse_file(file_path)


def parse_source(source_text: str, file_path: str, language: str | None = None) -> ParseResult:
    """Parse source code string into an arena.

    Args:
        source_text: Source code as string
        file_path: File path (for metadata)
        language: Language identifier. If None, detected from file_path.

    Returns:
        ParseResult holding the arena
    """
    if language is None:
        language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Cannot detect language for {file_path}")
    return get_parser(language).parse_source(source_text, file_path)
