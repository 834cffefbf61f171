"""Syntax package utilities.

Language detection, parser registry, and source file discovery.
"""

import os
from typing import TYPE_CHECKING, Dict, Iterator, Optional

if TYPE_CHECKING:
    from .base import BaseLanguageParser

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".tsx": "tsx",
}

# Directories to skip when a directory is given on the command line
SKIP_DIRECTORIES = frozenset({
    "node_modules",
    "bower_components",
    "dist",
    "build",
    "coverage",
    "__pycache__",
    ".git",
    ".next",
    ".cache",
})

# Parser registry, filled on first use per language
_parser_registry: Dict[str, "BaseLanguageParser"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Detect source language from file extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_parser(language: str) -> "BaseLanguageParser":
    """Get a parser instance for the given language.

    Args:
        language: Language identifier (e.g., "javascript")

    Returns:
        Parser instance

    Raises:
        ValueError: If language is not supported
    """
    if language not in _parser_registry:
        if language == "javascript":
            from .javascript_parser import JavaScriptParser
            _parser_registry["javascript"] = JavaScriptParser()
        elif language == "typescript":
            from .typescript_parser import TypeScriptParser
            _parser_registry["typescript"] = TypeScriptParser()
        elif language == "tsx":
            from .typescript_parser import TsxParser
            _parser_registry["tsx"] = TsxParser()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _parser_registry[language]


def should_skip_directory(dir_name: str) -> bool:
    """Check if a directory should be skipped during file walking."""
    return dir_name in SKIP_DIRECTORIES or dir_name.startswith(".")


def is_supported_file(file_path: str) -> bool:
    """Check if a file has a supported language extension."""
    return detect_language(file_path) is not None


def iter_source_files(path: str) -> Iterator[str]:
    """Yield supported source files under ``path`` (or ``path`` itself).

    Files named explicitly are yielded as-is; directories are walked in
    sorted order so runs are reproducible.
    """
    if not os.path.isdir(path):
        yield path
        return

    for dirpath, dirnames, filenames in os.walk(path):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_directory(d))
        for filename in sorted(filenames):
            full_path = os.path.join(dirpath, filename)
            if is_supported_file(full_path):
                yield full_path
