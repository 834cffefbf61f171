"""JavaScript parser using tree-sitter.

The JavaScript grammar already covers JSX and class fields, so ``.js`` and
``.jsx`` component files share it.
"""

import logging

import tree_sitter
import tree_sitter_javascript

from .base import BaseLanguageParser

logger = logging.getLogger(__name__)

_JS_LANGUAGE = tree_sitter.Language(tree_sitter_javascript.language())


class JavaScriptParser(BaseLanguageParser):
    """tree-sitter based JavaScript (and JSX) parser.

    All node kinds it needs are in the shared table; class fields use the
    ``property`` field name the conversion pipeline expects.
    """

    def get_language(self) -> str:
        return "javascript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _JS_LANGUAGE
