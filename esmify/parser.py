"""
Tree-sitter parsing for TypeScript and TSX sources.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from tree_sitter import Language, Parser, Tree

from .exceptions import ParsingError

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
# Tree-sitter language setup (one grammar per dialect, loaded once)
# -------------------------------------------------------------------
_LANGUAGE_CACHE: Dict[str, Language] = {}


def get_language(dialect: str) -> Language:
    """Return the tree-sitter Language for 'typescript' or 'tsx'."""
    if dialect in _LANGUAGE_CACHE:
        return _LANGUAGE_CACHE[dialect]

    import tree_sitter_typescript

    if dialect == 'tsx':
        lang = Language(tree_sitter_typescript.language_tsx())
    elif dialect == 'typescript':
        lang = Language(tree_sitter_typescript.language_typescript())
    else:
        raise ValueError(f"Unknown TypeScript dialect: {dialect}")

    _LANGUAGE_CACHE[dialect] = lang
    logger.debug(f"Loaded tree-sitter language '{dialect}'")
    return lang


def dialect_for(file_path: str) -> str:
    """Pick the grammar for a file; <T>casts only parse under the plain grammar."""
    return 'tsx' if Path(file_path).suffix.lower() == '.tsx' else 'typescript'


def _first_error(root: Any) -> Optional[Any]:
    """Depth-first search for the first ERROR or MISSING node, in source order."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_error or node.is_missing:
            return node
        stack.extend(reversed([c for c in node.children if c.has_error or c.is_missing]))
    return None


class SourceParser:
    """Parses TypeScript/TSX source bytes into tree-sitter trees."""

    def __init__(self):
        self._parsers: Dict[str, Parser] = {}

    def _get_parser(self, dialect: str) -> Parser:
        if dialect not in self._parsers:
            self._parsers[dialect] = Parser(get_language(dialect))
        return self._parsers[dialect]

    def parse(self, file_path: str, source: bytes) -> Tree:
        """Parse a file's contents.

        Args:
            file_path: Path of the file, used to pick the grammar and for errors
            source: Raw file contents

        Returns:
            The syntax tree

        Raises:
            ParsingError: if the source contains syntax errors
        """
        tree = self._get_parser(dialect_for(file_path)).parse(source)

        if tree.root_node.has_error:
            error_node = _first_error(tree.root_node)
            line = error_node.start_point[0] + 1 if error_node is not None else None
            reason = "missing token" if error_node is not None and error_node.is_missing else "syntax error"
            raise ParsingError(file_path, reason, line=line)

        return tree
