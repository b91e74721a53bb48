"""
Syntax visitor that locates module specifiers and plans their rewrites.

Four node shapes carry a specifier:
- import_statement with a `source` string:   import { A } from './a'
- export_statement with a `source` string:   export * from './a'
- import(...) call with a string argument:   await import('./a')
- the same call in a type position:          typeof import('./a'), import('./a').T

Nothing is mutated; the visitor returns the byte-range edits to apply.
"""

import logging
from typing import Any, Optional

from .models import Edit, Specifier, SpecifierKind, VisitResult
from .resolvers import TypeScriptResolver

logger = logging.getLogger(__name__)

# Ancestors that put an import(...) call in type position
TYPE_CONTEXTS = {
    'type_query',
    'type_annotation',
    'type_alias_declaration',
    'type_arguments',
    'literal_type',
    'generic_type',
}


class SpecifierVisitor:
    """Walks a tree-sitter tree and resolves every relative specifier in it."""

    def __init__(self, resolver: TypeScriptResolver):
        self.resolver = resolver

    def visit(self, tree: Any, source: bytes, file_path: str) -> VisitResult:
        """Collect specifiers and the edits needed to make them resolve.

        The walk keeps its own stack, so nesting depth is bounded by memory
        rather than the interpreter's recursion limit.

        Args:
            tree: Parsed tree-sitter tree for `source`
            source: Raw file contents the tree was parsed from
            file_path: Absolute path of the file

        Returns:
            VisitResult with one edit per rewritten specifier
        """
        result = VisitResult()
        seen = set()

        stack = [tree.root_node]
        while stack:
            node = stack.pop()

            if node.type in ('import_statement', 'export_statement'):
                source_node = node.child_by_field_name('source')
                if source_node is not None and source_node.type == 'string':
                    kind = SpecifierKind.IMPORT if node.type == 'import_statement' else SpecifierKind.EXPORT
                    self._visit_string(source_node, kind, source, file_path, result, seen)
            elif node.type == 'import' and node.child_count == 0:
                argument = self._import_call_argument(node)
                if argument is not None:
                    kind = SpecifierKind.IMPORT_TYPE if self._in_type_context(node) else SpecifierKind.DYNAMIC_IMPORT
                    self._visit_string(argument, kind, source, file_path, result, seen)

            # Reversed so nodes pop in source order
            stack.extend(reversed(node.children))

        return result

    def _visit_string(self, string_node: Any, kind: SpecifierKind, source: bytes,
                      file_path: str, result: VisitResult, seen: set):
        # Inner range excludes the quotes so the original quote style survives
        start, end = string_node.start_byte + 1, string_node.end_byte - 1
        if end < start or start in seen:
            return
        seen.add(start)
        text = source[start:end].decode('utf-8')

        specifier = Specifier(
            text=text,
            kind=kind,
            start_byte=start,
            end_byte=end,
            line_number=string_node.start_point[0] + 1
        )
        result.specifiers.append(specifier)

        resolution = self.resolver.resolve(text, file_path)
        if resolution.changed:
            result.edits.append(Edit(start, end, resolution.specifier))
            logger.debug(f"{file_path}:{specifier.line_number} {kind.value} "
                         f"'{text}' -> '{resolution.specifier}' ({resolution.kind.value})")

    @staticmethod
    def _import_call_argument(import_node: Any) -> Optional[Any]:
        """Return the string literal passed to the `import` keyword node, if any.

        The grammar shapes import(...) differently in expression and type
        positions: either an `arguments` node follows the keyword, or the
        parenthesised argument follows it directly.
        """
        following = import_node.next_sibling
        if following is None:
            return None

        if following.type == 'arguments':
            candidates = following.named_children
        elif following.type == '(':
            candidates = []
            sibling = following.next_sibling
            while sibling is not None and sibling.type != ')':
                candidates.append(sibling)
                sibling = sibling.next_sibling
            candidates = [c for c in candidates if c.is_named]
        else:
            return None

        args = [child for child in candidates if child.type != 'comment']
        if not args:
            return None

        first = args[0]
        if first.type == 'literal_type' and first.named_child_count:
            first = first.named_children[0]
        return first if first.type == 'string' else None

    @staticmethod
    def _in_type_context(node: Any) -> bool:
        current = node.parent
        while current is not None:
            if current.type in TYPE_CONTEXTS:
                return True
            current = current.parent
        return False
