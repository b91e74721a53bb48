"""
TypeScript specifier resolver for strict ESM output.

Maps an extensionless relative specifier to the form a strict ESM loader
expects at runtime:
- ./foo      -> ./foo.js        (foo.ts or foo.d.ts)
- ./Foo      -> ./Foo.js|.jsx   (Foo.tsx)
- ./dir      -> ./dir/index.js  (dir/index.ts or dir/index.d.ts)
- ./widgets  -> ./widgets/index.js|.jsx  (widgets/index.tsx)

Resolution only consults the file index, never the file system.
"""

import os

from ..models import FileIndex, Resolution, ResolutionKind


class TypeScriptResolver:
    """Resolves relative TypeScript specifiers against a file index."""

    def __init__(self, index: FileIndex, jsx: bool = False):
        """
        Initialize TypeScript specifier resolver.

        Args:
            index: Absolute paths of every indexed source file
            jsx: Append .jsx rather than .js for matches on .tsx files
        """
        self.index = index
        self.jsx = jsx
        self.runtime_extension = '.js'
        self.jsx_extension = '.jsx' if jsx else '.js'

    def resolve(self, specifier: str, from_file: str) -> Resolution:
        """
        Resolve a specifier found in `from_file`.

        Args:
            specifier: Raw specifier text, without quotes
            from_file: Absolute path of the file containing the specifier

        Returns:
            Resolution carrying the specifier to write back, unchanged when
            it is not relative, already ends in .js, or matches nothing
        """
        if not specifier.startswith('.'):
            return Resolution(specifier, specifier)
        if specifier.endswith(self.runtime_extension):
            return Resolution(specifier, specifier)

        candidate = os.path.normpath(os.path.join(os.path.dirname(from_file), specifier))

        # "./", ".", ".." and "../.." name directories, so only index forms apply
        names_directory = specifier.endswith('/') or specifier.rsplit('/', 1)[-1] in ('.', '..')
        if not names_directory:
            if candidate + '.ts' in self.index or candidate + '.d.ts' in self.index:
                return Resolution(specifier, specifier + self.runtime_extension, ResolutionKind.FILE)
            if candidate + '.tsx' in self.index:
                return Resolution(specifier, specifier + self.jsx_extension, ResolutionKind.JSX_FILE)

        index_base = os.path.join(candidate, 'index')
        prefix = specifier if specifier.endswith('/') else specifier + '/'
        if index_base + '.ts' in self.index or index_base + '.d.ts' in self.index:
            return Resolution(specifier, prefix + 'index' + self.runtime_extension,
                              ResolutionKind.DIRECTORY_INDEX)
        if index_base + '.tsx' in self.index:
            return Resolution(specifier, prefix + 'index' + self.jsx_extension,
                              ResolutionKind.DIRECTORY_JSX_INDEX)

        return Resolution(specifier, specifier)
