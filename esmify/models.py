"""
Data models for the import rewriter.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional
from pathlib import Path


class PathUtils:
    """Cross-platform path normalization utilities."""

    @staticmethod
    def normalize(path: str) -> str:
        """
        Convert any path to forward slashes for consistency.

        Args:
            path: Path string (may contain backslashes on Windows)

        Returns:
            Path with forward slashes (POSIX style)
        """
        if not path:
            return path
        return str(Path(path).as_posix())

    @staticmethod
    def to_relative(path: str, base: str) -> str:
        """
        Get relative path with forward slashes.

        Args:
            path: Absolute or relative path
            base: Base directory

        Returns:
            Relative path with forward slashes
        """
        try:
            rel = Path(path).relative_to(Path(base))
            return str(rel.as_posix())
        except (ValueError, TypeError):
            return PathUtils.normalize(path)


class SpecifierKind(Enum):
    """Syntactic position a module specifier was found in."""
    IMPORT = "import"
    EXPORT = "export"
    DYNAMIC_IMPORT = "dynamic_import"
    IMPORT_TYPE = "import_type"


class ResolutionKind(Enum):
    """Outcome of resolving one specifier against the file index."""
    UNCHANGED = "unchanged"
    FILE = "file"                    # <path>.ts or <path>.d.ts
    JSX_FILE = "jsx_file"            # <path>.tsx
    DIRECTORY_INDEX = "directory_index"          # <path>/index.ts or <path>/index.d.ts
    DIRECTORY_JSX_INDEX = "directory_jsx_index"  # <path>/index.tsx


@dataclass(frozen=True)
class FileIndex:
    """Immutable set of absolute source file paths found under a root."""
    root: str
    paths: FrozenSet[str] = frozenset()

    @classmethod
    def from_paths(cls, root: str, paths: Iterable[str]) -> 'FileIndex':
        return cls(root=root, paths=frozenset(paths))

    def __contains__(self, path: str) -> bool:
        return path in self.paths

    def __iter__(self):
        return iter(sorted(self.paths))

    def __len__(self) -> int:
        return len(self.paths)


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a specifier."""
    original: str
    specifier: str
    kind: ResolutionKind = ResolutionKind.UNCHANGED

    @property
    def changed(self) -> bool:
        return self.kind != ResolutionKind.UNCHANGED


@dataclass
class Specifier:
    """A module specifier string literal located in a source file."""
    text: str
    kind: SpecifierKind
    start_byte: int  # first byte inside the quotes
    end_byte: int    # byte of the closing quote
    line_number: int = 0


@dataclass(frozen=True)
class Edit:
    """Replacement of a byte range in the original source."""
    start_byte: int
    end_byte: int
    replacement: str


@dataclass
class VisitResult:
    """Edits produced by visiting one syntax tree."""
    edits: List[Edit] = field(default_factory=list)
    specifiers: List[Specifier] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.edits)


@dataclass
class FileResult:
    """Settled outcome of one file's rewrite pipeline."""
    path: str
    changed: bool = False
    rewrites: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class RunResult:
    """Aggregate of every file outcome in a run."""
    root: str
    results: List[FileResult] = field(default_factory=list)

    @property
    def rewritten(self) -> List[FileResult]:
        return [r for r in self.results if r.success and r.changed]

    @property
    def unchanged(self) -> List[FileResult]:
        return [r for r in self.results if r.success and not r.changed]

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.results if not r.success]

    @property
    def ok(self) -> bool:
        return not self.failed
