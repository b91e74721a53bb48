"""
Source scanner that builds the file index for a rewrite run.
"""

import os
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .models import FileIndex
from .exceptions import InvalidProjectError

logger = logging.getLogger(__name__)


DEFAULT_EXCLUDE_DIRS = frozenset({'node_modules'})
DEFAULT_SOURCE_EXTENSIONS = ('.ts', '.tsx')


class SourceScanner:
    """Walks a project directory and collects every TypeScript source file."""

    def __init__(self, project_path: str,
                 exclude_dirs: Optional[Iterable[str]] = None,
                 source_extensions: Optional[Iterable[str]] = None):
        """Initialize the source scanner.

        Args:
            project_path: Path to the project directory to scan
            exclude_dirs: Directory names skipped at any depth
            source_extensions: File suffixes to collect
        """
        self.project_path = Path(project_path)
        self.exclude_dirs = frozenset(exclude_dirs if exclude_dirs is not None else DEFAULT_EXCLUDE_DIRS)
        self.source_extensions = tuple(source_extensions or DEFAULT_SOURCE_EXTENSIONS)

    def iter_files(self) -> Iterator[str]:
        """Yield absolute paths of source files below the project path."""
        root = os.path.abspath(self.project_path)
        for dirpath, dirs, files in os.walk(root):
            dirs[:] = [d for d in dirs if d not in self.exclude_dirs]

            for file in files:
                if file.endswith(self.source_extensions):
                    yield os.path.join(dirpath, file)

    def scan(self) -> FileIndex:
        """Scan the project and build the file index.

        Returns:
            FileIndex of absolute source file paths

        Raises:
            InvalidProjectError: if the project path is missing or not a directory
        """
        if not self.project_path.exists():
            raise InvalidProjectError(str(self.project_path), "path does not exist")
        if not self.project_path.is_dir():
            raise InvalidProjectError(str(self.project_path), "not a directory")

        logger.info(f"Scanning project at: {self.project_path}")

        index = FileIndex.from_paths(os.path.abspath(self.project_path), self.iter_files())

        logger.info(f"Scan complete. Indexed {len(index)} source files")
        return index
