"""
Main import rewriter orchestrator.
"""

import logging
from typing import Optional

from .config_loader import RunConfig
from .models import FileIndex, RunResult
from .parallel_rewriter import ParallelRewriter
from .scanner import SourceScanner

logger = logging.getLogger(__name__)


class ImportRewriter:
    """Rewrites relative specifiers under a folder so they resolve under strict ESM."""

    def __init__(self, config: Optional[RunConfig] = None):
        """Initialize the import rewriter.

        Args:
            config: Run configuration, defaults to RunConfig()
        """
        self.config = config or RunConfig()
        self.index: Optional[FileIndex] = None

    def build_index(self, folder_path: str) -> FileIndex:
        """Scan `folder_path` and return its file index."""
        scanner = SourceScanner(
            folder_path,
            exclude_dirs=self.config.exclude_dirs,
            source_extensions=self.config.source_extensions
        )
        return scanner.scan()

    def rewrite(self, folder_path: str) -> RunResult:
        """Main rewrite pipeline.

        Args:
            folder_path: Path to the folder whose sources are rewritten in place

        Returns:
            RunResult with one settled FileResult per indexed file

        Raises:
            InvalidProjectError: if `folder_path` is not a directory
        """
        logger.info(f"Starting import rewrite for: {folder_path}")

        self.index = self.build_index(folder_path)

        rewriter = ParallelRewriter(self.config)
        results = rewriter.rewrite_files(self.index)

        run_result = RunResult(root=self.index.root, results=results)

        logger.info(f"Rewrite complete: {len(self.index)} indexed, "
                    f"{len(run_result.rewritten)} rewritten, "
                    f"{len(run_result.unchanged)} unchanged, "
                    f"{len(run_result.failed)} failed")

        if run_result.failed:
            for result in run_result.failed[:5]:
                logger.error(f"Failed: {result.path} - {result.error}")

        return run_result
