"""
Parallel rewriter for processing many files concurrently in worker processes.

Every file runs its own read -> parse -> visit -> serialize -> format -> write
pipeline. Pipelines share nothing but the read-only file index and run
configuration, and a failure in one is recorded in its FileResult without
affecting any other.
"""

import os
import logging
import traceback
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from concurrent.futures.process import BrokenProcessPool
from pathlib import Path
from typing import Dict, List, Optional

from .config_loader import RunConfig
from .formatter import PrettierFormatter
from .models import FileIndex, FileResult, PathUtils
from .parser import SourceParser
from .resolvers import TypeScriptResolver
from .serializer import serialize
from .visitor import SpecifierVisitor

logger = logging.getLogger(__name__)


class FilePipeline:
    """Rewrites single files against a shared index and configuration."""

    def __init__(self, index: FileIndex, config: RunConfig):
        self.index = index
        self.config = config
        self.parser = SourceParser()
        self.visitor = SpecifierVisitor(TypeScriptResolver(index, jsx=config.jsx))
        self.formatter = (PrettierFormatter(config.prettier_options)
                          if config.prettier_options is not None else None)

    def run(self, file_path: str) -> FileResult:
        """Rewrite one file in place if any of its specifiers change.

        Never raises; failures are reported through FileResult.error.
        """
        relative_path = PathUtils.to_relative(file_path, self.index.root)
        try:
            source = Path(file_path).read_bytes()
            tree = self.parser.parse(file_path, source)
            visited = self.visitor.visit(tree, source, file_path)

            if not visited.changed:
                logger.debug(f"Unchanged: {relative_path} ({len(visited.specifiers)} specifiers)")
                return FileResult(path=file_path)

            text = serialize(source, visited.edits)
            if self.formatter is not None:
                text = self.formatter.format(text, file_path)

            Path(file_path).write_bytes(text.encode('utf-8'))
            logger.info(f"Rewrote {len(visited.edits)} specifiers in {relative_path}")
            return FileResult(path=file_path, changed=True, rewrites=len(visited.edits))

        except Exception as e:
            logger.error(f"Failed to rewrite {relative_path}: {e}")
            logger.debug(traceback.format_exc())
            return FileResult(path=file_path, error=str(e))


# Per-process pipeline, built once by the executor initializer
_WORKER_PIPELINE: Optional[FilePipeline] = None


def _init_worker(index: FileIndex, config: RunConfig):
    global _WORKER_PIPELINE
    _WORKER_PIPELINE = FilePipeline(index, config)


def _rewrite_file_worker(file_path: str) -> FileResult:
    """Worker function that runs in separate process.

    This function is the target for the process pool. It must be
    at module level (not nested) for pickle serialization.
    """
    return _WORKER_PIPELINE.run(file_path)


def settle(file_path: str, future: Future) -> FileResult:
    """Turn a finished future into a FileResult.

    A worker that dies (killed, out of memory) never returns its own
    FileResult; the pool breaks and every future it held raises instead.
    Those files are reported as failed rather than lost.
    """
    error = future.exception()
    if error is None:
        return future.result()

    if isinstance(error, BrokenProcessPool):
        reason = "worker process terminated abruptly"
    else:
        reason = f"worker error: {error}"
    logger.error(f"Failed to rewrite {file_path}: {reason}")
    return FileResult(path=file_path, error=reason)


class ParallelRewriter:
    """Orchestrates parallel rewriting of every indexed file."""

    def __init__(self, config: RunConfig):
        """Initialize parallel rewriter.

        Args:
            config: Run configuration; `workers` sets the process count
        """
        self.config = config

        if config.workers is None:
            self.worker_count = self.get_optimal_worker_count()
        else:
            self.worker_count = max(1, config.workers)

        logger.debug(f"Initialized ParallelRewriter with {self.worker_count} workers")

    def rewrite_files(self, index: FileIndex) -> List[FileResult]:
        """Run every file's pipeline and wait for all of them to settle.

        Args:
            index: The file index; every path in it is processed

        Returns:
            One FileResult per indexed file, in index order
        """
        file_paths = list(index)
        if not file_paths:
            logger.warning("No source files to rewrite")
            return []

        if self.worker_count == 1 or len(file_paths) == 1:
            return self.rewrite_files_sequential(index)

        workers = min(self.worker_count, len(file_paths))
        logger.info(f"Rewriting {len(file_paths)} files across {workers} workers")

        results: Dict[str, FileResult] = {}
        try:
            with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                     initargs=(index, self.config)) as executor:
                future_to_path = {}
                for file_path in file_paths:
                    try:
                        future_to_path[executor.submit(_rewrite_file_worker, file_path)] = file_path
                    except BrokenProcessPool:
                        results[file_path] = FileResult(
                            path=file_path, error="worker process terminated abruptly")

                for future in as_completed(future_to_path):
                    file_path = future_to_path[future]
                    results[file_path] = settle(file_path, future)
        except OSError as e:
            logger.warning(f"Process pool unavailable ({e}), continuing sequentially")
            pipeline = FilePipeline(index, self.config)
            for file_path in file_paths:
                if file_path not in results:
                    results[file_path] = pipeline.run(file_path)

        return [results[p] for p in file_paths]

    def rewrite_files_sequential(self, index: FileIndex) -> List[FileResult]:
        """Run every pipeline in this process, one after another."""
        pipeline = FilePipeline(index, self.config)
        return [pipeline.run(file_path) for file_path in index]

    @staticmethod
    def get_optimal_worker_count() -> int:
        """Calculate optimal number of workers based on CPU count.

        Returns:
            Recommended worker count (cpu_count - 1, minimum 1)
        """
        cpu_count = os.cpu_count() or 1
        return max(1, cpu_count - 1)
