"""
Exceptions raised by esmify.

Per-file errors (ParsingError, FormatterError) are caught by the file
pipeline and their text becomes FileResult.error; ConfigurationError and
InvalidProjectError stop the run before any file is touched.
"""


class RewriterError(Exception):
    """Base exception for rewriter errors."""


class ParsingError(RewriterError):
    """Source file contains syntax the TypeScript grammar rejects."""

    def __init__(self, file_path: str, reason: str, line: int = None):
        location = f"{file_path}:{line}" if line is not None else file_path
        super().__init__(f"{location}: {reason}")
        self.file_path = file_path
        self.reason = reason
        self.line = line


class FormatterError(RewriterError):
    """Prettier could not be run or rejected the rewritten text."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"{file_path}: prettier failed: {reason}")
        self.file_path = file_path
        self.reason = reason


class ConfigurationError(RewriterError):
    """Prettier options file missing or malformed."""

    def __init__(self, config_file: str, reason: str):
        super().__init__(f"{config_file}: {reason}")
        self.config_file = config_file
        self.reason = reason


class InvalidProjectError(RewriterError):
    """Target folder missing or not a directory."""

    def __init__(self, project_path: str, reason: str):
        super().__init__(f"Invalid project: {project_path} - {reason}")
        self.project_path = project_path
        self.reason = reason
