"""
Optional Prettier pass over rewritten files.

Prettier is a Node.js tool, so it runs as a subprocess reading the
source on stdin. Options from the loaded config become CLI flags.
"""

import re
import shutil
import logging
import subprocess
from typing import Any, Dict, List, Optional

from .exceptions import FormatterError

logger = logging.getLogger(__name__)

# Config keys whose CLI flag is not the kebab-cased key
_FLAG_NAMES = {
    'plugins': 'plugin',
}


def _kebab(name: str) -> str:
    return re.sub(r'(?<!^)(?=[A-Z])', '-', name).lower()


def options_to_flags(options: Dict[str, Any]) -> List[str]:
    """Translate a Prettier options mapping into command-line flags."""
    flags = []
    for key, value in options.items():
        flag = '--' + _FLAG_NAMES.get(key, _kebab(key))
        if isinstance(value, bool):
            flags.append(flag if value else '--no-' + flag[2:])
        elif isinstance(value, (list, tuple)):
            flags.extend(f"{flag}={item}" for item in value)
        elif isinstance(value, dict):
            logger.warning(f"Formatter option '{key}' has no CLI form and is ignored")
        elif value is not None:
            flags.append(f"{flag}={value}")
    return flags


class PrettierFormatter:
    """Pipes source text through the prettier CLI."""

    def __init__(self, options: Dict[str, Any], command: Optional[List[str]] = None):
        """
        Args:
            options: Prettier options; `parser` is forced to typescript
            command: Executable and leading arguments, found on PATH when omitted
        """
        self.options = dict(options)
        self.options['parser'] = 'typescript'
        self.command = command

    def _resolve_command(self, file_path: str) -> List[str]:
        if self.command:
            return list(self.command)
        prettier = shutil.which('prettier')
        if prettier:
            return [prettier]
        npx = shutil.which('npx')
        if npx:
            return [npx, '--no-install', 'prettier']
        raise FormatterError(file_path, "prettier executable not found on PATH")

    def format(self, text: str, file_path: str) -> str:
        """Format `text` as the contents of `file_path`.

        Raises:
            FormatterError: if prettier is missing or exits with an error
        """
        cmd = self._resolve_command(file_path) + [
            '--no-config',
            '--stdin-filepath', file_path,
        ] + options_to_flags(self.options)

        try:
            completed = subprocess.run(
                cmd,
                input=text,
                capture_output=True,
                text=True,
                encoding='utf-8',
            )
        except OSError as e:
            raise FormatterError(file_path, f"could not run prettier: {e}") from e

        if completed.returncode != 0:
            reason = (completed.stderr or '').strip() or f"exit status {completed.returncode}"
            raise FormatterError(file_path, reason)

        return completed.stdout
