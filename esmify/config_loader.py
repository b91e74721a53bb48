"""
Run configuration for esmify.

Holds the options that shape a rewrite run and loads the optional
formatter options file (JSON, or YAML for `.yaml`/`.yml`).
"""

import json
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, FrozenSet, Optional, Tuple, Union
from dataclasses import dataclass, field

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Options for one rewrite run."""

    # Append .jsx instead of .js for specifiers resolved to .tsx files
    jsx: bool = False

    # Options passed through to the external formatter; None writes raw text
    prettier_options: Optional[Dict[str, Any]] = None

    # Worker processes (None: cpu_count - 1, 1: sequential in-process)
    workers: Optional[int] = None

    # Directory names never descended into
    exclude_dirs: FrozenSet[str] = field(default_factory=lambda: frozenset({'node_modules'}))

    # File suffixes that make up the file index
    source_extensions: Tuple[str, ...] = ('.ts', '.tsx')


def load_formatter_options(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load formatter options from a JSON or YAML file.

    The `parser` option is always forced to TypeScript since every
    rewritten file is a .ts or .tsx source.

    Args:
        config_path: Path to the options file, relative to the working directory

    Returns:
        Options mapping

    Raises:
        ConfigurationError: if the file is missing, malformed, or not a mapping
    """
    config_path = Path(config_path)
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix in ['.yaml', '.yml']:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except OSError as e:
        raise ConfigurationError(str(config_path), f"could not read: {e.strerror or e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(str(config_path), f"malformed options file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            str(config_path),
            f"options file must contain an object, got {type(data).__name__}"
        )

    options = dict(data)
    options['parser'] = 'typescript'
    logger.info(f"Loaded formatter config: {config_path} ({len(options)} options)")
    return options
