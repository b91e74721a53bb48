"""
esmify

Rewrites relative import specifiers in TypeScript sources so they carry the
explicit extensions a strict ESM loader requires.
"""

from .models import FileIndex, Resolution, ResolutionKind, SpecifierKind, FileResult, RunResult
from .config_loader import RunConfig, load_formatter_options
from .scanner import SourceScanner
from .resolvers import TypeScriptResolver
from .parser import SourceParser
from .visitor import SpecifierVisitor
from .main import ImportRewriter

__version__ = "0.1.0"

__all__ = [
    'FileIndex', 'Resolution', 'ResolutionKind', 'SpecifierKind', 'FileResult', 'RunResult',
    'RunConfig', 'load_formatter_options', 'SourceScanner', 'TypeScriptResolver',
    'SourceParser', 'SpecifierVisitor', 'ImportRewriter'
]
