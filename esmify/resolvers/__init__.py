"""
Resolver package for module specifier resolution.
"""

from .typescript_resolver import TypeScriptResolver

__all__ = [
    'TypeScriptResolver',
]
