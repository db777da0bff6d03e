"""Utilities module for common helper functions.

This module contains:
- Filesystem utilities (atomic writes, path helpers)
- Ignore file handling (.twigignore)
"""

from twig.utils.ignore import IgnoreMatcher, IgnorePattern
from twig.utils.fs import atomic_write, atomic_write_text

__all__ = [
    'IgnoreMatcher', 'IgnorePattern',
    'atomic_write', 'atomic_write_text',
]
