"""Core functionality for Twig.

This module contains the core data structures:
- Twig objects (Blob, Tree, Commit) and the object store
- Repository management
- Index/staging area
- Reference management
- Configuration and identity
- Hashing utilities
- The error hierarchy

For operations like diff, merge, rebase and blame, see twig.operations
For utilities like ignore handling, see twig.utils
"""

from twig.core.objects import TwigObject, Blob, Tree, TreeEntry, Commit, Signature
from twig.core.repository import Repository
from twig.core.hash import hash_object, hash_file
from twig.core.store import ObjectStore
from twig.core.index import Index
from twig.core.refs import RefManager
from twig.core.config import Config, Identity, get_config

__all__ = [
    'TwigObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'Signature',
    'Repository',
    'ObjectStore',
    'Index',
    'RefManager',
    'Config',
    'Identity',
    'get_config',
    'hash_object',
    'hash_file',
]
