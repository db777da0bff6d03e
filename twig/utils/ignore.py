"""Ignore rules loaded from .twigignore files.

Patterns are plain repository-relative paths, not globs:

- ``name`` ignores the path ``name`` and everything beneath it
- ``name/`` ignores only what lives under the directory ``name``
- blank lines and lines starting with ``#`` are skipped
"""

import logging
from pathlib import Path
from typing import Iterable, List

from twig.utils.fs import to_posix

logger = logging.getLogger(__name__)


class IgnorePattern:
    """Represents a single ignore pattern."""

    def __init__(self, pattern: str, directory_only: bool = False):
        """
        Args:
            pattern: Path prefix, without leading or trailing slash
            directory_only: If True, only match as a directory prefix
        """
        self.pattern = pattern
        self.directory_only = directory_only

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """
        Check if a path matches this pattern.

        Args:
            path: The path to check (relative to repo root)
            is_dir: Whether the path is a directory
        """
        if path.startswith(self.pattern + '/'):
            return True
        if path == self.pattern:
            return is_dir or not self.directory_only
        return False

    def __repr__(self) -> str:
        suffix = '/' if self.directory_only else ''
        return f"IgnorePattern({self.pattern}{suffix})"


class IgnoreMatcher:
    """Matches paths against a set of ignore patterns."""

    def __init__(self):
        self.patterns: List[IgnorePattern] = []

    def add_pattern(self, line: str) -> None:
        """Add one line of an ignore file."""
        line = line.strip()
        if not line or line.startswith('#'):
            return

        directory_only = line.endswith('/')
        pattern = to_posix(line).strip('/')
        if pattern.startswith('./'):
            pattern = pattern[2:]
        if pattern:
            self.patterns.append(IgnorePattern(pattern, directory_only))

    def add_patterns(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.add_pattern(line)

    def load_file(self, path: Path) -> bool:
        """
        Load patterns from an ignore file.

        Returns:
            True if the file existed and was loaded
        """
        if not path.is_file():
            return False
        self.add_patterns(path.read_text(encoding='utf-8', errors='replace').splitlines())
        logger.debug("loaded %d ignore patterns from %s", len(self.patterns), path)
        return True

    def is_ignored(self, path: str, is_dir: bool = False) -> bool:
        """
        Check if a path should be ignored.

        Args:
            path: The path to check (relative to repo root)
            is_dir: Whether the path is a directory
        """
        path = to_posix(path)
        if path.startswith('./'):
            path = path[2:]
        return any(p.matches(path, is_dir) for p in self.patterns)


def get_ignore_matcher(repo_root: Path, metadata_dir: str = '.twig',
                       ignore_file: str = '.twigignore') -> IgnoreMatcher:
    """
    Create an IgnoreMatcher for a repository.

    The metadata directory is always ignored; patterns from the ignore
    file in the repository root are added when it exists.
    """
    matcher = IgnoreMatcher()
    matcher.add_pattern(metadata_dir)
    matcher.load_file(Path(repo_root) / ignore_file)
    return matcher
