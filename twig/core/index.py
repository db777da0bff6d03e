"""Index (staging area) implementation."""

import json
import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .objects import Blob
from twig.utils.fs import atomic_write_text, to_posix

logger = logging.getLogger(__name__)


class Index:
    """
    Twig index (staging area).

    An ordered mapping of repository-relative paths to blob hashes: what the
    next commit's tree will contain. Persisted as a JSON list of
    ``[path, hash]`` pairs, in mapping order.
    """

    def __init__(self):
        self.entries: Dict[str, str] = {}

    def get(self, path: str) -> Optional[str]:
        return self.entries.get(path)

    def set_entry(self, path: str, blob_hash: str) -> bool:
        """
        Record blob_hash for path.

        A file replaces a directory of the same name and vice versa: staged
        entries for parent directories of path, or for paths beneath it,
        are dropped.

        Returns:
            True if the mapping changed
        """
        if self.entries.get(path) == blob_hash:
            return False
        for displaced in self._displaced_by(path):
            del self.entries[displaced]
            logger.debug("unstaged %s, replaced by %s", displaced, path)
        self.entries[path] = blob_hash
        return True

    def _displaced_by(self, path: str) -> List[str]:
        parts = path.split('/')
        parents = {'/'.join(parts[:i]) for i in range(1, len(parts))}
        prefix = path + '/'
        return [p for p in self.entries if p in parents or p.startswith(prefix)]

    def remove(self, path: str) -> bool:
        """Drop path from the index. Returns True if it was present."""
        return self.entries.pop(path, None) is not None

    def replace(self, files: Dict[str, str]) -> None:
        """Make the index mirror files exactly."""
        self.entries = dict(files)

    def clear(self) -> None:
        self.entries.clear()

    def add_file(self, repo, filepath) -> bool:
        """
        Stage a file.

        The blob is written to the object store; the index changes only when
        the content differs from what is already staged for that path.

        Args:
            repo: Repository instance
            filepath: Path to file (absolute or relative to the work tree)

        Returns:
            bool: True if the index was modified

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the path is not a file inside the work tree
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = repo.work_tree / file_path

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not file_path.is_file():
            raise ValueError(f"Not a file: {filepath}")

        try:
            rel_path = to_posix(file_path.resolve().relative_to(repo.work_tree))
        except ValueError:
            raise ValueError(f"Path is outside the repository: {filepath}") from None

        blob_hash = repo.store.write(Blob.from_file(file_path))
        changed = self.set_entry(rel_path, blob_hash)
        if changed:
            logger.debug("staged %s as %s", rel_path, blob_hash)
        return changed

    def add_all(self, repo, root=None) -> List[str]:
        """
        Recursively stage every file under root.

        The repository's metadata directory and paths matched by the ignore
        rules are skipped.

        Returns:
            List of paths whose staged content changed
        """
        changed = []
        for rel_path in repo.worktree.list_files(root):
            if self.add_file(repo, repo.work_tree / rel_path):
                changed.append(rel_path)
        return changed

    def write_tree(self, repo) -> str:
        """Store the staged snapshot as nested trees and return the root hash."""
        return repo.store.build_tree(self.entries)

    def write(self, index_path) -> None:
        """
        Persist the index.

        Args:
            index_path: Path to index file
        """
        pairs = [[path, blob_hash] for path, blob_hash in self.entries.items()]
        atomic_write_text(index_path, json.dumps(pairs, indent=0))

    def read(self, index_path) -> None:
        """
        Load the index, replacing the current entries.

        A missing file yields an empty index.

        Raises:
            ValueError: If the file is not a list of [path, hash] pairs
        """
        path = Path(index_path)
        self.entries = {}
        if not path.exists():
            return

        text = path.read_text(encoding='utf-8')
        if not text.strip():
            return
        try:
            pairs = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid index file: {e}") from e

        if not isinstance(pairs, list):
            raise ValueError("Invalid index file: expected a list of pairs")
        for pair in pairs:
            if not isinstance(pair, list) or len(pair) != 2:
                raise ValueError(f"Invalid index entry: {pair!r}")
            self.entries[pair[0]] = pair[1]

    @classmethod
    def load(cls, index_path) -> 'Index':
        index = cls()
        index.read(index_path)
        return index

    def items(self) -> List[Tuple[str, str]]:
        return list(self.entries.items())

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
