"""Working tree materialization and status."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from twig.core.errors import LocalChangesError
from twig.core.hash import hash_file
from twig.utils.fs import atomic_write, prune_empty_dirs, to_posix
from twig.utils.ignore import get_ignore_matcher

logger = logging.getLogger(__name__)


@dataclass
class Status:
    """Snapshot of the differences between HEAD, the index and the work tree."""
    branch: str
    head: Optional[str]
    staged_added: List[str] = field(default_factory=list)
    staged_modified: List[str] = field(default_factory=list)
    staged_deleted: List[str] = field(default_factory=list)
    unstaged_modified: List[str] = field(default_factory=list)
    unstaged_deleted: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)
    merge_in_progress: bool = False

    @property
    def has_staged(self) -> bool:
        return bool(self.staged_added or self.staged_modified or self.staged_deleted)

    @property
    def is_clean(self) -> bool:
        return not (self.has_staged or self.unstaged_modified
                    or self.unstaged_deleted or self.untracked)


class WorkTree:
    """Reads and rewrites the files of a repository's working directory."""

    def __init__(self, repo):
        self.repo = repo
        self.root = repo.work_tree

    @property
    def ignore(self):
        return get_ignore_matcher(self.root, self.repo.twig_dir.name, self.repo.ignore_file.name)

    def list_files(self, start=None) -> List[str]:
        """
        Every non-ignored file under start (default: the work tree root).

        Returns:
            Sorted repository-relative POSIX paths
        """
        matcher = self.ignore
        start = Path(start) if start is not None else self.root
        if not start.is_absolute():
            start = self.root / start
        start = start.resolve()

        if start.is_file():
            rel = to_posix(start.relative_to(self.root))
            return [] if matcher.is_ignored(rel) else [rel]

        files = []
        for dirpath, dirnames, filenames in os.walk(start):
            base = Path(dirpath)
            kept = []
            for name in dirnames:
                rel = to_posix((base / name).relative_to(self.root))
                if not matcher.is_ignored(rel, is_dir=True):
                    kept.append(name)
            dirnames[:] = kept

            for name in filenames:
                rel = to_posix((base / name).relative_to(self.root))
                if not matcher.is_ignored(rel):
                    files.append(rel)
        return sorted(files)

    def write_file(self, rel_path: str, data: bytes) -> None:
        path = self.root / rel_path
        if path.is_dir():
            raise IsADirectoryError(f"Cannot write {rel_path}: a directory is in the way")
        atomic_write(path, data, fsync=False)

    def remove_file(self, rel_path: str) -> None:
        path = self.root / rel_path
        if path.is_file() or path.is_symlink():
            path.unlink()
            prune_empty_dirs(path.parent, self.root)

    def staged_paths(self) -> List[str]:
        """Paths whose staged blob differs from HEAD's snapshot."""
        head_files = self.repo.store.flatten_tree(self.repo.head_tree())
        entries = self.repo.index.entries
        return sorted(p for p in set(head_files) | set(entries)
                      if head_files.get(p) != entries.get(p))

    def require_no_staged_changes(self) -> None:
        """
        Raises:
            LocalChangesError: If the index differs from HEAD
        """
        staged = self.staged_paths()
        if staged:
            raise LocalChangesError(staged)

    def checkout_tree(self, tree_hash: str) -> int:
        """
        Make the work tree and index mirror a tree.

        Tracked files missing from the tree are deleted; untracked files are
        left alone. The index is replaced by the tree's file list and saved.

        Returns:
            Number of files in the tree
        """
        store = self.repo.store
        target = store.flatten_tree(tree_hash)
        index = self.repo.index

        for rel_path in list(index):
            if rel_path not in target:
                self.remove_file(rel_path)

        for rel_path, blob_hash in target.items():
            path = self.root / rel_path
            if path.is_file() and index.get(rel_path) == blob_hash and hash_file(path) == blob_hash:
                continue
            self.write_file(rel_path, store.read_blob(blob_hash).data)

        index.replace(target)
        self.repo.save_index()
        logger.debug("checked out tree %s (%d files)", tree_hash, len(target))
        return len(target)

    def status(self) -> Status:
        """Compare HEAD, index and work tree."""
        repo = self.repo
        head = repo.refs.resolve_head()
        head_files = repo.store.flatten_tree(repo.head_tree()) if head else {}
        index = repo.index

        status = Status(
            branch=repo.refs.current_branch(),
            head=head,
            merge_in_progress=repo.merge.is_merge_in_progress(),
        )

        for path, blob_hash in index.entries.items():
            if path not in head_files:
                status.staged_added.append(path)
            elif head_files[path] != blob_hash:
                status.staged_modified.append(path)
        status.staged_deleted = [p for p in head_files if p not in index]

        for path, blob_hash in index.entries.items():
            full = self.root / path
            if not full.is_file():
                status.unstaged_deleted.append(path)
            elif hash_file(full) != blob_hash:
                status.unstaged_modified.append(path)

        status.untracked = [p for p in self.list_files() if p not in index]

        for name in ('staged_added', 'staged_modified', 'staged_deleted',
                     'unstaged_modified', 'unstaged_deleted'):
            getattr(status, name).sort()
        return status
